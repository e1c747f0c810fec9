from django.contrib import admin
from .models import Asset, AssetAssignmentHistory


class AssetAssignmentHistoryInline(admin.TabularInline):
    model = AssetAssignmentHistory
    extra = 0
    readonly_fields = ("from_user", "to_user", "changed_by", "changed_at", "note")
    can_delete = False


@admin.register(Asset)
class AssetAdmin(admin.ModelAdmin):
    list_display = ("asset_tag", "name", "org", "category", "status", "assigned_to", "location")
    list_filter = ("status", "org", "category")
    search_fields = ("asset_tag", "name", "serial_number", "manufacturer", "model")
    readonly_fields = ("assigned_at", "created_at", "updated_at")
    inlines = [AssetAssignmentHistoryInline]
