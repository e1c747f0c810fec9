from django.contrib import admin
from .models import ProcurementOrder


@admin.register(ProcurementOrder)
class ProcurementOrderAdmin(admin.ModelAdmin):
    list_display = ("order_id", "asset_name", "org", "supplier", "quantity", "status", "estimated_delivery")
    list_filter = ("status", "org")
    search_fields = ("order_id", "asset_name", "supplier")
    readonly_fields = ("tracking_history", "created_at", "updated_at")
