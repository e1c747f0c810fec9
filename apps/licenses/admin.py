from django.contrib import admin
from .models import License


@admin.register(License)
class LicenseAdmin(admin.ModelAdmin):
    list_display = ("name", "vendor", "org", "seats_assigned", "seats_total", "renewal_date", "status")
    list_filter = ("status", "org")
    search_fields = ("name", "vendor")
    readonly_fields = ("status", "created_at", "updated_at")
