from django.contrib import admin
from .models import InventoryItem


@admin.register(InventoryItem)
class InventoryItemAdmin(admin.ModelAdmin):
    list_display = ("name", "sku", "org", "location", "quantity_on_hand", "quantity_minimum", "cost_per_item")
    list_filter = ("org", "location", "category")
    search_fields = ("name", "sku")
    readonly_fields = ("created_at", "updated_at")
