from django.contrib import admin
from .models import Category, Location


@admin.register(Category)
class CategoryAdmin(admin.ModelAdmin):
    list_display = ("name", "org", "icon_key", "created_at")
    list_filter = ("org",)
    search_fields = ("name", "description")
    ordering = ("name",)


@admin.register(Location)
class LocationAdmin(admin.ModelAdmin):
    list_display = ("name", "org", "type", "city", "country", "capacity", "status")
    list_filter = ("type", "status", "org")
    search_fields = ("name", "address", "city", "state")
    readonly_fields = ("created_at", "updated_at")
