from django.contrib import admin
from django.contrib.auth.admin import UserAdmin as BaseUserAdmin
from .models import User, Organization


@admin.register(Organization)
class OrganizationAdmin(admin.ModelAdmin):
    list_display = ['name', 'plan', 'created_at']
    list_filter = ['plan']
    search_fields = ['name']


@admin.register(User)
class UserAdmin(BaseUserAdmin):
    ordering = ['email']
    list_display = ['email', 'full_name', 'org', 'role', 'status', 'date_joined']
    list_filter = ['role', 'status', 'is_staff', 'org']
    search_fields = ['email', 'first_name', 'last_name', 'department']

    # Email is the username, so the stock fieldsets are replaced
    fieldsets = (
        (None, {'fields': ('email', 'password', 'org')}),
        ('Personal info', {'fields': ('first_name', 'last_name', 'phone', 'department', 'location', 'timezone')}),
        ('Access', {'fields': ('role', 'status', 'is_staff', 'is_superuser', 'groups', 'user_permissions')}),
        ('Important dates', {'fields': ('last_login', 'date_joined')}),
    )
    add_fieldsets = (
        (None, {
            'classes': ('wide',),
            'fields': ('email', 'org', 'role', 'password1', 'password2'),
        }),
    )
