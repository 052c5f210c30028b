from django.contrib import admin
from .models import Module, UserModulePermission


@admin.register(Module)
class ModuleAdmin(admin.ModelAdmin):
    list_display = ['name', 'display_name', 'route', 'icon', 'sort_order', 'is_active']
    list_filter = ['is_active']
    search_fields = ['name', 'display_name', 'route']
    ordering = ['sort_order']


@admin.register(UserModulePermission)
class UserModulePermissionAdmin(admin.ModelAdmin):
    list_display = ['user', 'module', 'granted', 'updated_at']
    list_filter = ['granted', 'module']
    search_fields = ['user__name', 'user__email', 'module__name']
