from django.contrib import admin
from .models import User


@admin.register(User)
class UserAdmin(admin.ModelAdmin):
    list_display = ['name', 'email', 'role', 'status', 'team', 'last_login', 'created_at']
    list_filter = ['role', 'status', 'team']
    search_fields = ['name', 'email', 'phone']
    exclude = ['password']
