from django.contrib import admin
from .models import Customer


@admin.register(Customer)
class CustomerAdmin(admin.ModelAdmin):
    list_display = ['name', 'email', 'phone', 'segment', 'status', 'sales_stage', 'assigned_to', 'created_at']
    list_filter = ['segment', 'status', 'sales_stage', 'priority']
    search_fields = ['name', 'email', 'phone', 'company_name']
