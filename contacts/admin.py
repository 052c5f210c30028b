from django.contrib import admin
from .models import Company, Contact, ContactActivity


@admin.register(Company)
class CompanyAdmin(admin.ModelAdmin):
    list_display = ['name', 'industry', 'city', 'status', 'assigned_to', 'created_at']
    list_filter = ['status', 'industry']
    search_fields = ['name', 'email', 'phone', 'website']


@admin.register(Contact)
class ContactAdmin(admin.ModelAdmin):
    list_display = ['first_name', 'last_name', 'company', 'email', 'phone', 'status', 'created_at']
    list_filter = ['status', 'source', 'is_primary']
    search_fields = ['first_name', 'last_name', 'email', 'phone', 'mobile', 'company__name']


@admin.register(ContactActivity)
class ContactActivityAdmin(admin.ModelAdmin):
    list_display = ['title', 'contact', 'activity_type', 'status', 'priority', 'created_at']
    list_filter = ['activity_type', 'status', 'priority']
    search_fields = ['title', 'description', 'contact__first_name', 'contact__last_name']
