from django.contrib import admin
from .models import Product, Deal, Sale, SaleItem


class SaleItemInline(admin.TabularInline):
    model = SaleItem
    extra = 0
    readonly_fields = ['total_price']


@admin.register(Product)
class ProductAdmin(admin.ModelAdmin):
    list_display = ['name', 'category', 'price', 'currency', 'is_active']
    list_filter = ['is_active', 'category']
    search_fields = ['name', 'description']


@admin.register(Deal)
class DealAdmin(admin.ModelAdmin):
    list_display = ['title', 'customer', 'stage', 'total_value', 'assigned_to', 'expected_close_date']
    list_filter = ['stage']
    search_fields = ['title', 'customer__name']


@admin.register(Sale)
class SaleAdmin(admin.ModelAdmin):
    list_display = ['id', 'customer_name', 'total_amount', 'currency', 'payment_status', 'sales_person_name', 'sale_date']
    list_filter = ['payment_status', 'currency']
    search_fields = ['customer_name', 'invoice_number', 'sales_person_name']
    inlines = [SaleItemInline]
