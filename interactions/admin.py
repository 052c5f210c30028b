from django.contrib import admin
from .models import Interaction


@admin.register(Interaction)
class InteractionAdmin(admin.ModelAdmin):
    list_display = ['subject', 'customer', 'type', 'direction', 'performed_by', 'date']
    list_filter = ['type', 'direction', 'channel']
    search_fields = ['subject', 'description', 'customer__name']
