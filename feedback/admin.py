from django.contrib import admin
from .models import Feedback


@admin.register(Feedback)
class FeedbackAdmin(admin.ModelAdmin):
    list_display = ['customer', 'type', 'title', 'score', 'priority', 'status', 'created_at']
    list_filter = ['type', 'status', 'priority', 'channel']
    search_fields = ['title', 'comment', 'product', 'customer__name']
