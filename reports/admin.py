from django.contrib import admin
from .models import DailyReport


@admin.register(DailyReport)
class DailyReportAdmin(admin.ModelAdmin):
    list_display = ('id', 'user', 'report_date', 'persian_date', 'working_hours', 'created_at')
    list_filter = ('report_date',)
    search_fields = ('user__name', 'work_description', 'achievements', 'challenges')
