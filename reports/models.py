import jdatetime
from django.db import models

from users.models import User


def to_persian_date(value):
    """Jalali YYYY/MM/DD for a gregorian date"""
    return jdatetime.date.fromgregorian(date=value).strftime('%Y/%m/%d')


class DailyReport(models.Model):
    user = models.ForeignKey(User, on_delete=models.CASCADE, related_name='daily_reports')
    report_date = models.DateField()
    persian_date = models.CharField(max_length=10, blank=True)
    work_description = models.TextField()
    completed_tasks = models.JSONField(default=list, blank=True, help_text="Ids of tasks finished that day")
    working_hours = models.DecimalField(max_digits=4, decimal_places=2, blank=True, null=True)
    challenges = models.TextField(blank=True, null=True)
    achievements = models.TextField(blank=True, null=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'daily_reports'
        ordering = ['-report_date', '-created_at']
        constraints = [
            models.UniqueConstraint(fields=['user', 'report_date'], name='daily_reports_user_date_unique'),
        ]

    def __str__(self):
        return f"DailyReport(user={self.user_id}, date={self.report_date})"

    def save(self, *args, **kwargs):
        if self.report_date and not self.persian_date:
            self.persian_date = to_persian_date(self.report_date)
        super().save(*args, **kwargs)

    def task_ids(self):
        if not isinstance(self.completed_tasks, list):
            return []
        return [pk for pk in self.completed_tasks if str(pk).isdigit()]
