import mimetypes
import os
import uuid

from django.conf import settings
from django.db import models

from customers.models import Customer
from sales.models import Deal
from users.models import User


class Task(models.Model):
    PRIORITY_CHOICES = [
        ('low', 'Low'),
        ('medium', 'Medium'),
        ('high', 'High'),
        ('urgent', 'Urgent'),
    ]

    CATEGORY_CHOICES = [
        ('call', 'Call'),
        ('meeting', 'Meeting'),
        ('follow_up', 'Follow Up'),
        ('proposal', 'Proposal'),
        ('support', 'Support'),
        ('other', 'Other'),
    ]

    STATUS_CHOICES = [
        ('pending', 'Pending'),
        ('in_progress', 'In Progress'),
        ('completed', 'Completed'),
        ('cancelled', 'Cancelled'),
    ]

    title = models.CharField(max_length=255)
    description = models.TextField(blank=True, null=True)
    customer = models.ForeignKey(Customer, on_delete=models.SET_NULL, null=True, blank=True, related_name='tasks')
    deal = models.ForeignKey(Deal, on_delete=models.SET_NULL, null=True, blank=True, related_name='tasks')
    assigned_by = models.ForeignKey(User, on_delete=models.SET_NULL, null=True, blank=True, related_name='created_tasks')
    assignees = models.ManyToManyField(User, through='TaskAssignee', through_fields=('task', 'user'), related_name='tasks')
    priority = models.CharField(max_length=10, choices=PRIORITY_CHOICES, default='medium')
    category = models.CharField(max_length=20, choices=CATEGORY_CHOICES, default='follow_up')
    status = models.CharField(max_length=20, choices=STATUS_CHOICES, default='pending')
    due_date = models.DateTimeField(blank=True, null=True)
    completed_at = models.DateTimeField(blank=True, null=True)
    completion_notes = models.TextField(blank=True, null=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'tasks'
        ordering = ['due_date', '-created_at']

    def __str__(self):
        return self.title

    def is_assignee(self, user):
        return self.task_assignees.filter(user=user).exists()


class TaskAssignee(models.Model):
    task = models.ForeignKey(Task, on_delete=models.CASCADE, related_name='task_assignees')
    user = models.ForeignKey(User, on_delete=models.CASCADE, related_name='task_assignments')
    assigned_by = models.ForeignKey(User, on_delete=models.SET_NULL, null=True, blank=True, related_name='+')
    assigned_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'task_assignees'
        unique_together = ('task', 'user')

    def __str__(self):
        return f"TaskAssignee(task={self.task_id}, user={self.user_id})"


def task_file_upload_path(instance, filename):
    """uploads/tasks/<uuid><ext>, the original name is kept on the row"""
    extension = os.path.splitext(filename)[1]
    return f"{settings.TASK_UPLOAD_DIR}/{uuid.uuid4()}{extension}"


class TaskFile(models.Model):
    task = models.ForeignKey(Task, on_delete=models.CASCADE, related_name='files')
    file = models.FileField(upload_to=task_file_upload_path, max_length=500)
    original_name = models.CharField(max_length=255)
    file_size = models.PositiveIntegerField(blank=True, null=True, help_text='File size in bytes')
    mime_type = models.CharField(max_length=100, blank=True, null=True)
    uploaded_by = models.ForeignKey(User, on_delete=models.SET_NULL, null=True, blank=True, related_name='task_files')
    uploaded_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'task_files'
        ordering = ['-uploaded_at']

    def save(self, *args, **kwargs):
        if self.file and not self.original_name:
            self.original_name = os.path.basename(self.file.name)
        if self.file and not self.mime_type:
            self.mime_type, _ = mimetypes.guess_type(self.original_name or self.file.name)
        if self.file and not self.file_size:
            try:
                self.file_size = self.file.size
            except (OSError, AttributeError):
                pass
        super().save(*args, **kwargs)

    @property
    def filename(self):
        return os.path.basename(self.file.name) if self.file else None

    @property
    def file_path(self):
        return f"/{self.file.name}" if self.file else None


class TaskHistory(models.Model):
    ACTION_CHOICES = [
        ('create', 'Create'),
        ('status_change', 'Status Change'),
        ('attachment_add', 'Attachment Added'),
        ('attachment_remove', 'Attachment Removed'),
    ]

    task = models.ForeignKey(Task, on_delete=models.CASCADE, related_name='history_entries')
    action = models.CharField(max_length=20, choices=ACTION_CHOICES)
    changed_by = models.ForeignKey(
        User, on_delete=models.SET_NULL, null=True, blank=True, related_name='task_history_changes'
    )
    changes = models.JSONField(default=dict, blank=True)
    timestamp = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'task_history'
        ordering = ['-timestamp']

    def __str__(self):
        return f"TaskHistory(task_id={self.task_id}, action={self.action}, at={self.timestamp})"
