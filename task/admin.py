from django.contrib import admin
from .models import Task, TaskAssignee, TaskFile, TaskHistory


class TaskAssigneeInline(admin.TabularInline):
    model = TaskAssignee
    fk_name = 'task'
    extra = 0


class TaskFileInline(admin.TabularInline):
    model = TaskFile
    extra = 0


@admin.register(Task)
class TaskAdmin(admin.ModelAdmin):
    list_display = ('id', 'title', 'assigned_by', 'priority', 'category', 'status', 'due_date', 'completed_at')
    list_filter = ('priority', 'category', 'status')
    search_fields = ('title', 'description')
    inlines = [TaskAssigneeInline, TaskFileInline]


admin.site.register(TaskFile)
admin.site.register(TaskHistory)
