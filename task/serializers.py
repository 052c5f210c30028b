from rest_framework import serializers

from customers.models import Customer
from sales.models import Deal
from users.models import User
from .models import Task, TaskFile, TaskHistory


class TaskFileSerializer(serializers.ModelSerializer):
    filename = serializers.CharField(read_only=True)
    file_path = serializers.CharField(read_only=True)
    file_url = serializers.SerializerMethodField()
    uploaded_by_name = serializers.CharField(source='uploaded_by.name', read_only=True, default=None)

    class Meta:
        model = TaskFile
        fields = [
            'id', 'task', 'filename', 'original_name', 'file_path', 'file_url',
            'file_size', 'mime_type', 'uploaded_by', 'uploaded_by_name', 'uploaded_at',
        ]
        read_only_fields = fields

    def get_file_url(self, obj):
        """Return the URL to access the file"""
        if obj.file:
            request = self.context.get('request')
            if request:
                return request.build_absolute_uri(obj.file.url)
            return obj.file.url
        return None


class TaskSerializer(serializers.ModelSerializer):
    customer_name = serializers.CharField(source='customer.name', read_only=True, default=None)
    assigned_by_name = serializers.CharField(source='assigned_by.name', read_only=True, default=None)
    assigned_to_names = serializers.SerializerMethodField()
    assigned_user_ids = serializers.SerializerMethodField()
    files = TaskFileSerializer(many=True, read_only=True)

    class Meta:
        model = Task
        fields = [
            'id', 'title', 'description', 'customer', 'customer_name', 'deal', 'assigned_by',
            'assigned_by_name', 'assigned_to_names', 'assigned_user_ids', 'priority', 'category',
            'status', 'due_date', 'completed_at', 'completion_notes', 'files', 'created_at', 'updated_at',
        ]
        read_only_fields = fields

    def get_assigned_to_names(self, obj):
        return ', '.join(a.user.name for a in obj.task_assignees.all())

    def get_assigned_user_ids(self, obj):
        return [a.user_id for a in obj.task_assignees.all()]


class TaskCreateSerializer(serializers.Serializer):
    REQUIRED = 'عنوان و حداقل یک فرد مسئول الزامی است'

    title = serializers.CharField(max_length=255, error_messages={'required': REQUIRED, 'blank': REQUIRED})
    description = serializers.CharField(required=False, allow_blank=True, allow_null=True)
    customer_id = serializers.IntegerField(required=False, allow_null=True)
    deal_id = serializers.IntegerField(required=False, allow_null=True)
    assigned_to = serializers.ListField(
        child=serializers.IntegerField(),
        allow_empty=False,
        error_messages={'required': REQUIRED, 'empty': REQUIRED, 'null': REQUIRED},
    )
    priority = serializers.ChoiceField(choices=Task.PRIORITY_CHOICES, default='medium')
    category = serializers.ChoiceField(choices=Task.CATEGORY_CHOICES, default='follow_up')
    due_date = serializers.DateTimeField(required=False, allow_null=True)

    def validate_assigned_to(self, value):
        ids = list(dict.fromkeys(value))
        users = list(User.objects.filter(pk__in=ids, status='active'))
        if len(users) != len(ids):
            raise serializers.ValidationError('کاربر مسئول یافت نشد')
        by_id = {u.pk: u for u in users}
        return [by_id[pk] for pk in ids]

    def validate_customer_id(self, value):
        if value is not None and not Customer.objects.filter(pk=value).exists():
            raise serializers.ValidationError('مشتری یافت نشد')
        return value

    def validate_deal_id(self, value):
        if value is not None and not Deal.objects.filter(pk=value).exists():
            raise serializers.ValidationError('معامله یافت نشد')
        return value


class TaskStatusSerializer(serializers.Serializer):
    REQUIRED = 'شناسه وظیفه و وضعیت الزامی است'

    taskId = serializers.IntegerField(error_messages={'required': REQUIRED, 'null': REQUIRED, 'invalid': REQUIRED})
    status = serializers.ChoiceField(choices=Task.STATUS_CHOICES, error_messages={'required': REQUIRED, 'null': REQUIRED})
    completion_notes = serializers.CharField(required=False, allow_blank=True, allow_null=True)


class TaskFileUploadSerializer(serializers.Serializer):
    REQUIRED = 'شناسه وظیفه و فایل الزامی است'

    taskId = serializers.IntegerField(error_messages={'required': REQUIRED, 'null': REQUIRED, 'invalid': REQUIRED})
    file = serializers.FileField(error_messages={'required': REQUIRED, 'empty': REQUIRED, 'invalid': REQUIRED})


class TaskHistorySerializer(serializers.ModelSerializer):
    changed_by_name = serializers.CharField(source='changed_by.name', read_only=True, default=None)

    class Meta:
        model = TaskHistory
        fields = ['id', 'action', 'changed_by', 'changed_by_name', 'changes', 'timestamp']
