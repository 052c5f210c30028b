from rest_framework import serializers

from task.models import Task
from .models import DailyReport

DATE_FORMATS = ['iso-8601', '%Y-%m-%dT%H:%M:%S.%fZ', '%Y-%m-%dT%H:%M:%SZ', '%Y/%m/%d']


class ReportTaskSerializer(serializers.ModelSerializer):
    class Meta:
        model = Task
        fields = ['id', 'title', 'status', 'description']


class DailyReportSerializer(serializers.ModelSerializer):
    user_name = serializers.CharField(source='user.name', read_only=True)
    user_role = serializers.CharField(source='user.role', read_only=True)
    tasks = serializers.SerializerMethodField()

    class Meta:
        model = DailyReport
        fields = [
            'id', 'user', 'user_name', 'user_role', 'report_date', 'persian_date', 'work_description',
            'completed_tasks', 'working_hours', 'challenges', 'achievements', 'tasks',
            'created_at', 'updated_at',
        ]
        read_only_fields = fields

    def get_tasks(self, obj):
        ids = obj.task_ids()
        if not ids:
            return []
        known = self.context.get('tasks')
        if known is not None:
            tasks = [known[int(pk)] for pk in ids if int(pk) in known]
        else:
            tasks = Task.objects.filter(pk__in=ids)
        return ReportTaskSerializer(tasks, many=True).data


class DailyReportWriteSerializer(serializers.Serializer):
    REQUIRED = 'توضیحات کار انجام شده الزامی است'

    work_description = serializers.CharField(error_messages={'required': REQUIRED, 'blank': REQUIRED, 'null': REQUIRED})
    completed_tasks = serializers.ListField(child=serializers.IntegerField(), required=False, allow_null=True)
    working_hours = serializers.DecimalField(max_digits=4, decimal_places=2, min_value=0, max_value=24,
                                             required=False, allow_null=True)
    challenges = serializers.CharField(required=False, allow_blank=True, allow_null=True)
    achievements = serializers.CharField(required=False, allow_blank=True, allow_null=True)
    report_date = serializers.DateField(
        required=False,
        allow_null=True,
        input_formats=DATE_FORMATS,
        error_messages={'invalid': 'فرمت تاریخ نامعتبر است'},
    )


class ReportAnalysisSerializer(serializers.Serializer):
    REQUIRED = 'کاربر و بازه زمانی الزامی است'

    user_id = serializers.IntegerField(error_messages={'required': REQUIRED, 'null': REQUIRED, 'invalid': REQUIRED})
    start_date = serializers.DateField(input_formats=DATE_FORMATS, error_messages={
        'required': REQUIRED, 'null': REQUIRED, 'invalid': 'فرمت تاریخ نامعتبر است',
    })
    end_date = serializers.DateField(input_formats=DATE_FORMATS, error_messages={
        'required': REQUIRED, 'null': REQUIRED, 'invalid': 'فرمت تاریخ نامعتبر است',
    })


class VoiceCommandSerializer(serializers.Serializer):
    REQUIRED = 'متن و نام همکار الزامی است'

    text = serializers.CharField(error_messages={'required': REQUIRED, 'blank': REQUIRED, 'null': REQUIRED})
    employeeName = serializers.CharField(error_messages={'required': REQUIRED, 'blank': REQUIRED, 'null': REQUIRED})
