import logging

from django.db import transaction
from django.db.models import Case, IntegerField, Q, Value, When
from django.utils import timezone
from drf_spectacular.utils import extend_schema, extend_schema_view, OpenApiParameter
from drf_spectacular.types import OpenApiTypes
from rest_framework import viewsets, status, filters
from rest_framework.decorators import action
from rest_framework.exceptions import NotFound, PermissionDenied, ValidationError
from rest_framework.parsers import MultiPartParser, FormParser, JSONParser
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from users.models import User
from users.serializers import CoworkerSerializer
from .models import Task, TaskAssignee, TaskFile, TaskHistory
from .serializers import (
    TaskSerializer,
    TaskCreateSerializer,
    TaskStatusSerializer,
    TaskFileUploadSerializer,
    TaskFileSerializer,
    TaskHistorySerializer,
)

logger = logging.getLogger(__name__)

PRIORITY_RANK = Case(
    When(priority='urgent', then=Value(4)),
    When(priority='high', then=Value(3)),
    When(priority='medium', then=Value(2)),
    default=Value(1),
    output_field=IntegerField(),
)


def _task_or_404(task_id):
    task = Task.objects.filter(pk=task_id).first()
    if task is None:
        raise NotFound('وظیفه یافت نشد')
    return task


@extend_schema_view(
    list=extend_schema(
        summary="List tasks",
        description="Managers see every task, other users the tasks assigned to or created by them",
        tags=["Tasks"],
        parameters=[
            OpenApiParameter(name='status', type=OpenApiTypes.STR, location=OpenApiParameter.QUERY, required=False),
            OpenApiParameter(name='priority', type=OpenApiTypes.STR, location=OpenApiParameter.QUERY, required=False),
            OpenApiParameter(name='assigned_to', type=OpenApiTypes.INT, location=OpenApiParameter.QUERY, required=False),
        ],
    ),
    create=extend_schema(summary="Create task", description="Managers only", tags=["Tasks"], request=TaskCreateSerializer),
    retrieve=extend_schema(summary="Get task details", tags=["Tasks"]),
    destroy=extend_schema(summary="Delete task", description="Managers only", tags=["Tasks"]),
)
class TaskViewSet(viewsets.ModelViewSet):
    serializer_class = TaskSerializer
    permission_classes = [IsAuthenticated]
    parser_classes = [JSONParser, MultiPartParser, FormParser]
    filter_backends = [filters.SearchFilter]
    search_fields = ['title', 'description', 'customer__name']
    http_method_names = ['get', 'post', 'put', 'delete']

    def get_queryset(self):
        user = self.request.user
        params = self.request.query_params
        qs = Task.objects.select_related('customer', 'assigned_by').prefetch_related(
            'task_assignees__user', 'files__uploaded_by',
        )

        if params.get('status'):
            qs = qs.filter(status=params['status'])
        if params.get('priority'):
            qs = qs.filter(priority=params['priority'])
        if params.get('assigned_to'):
            qs = qs.filter(task_assignees__user_id=params['assigned_to'])

        if not user.is_manager:
            qs = qs.filter(Q(task_assignees__user=user) | Q(assigned_by=user))

        return qs.distinct().annotate(priority_rank=PRIORITY_RANK).order_by('due_date', '-priority_rank', '-created_at')

    def list(self, request, *args, **kwargs):
        queryset = self.filter_queryset(self.get_queryset())
        serializer = self.get_serializer(queryset, many=True)
        return Response({"success": True, "data": serializer.data})

    def create(self, request, *args, **kwargs):
        serializer = TaskCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        if not request.user.is_manager:
            raise PermissionDenied('شما مجوز ایجاد وظیفه ندارید')

        data = serializer.validated_data
        with transaction.atomic():
            task = Task.objects.create(
                title=data['title'],
                description=data.get('description') or None,
                customer_id=data.get('customer_id'),
                deal_id=data.get('deal_id'),
                assigned_by=request.user,
                priority=data['priority'],
                category=data['category'],
                status='pending',
                due_date=data.get('due_date'),
            )
            TaskAssignee.objects.bulk_create([
                TaskAssignee(task=task, user=assignee, assigned_by=request.user)
                for assignee in data['assigned_to']
            ])
            TaskHistory.objects.create(
                task=task,
                action='create',
                changed_by=request.user,
                changes={'assigned_to': [u.pk for u in data['assigned_to']]},
            )

        logger.info("Task %s created by %s for %d assignee(s)", task.pk, request.user.pk, len(data['assigned_to']))
        return Response(
            {"success": True, "message": "وظیفه با موفقیت ایجاد شد", "data": {"id": task.pk}},
            status=status.HTTP_201_CREATED,
        )

    def retrieve(self, request, *args, **kwargs):
        return Response({"success": True, "data": self.get_serializer(self.get_object()).data})

    def update(self, request, *args, **kwargs):
        return self.update_status(request, pk=kwargs.get('pk'))

    def destroy(self, request, *args, **kwargs):
        if not request.user.is_manager:
            raise PermissionDenied('شما مجوز حذف این وظیفه را ندارید')
        task = self.get_object()
        task_id = task.pk
        for task_file in task.files.all():
            task_file.file.delete(save=False)
        task.delete()
        logger.info("Task %s deleted by %s", task_id, request.user.pk)
        return Response({"success": True, "message": "وظیفه حذف شد"})

    @extend_schema(
        summary="Update task status",
        description="Assignees and managers only. Completing a task stamps completed_at once per call.",
        tags=["Tasks"],
        request=TaskStatusSerializer,
    )
    @action(detail=False, methods=['put'], url_path='status')
    def update_status(self, request, pk=None):
        data = request.data.copy()
        if pk is not None and not data.get('taskId'):
            data['taskId'] = pk
        serializer = TaskStatusSerializer(data=data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        task = _task_or_404(data['taskId'])
        if not request.user.is_manager and not task.is_assignee(request.user):
            raise PermissionDenied('شما مجوز تغییر این وظیفه را ندارید')

        previous = task.status
        task.status = data['status']
        fields = ['status', 'updated_at']
        if task.status == 'completed':
            task.completed_at = timezone.now()
            fields.append('completed_at')
            if data.get('completion_notes'):
                task.completion_notes = data['completion_notes']
                fields.append('completion_notes')

        with transaction.atomic():
            task.save(update_fields=fields)
            TaskHistory.objects.create(
                task=task,
                action='status_change',
                changed_by=request.user,
                changes={'status': {'old': previous, 'new': task.status}},
            )

        return Response({"success": True, "message": "وضعیت وظیفه به‌روزرسانی شد"})

    @extend_schema(
        summary="Upload or delete a task file",
        description="POST: multipart form with taskId and file. DELETE: ?fileId=",
        tags=["Tasks"],
        request={'multipart/form-data': TaskFileUploadSerializer},
        parameters=[OpenApiParameter(name='fileId', type=OpenApiTypes.INT, location=OpenApiParameter.QUERY, required=False)],
    )
    @action(detail=False, methods=['post', 'delete'], url_path='upload', parser_classes=[MultiPartParser, FormParser])
    def upload(self, request):
        if request.method == 'DELETE':
            return self._delete_file(request)

        serializer = TaskFileUploadSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        upload = serializer.validated_data['file']

        task = _task_or_404(serializer.validated_data['taskId'])
        if not request.user.is_manager and not task.is_assignee(request.user):
            raise PermissionDenied('شما مجوز آپلود فایل برای این وظیفه را ندارید')

        task_file = TaskFile.objects.create(
            task=task,
            file=upload,
            original_name=upload.name,
            file_size=upload.size,
            mime_type=getattr(upload, 'content_type', None),
            uploaded_by=request.user,
        )
        TaskHistory.objects.create(
            task=task,
            action='attachment_add',
            changed_by=request.user,
            changes={'attachments': {'added': [task_file.original_name]}},
        )
        logger.info("File %s uploaded to task %s by %s", task_file.filename, task.pk, request.user.pk)

        return Response({
            "success": True,
            "message": "فایل با موفقیت آپلود شد",
            "data": TaskFileSerializer(task_file, context={'request': request}).data,
        })

    def _delete_file(self, request):
        file_id = request.query_params.get('fileId')
        if not file_id:
            raise ValidationError('شناسه فایل الزامی است')

        task_file = TaskFile.objects.select_related('task').filter(pk=file_id).first() if file_id.isdigit() else None
        if task_file is None:
            raise NotFound('فایل یافت نشد')

        user = request.user
        is_uploader = task_file.uploaded_by_id == user.pk
        is_task_creator = task_file.task.assigned_by_id == user.pk
        if not user.is_manager and not is_uploader and not is_task_creator:
            raise PermissionDenied('شما مجوز حذف این فایل را ندارید')

        name = task_file.original_name
        task = task_file.task
        task_file.file.delete(save=False)
        task_file.delete()
        TaskHistory.objects.create(
            task=task,
            action='attachment_remove',
            changed_by=user,
            changes={'attachments': {'removed': [name]}},
        )
        return Response({"success": True, "message": "فایل با موفقیت حذف شد"})

    @extend_schema(summary="Assignable users", description="Managers only", tags=["Tasks"])
    @action(detail=False, methods=['get'])
    def users(self, request):
        if not request.user.is_manager:
            raise PermissionDenied('شما مجوز مشاهده لیست کاربران را ندارید')
        queryset = User.objects.filter(status='active').order_by('name')
        return Response({"success": True, "data": CoworkerSerializer(queryset, many=True).data})

    @extend_schema(summary="Task history", tags=["Tasks"], responses={200: TaskHistorySerializer(many=True)})
    @action(detail=True, methods=['get'])
    def history(self, request, pk=None):
        task = self.get_object()
        entries = task.history_entries.select_related('changed_by')
        return Response({"success": True, "data": TaskHistorySerializer(entries, many=True).data})
