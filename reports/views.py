import logging
from datetime import timedelta

from django.utils import timezone
from drf_spectacular.utils import extend_schema, extend_schema_view, OpenApiParameter
from drf_spectacular.types import OpenApiTypes
from rest_framework import viewsets, status
from rest_framework.decorators import action
from rest_framework.exceptions import NotFound, PermissionDenied
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from task.models import Task
from users.models import User
from . import ai_service
from .models import DailyReport
from .serializers import (
    DailyReportSerializer,
    DailyReportWriteSerializer,
    ReportAnalysisSerializer,
    VoiceCommandSerializer,
)

logger = logging.getLogger(__name__)


def serialize_reports(reports):
    """Serialize reports with their completed tasks resolved in one query"""
    reports = list(reports)
    ids = {int(pk) for report in reports for pk in report.task_ids()}
    tasks = Task.objects.in_bulk(ids) if ids else {}
    return DailyReportSerializer(reports, many=True, context={'tasks': tasks}).data


def analysis_rows(data):
    """Shape serialized reports for the analysis prompt"""
    return [
        {
            'date': row['report_date'],
            'persian_date': row['persian_date'],
            'work_description': row['work_description'],
            'working_hours': row['working_hours'],
            'challenges': row['challenges'],
            'achievements': row['achievements'],
            'tasks': row['tasks'],
        }
        for row in data
    ]


@extend_schema_view(
    list=extend_schema(
        summary="List daily reports",
        description="Own reports, managers may pass user_id. At most 100 rows.",
        tags=["Reports"],
        parameters=[
            OpenApiParameter(name='date', type=OpenApiTypes.DATE, location=OpenApiParameter.QUERY, required=False),
            OpenApiParameter(name='user_id', type=OpenApiTypes.INT, location=OpenApiParameter.QUERY, required=False),
        ],
    ),
    create=extend_schema(
        summary="Create or update a daily report",
        description="One report per user and day. Only today's report may be edited. CEOs do not report.",
        tags=["Reports"],
        request=DailyReportWriteSerializer,
    ),
)
class DailyReportViewSet(viewsets.GenericViewSet):
    serializer_class = DailyReportSerializer
    permission_classes = [IsAuthenticated]

    def get_queryset(self):
        user = self.request.user
        params = self.request.query_params
        queryset = DailyReport.objects.select_related('user')

        if not user.is_manager:
            queryset = queryset.filter(user=user)
        elif params.get('user_id'):
            queryset = queryset.filter(user_id=params['user_id'])

        if params.get('date'):
            queryset = queryset.filter(report_date=params['date'])

        return queryset.order_by('-report_date', '-created_at')

    def list(self, request):
        return Response({"success": True, "data": serialize_reports(self.get_queryset()[:100])})

    def create(self, request):
        if request.user.is_ceo:
            raise PermissionDenied('مدیران عامل نیازی به ثبت گزارش روزانه ندارند')

        serializer = DailyReportWriteSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        today = timezone.localdate()
        report_date = data.get('report_date') or today
        values = {
            'work_description': data['work_description'],
            'completed_tasks': data.get('completed_tasks') or [],
            'working_hours': data.get('working_hours'),
            'challenges': data.get('challenges') or None,
            'achievements': data.get('achievements') or None,
        }

        report = DailyReport.objects.filter(user=request.user, report_date=report_date).first()
        if report is not None:
            if report_date != today:
                raise PermissionDenied('فقط می‌توانید گزارش امروز را ویرایش کنید')
            for field, value in values.items():
                setattr(report, field, value)
            report.save()
            return Response({
                "success": True,
                "message": "گزارش روزانه با موفقیت به‌روزرسانی شد",
                "data": {"id": report.pk},
            })

        report = DailyReport.objects.create(user=request.user, report_date=report_date, **values)
        logger.info("Daily report %s for %s submitted by user %s", report.pk, report_date, request.user.pk)
        return Response(
            {"success": True, "message": "گزارش روزانه با موفقیت ثبت شد", "data": {"id": report.pk}},
            status=status.HTTP_201_CREATED,
        )

    @extend_schema(summary="Today's report of the current user", tags=["Reports"])
    @action(detail=False, methods=['get'])
    def today(self, request):
        report = DailyReport.objects.filter(user=request.user, report_date=timezone.localdate()).first()
        data = DailyReportSerializer(report).data if report is not None else None
        return Response({"success": True, "data": data})

    @extend_schema(
        summary="Analyze reports of a user",
        description="Sends the reports of a period to the AI proxy. Falls back to a statistical summary with ai_error=true.",
        tags=["Reports"],
        request=ReportAnalysisSerializer,
    )
    @action(detail=False, methods=['post'])
    def analyze(self, request):
        serializer = ReportAnalysisSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data
        start_date, end_date = data['start_date'], data['end_date']

        if not request.user.is_manager and data['user_id'] != request.user.pk:
            raise PermissionDenied('شما فقط می‌توانید گزارشات خود را تحلیل کنید')

        selected = User.objects.filter(pk=data['user_id'], status='active').first()
        if selected is None:
            raise NotFound('کاربر انتخاب شده یافت نشد')

        reports = DailyReport.objects.select_related('user').filter(
            user=selected, report_date__range=(start_date, end_date),
        ).order_by('report_date')
        raw_reports = serialize_reports(reports)
        if not raw_reports:
            raise NotFound('هیچ گزارشی در بازه زمانی انتخاب شده یافت نشد')

        rows = analysis_rows(raw_reports)
        period = {
            'start_date': start_date.isoformat(),
            'end_date': end_date.isoformat(),
            'total_days': len(rows),
        }
        prompt = ai_service.build_analysis_prompt(
            selected.name, selected.role, period['start_date'], period['end_date'], rows,
        )
        result = ai_service.request_analysis(prompt)

        payload = {
            'user_info': {'name': selected.name, 'role': selected.role},
            'period': period,
            'reports_count': len(rows),
            'raw_reports': raw_reports,
        }
        if result['success']:
            payload['analysis'] = result['analysis']
        else:
            payload['analysis'] = ai_service.fallback_analysis(
                selected.name, period['start_date'], period['end_date'], rows,
            )
            payload['ai_error'] = True

        return Response({"success": True, "data": payload})


class VoiceCommandView(APIView):
    """
    Answers a recognised voice command about a colleague with an analysis
    of their last seven days of reports.
    """
    permission_classes = [IsAuthenticated]

    @extend_schema(summary="Process a voice command", tags=["Reports"], request=VoiceCommandSerializer)
    def post(self, request):
        serializer = VoiceCommandSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        text = serializer.validated_data['text']
        employee_name = serializer.validated_data['employeeName']

        employee = User.objects.filter(name__icontains=employee_name, status='active').order_by('name').first()
        if employee is None:
            return Response({
                "success": True,
                "data": {"employee_found": False, "employee_name": employee_name, "text": text},
            })

        end_date = timezone.localdate()
        start_date = end_date - timedelta(days=7)
        reports = DailyReport.objects.select_related('user').filter(
            user=employee, report_date__range=(start_date, end_date),
        ).order_by('-report_date')[:10]
        rows = analysis_rows(serialize_reports(reports))

        if not rows:
            return Response({
                "success": True,
                "data": {
                    "employee_found": True,
                    "employee_name": employee.name,
                    "text": text,
                    "analysis": f"همکار {employee.name} در 7 روز گذشته هیچ گزارشی ثبت نکرده است.",
                },
            })

        start, end = start_date.isoformat(), end_date.isoformat()
        prompt = ai_service.build_analysis_prompt(employee.name, employee.role, start, end, rows)
        result = ai_service.request_analysis(prompt)

        payload = {
            'employee_found': True,
            'employee_name': employee.name,
            'employee_role': employee.role,
            'text': text,
            'reports_count': len(rows),
            'period': f"{start} تا {end}",
        }
        if result['success']:
            payload['analysis'] = result['analysis']
        else:
            payload['analysis'] = ai_service.voice_fallback_analysis(employee.name, start, end, rows)
            payload['ai_error'] = True

        return Response({"success": True, "data": payload})
