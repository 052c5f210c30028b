from datetime import timedelta
from decimal import Decimal

from django.db.models import Avg, Count, Q, Sum
from django.db.models.functions import TruncMonth
from django.utils import timezone
from drf_spectacular.utils import extend_schema, OpenApiParameter
from drf_spectacular.types import OpenApiTypes
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from chat.models import ChatMessage
from customers.models import Customer
from reports.models import DailyReport
from sales.models import Deal, Sale
from task.models import Task
from .serializers import DashboardStatsSerializer

PERIOD_DAYS = {'week': 7, 'month': 30, 'quarter': 90, 'year': 365}


class DashboardStatsView(APIView):
    permission_classes = [IsAuthenticated]

    @extend_schema(
        summary="Dashboard statistics",
        description="Aggregated data for dashboard tiles and charts. Non-managers only see their own records.",
        tags=["Dashboard"],
        responses=DashboardStatsSerializer,
        parameters=[
            OpenApiParameter(
                name='period',
                type=OpenApiTypes.STR,
                required=False,
                location=OpenApiParameter.QUERY,
                description="Time range for deal figures. One of: week, month (default), quarter, year."
            ),
        ],
    )
    def get(self, request):
        user = request.user
        period = request.query_params.get('period') or 'month'
        scoped = not user.is_manager
        now = timezone.now()

        customers = Customer.objects.all()
        deals = Deal.objects.all()
        sales = Sale.objects.all()
        tasks = Task.objects.all()
        reports = DailyReport.objects.all()
        if scoped:
            customers = customers.filter(assigned_to=user)
            deals = deals.filter(assigned_to=user)
            sales = sales.filter(sales_person=user)
            tasks = tasks.filter(task_assignees__user=user).distinct()
            reports = reports.filter(user=user)

        period_deals = deals
        if period in PERIOD_DAYS:
            period_deals = deals.filter(created_at__gte=now - timedelta(days=PERIOD_DAYS[period]))

        payload = {
            'customers': customers.aggregate(
                total_customers=Count('id'),
                active_customers=Count('id', filter=Q(status='active')),
                prospects=Count('id', filter=Q(status='prospect')),
            ),
            'deals': self._deal_stats(period_deals),
            'sales': self._month_sales(sales, now),
            'tasks': {
                'pending': tasks.filter(status='pending').count(),
                'in_progress': tasks.filter(status='in_progress').count(),
                'completed': tasks.filter(status='completed').count(),
            },
            'reports_today': reports.filter(report_date=timezone.localdate()).count(),
            'unread_messages': ChatMessage.objects.filter(receiver=user, read_at__isnull=True).count(),
            'salesTrend': self._sales_trend(deals, now),
            'pipelineOverview': self._pipeline(deals),
            'period': period,
        }

        serializer = DashboardStatsSerializer(payload)
        return Response({"success": True, "data": serializer.data})

    # ----------------------
    # Helper Methods
    # ----------------------

    @staticmethod
    def _deal_stats(queryset):
        stats = queryset.aggregate(
            total_deals=Count('id'),
            open_deals=Count('id', filter=~Q(stage__in=['closed_won', 'closed_lost'])),
            deal_value=Sum('total_value'),
            avg_probability=Avg('probability'),
            won_deals=Count('id', filter=Q(stage='closed_won')),
            won_deal_value=Sum('total_value', filter=Q(stage='closed_won')),
        )
        stats['total_value'] = stats.pop('deal_value') or Decimal('0')
        stats['won_value'] = stats.pop('won_deal_value') or Decimal('0')
        return stats

    @staticmethod
    def _month_sales(queryset, now):
        month_start = timezone.localtime(now).replace(day=1, hour=0, minute=0, second=0, microsecond=0)
        stats = queryset.filter(sale_date__gte=month_start).aggregate(
            month_total=Sum('total_amount'),
            month_count=Count('id'),
        )
        stats['month_total'] = stats['month_total'] or Decimal('0')
        return stats

    @staticmethod
    def _sales_trend(queryset, now):
        """Won deal revenue per month over the last twelve months"""
        rows = (
            queryset.filter(stage='closed_won', actual_close_date__gte=now - timedelta(days=365))
            .annotate(month_start=TruncMonth('actual_close_date'))
            .values('month_start')
            .annotate(revenue=Sum('total_value'), deals_count=Count('id'))
            .order_by('month_start')
        )
        return [
            {
                'month': row['month_start'].strftime('%Y-%m'),
                'revenue': row['revenue'] or Decimal('0'),
                'deals_count': row['deals_count'],
            }
            for row in rows
        ]

    @staticmethod
    def _pipeline(queryset):
        counts = {
            row['stage']: row
            for row in queryset.values('stage').annotate(deals_count=Count('id'), stage_value=Sum('total_value'))
        }
        return [
            {
                'stage_code': code,
                'stage_name': name,
                'deals_count': counts.get(code, {}).get('deals_count', 0),
                'total_value': counts.get(code, {}).get('stage_value') or Decimal('0'),
            }
            for code, name in Deal.STAGE_CHOICES
        ]
