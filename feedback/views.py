import logging

from django_filters.rest_framework import DjangoFilterBackend
from drf_spectacular.utils import extend_schema, extend_schema_view
from rest_framework import viewsets, status, filters
from rest_framework.exceptions import PermissionDenied
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from cem.pagination import StandardPagination
from .models import Feedback
from .serializers import FeedbackSerializer

logger = logging.getLogger(__name__)


@extend_schema_view(
    list=extend_schema(summary="List feedback", description="Filter with type, status and customer_id", tags=["Feedback"]),
    create=extend_schema(summary="Record customer feedback", tags=["Feedback"]),
    retrieve=extend_schema(summary="Get feedback", tags=["Feedback"]),
    update=extend_schema(summary="Update feedback", tags=["Feedback"]),
    partial_update=extend_schema(summary="Partially update feedback", tags=["Feedback"]),
    destroy=extend_schema(summary="Delete feedback", description="Managers only", tags=["Feedback"]),
)
class FeedbackViewSet(viewsets.ModelViewSet):
    serializer_class = FeedbackSerializer
    permission_classes = [IsAuthenticated]
    pagination_class = StandardPagination
    filter_backends = [DjangoFilterBackend, filters.SearchFilter, filters.OrderingFilter]
    filterset_fields = ['type', 'status', 'priority', 'channel']
    search_fields = ['title', 'comment', 'product', 'customer__name']
    ordering_fields = ['created_at', 'score', 'priority']
    ordering = ['-created_at']

    def get_queryset(self):
        queryset = Feedback.objects.select_related('customer')
        customer_id = self.request.query_params.get('customer_id')
        if customer_id and customer_id.isdigit():
            queryset = queryset.filter(customer_id=customer_id)
        return queryset

    def create(self, request, *args, **kwargs):
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        feedback = serializer.save(created_by=request.user)
        logger.info("Feedback %s recorded for customer %s", feedback.pk, feedback.customer_id)
        return Response(
            {"success": True, "message": "بازخورد با موفقیت ایجاد شد", "data": FeedbackSerializer(feedback).data},
            status=status.HTTP_201_CREATED,
        )

    def retrieve(self, request, *args, **kwargs):
        return Response({"success": True, "data": self.get_serializer(self.get_object()).data})

    def update(self, request, *args, **kwargs):
        partial = kwargs.pop('partial', False)
        instance = self.get_object()
        serializer = self.get_serializer(instance, data=request.data, partial=partial)
        serializer.is_valid(raise_exception=True)
        serializer.save()
        return Response({"success": True, "message": "بازخورد با موفقیت به‌روزرسانی شد", "data": serializer.data})

    def destroy(self, request, *args, **kwargs):
        if not request.user.is_manager:
            raise PermissionDenied('دسترسی غیرمجاز')
        instance = self.get_object()
        instance.delete()
        return Response({"success": True, "message": "بازخورد با موفقیت حذف شد"})
