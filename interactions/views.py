import logging

from django.db import transaction
from django.utils import timezone
from django_filters.rest_framework import DjangoFilterBackend
from drf_spectacular.utils import extend_schema, extend_schema_view
from rest_framework import viewsets, status, filters
from rest_framework.exceptions import PermissionDenied
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from cem.pagination import StandardPagination
from customers.models import Customer
from .models import Interaction
from .serializers import InteractionSerializer

logger = logging.getLogger(__name__)


@extend_schema_view(
    list=extend_schema(
        summary="List interactions",
        description="CEOs see every interaction, other users only the ones they performed.",
        tags=["Interactions"],
    ),
    create=extend_schema(summary="Log an interaction", tags=["Interactions"]),
    retrieve=extend_schema(summary="Get an interaction", tags=["Interactions"]),
    update=extend_schema(summary="Update an interaction", tags=["Interactions"]),
    partial_update=extend_schema(summary="Partially update an interaction", tags=["Interactions"]),
    destroy=extend_schema(summary="Delete an interaction", tags=["Interactions"]),
)
class InteractionViewSet(viewsets.ModelViewSet):
    serializer_class = InteractionSerializer
    permission_classes = [IsAuthenticated]
    pagination_class = StandardPagination
    filter_backends = [DjangoFilterBackend, filters.SearchFilter, filters.OrderingFilter]
    filterset_fields = ['type', 'direction', 'channel']
    search_fields = ['subject', 'description', 'customer__name']
    ordering_fields = ['date', 'created_at', 'duration']
    ordering = ['-date']

    def get_queryset(self):
        queryset = Interaction.objects.select_related('customer', 'performed_by')
        user = self.request.user
        if not user.is_ceo:
            queryset = queryset.filter(performed_by=user)

        customer_id = self.request.query_params.get('customer_id')
        if customer_id and customer_id.isdigit():
            queryset = queryset.filter(customer_id=customer_id)
        return queryset

    def create(self, request, *args, **kwargs):
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        with transaction.atomic():
            interaction = serializer.save(
                performed_by=request.user,
                date=serializer.validated_data.get('date') or timezone.now(),
            )
            Customer.objects.filter(pk=interaction.customer_id).update(
                last_interaction=interaction.date, updated_at=timezone.now()
            )

        logger.info("Interaction %s logged by %s", interaction.pk, request.user.pk)
        return Response(
            {"success": True, "message": "تعامل با موفقیت ایجاد شد", "data": InteractionSerializer(interaction).data},
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
        return Response({"success": True, "message": "تعامل با موفقیت به‌روزرسانی شد", "data": serializer.data})

    def destroy(self, request, *args, **kwargs):
        instance = self.get_object()
        if instance.performed_by_id != request.user.pk and not request.user.is_manager:
            raise PermissionDenied('دسترسی غیرمجاز')
        instance.delete()
        return Response({"success": True, "message": "تعامل با موفقیت حذف شد"})
