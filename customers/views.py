import logging

from django.db.models import Q
from django_filters.rest_framework import DjangoFilterBackend
from drf_spectacular.utils import extend_schema, extend_schema_view
from rest_framework import viewsets, status, filters
from rest_framework.decorators import action
from rest_framework.exceptions import PermissionDenied
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from cem.pagination import StandardPagination
from .models import Customer
from .serializers import CustomerSerializer, CustomerCreateSerializer, SalesStageSerializer

logger = logging.getLogger(__name__)


@extend_schema_view(
	list=extend_schema(
		summary="List customers",
		description="Paginated customers. CEOs see every customer, other users only their own.",
		tags=["Customers"],
	),
	create=extend_schema(summary="Create a customer", tags=["Customers"]),
	retrieve=extend_schema(summary="Get a customer by ID", tags=["Customers"]),
	update=extend_schema(summary="Update a customer", tags=["Customers"]),
	partial_update=extend_schema(summary="Partial update a customer", tags=["Customers"]),
	destroy=extend_schema(summary="Delete a customer", description="Managers only", tags=["Customers"]),
)
class CustomerViewSet(viewsets.ModelViewSet):
	queryset = Customer.objects.select_related('assigned_to').order_by('-created_at')
	pagination_class = StandardPagination
	filter_backends = [DjangoFilterBackend, filters.SearchFilter, filters.OrderingFilter]
	filterset_fields = ['status', 'segment', 'priority', 'sales_stage', 'assigned_to']
	search_fields = ['name', 'email', 'phone', 'company_name']
	ordering_fields = ['created_at', 'updated_at', 'name', 'last_interaction']
	ordering = ['-created_at']
	permission_classes = [IsAuthenticated]

	def get_serializer_class(self):
		if self.action in ['create', 'update', 'partial_update']:
			return CustomerCreateSerializer
		return CustomerSerializer

	def get_queryset(self):
		queryset = super().get_queryset()
		user = self.request.user
		if not user.is_ceo:
			queryset = queryset.filter(Q(assigned_to=user) | Q(created_by=user))
		return queryset

	def create(self, request, *args, **kwargs):
		serializer = self.get_serializer(data=request.data)
		serializer.is_valid(raise_exception=True)
		assigned_to = serializer.validated_data.get('assigned_to') or request.user
		customer = serializer.save(created_by=request.user, assigned_to=assigned_to)
		return Response(
			{"success": True, "message": "مشتری با موفقیت ایجاد شد", "data": CustomerSerializer(customer).data},
			status=status.HTTP_201_CREATED,
		)

	def retrieve(self, request, *args, **kwargs):
		return Response({"success": True, "data": CustomerSerializer(self.get_object()).data})

	def update(self, request, *args, **kwargs):
		partial = kwargs.pop('partial', False)
		instance = self.get_object()
		serializer = self.get_serializer(instance, data=request.data, partial=partial)
		serializer.is_valid(raise_exception=True)
		customer = serializer.save()
		return Response({"success": True, "message": "مشتری با موفقیت به‌روزرسانی شد", "data": CustomerSerializer(customer).data})

	def destroy(self, request, *args, **kwargs):
		if not request.user.is_manager:
			raise PermissionDenied('دسترسی غیرمجاز')
		instance = self.get_object()
		instance.delete()
		logger.info("Customer %s deleted by %s", instance.pk, request.user.pk)
		return Response({"success": True, "message": "مشتری با موفقیت حذف شد"}, status=status.HTTP_200_OK)

	@extend_schema(summary="Update the sales stage of a customer", tags=["Customers"], request=SalesStageSerializer)
	@action(detail=True, methods=['put', 'patch'], url_path='sales-stage')
	def sales_stage(self, request, pk=None):
		customer = self.get_object()
		serializer = SalesStageSerializer(data=request.data)
		serializer.is_valid(raise_exception=True)
		customer.sales_stage = serializer.validated_data['sales_stage']
		customer.save(update_fields=['sales_stage', 'updated_at'])
		return Response({"success": True, "message": "مرحله فروش به‌روزرسانی شد", "data": CustomerSerializer(customer).data})
