import logging

from django_filters.rest_framework import DjangoFilterBackend
from drf_spectacular.utils import extend_schema, extend_schema_view
from rest_framework import viewsets, status, filters
from rest_framework.exceptions import PermissionDenied
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from access.permissions import IsSalesRole, ManagerWriteOrReadOnly
from cem.pagination import StandardPagination
from .models import Product, Deal, Sale
from .serializers import (
    ProductSerializer,
    DealSerializer,
    SaleSerializer,
    SaleWriteSerializer,
)
from .services import record_sale

logger = logging.getLogger(__name__)


@extend_schema_view(
    list=extend_schema(summary="List products", tags=["Products"]),
    create=extend_schema(summary="Create a product", tags=["Products"]),
    retrieve=extend_schema(summary="Get a product", tags=["Products"]),
    update=extend_schema(summary="Update a product", tags=["Products"]),
    partial_update=extend_schema(summary="Partially update a product", tags=["Products"]),
    destroy=extend_schema(summary="Deactivate a product", tags=["Products"]),
)
class ProductViewSet(viewsets.ModelViewSet):
    queryset = Product.objects.all()
    serializer_class = ProductSerializer
    permission_classes = [ManagerWriteOrReadOnly]
    filter_backends = [DjangoFilterBackend, filters.SearchFilter, filters.OrderingFilter]
    filterset_fields = ['category', 'is_active', 'currency']
    search_fields = ['name', 'description', 'category']
    ordering_fields = ['name', 'price', 'created_at']
    ordering = ['name']

    def list(self, request, *args, **kwargs):
        queryset = self.filter_queryset(self.get_queryset())
        return Response({"success": True, "data": self.get_serializer(queryset, many=True).data})

    def create(self, request, *args, **kwargs):
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        serializer.save()
        return Response(
            {"success": True, "message": "محصول با موفقیت ایجاد شد", "data": serializer.data},
            status=status.HTTP_201_CREATED,
        )

    def update(self, request, *args, **kwargs):
        partial = kwargs.pop('partial', False)
        serializer = self.get_serializer(self.get_object(), data=request.data, partial=partial)
        serializer.is_valid(raise_exception=True)
        serializer.save()
        return Response({"success": True, "message": "محصول با موفقیت به‌روزرسانی شد", "data": serializer.data})

    def destroy(self, request, *args, **kwargs):
        # products referenced by sale items stay in place, only hidden
        product = self.get_object()
        Product.objects.filter(pk=product.pk).update(is_active=False)
        return Response({"success": True, "message": "محصول غیرفعال شد"})


@extend_schema_view(
    list=extend_schema(summary="List deals", description="Non-CEO users see only deals assigned to them", tags=["Deals"]),
    create=extend_schema(summary="Create a deal", tags=["Deals"]),
    retrieve=extend_schema(summary="Get a deal", tags=["Deals"]),
    update=extend_schema(summary="Update a deal", tags=["Deals"]),
    partial_update=extend_schema(summary="Partially update a deal", tags=["Deals"]),
    destroy=extend_schema(summary="Delete a deal", tags=["Deals"]),
)
class DealViewSet(viewsets.ModelViewSet):
    serializer_class = DealSerializer
    permission_classes = [IsAuthenticated]
    pagination_class = StandardPagination
    filter_backends = [DjangoFilterBackend, filters.SearchFilter, filters.OrderingFilter]
    filterset_fields = ['stage', 'customer', 'assigned_to']
    search_fields = ['title', 'customer__name']
    ordering_fields = ['created_at', 'total_value', 'expected_close_date']
    ordering = ['-created_at']

    def get_queryset(self):
        queryset = Deal.objects.select_related('customer', 'assigned_to')
        if not self.request.user.is_ceo:
            queryset = queryset.filter(assigned_to=self.request.user)
        return queryset

    def create(self, request, *args, **kwargs):
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        deal = serializer.save(assigned_to=serializer.validated_data.get('assigned_to') or request.user)
        return Response(
            {"success": True, "message": "معامله با موفقیت ایجاد شد", "data": DealSerializer(deal).data},
            status=status.HTTP_201_CREATED,
        )

    def retrieve(self, request, *args, **kwargs):
        return Response({"success": True, "data": self.get_serializer(self.get_object()).data})

    def update(self, request, *args, **kwargs):
        partial = kwargs.pop('partial', False)
        serializer = self.get_serializer(self.get_object(), data=request.data, partial=partial)
        serializer.is_valid(raise_exception=True)
        serializer.save()
        return Response({"success": True, "message": "معامله با موفقیت به‌روزرسانی شد", "data": serializer.data})

    def destroy(self, request, *args, **kwargs):
        deal = self.get_object()
        if deal.sales.exists():
            return Response(
                {"success": False, "message": "امکان حذف معامله‌ای که فروش ثبت شده دارد وجود ندارد"},
                status=status.HTTP_400_BAD_REQUEST,
            )
        deal.delete()
        return Response({"success": True, "message": "معامله حذف شد"})


@extend_schema_view(
    list=extend_schema(summary="List sales", description="Non-managers only see their own sales", tags=["Sales"]),
    create=extend_schema(summary="Record a sale", tags=["Sales"], request=SaleWriteSerializer),
    retrieve=extend_schema(summary="Get a sale", tags=["Sales"]),
    update=extend_schema(summary="Edit a sale", tags=["Sales"], request=SaleWriteSerializer),
    destroy=extend_schema(summary="Delete a sale", description="Managers only", tags=["Sales"]),
)
class SaleViewSet(viewsets.ModelViewSet):
    serializer_class = SaleSerializer
    pagination_class = StandardPagination
    http_method_names = ['get', 'post', 'put', 'delete']

    def get_permissions(self):
        if self.action in ['create', 'update']:
            return [IsAuthenticated(), IsSalesRole()]
        return [IsAuthenticated()]

    def get_queryset(self):
        queryset = Sale.objects.select_related('deal').prefetch_related('items')
        user = self.request.user
        params = self.request.query_params

        if not user.is_manager:
            queryset = queryset.filter(sales_person=user)
        elif params.get('sales_person_id'):
            queryset = queryset.filter(sales_person_id=params['sales_person_id'])

        if params.get('customer_id'):
            queryset = queryset.filter(customer_id=params['customer_id'])
        if params.get('payment_status'):
            queryset = queryset.filter(payment_status=params['payment_status'])
        if params.get('start_date'):
            queryset = queryset.filter(sale_date__date__gte=params['start_date'])
        if params.get('end_date'):
            queryset = queryset.filter(sale_date__date__lte=params['end_date'])

        return queryset.order_by('-sale_date')

    def create(self, request, *args, **kwargs):
        serializer = SaleWriteSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        sale = record_sale(request.user, serializer.validated_data)
        return Response(
            {"success": True, "message": "فروش با موفقیت ثبت شد", "data": SaleSerializer(sale).data},
            status=status.HTTP_201_CREATED,
        )

    def retrieve(self, request, *args, **kwargs):
        return Response({"success": True, "data": self.get_serializer(self.get_object()).data})

    def update(self, request, *args, **kwargs):
        sale = self.get_object()
        serializer = SaleWriteSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        sale = record_sale(request.user, serializer.validated_data, sale=sale)
        return Response({"success": True, "message": "فروش با موفقیت ویرایش شد", "data": SaleSerializer(sale).data})

    def destroy(self, request, *args, **kwargs):
        if not request.user.is_manager:
            raise PermissionDenied('عدم دسترسی')
        sale = self.get_object()
        sale_id = sale.pk
        sale.delete()
        logger.info("Sale %s deleted by %s", sale_id, request.user.pk)
        return Response({"success": True, "message": "فروش حذف شد"})
