import logging

from django.db import transaction
from django.db.models import Count
from django.utils import timezone
from django_filters.rest_framework import DjangoFilterBackend
from drf_spectacular.utils import extend_schema, extend_schema_view
from rest_framework import viewsets, status, filters
from rest_framework.decorators import action
from rest_framework.exceptions import NotFound
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from cem.pagination import LimitOffsetEnvelopePagination
from .models import Company, Contact, ContactActivity
from .serializers import (
    CompanySerializer,
    ContactSerializer,
    ContactWriteSerializer,
    ContactActivitySerializer,
)

logger = logging.getLogger(__name__)


class EnvelopeListMixin:
    """List with limit/offset slicing, wrapped in the API envelope"""

    def list(self, request, *args, **kwargs):
        queryset = self.filter_queryset(self.get_queryset())
        total = queryset.count()
        page = LimitOffsetEnvelopePagination().paginate(queryset, request)
        serializer = self.get_serializer(page, many=True)
        return Response({"success": True, "data": serializer.data, "total": total})


@extend_schema_view(
    list=extend_schema(summary="List companies", description="Includes the number of contacts per company", tags=["Companies"]),
    create=extend_schema(summary="Create a company", tags=["Companies"]),
    retrieve=extend_schema(summary="Get a company", tags=["Companies"]),
    update=extend_schema(summary="Update a company", tags=["Companies"]),
    partial_update=extend_schema(summary="Partially update a company", tags=["Companies"]),
    destroy=extend_schema(summary="Delete a company", description="Refused while contacts still reference it", tags=["Companies"]),
)
class CompanyViewSet(EnvelopeListMixin, viewsets.ModelViewSet):
    serializer_class = CompanySerializer
    permission_classes = [IsAuthenticated]
    filter_backends = [DjangoFilterBackend, filters.SearchFilter, filters.OrderingFilter]
    filterset_fields = ['status', 'industry', 'city']
    search_fields = ['name', 'email', 'phone', 'website']
    ordering_fields = ['name', 'created_at', 'rating']
    ordering = ['name']

    def get_queryset(self):
        return Company.objects.select_related('assigned_to').annotate(contacts_count=Count('contacts'))

    def create(self, request, *args, **kwargs):
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        company = serializer.save(created_by=request.user)
        company.contacts_count = 0
        return Response(
            {"success": True, "message": "شرکت با موفقیت اضافه شد", "data": CompanySerializer(company).data},
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
        return Response({"success": True, "message": "شرکت با موفقیت به‌روزرسانی شد", "data": serializer.data})

    def destroy(self, request, *args, **kwargs):
        instance = self.get_object()
        if instance.contacts.exists():
            logger.info("Refused to delete company %s with contacts", instance.pk)
            return Response(
                {"success": False, "message": "امکان حذف شرکت وجود ندارد. ابتدا مخاطبین مرتبط را حذف کنید."},
                status=status.HTTP_400_BAD_REQUEST,
            )
        instance.delete()
        return Response({"success": True, "message": "شرکت با موفقیت حذف شد"})


@extend_schema_view(
    list=extend_schema(summary="List contacts", tags=["Contacts"]),
    create=extend_schema(summary="Create a contact", tags=["Contacts"], request=ContactWriteSerializer),
    retrieve=extend_schema(summary="Get a contact", tags=["Contacts"]),
    update=extend_schema(summary="Update a contact", tags=["Contacts"], request=ContactWriteSerializer),
    partial_update=extend_schema(summary="Partially update a contact", tags=["Contacts"], request=ContactWriteSerializer),
    destroy=extend_schema(summary="Delete a contact", tags=["Contacts"]),
)
class ContactViewSet(EnvelopeListMixin, viewsets.ModelViewSet):
    permission_classes = [IsAuthenticated]
    filter_backends = [DjangoFilterBackend, filters.SearchFilter, filters.OrderingFilter]
    filterset_fields = ['status', 'source', 'is_primary']
    search_fields = ['first_name', 'last_name', 'email', 'phone', 'mobile', 'job_title']
    ordering_fields = ['created_at', 'first_name', 'last_name', 'last_contact_date']
    ordering = ['-created_at']

    def get_serializer_class(self):
        if self.action in ['create', 'update', 'partial_update']:
            return ContactWriteSerializer
        if self.action == 'activities':
            return ContactActivitySerializer
        return ContactSerializer

    def get_queryset(self):
        queryset = Contact.objects.select_related('company')

        company_id = self.request.query_params.get('company_id')
        if company_id == 'individual':
            queryset = queryset.filter(company__isnull=True)
        elif company_id and company_id.isdigit():
            queryset = queryset.filter(company_id=company_id)

        return queryset

    def create(self, request, *args, **kwargs):
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        with transaction.atomic():
            contact = serializer.save(
                created_by=request.user,
                assigned_to=serializer.validated_data.get('assigned_to') or request.user,
            )
            if contact.notes:
                ContactActivity.objects.create(
                    contact=contact,
                    company=contact.company,
                    activity_type='note',
                    title='یادداشت اولیه',
                    description=contact.notes,
                    status='completed',
                    priority='low',
                    completed_at=timezone.now(),
                    created_by=request.user,
                )

        logger.info("Contact %s created by %s", contact.pk, request.user.pk)
        return Response(
            {"success": True, "message": "مخاطب با موفقیت اضافه شد", "data": ContactSerializer(contact).data},
            status=status.HTTP_201_CREATED,
        )

    def retrieve(self, request, *args, **kwargs):
        return Response({"success": True, "data": ContactSerializer(self.get_object()).data})

    def update(self, request, *args, **kwargs):
        partial = kwargs.pop('partial', False)
        instance = self.get_object()
        serializer = self.get_serializer(instance, data=request.data, partial=partial)
        serializer.is_valid(raise_exception=True)
        contact = serializer.save()
        return Response({"success": True, "message": "مخاطب با موفقیت به‌روزرسانی شد", "data": ContactSerializer(contact).data})

    def destroy(self, request, *args, **kwargs):
        instance = self.get_object()
        instance.delete()
        return Response({"success": True, "message": "مخاطب با موفقیت حذف شد"})

    @extend_schema(summary="List or add activities of a contact", tags=["Contacts"])
    @action(detail=True, methods=['get', 'post'])
    def activities(self, request, pk=None):
        contact = self.get_object()

        if request.method == 'GET':
            queryset = contact.activities.select_related('created_by')
            return Response({"success": True, "data": ContactActivitySerializer(queryset, many=True).data})

        serializer = ContactActivitySerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        now = timezone.now()
        activity_status = serializer.validated_data.get('status', 'completed')

        with transaction.atomic():
            activity = serializer.save(
                contact=contact,
                company=contact.company,
                created_by=request.user,
                completed_at=now if activity_status == 'completed' else None,
            )
            if activity_status == 'completed' and activity.activity_type in ('call', 'email', 'meeting'):
                Contact.objects.filter(pk=contact.pk).update(last_contact_date=timezone.localdate(), updated_at=now)

        return Response(
            {"success": True, "message": "فعالیت با موفقیت اضافه شد", "data": ContactActivitySerializer(activity).data},
            status=status.HTTP_201_CREATED,
        )

    @extend_schema(summary="Delete an activity of a contact", tags=["Contacts"])
    @action(detail=True, methods=['delete'], url_path='activities/(?P<activity_id>[^/.]+)')
    def delete_activity(self, request, pk=None, activity_id=None):
        contact = self.get_object()
        activity = contact.activities.filter(pk=activity_id).first() if str(activity_id).isdigit() else None
        if activity is None:
            raise NotFound('فعالیت یافت نشد')
        activity.delete()
        return Response({"success": True, "message": "فعالیت با موفقیت حذف شد"})
