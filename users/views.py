import logging

from django.conf import settings
from django.utils import timezone
from drf_spectacular.utils import extend_schema, extend_schema_view, OpenApiParameter
from drf_spectacular.types import OpenApiTypes
from rest_framework import viewsets, status, filters
from rest_framework.decorators import action
from rest_framework.exceptions import PermissionDenied
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from access.permissions import IsManager, IsManagerOrSelf
from cem.pagination import LimitOffsetEnvelopePagination
from .authentication import issue_token
from .models import User
from .serializers import (
    UserSerializer,
    CoworkerSerializer,
    LoginSerializer,
    UserCreateSerializer,
    UserUpdateSerializer,
    ProfileSerializer,
    PasswordChangeSerializer,
)

logger = logging.getLogger(__name__)


class LoginView(APIView):
    """
    Email/password login. The token is returned in the body and set as the
    HTTP-only ``auth-token`` cookie.
    """
    permission_classes = [AllowAny]
    authentication_classes = []

    @extend_schema(summary="Login", tags=["Authentication"], request=LoginSerializer)
    def post(self, request):
        serializer = LoginSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        email = serializer.validated_data['email']
        password = serializer.validated_data['password']

        user = User.objects.filter(email=email, status='active').first()
        if user is None or not user.check_password(password):
            logger.info("Failed login attempt for %s", email)
            return Response(
                {"success": False, "message": "ایمیل یا رمز عبور اشتباه است"},
                status=status.HTTP_401_UNAUTHORIZED,
            )

        now = timezone.now()
        User.objects.filter(pk=user.pk).update(last_login=now, last_active=now)
        user.last_login = now
        user.last_active = now

        token = issue_token(user)
        response = Response({
            "success": True,
            "message": "ورود موفقیت‌آمیز بود",
            "token": token,
            "user": UserSerializer(user).data,
        })
        response.set_cookie(
            settings.AUTH_COOKIE_NAME,
            token,
            max_age=settings.AUTH_COOKIE_MAX_AGE,
            httponly=True,
            secure=settings.AUTH_COOKIE_SECURE,
            samesite='Lax',
        )
        return response


class LogoutView(APIView):
    permission_classes = [AllowAny]
    authentication_classes = []

    @extend_schema(summary="Logout", tags=["Authentication"], request=None)
    def post(self, request):
        response = Response({"success": True, "message": "خروج با موفقیت انجام شد"})
        response.delete_cookie(settings.AUTH_COOKIE_NAME)
        return response


class MeView(APIView):
    permission_classes = [IsAuthenticated]

    @extend_schema(summary="Current user", tags=["Authentication"])
    def get(self, request):
        User.objects.filter(pk=request.user.pk).update(last_active=timezone.now())
        return Response({"success": True, "data": UserSerializer(request.user).data})


@extend_schema_view(
    list=extend_schema(
        summary="List users",
        description="Active and suspended users. Managers only.",
        tags=["Users"],
        parameters=[
            OpenApiParameter(name='status', type=OpenApiTypes.STR, location=OpenApiParameter.QUERY, required=False),
            OpenApiParameter(name='role', type=OpenApiTypes.STR, location=OpenApiParameter.QUERY, required=False,
                             description="Comma separated list of roles"),
            OpenApiParameter(name='limit', type=OpenApiTypes.INT, location=OpenApiParameter.QUERY, required=False),
            OpenApiParameter(name='offset', type=OpenApiTypes.INT, location=OpenApiParameter.QUERY, required=False),
        ],
    ),
    create=extend_schema(summary="Create user", tags=["Users"]),
    retrieve=extend_schema(summary="Get user", tags=["Users"]),
    update=extend_schema(summary="Update user", tags=["Users"]),
    partial_update=extend_schema(summary="Partially update user", tags=["Users"]),
    destroy=extend_schema(summary="Disable user", description="Sets the status to inactive", tags=["Users"]),
)
class UserViewSet(viewsets.ModelViewSet):
    queryset = User.objects.exclude(status='inactive')
    filter_backends = [filters.SearchFilter, filters.OrderingFilter]
    search_fields = ['name', 'email', 'team', 'phone']
    ordering_fields = ['name', 'created_at', 'last_active', 'role']
    ordering = ['name']
    http_method_names = ['get', 'post', 'put', 'patch', 'delete']

    def get_permissions(self):
        if self.action in ['list', 'create', 'destroy']:
            return [IsAuthenticated(), IsManager()]
        if self.action in ['retrieve', 'update', 'partial_update']:
            return [IsAuthenticated(), IsManagerOrSelf()]
        return [IsAuthenticated()]

    def get_serializer_class(self):
        if self.action == 'create':
            return UserCreateSerializer
        if self.action in ['update', 'partial_update']:
            return UserUpdateSerializer
        if self.action == 'coworkers':
            return CoworkerSerializer
        return UserSerializer

    def get_queryset(self):
        queryset = super().get_queryset()

        status_filter = self.request.query_params.get('status')
        if status_filter:
            queryset = queryset.filter(status=status_filter)

        roles = self.request.query_params.get('role')
        if roles:
            queryset = queryset.filter(role__in=[r.strip() for r in roles.split(',') if r.strip()])

        return queryset

    def list(self, request, *args, **kwargs):
        queryset = self.filter_queryset(self.get_queryset())
        total = queryset.count()
        page = LimitOffsetEnvelopePagination().paginate(queryset, request)
        return Response({
            "success": True,
            "data": UserSerializer(page, many=True).data,
            "total": total,
        })

    def create(self, request, *args, **kwargs):
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        user = serializer.save()
        logger.info("User %s created by %s", user.email, request.user.email)
        return Response(
            {"success": True, "message": "کاربر با موفقیت ایجاد شد", "data": UserSerializer(user).data},
            status=status.HTTP_201_CREATED,
        )

    def retrieve(self, request, *args, **kwargs):
        return Response({"success": True, "data": UserSerializer(self.get_object()).data})

    def update(self, request, *args, **kwargs):
        partial = kwargs.pop('partial', False)
        instance = self.get_object()

        if not request.user.is_manager:
            for field in ('role', 'status'):
                if field in request.data and request.data[field] != getattr(instance, field):
                    raise PermissionDenied('فقط مدیران می‌توانند نقش یا وضعیت کاربران را تغییر دهند')

        serializer = self.get_serializer(instance, data=request.data, partial=partial)
        serializer.is_valid(raise_exception=True)
        user = serializer.save()
        return Response({"success": True, "message": "اطلاعات کاربر به‌روزرسانی شد", "data": UserSerializer(user).data})

    def destroy(self, request, *args, **kwargs):
        instance = self.get_object()
        if instance.pk == request.user.pk:
            return Response(
                {"success": False, "message": "امکان غیرفعال کردن حساب خودتان وجود ندارد"},
                status=status.HTTP_400_BAD_REQUEST,
            )
        User.objects.filter(pk=instance.pk).update(status='inactive', updated_at=timezone.now())
        logger.info("User %s disabled by %s", instance.email, request.user.email)
        return Response({"success": True, "message": "کاربر غیرفعال شد"})

    @extend_schema(summary="List coworkers", description="Active users for chat and task assignment", tags=["Users"])
    @action(detail=False, methods=['get'])
    def coworkers(self, request):
        queryset = User.objects.filter(status='active').order_by('name')
        return Response({"success": True, "data": CoworkerSerializer(queryset, many=True).data})


class ProfileView(APIView):
    permission_classes = [IsAuthenticated]

    @extend_schema(summary="Get own profile", tags=["Profile"])
    def get(self, request):
        return Response({"success": True, "data": ProfileSerializer(request.user).data})

    @extend_schema(summary="Update own profile", tags=["Profile"], request=ProfileSerializer)
    def put(self, request):
        serializer = ProfileSerializer(request.user, data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)
        serializer.save()
        return Response({"success": True, "message": "پروفایل به‌روزرسانی شد", "data": serializer.data})


class PasswordChangeView(APIView):
    permission_classes = [IsAuthenticated]

    @extend_schema(summary="Change own password", tags=["Profile"], request=PasswordChangeSerializer)
    def post(self, request):
        serializer = PasswordChangeSerializer(data=request.data, context={'user': request.user})
        serializer.is_valid(raise_exception=True)
        user = request.user
        user.set_password(serializer.validated_data['new_password'])
        user.save(update_fields=['password', 'updated_at'])
        return Response({"success": True, "message": "رمز عبور با موفقیت تغییر کرد"})
