import logging

from drf_spectacular.utils import extend_schema, OpenApiParameter
from drf_spectacular.types import OpenApiTypes
from rest_framework import status
from rest_framework.exceptions import NotFound, PermissionDenied, ValidationError
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from users.models import User
from .models import Module, UserModulePermission
from .navigation import build_navigation
from .permissions import IsManager
from .policy import policy
from .resolver import (
    accessible_modules,
    active_modules,
    apply_permission_changes,
    has_module_access,
    set_module_permission,
    update_or_grant_module,
)
from .serializers import (
    ModuleSerializer,
    NavigationItemSerializer,
    PermissionChangeSerializer,
    BulkPermissionSerializer,
    UserModuleChangeSerializer,
)

logger = logging.getLogger(__name__)


def _grant_target(user_id):
    """Active non-manager user whose grants may be edited"""
    target = User.objects.filter(pk=user_id, status='active').first()
    if target is None:
        raise NotFound('کاربر یافت نشد')
    if target.is_manager:
        raise PermissionDenied('نمی‌توان دسترسی مدیران را تغییر داد')
    return target


def _module(module_id):
    module = Module.objects.filter(pk=module_id).first()
    if module is None:
        raise NotFound('ماژول یافت نشد')
    return module


class AuthPermissionsView(APIView):
    """Modules the current user may open"""
    permission_classes = [IsAuthenticated]

    @extend_schema(summary="Current user's modules", tags=["Permissions"])
    def get(self, request):
        return Response({
            "success": True,
            "data": {
                "modules": accessible_modules(request.user),
                "userRole": request.user.role,
                "isManager": request.user.is_manager,
            },
        })


class NavigationView(APIView):
    permission_classes = [IsAuthenticated]

    @extend_schema(
        summary="Current user's navigation tree",
        tags=["Permissions"],
        responses=NavigationItemSerializer(many=True),
    )
    def get(self, request):
        return Response({"success": True, "data": build_navigation(accessible_modules(request.user))})


class PermissionsView(APIView):
    """
    Manager screen for per-user module grants.
    GET lists non-manager users with their granted module ids and the grantable modules.
    POST grants or revokes one module for one user.
    """
    permission_classes = [IsAuthenticated, IsManager]

    @extend_schema(summary="Users and grantable modules", tags=["Permissions"])
    def get(self, request):
        users = User.objects.filter(status='active').exclude(role__in=policy.manager_roles).order_by('name')

        granted = {}
        rows = UserModulePermission.objects.filter(user__in=users, granted=True).values_list('user_id', 'module_id')
        for user_id, module_id in rows:
            granted.setdefault(user_id, []).append(module_id)

        modules = [m for m in active_modules() if m['name'] not in policy.hidden_from_grants]

        return Response({
            "success": True,
            "data": {
                "users": [
                    {
                        "id": u.id,
                        "name": u.name,
                        "email": u.email,
                        "role": u.role,
                        "status": u.status,
                        "granted_modules": granted.get(u.id, []),
                    }
                    for u in users
                ],
                "modules": modules,
            },
        })

    @extend_schema(summary="Grant or revoke a module", tags=["Permissions"], request=PermissionChangeSerializer)
    def post(self, request):
        serializer = PermissionChangeSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        target = _grant_target(data['targetUserId'])
        module = _module(data['moduleId'])
        permission, created = set_module_permission(target, module, data['granted'])
        logger.info(
            "Module %s %s for user %s by %s",
            module.name, 'granted' if permission.granted else 'revoked', target.pk, request.user.pk,
        )

        return Response({
            "success": True,
            "message": 'دسترسی اعطا شد' if permission.granted else 'دسترسی لغو شد',
            "data": {"userId": target.id, "moduleId": module.id, "granted": permission.granted, "created": created},
        })


class BulkPermissionsView(APIView):
    """Applies a list of grant/revoke changes atomically"""
    permission_classes = [IsAuthenticated, IsManager]

    @extend_schema(summary="Apply several grant changes at once", tags=["Permissions"], request=BulkPermissionSerializer)
    def post(self, request):
        serializer = BulkPermissionSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        changes = [
            (_grant_target(change['targetUserId']), _module(change['moduleId']), change['granted'])
            for change in serializer.validated_data['changes']
        ]
        permissions = apply_permission_changes(changes)
        logger.info("Applied %d permission changes by %s", len(permissions), request.user.pk)

        return Response({
            "success": True,
            "message": 'تغییرات دسترسی ذخیره شد',
            "data": [
                {"userId": p.user_id, "moduleId": p.module_id, "granted": p.granted}
                for p in permissions
            ],
        })


class UserModulesView(APIView):
    permission_classes = [IsAuthenticated]

    @extend_schema(
        summary="Modules of a user",
        tags=["Permissions"],
        parameters=[OpenApiParameter(name='userId', type=OpenApiTypes.INT, location=OpenApiParameter.QUERY, required=True)],
    )
    def get(self, request):
        user_id = request.query_params.get('userId')
        if not user_id:
            raise ValidationError('شناسه کاربر الزامی است')
        if str(request.user.pk) != str(user_id) and not request.user.is_manager:
            raise PermissionDenied('شما فقط می‌توانید دسترسی‌های خود را مشاهده کنید')

        user = User.objects.filter(pk=user_id, status='active').first() if str(user_id).isdigit() else None
        if user is None:
            raise NotFound('کاربر یافت نشد')

        return Response({"success": True, "data": accessible_modules(user)})

    @extend_schema(summary="Set a module for a user", tags=["Permissions"], request=UserModuleChangeSerializer)
    def post(self, request):
        if not request.user.is_manager:
            raise PermissionDenied('فقط مدیران می‌توانند دسترسی‌ها را تغییر دهند')

        serializer = UserModuleChangeSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        target = _grant_target(data['userId'])
        module = _module(data['moduleId'])
        permission = update_or_grant_module(target, module, data['granted'])

        return Response({
            "success": True,
            "message": 'دسترسی به‌روزرسانی شد',
            "data": {
                "userId": target.id,
                "moduleId": module.id,
                "granted": permission.granted if permission is not None else False,
            },
        })


class PermissionCheckView(APIView):
    permission_classes = [IsAuthenticated]

    @extend_schema(
        summary="Check access to a module",
        tags=["Permissions"],
        parameters=[OpenApiParameter(name='module', type=OpenApiTypes.STR, location=OpenApiParameter.QUERY, required=True)],
    )
    def get(self, request):
        module_name = request.query_params.get('module')
        if not module_name:
            raise ValidationError('نام ماژول الزامی است')
        return Response({"success": True, "data": {"module": module_name, "hasAccess": has_module_access(request.user, module_name)}})


class ModuleListView(APIView):
    permission_classes = [IsAuthenticated]

    @extend_schema(summary="Active module catalog", tags=["Permissions"], responses=ModuleSerializer(many=True))
    def get(self, request):
        return Response({"success": True, "data": active_modules()}, status=status.HTTP_200_OK)
