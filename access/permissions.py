"""
DRF permission classes built on the role allowlists in ``access.policy``.
"""
from rest_framework import permissions

from .policy import policy


class IsManager(permissions.BasePermission):
    """Manager roles only (ceo, مدیر, sales_manager, مدیر فروش)"""
    message = 'شما دسترسی لازم برای این عملیات را ندارید'

    def has_permission(self, request, view):
        user = request.user
        return bool(user and user.is_authenticated and policy.is_manager(getattr(user, 'role', None)))


class IsSalesRole(permissions.BasePermission):
    """Managers plus sales agents"""
    message = 'شما دسترسی لازم برای ثبت فروش را ندارید'

    def has_permission(self, request, view):
        user = request.user
        return bool(user and user.is_authenticated and policy.is_sales(getattr(user, 'role', None)))


class IsManagerOrSelf(permissions.BasePermission):
    """Object level: the user row itself, or any manager"""
    message = 'شما فقط می‌توانید اطلاعات خود را مشاهده یا ویرایش کنید'

    def has_object_permission(self, request, view, obj):
        return obj.pk == request.user.pk or policy.is_manager(request.user.role)


class ManagerWriteOrReadOnly(permissions.BasePermission):
    """Everyone authenticated may read; only managers write"""
    message = 'فقط مدیران می‌توانند این مورد را تغییر دهند'

    def has_permission(self, request, view):
        user = request.user
        if not (user and user.is_authenticated):
            return False
        if request.method in permissions.SAFE_METHODS:
            return True
        return policy.is_manager(getattr(user, 'role', None))
