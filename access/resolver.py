"""
Resolves which dashboard modules a user may open.

Managers see the whole active catalog. Everyone else sees the modules granted
to them plus the baseline modules (dashboard, tasks, profile).
"""
import logging

from django.db import DatabaseError, transaction

from .models import Module, UserModulePermission
from .policy import policy

logger = logging.getLogger(__name__)


def _sorted(modules):
    return sorted(modules, key=lambda m: (m['sort_order'], m['display_name']))


def active_modules():
    """
    Active catalog sorted by sort order then display name. Falls back to the
    default catalog when the table cannot be read or holds no modules.
    """
    try:
        modules = [m.as_dict() for m in Module.objects.filter(is_active=True)]
    except DatabaseError:
        logger.warning("Module catalog could not be read; serving default catalog", exc_info=True)
        return policy.default_catalog()

    if not modules:
        logger.warning("Module catalog is empty; serving default catalog")
        return policy.default_catalog()

    return _sorted(modules)


def granted_modules(user):
    """Modules with an explicit granted row for ``user``"""
    queryset = Module.objects.filter(
        is_active=True,
        user_permissions__user=user,
        user_permissions__granted=True,
    )
    return [m.as_dict() for m in queryset]


def accessible_modules(user):
    if policy.is_manager(user.role):
        return active_modules()

    try:
        granted = granted_modules(user)
        baseline = [
            m.as_dict()
            for m in Module.objects.filter(is_active=True, name__in=policy.baseline_modules)
        ]
    except DatabaseError:
        logger.warning("Permissions for user %s could not be read; serving baseline modules", user.pk, exc_info=True)
        return policy.default_baseline()

    by_id = {}
    for module in granted + baseline:
        by_id.setdefault(module['id'], module)

    if not by_id:
        logger.warning("No modules resolved for user %s; serving baseline modules", user.pk)
        return policy.default_baseline()

    return _sorted(by_id.values())


def has_module_access(user, module_name):
    return any(m['name'] == module_name for m in accessible_modules(user))


def set_module_permission(user, module, granted):
    """Upsert the (user, module) row. Returns ``(permission, created)``."""
    return UserModulePermission.objects.update_or_create(
        user=user,
        module=module,
        defaults={'granted': bool(granted)},
    )


def update_or_grant_module(user, module, granted):
    """
    Update an existing row in place; insert a new one only when granting.
    Returns the row, or ``None`` when nothing was stored.
    """
    permission = UserModulePermission.objects.filter(user=user, module=module).first()
    if permission is not None:
        permission.granted = bool(granted)
        permission.save(update_fields=['granted', 'updated_at'])
        return permission
    if granted:
        return UserModulePermission.objects.create(user=user, module=module, granted=True)
    return None


def apply_permission_changes(changes):
    """
    Apply a batch of ``(user, module, granted)`` changes in one transaction;
    a failure rolls back every change in the batch.
    """
    with transaction.atomic():
        return [set_module_permission(user, module, granted)[0] for user, module, granted in changes]
