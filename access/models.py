from django.db import models


class Module(models.Model):
    """A navigable dashboard section that can be granted to users"""

    name = models.CharField(max_length=100, unique=True, help_text="Machine name, e.g. customers")
    display_name = models.CharField(max_length=255, help_text="Persian label shown in the sidebar")
    route = models.CharField(max_length=255, blank=True, default='', help_text="Frontend route, e.g. /dashboard/customers")
    icon = models.CharField(max_length=100, default='LayoutDashboard')
    sort_order = models.IntegerField(default=0)
    parent = models.ForeignKey(
        'self',
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='children',
    )
    is_active = models.BooleanField(default=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'modules'
        ordering = ['sort_order', 'display_name']
        verbose_name = 'Module'
        verbose_name_plural = 'Modules'

    def __str__(self):
        return self.display_name

    def save(self, *args, **kwargs):
        if not self.route:
            self.route = f'/dashboard/{self.name}'
        super().save(*args, **kwargs)

    def as_dict(self):
        return {
            'id': self.id,
            'name': self.name,
            'display_name': self.display_name,
            'route': self.route,
            'icon': self.icon or 'LayoutDashboard',
            'sort_order': self.sort_order,
            'parent_id': self.parent_id,
        }


class UserModulePermission(models.Model):
    """Grant (or explicit revoke) of one module for one user"""

    user = models.ForeignKey('users.User', on_delete=models.CASCADE, related_name='module_permissions')
    module = models.ForeignKey(Module, on_delete=models.CASCADE, related_name='user_permissions')
    granted = models.BooleanField(default=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'user_module_permissions'
        verbose_name = 'User Module Permission'
        verbose_name_plural = 'User Module Permissions'
        constraints = [
            models.UniqueConstraint(fields=['user', 'module'], name='access_user_module_unique'),
        ]

    def __str__(self):
        state = 'granted' if self.granted else 'revoked'
        return f"{self.user_id}:{self.module.name} ({state})"
