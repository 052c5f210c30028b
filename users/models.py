from django.contrib.auth.hashers import make_password, check_password
from django.db import models

from access.policy import policy


class User(models.Model):
    """
    Dashboard user. Authentication runs on JWTs issued for this model, not on
    ``django.contrib.auth``.
    """

    STATUS_CHOICES = [
        ('active', 'Active'),
        ('inactive', 'Inactive'),
        ('suspended', 'Suspended'),
    ]

    name = models.CharField(max_length=255, help_text="Full name")
    email = models.EmailField(unique=True, help_text="Login email, stored lower-cased")
    password = models.CharField(max_length=128, help_text="Password hash")
    role = models.CharField(
        max_length=50,
        default='agent',
        help_text="Role name, matched against the role allowlists"
    )
    status = models.CharField(max_length=20, choices=STATUS_CHOICES, default='active')
    team = models.CharField(max_length=100, blank=True, null=True)
    phone = models.CharField(max_length=20, blank=True, null=True)
    avatar_url = models.CharField(max_length=500, blank=True, null=True)

    last_login = models.DateTimeField(blank=True, null=True)
    last_active = models.DateTimeField(blank=True, null=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'users'
        ordering = ['name']
        verbose_name = 'User'
        verbose_name_plural = 'Users'

    def __str__(self):
        return f"{self.name} <{self.email}>"

    @property
    def is_authenticated(self):
        """Always True for loaded users; lets DRF treat them as logged in"""
        return True

    @property
    def is_anonymous(self):
        return False

    @property
    def is_active(self):
        return self.status == 'active'

    @property
    def is_manager(self):
        return policy.is_manager(self.role)

    @property
    def is_ceo(self):
        return policy.is_ceo(self.role)

    @property
    def is_sales(self):
        return policy.is_sales(self.role)

    def set_password(self, raw_password):
        """Hash and store the password; the caller saves the instance"""
        self.password = make_password(raw_password)

    def check_password(self, raw_password):
        return check_password(raw_password, self.password)
