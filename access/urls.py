from django.urls import path

from .views import (
    AuthPermissionsView,
    NavigationView,
    PermissionsView,
    BulkPermissionsView,
    UserModulesView,
    PermissionCheckView,
    ModuleListView,
)

urlpatterns = [
    path('auth/permissions/', AuthPermissionsView.as_view(), name='auth-permissions'),
    path('auth/navigation/', NavigationView.as_view(), name='auth-navigation'),
    path('permissions/', PermissionsView.as_view(), name='permissions'),
    path('permissions/bulk/', BulkPermissionsView.as_view(), name='permissions-bulk'),
    path('permissions/user-modules/', UserModulesView.as_view(), name='permissions-user-modules'),
    path('permissions/check/', PermissionCheckView.as_view(), name='permissions-check'),
    path('permissions/modules/', ModuleListView.as_view(), name='permissions-modules'),
]
