from django.conf import settings
from django.conf.urls.static import static
from django.contrib import admin
from django.urls import path, include
from drf_spectacular.views import SpectacularAPIView, SpectacularSwaggerView

urlpatterns = [
    path('admin/', admin.site.urls),
    path('api/schema/', SpectacularAPIView.as_view(), name='schema'),
    path('api/docs/', SpectacularSwaggerView.as_view(url_name='schema'), name='swagger-ui'),
    path('api/', include('users.urls')),
    path('api/', include('access.urls')),
    path('api/', include('customers.urls')),
    path('api/', include('contacts.urls')),
    path('api/', include('interactions.urls')),
    path('api/', include('feedback.urls')),
    path('api/', include('sales.urls')),
    path('api/', include('task.urls')),
    path('api/', include('reports.urls')),
    path('api/', include('chat.urls')),
    path('api/', include('dashboard.urls')),
]

if settings.DEBUG:
    urlpatterns += static('/uploads/', document_root=settings.MEDIA_ROOT / 'uploads')
