from django.urls import path, include
from rest_framework.routers import DefaultRouter

from .views import DailyReportViewSet, VoiceCommandView

router = DefaultRouter(trailing_slash=True)
router.register(r'reports', DailyReportViewSet, basename='report')

urlpatterns = [
    path('voice-analysis/process/', VoiceCommandView.as_view(), name='voice-analysis-process'),
    path('', include(router.urls)),
]
