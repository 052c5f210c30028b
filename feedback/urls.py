from django.urls import path, include
from rest_framework.routers import DefaultRouter

from .views import FeedbackViewSet

router = DefaultRouter(trailing_slash=True)
router.register(r'feedback', FeedbackViewSet, basename='feedback')

urlpatterns = [
    path('', include(router.urls)),
]
