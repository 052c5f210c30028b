from django.urls import path, include
from rest_framework.routers import DefaultRouter

from .views import InteractionViewSet

router = DefaultRouter(trailing_slash=True)
router.register(r'interactions', InteractionViewSet, basename='interaction')

urlpatterns = [
    path('', include(router.urls)),
]
