from django.urls import path, include
from rest_framework.routers import DefaultRouter

from .views import ProductViewSet, DealViewSet, SaleViewSet

router = DefaultRouter(trailing_slash=True)
router.register(r'products', ProductViewSet, basename='product')
router.register(r'deals', DealViewSet, basename='deal')
router.register(r'sales', SaleViewSet, basename='sale')

urlpatterns = [
    path('', include(router.urls)),
]
