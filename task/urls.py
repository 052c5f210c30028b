from django.urls import path, include
from rest_framework.routers import DefaultRouter

from .views import TaskViewSet

router = DefaultRouter(trailing_slash=True)
router.register(r'tasks', TaskViewSet, basename='task')

task_collection = TaskViewSet.as_view({'get': 'list', 'post': 'create', 'put': 'update_status'})

urlpatterns = [
    path('tasks/', task_collection, name='task-collection'),
    path('', include(router.urls)),
]
