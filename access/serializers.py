from rest_framework import serializers

from .models import Module


class ModuleSerializer(serializers.ModelSerializer):
    parent_id = serializers.IntegerField(read_only=True)

    class Meta:
        model = Module
        fields = ['id', 'name', 'display_name', 'route', 'icon', 'sort_order', 'parent_id', 'is_active']
        read_only_fields = fields


class PermissionChangeSerializer(serializers.Serializer):
    targetUserId = serializers.IntegerField(error_messages={'required': 'شناسه کاربر، ماژول و وضعیت دسترسی الزامی است'})
    moduleId = serializers.IntegerField(error_messages={'required': 'شناسه کاربر، ماژول و وضعیت دسترسی الزامی است'})
    granted = serializers.BooleanField(error_messages={
        'required': 'شناسه کاربر، ماژول و وضعیت دسترسی الزامی است',
        'invalid': 'وضعیت دسترسی باید true یا false باشد',
    })


class BulkPermissionSerializer(serializers.Serializer):
    changes = PermissionChangeSerializer(many=True, allow_empty=False)


class UserModuleChangeSerializer(serializers.Serializer):
    userId = serializers.IntegerField(error_messages={'required': 'شناسه کاربر و ماژول الزامی است'})
    moduleId = serializers.IntegerField(error_messages={'required': 'شناسه کاربر و ماژول الزامی است'})
    granted = serializers.BooleanField(default=True)


class NavigationItemSerializer(serializers.Serializer):
    title = serializers.CharField()
    href = serializers.CharField()
    icon = serializers.CharField()
    children = serializers.ListField(child=serializers.DictField(), required=False)
