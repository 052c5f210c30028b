from rest_framework import serializers

from .models import Customer


class CustomerSerializer(serializers.ModelSerializer):
	"""
	Read serializer for customers, with the assigned user's name
	"""
	assigned_user_name = serializers.CharField(source='assigned_to.name', read_only=True, default=None)
	segment_display = serializers.CharField(source='get_segment_display', read_only=True)
	status_display = serializers.CharField(source='get_status_display', read_only=True)

	class Meta:
		model = Customer
		fields = [
			'id', 'name', 'email', 'phone', 'website', 'address', 'city', 'state', 'country',
			'company_name', 'industry', 'company_size', 'annual_revenue', 'segment', 'segment_display',
			'priority', 'status', 'status_display', 'sales_stage', 'assigned_to', 'assigned_user_name',
			'created_by', 'notes', 'last_interaction', 'created_at', 'updated_at',
		]
		read_only_fields = fields


class CustomerCreateSerializer(serializers.ModelSerializer):
	name = serializers.CharField(max_length=255, error_messages={
		'required': 'نام مشتری الزامی است',
		'blank': 'نام مشتری الزامی است',
	})

	class Meta:
		model = Customer
		fields = [
			'id', 'name', 'email', 'phone', 'website', 'address', 'city', 'state', 'country',
			'company_name', 'industry', 'company_size', 'annual_revenue', 'segment',
			'priority', 'status', 'sales_stage', 'assigned_to', 'notes', 'last_interaction',
		]
		read_only_fields = ['id']


class SalesStageSerializer(serializers.Serializer):
	sales_stage = serializers.ChoiceField(choices=Customer.SALES_STAGE_CHOICES, error_messages={
		'required': 'مرحله فروش الزامی است',
		'invalid_choice': 'مرحله فروش نامعتبر است',
	})
