from rest_framework import serializers

from .models import Interaction


REQUIRED = 'فیلدهای الزامی کامل نیست'


class InteractionSerializer(serializers.ModelSerializer):
    type = serializers.ChoiceField(choices=Interaction.TYPE_CHOICES, error_messages={
        'required': REQUIRED,
        'invalid_choice': 'نوع تعامل نامعتبر است',
    })
    subject = serializers.CharField(max_length=255, error_messages={'required': REQUIRED, 'blank': REQUIRED})
    date = serializers.DateTimeField(required=False)
    customer_name = serializers.CharField(source='customer.name', read_only=True)
    performed_by_name = serializers.CharField(source='performed_by.name', read_only=True, default=None)

    class Meta:
        model = Interaction
        fields = [
            'id', 'customer', 'customer_name', 'type', 'subject', 'description', 'outcome',
            'direction', 'channel', 'date', 'duration', 'performed_by', 'performed_by_name',
            'created_at', 'updated_at',
        ]
        read_only_fields = ['id', 'performed_by', 'created_at', 'updated_at']
        extra_kwargs = {
            'customer': {'error_messages': {'required': REQUIRED, 'does_not_exist': 'مشتری یافت نشد'}},
        }
