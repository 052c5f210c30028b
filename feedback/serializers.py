from rest_framework import serializers

from .models import Feedback


INCOMPLETE = 'اطلاعات بازخورد کامل نیست'


class FeedbackSerializer(serializers.ModelSerializer):
    type = serializers.ChoiceField(choices=Feedback.TYPE_CHOICES, error_messages={
        'required': INCOMPLETE,
        'invalid_choice': 'نوع بازخورد نامعتبر است',
    })
    comment = serializers.CharField(error_messages={'required': INCOMPLETE, 'blank': INCOMPLETE})
    customer_name = serializers.CharField(source='customer.name', read_only=True)

    class Meta:
        model = Feedback
        fields = [
            'id', 'customer', 'customer_name', 'type', 'title', 'comment', 'score', 'product',
            'channel', 'category', 'priority', 'status', 'created_by', 'created_at', 'updated_at',
        ]
        read_only_fields = ['id', 'created_by', 'created_at', 'updated_at']
        extra_kwargs = {
            'customer': {'error_messages': {'required': INCOMPLETE, 'does_not_exist': 'مشتری یافت نشد'}},
        }

    def validate_score(self, value):
        if value is not None and not 0 <= value <= 10:
            raise serializers.ValidationError('امتیاز باید بین ۰ تا ۱۰ باشد')
        return value
