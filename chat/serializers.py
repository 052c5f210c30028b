from rest_framework import serializers

from .models import ChatMessage


class ChatMessageSerializer(serializers.ModelSerializer):
    sender_name = serializers.CharField(source='sender.name', read_only=True)
    receiver_name = serializers.CharField(source='receiver.name', read_only=True)

    class Meta:
        model = ChatMessage
        fields = ['id', 'sender', 'sender_name', 'receiver', 'receiver_name', 'message', 'read_at', 'created_at']
        read_only_fields = fields


class SendMessageSerializer(serializers.Serializer):
    INCOMPLETE = 'پارامترهای ناقص'

    receiverId = serializers.IntegerField(error_messages={'required': INCOMPLETE, 'null': INCOMPLETE, 'invalid': INCOMPLETE})
    message = serializers.CharField(error_messages={'required': INCOMPLETE, 'blank': INCOMPLETE, 'null': INCOMPLETE})
