import logging

from django.db.models import Count, Q
from django.utils import timezone
from drf_spectacular.utils import extend_schema, OpenApiParameter
from drf_spectacular.types import OpenApiTypes
from rest_framework import status
from rest_framework.exceptions import NotFound
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from users.models import User
from .models import ChatMessage
from .serializers import ChatMessageSerializer, SendMessageSerializer

logger = logging.getLogger(__name__)


class ChatMessagesView(APIView):
    permission_classes = [IsAuthenticated]

    @extend_schema(
        summary="Chat messages",
        description="With userId: the conversation with that user, oldest first, received messages are marked read. "
                    "Without: the 50 most recent messages of the current user.",
        tags=["Chat"],
        parameters=[OpenApiParameter(name='userId', type=OpenApiTypes.INT, location=OpenApiParameter.QUERY, required=False)],
    )
    def get(self, request):
        me = request.user
        peer_id = request.query_params.get('userId')
        queryset = ChatMessage.objects.select_related('sender', 'receiver')

        if peer_id:
            if not peer_id.isdigit():
                raise NotFound('کاربر یافت نشد')
            messages = list(
                queryset.filter(
                    Q(sender=me, receiver_id=peer_id) | Q(sender_id=peer_id, receiver=me)
                ).order_by('created_at', 'id')[:100]
            )
            ChatMessage.objects.filter(receiver=me, sender_id=peer_id, read_at__isnull=True).update(read_at=timezone.now())
            return Response({"success": True, "data": ChatMessageSerializer(messages, many=True).data})

        messages = queryset.filter(Q(sender=me) | Q(receiver=me)).order_by('-created_at', '-id')[:50]
        return Response({"success": True, "data": ChatMessageSerializer(messages, many=True).data})

    @extend_schema(summary="Send a chat message", tags=["Chat"], request=SendMessageSerializer)
    def post(self, request):
        serializer = SendMessageSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        receiver = User.objects.filter(pk=serializer.validated_data['receiverId'], status='active').first()
        if receiver is None:
            raise NotFound('کاربر یافت نشد')

        message = ChatMessage.objects.create(
            sender=request.user,
            receiver=receiver,
            message=serializer.validated_data['message'],
        )
        logger.info("Chat message %s sent from %s to %s", message.pk, request.user.pk, receiver.pk)
        return Response(
            {"success": True, "message": "پیام با موفقیت ارسال شد", "data": ChatMessageSerializer(message).data},
            status=status.HTTP_201_CREATED,
        )


class ConversationsView(APIView):
    """One entry per peer with the last message and the unread count"""
    permission_classes = [IsAuthenticated]

    @extend_schema(summary="Chat conversations", tags=["Chat"])
    def get(self, request):
        me = request.user
        unread = dict(
            ChatMessage.objects.filter(receiver=me, read_at__isnull=True)
            .values('sender_id')
            .annotate(total=Count('id'))
            .values_list('sender_id', 'total')
        )

        conversations = {}
        messages = ChatMessage.objects.select_related('sender', 'receiver').filter(
            Q(sender=me) | Q(receiver=me)
        ).order_by('-created_at', '-id')
        for message in messages.iterator():
            peer = message.receiver if message.sender_id == me.pk else message.sender
            if peer.pk in conversations:
                continue
            conversations[peer.pk] = {
                'user': {'id': peer.pk, 'name': peer.name, 'email': peer.email, 'avatar_url': peer.avatar_url},
                'last_message': {
                    'content': message.message,
                    'sent_at': message.created_at,
                    'sender_name': message.sender.name,
                },
                'unread_count': unread.get(peer.pk, 0),
            }

        return Response({"success": True, "data": list(conversations.values())})
