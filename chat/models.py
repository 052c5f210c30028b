from django.db import models

from users.models import User


class ChatMessage(models.Model):
    sender = models.ForeignKey(User, on_delete=models.CASCADE, related_name='sent_messages')
    receiver = models.ForeignKey(User, on_delete=models.CASCADE, related_name='received_messages')
    message = models.TextField()
    read_at = models.DateTimeField(blank=True, null=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'chat_messages'
        ordering = ['created_at']
        indexes = [
            models.Index(fields=['sender', 'receiver', 'created_at'], name='chat_pair_created_idx'),
            models.Index(fields=['receiver', 'read_at'], name='chat_unread_idx'),
        ]

    def __str__(self):
        return f"ChatMessage({self.sender_id} -> {self.receiver_id})"
