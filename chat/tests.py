from rest_framework import status
from rest_framework.test import APITestCase, APIClient

from users.models import User
from .models import ChatMessage


class ChatApiTests(APITestCase):
    def setUp(self):
        self.client = APIClient()
        self.ali = User.objects.create(name='علی', email='ali@example.com', role='agent', password='x')
        self.sara = User.objects.create(name='سارا', email='sara@example.com', role='agent', password='x')
        self.client.force_authenticate(user=self.ali)

    def test_send_requires_receiver_and_text(self):
        res = self.client.post('/api/chat/messages/', {'message': 'سلام'}, format='json')
        self.assertEqual(res.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(res.data['message'], 'پارامترهای ناقص')

        res = self.client.post('/api/chat/messages/', {'receiverId': 9999, 'message': 'سلام'}, format='json')
        self.assertEqual(res.status_code, status.HTTP_404_NOT_FOUND)

    def test_conversation_marks_messages_read(self):
        res = self.client.post('/api/chat/messages/', {'receiverId': self.sara.id, 'message': 'سلام'}, format='json')
        self.assertEqual(res.status_code, status.HTTP_201_CREATED)
        ChatMessage.objects.create(sender=self.sara, receiver=self.ali, message='علیک سلام')

        res = self.client.get('/api/chat/conversations/')
        self.assertEqual(len(res.data['data']), 1)
        self.assertEqual(res.data['data'][0]['unread_count'], 1)
        self.assertEqual(res.data['data'][0]['last_message']['content'], 'علیک سلام')

        res = self.client.get(f'/api/chat/messages/?userId={self.sara.id}')
        self.assertEqual([m['message'] for m in res.data['data']], ['سلام', 'علیک سلام'])
        self.assertFalse(ChatMessage.objects.filter(receiver=self.ali, read_at__isnull=True).exists())
