from rest_framework import status
from rest_framework.test import APITestCase, APIClient

from customers.models import Customer
from users.models import User
from .models import Feedback


class FeedbackApiTests(APITestCase):
    def setUp(self):
        self.client = APIClient()
        self.agent = User.objects.create(name='کارشناس', email='agent@example.com', role='agent', password='x')
        self.manager = User.objects.create(name='مدیر', email='ceo@example.com', role='ceo', password='x')
        self.customer = Customer.objects.create(name='شرکت آلفا', assigned_to=self.agent)
        self.client.force_authenticate(user=self.agent)

    def test_create_defaults_status_and_channel(self):
        res = self.client.post('/api/feedback/', {
            'customer': self.customer.id, 'type': 'complaint', 'comment': 'تحویل دیر انجام شد',
        }, format='json')
        self.assertEqual(res.status_code, status.HTTP_201_CREATED, res.content)
        self.assertEqual(res.data['message'], 'بازخورد با موفقیت ایجاد شد')
        self.assertEqual(res.data['data']['customer_name'], 'شرکت آلفا')

        feedback = Feedback.objects.get()
        self.assertEqual(feedback.status, 'pending')
        self.assertEqual(feedback.channel, 'website')
        self.assertEqual(feedback.priority, 'medium')
        self.assertEqual(feedback.created_by, self.agent)

    def test_customer_type_and_comment_are_required(self):
        for payload in (
            {'type': 'praise', 'comment': 'عالی'},
            {'customer': self.customer.id, 'comment': 'عالی'},
            {'customer': self.customer.id, 'type': 'praise'},
        ):
            res = self.client.post('/api/feedback/', payload, format='json')
            self.assertEqual(res.status_code, status.HTTP_400_BAD_REQUEST)
            self.assertEqual(res.data['message'], 'اطلاعات بازخورد کامل نیست')
        self.assertFalse(Feedback.objects.exists())

    def test_filter_by_type_and_customer(self):
        other = Customer.objects.create(name='شرکت بتا', assigned_to=self.agent)
        Feedback.objects.create(customer=self.customer, type='praise', comment='عالی')
        Feedback.objects.create(customer=self.customer, type='complaint', comment='کند')
        Feedback.objects.create(customer=other, type='complaint', comment='گران')

        res = self.client.get('/api/feedback/?type=complaint')
        self.assertEqual(res.data['pagination']['total'], 2)

        res = self.client.get(f'/api/feedback/?type=complaint&customer_id={self.customer.id}')
        self.assertEqual(res.data['pagination']['total'], 1)
        self.assertEqual(res.data['data'][0]['comment'], 'کند')

    def test_status_update_and_manager_delete(self):
        feedback = Feedback.objects.create(customer=self.customer, type='complaint', comment='کند')

        res = self.client.patch(f'/api/feedback/{feedback.id}/', {'status': 'resolved'}, format='json')
        self.assertEqual(res.status_code, status.HTTP_200_OK, res.content)
        feedback.refresh_from_db()
        self.assertEqual(feedback.status, 'resolved')

        res = self.client.delete(f'/api/feedback/{feedback.id}/')
        self.assertEqual(res.status_code, status.HTTP_403_FORBIDDEN)

        self.client.force_authenticate(user=self.manager)
        res = self.client.delete(f'/api/feedback/{feedback.id}/')
        self.assertEqual(res.status_code, status.HTTP_200_OK)
        self.assertFalse(Feedback.objects.exists())
