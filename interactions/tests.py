from datetime import timedelta

from django.utils import timezone
from rest_framework import status
from rest_framework.test import APITestCase, APIClient

from customers.models import Customer
from users.models import User
from .models import Interaction


class InteractionApiTests(APITestCase):
    def setUp(self):
        self.client = APIClient()
        self.ceo = User.objects.create(name='مدیرعامل', email='ceo@example.com', role='ceo', password='x')
        self.agent = User.objects.create(name='کارشناس', email='agent@example.com', role='agent', password='x')
        self.other = User.objects.create(name='همکار', email='other@example.com', role='agent', password='x')
        self.customer = Customer.objects.create(name='شرکت آلفا', assigned_to=self.agent)
        self.client.force_authenticate(user=self.agent)

    def test_create_records_performer_and_touches_customer(self):
        res = self.client.post('/api/interactions/', {
            'customer': self.customer.id, 'type': 'call', 'subject': 'تماس پیگیری',
        }, format='json')
        self.assertEqual(res.status_code, status.HTTP_201_CREATED, res.content)
        self.assertEqual(res.data['data']['performed_by_name'], 'کارشناس')
        self.assertEqual(res.data['data']['customer_name'], 'شرکت آلفا')

        interaction = Interaction.objects.get()
        self.assertEqual(interaction.performed_by, self.agent)
        self.assertEqual(interaction.direction, 'outbound')
        self.assertEqual(interaction.channel, 'system')

        self.customer.refresh_from_db()
        self.assertEqual(self.customer.last_interaction, interaction.date)

    def test_required_fields(self):
        res = self.client.post('/api/interactions/', {'customer': self.customer.id, 'type': 'call'}, format='json')
        self.assertEqual(res.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(res.data['message'], 'فیلدهای الزامی کامل نیست')

        res = self.client.post('/api/interactions/', {
            'customer': 99999, 'type': 'call', 'subject': 'تماس',
        }, format='json')
        self.assertEqual(res.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(res.data['message'], 'مشتری یافت نشد')
        self.assertFalse(Interaction.objects.exists())

    def test_listing_is_scoped_to_performer(self):
        now = timezone.now()
        Interaction.objects.create(customer=self.customer, type='call', subject='قدیمی', date=now - timedelta(days=1), performed_by=self.agent)
        Interaction.objects.create(customer=self.customer, type='email', subject='جدید', date=now, performed_by=self.agent)
        Interaction.objects.create(customer=self.customer, type='meeting', subject='جلسه', date=now, performed_by=self.other)

        res = self.client.get('/api/interactions/')
        self.assertEqual(res.data['pagination']['total'], 2)
        self.assertEqual([i['subject'] for i in res.data['data']], ['جدید', 'قدیمی'])

        res = self.client.get('/api/interactions/?search=جلسه')
        self.assertEqual(res.data['data'], [])

        self.client.force_authenticate(user=self.ceo)
        res = self.client.get('/api/interactions/?type=meeting')
        self.assertEqual(res.data['pagination']['total'], 1)

    def test_only_performer_or_manager_deletes(self):
        interaction = Interaction.objects.create(
            customer=self.customer, type='call', subject='تماس', date=timezone.now(), performed_by=self.other,
        )
        res = self.client.delete(f'/api/interactions/{interaction.id}/')
        self.assertEqual(res.status_code, status.HTTP_404_NOT_FOUND)

        self.client.force_authenticate(user=self.ceo)
        res = self.client.delete(f'/api/interactions/{interaction.id}/')
        self.assertEqual(res.status_code, status.HTTP_200_OK)
        self.assertFalse(Interaction.objects.exists())
