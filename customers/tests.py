from rest_framework import status
from rest_framework.test import APITestCase, APIClient

from users.models import User
from .models import Customer


class CustomerApiTests(APITestCase):
	def setUp(self):
		self.client = APIClient()
		self.ceo = User.objects.create(name='مدیرعامل', email='ceo@example.com', role='ceo', password='x')
		self.manager = User.objects.create(name='مدیر فروش', email='sm@example.com', role='sales_manager', password='x')
		self.agent = User.objects.create(name='کارشناس', email='agent@example.com', role='agent', password='x')
		self.other = User.objects.create(name='همکار', email='other@example.com', role='agent', password='x')

	def test_create_defaults_assignment_to_creator(self):
		self.client.force_authenticate(user=self.agent)
		res = self.client.post('/api/customers/', {'name': 'شرکت نمونه', 'segment': 'enterprise'}, format='json')
		self.assertEqual(res.status_code, status.HTTP_201_CREATED, res.content)

		customer = Customer.objects.get(pk=res.data['data']['id'])
		self.assertEqual(customer.assigned_to, self.agent)
		self.assertEqual(customer.created_by, self.agent)
		self.assertEqual(customer.country, 'ایران')
		self.assertEqual(customer.sales_stage, 'new_lead')

	def test_name_is_required(self):
		self.client.force_authenticate(user=self.agent)
		res = self.client.post('/api/customers/', {'email': 'a@example.com'}, format='json')
		self.assertEqual(res.status_code, status.HTTP_400_BAD_REQUEST)
		self.assertEqual(res.data['message'], 'نام مشتری الزامی است')
		self.assertFalse(Customer.objects.exists())

	def test_visibility_by_role(self):
		mine = Customer.objects.create(name='مال من', assigned_to=self.agent)
		Customer.objects.create(name='مال دیگری', assigned_to=self.other)

		self.client.force_authenticate(user=self.agent)
		res = self.client.get('/api/customers/')
		self.assertEqual([c['id'] for c in res.data['data']], [mine.id])
		self.assertEqual(res.data['pagination']['total'], 1)

		self.client.force_authenticate(user=self.ceo)
		res = self.client.get('/api/customers/')
		self.assertEqual(res.data['pagination']['total'], 2)

	def test_other_users_customer_is_not_found(self):
		customer = Customer.objects.create(name='مال دیگری', assigned_to=self.other)
		self.client.force_authenticate(user=self.agent)
		res = self.client.get(f'/api/customers/{customer.id}/')
		self.assertEqual(res.status_code, status.HTTP_404_NOT_FOUND)
		self.assertFalse(res.data['success'])

	def test_only_managers_delete(self):
		customer = Customer.objects.create(name='مشتری', assigned_to=self.agent, created_by=self.manager)

		self.client.force_authenticate(user=self.agent)
		res = self.client.delete(f'/api/customers/{customer.id}/')
		self.assertEqual(res.status_code, status.HTTP_403_FORBIDDEN)

		self.client.force_authenticate(user=self.manager)
		res = self.client.delete(f'/api/customers/{customer.id}/')
		self.assertEqual(res.status_code, status.HTTP_200_OK)
		self.assertFalse(Customer.objects.exists())

	def test_sales_stage(self):
		customer = Customer.objects.create(name='مشتری', assigned_to=self.agent)
		self.client.force_authenticate(user=self.agent)

		res = self.client.put(f'/api/customers/{customer.id}/sales-stage/', {'sales_stage': 'unknown'}, format='json')
		self.assertEqual(res.status_code, status.HTTP_400_BAD_REQUEST)
		self.assertEqual(res.data['message'], 'مرحله فروش نامعتبر است')

		res = self.client.put(f'/api/customers/{customer.id}/sales-stage/', {'sales_stage': 'proposal'}, format='json')
		self.assertEqual(res.status_code, status.HTTP_200_OK)
		customer.refresh_from_db()
		self.assertEqual(customer.sales_stage, 'proposal')
