from decimal import Decimal

from django.test import TestCase
from rest_framework import status
from rest_framework.test import APITestCase, APIClient

from customers.models import Customer
from users.models import User
from .models import Deal, Product, Sale, SaleItem, line_total, to_cents


class LineTotalTests(TestCase):
    def test_line_values_are_exact(self):
        self.assertEqual(line_total(2, '1000', 10), Decimal('1800'))
        self.assertEqual(line_total('1.5', '333.33', None), Decimal('499.995'))
        self.assertEqual(line_total(3, '19.99', '12.5'), Decimal('52.47375'))

    def test_rounding_is_half_up(self):
        self.assertEqual(to_cents(Decimal('499.995')), Decimal('500.00'))
        self.assertEqual(to_cents(Decimal('0.125')), Decimal('0.13'))
        self.assertEqual(to_cents(Decimal('52.47375')), Decimal('52.47'))


class SaleApiTests(APITestCase):
    def setUp(self):
        self.client = APIClient()
        self.manager = User.objects.create(name='مدیر فروش', email='sm@example.com', role='sales_manager', password='x')
        self.seller = User.objects.create(name='فروشنده', email='seller@example.com', role='sales_agent', password='x')
        self.agent = User.objects.create(name='پشتیبان', email='support@example.com', role='agent', password='x')

        self.customer = Customer.objects.create(name='شرکت آلفا', assigned_to=self.seller)
        self.deal = Deal.objects.create(title='قرارداد سالانه', customer=self.customer, assigned_to=self.seller)
        self.laptop = Product.objects.create(name='لپ‌تاپ', price=Decimal('50000000'))
        self.mouse = Product.objects.create(name='ماوس', price=Decimal('500000'))

    def payload(self, **extra):
        data = {
            'deal_id': self.deal.id,
            'customer_id': self.customer.id,
            'items': [
                {'product_id': self.laptop.id, 'quantity': 2, 'discount_percentage': 10},
                {'product_id': self.mouse.id, 'quantity': 3, 'unit_price': '400000'},
            ],
            'total_amount': 1,
        }
        data.update(extra)
        return data

    def test_total_is_computed_from_items(self):
        self.client.force_authenticate(user=self.seller)
        res = self.client.post('/api/sales/', self.payload(), format='json')
        self.assertEqual(res.status_code, status.HTTP_201_CREATED, res.content)

        sale = Sale.objects.get()
        self.assertEqual(sale.total_amount, Decimal('91200000.00'))
        self.assertEqual(sale.customer_name, 'شرکت آلفا')
        self.assertEqual(sale.sales_person, self.seller)
        self.assertEqual(len(res.data['data']['items']), 2)

        self.deal.refresh_from_db()
        self.assertEqual(self.deal.stage, 'new_lead')

    def test_total_rounds_the_exact_sum_once(self):
        self.client.force_authenticate(user=self.seller)
        half_cent = {'product_id': self.mouse.id, 'quantity': 1, 'unit_price': '0.01', 'discount_percentage': 50}
        res = self.client.post('/api/sales/', self.payload(items=[half_cent, half_cent]), format='json')
        self.assertEqual(res.status_code, status.HTTP_201_CREATED, res.content)

        sale = Sale.objects.get()
        self.assertEqual(sale.total_amount, Decimal('0.01'))
        self.assertEqual([item.total_price for item in sale.items.all()], [Decimal('0.01'), Decimal('0.01')])

    def test_paid_sale_closes_deal(self):
        self.client.force_authenticate(user=self.seller)
        res = self.client.post('/api/sales/', self.payload(payment_status='paid'), format='json')
        self.assertEqual(res.status_code, status.HTTP_201_CREATED, res.content)

        self.deal.refresh_from_db()
        self.assertEqual(self.deal.stage, 'closed_won')
        self.assertIsNotNone(self.deal.actual_close_date)

    def test_unknown_product_stores_nothing(self):
        self.client.force_authenticate(user=self.seller)
        payload = self.payload(items=[{'product_id': 99999, 'quantity': 1}])
        res = self.client.post('/api/sales/', payload, format='json')
        self.assertEqual(res.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertFalse(Sale.objects.exists())

    def test_items_are_required(self):
        self.client.force_authenticate(user=self.seller)
        res = self.client.post('/api/sales/', self.payload(items=[]), format='json')
        self.assertEqual(res.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(res.data['message'], 'حداقل یک محصول باید انتخاب شود')

    def test_non_sales_role_cannot_record(self):
        self.client.force_authenticate(user=self.agent)
        res = self.client.post('/api/sales/', self.payload(), format='json')
        self.assertEqual(res.status_code, status.HTTP_403_FORBIDDEN)

    def test_edit_replaces_items(self):
        self.client.force_authenticate(user=self.seller)
        res = self.client.post('/api/sales/', self.payload(), format='json')
        sale_id = res.data['data']['id']

        res = self.client.put(f'/api/sales/{sale_id}/', self.payload(items=[
            {'product_id': self.mouse.id, 'quantity': 1},
        ]), format='json')
        self.assertEqual(res.status_code, status.HTTP_200_OK, res.content)
        self.assertEqual(SaleItem.objects.filter(sale_id=sale_id).count(), 1)
        self.assertEqual(Sale.objects.get(pk=sale_id).total_amount, Decimal('500000.00'))

    def test_sales_visibility_and_delete(self):
        self.client.force_authenticate(user=self.seller)
        sale_id = self.client.post('/api/sales/', self.payload(), format='json').data['data']['id']

        other = User.objects.create(name='فروشنده دوم', email='s2@example.com', role='sales_agent', password='x')
        self.client.force_authenticate(user=other)
        res = self.client.get('/api/sales/')
        self.assertEqual(res.data['data'], [])

        res = self.client.delete(f'/api/sales/{sale_id}/')
        self.assertEqual(res.status_code, status.HTTP_403_FORBIDDEN)

        self.client.force_authenticate(user=self.manager)
        res = self.client.delete(f'/api/sales/{sale_id}/')
        self.assertEqual(res.status_code, status.HTTP_200_OK)
        self.assertFalse(Sale.objects.exists())

    def test_deal_with_sales_cannot_be_deleted(self):
        self.client.force_authenticate(user=self.seller)
        self.client.post('/api/sales/', self.payload(), format='json')

        res = self.client.delete(f'/api/deals/{self.deal.id}/')
        self.assertEqual(res.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertTrue(Deal.objects.filter(pk=self.deal.pk).exists())


class ProductApiTests(APITestCase):
    def setUp(self):
        self.client = APIClient()
        self.manager = User.objects.create(name='مدیر', email='m@example.com', role='ceo', password='x')
        self.agent = User.objects.create(name='کارشناس', email='a@example.com', role='agent', password='x')

    def test_only_managers_write(self):
        self.client.force_authenticate(user=self.agent)
        res = self.client.post('/api/products/', {'name': 'خدمات', 'price': '100'}, format='json')
        self.assertEqual(res.status_code, status.HTTP_403_FORBIDDEN)

        self.client.force_authenticate(user=self.manager)
        res = self.client.post('/api/products/', {'name': 'خدمات', 'price': '100'}, format='json')
        self.assertEqual(res.status_code, status.HTTP_201_CREATED)

    def test_delete_deactivates(self):
        product = Product.objects.create(name='خدمات', price=Decimal('100'))
        self.client.force_authenticate(user=self.manager)
        res = self.client.delete(f'/api/products/{product.id}/')
        self.assertEqual(res.status_code, status.HTTP_200_OK)
        product.refresh_from_db()
        self.assertFalse(product.is_active)


class DealApiTests(APITestCase):
    def setUp(self):
        self.client = APIClient()
        self.ceo = User.objects.create(name='مدیرعامل', email='ceo@example.com', role='ceo', password='x')
        self.seller = User.objects.create(name='فروشنده', email='seller@example.com', role='sales_agent', password='x')
        self.customer = Customer.objects.create(name='شرکت آلفا', assigned_to=self.seller)
        self.client.force_authenticate(user=self.seller)

    def test_title_and_customer_are_required(self):
        res = self.client.post('/api/deals/', {'customer': self.customer.id}, format='json')
        self.assertEqual(res.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(res.data['message'], 'اطلاعات معامله کامل نیست')

        res = self.client.post('/api/deals/', {'title': 'قرارداد'}, format='json')
        self.assertEqual(res.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(res.data['message'], 'اطلاعات معامله کامل نیست')

        res = self.client.post('/api/deals/', {'title': 'قرارداد', 'customer': 99999}, format='json')
        self.assertEqual(res.data['message'], 'مشتری یافت نشد')
        self.assertFalse(Deal.objects.exists())

    def test_create_assigns_creator_and_scopes_listing(self):
        res = self.client.post('/api/deals/', {'title': 'قرارداد', 'customer': self.customer.id}, format='json')
        self.assertEqual(res.status_code, status.HTTP_201_CREATED, res.content)
        self.assertEqual(res.data['data']['assigned_to'], self.seller.id)

        Deal.objects.create(title='معامله مدیر', customer=self.customer, assigned_to=self.ceo)
        res = self.client.get('/api/deals/')
        self.assertEqual(res.data['pagination']['total'], 1)

        self.client.force_authenticate(user=self.ceo)
        res = self.client.get('/api/deals/')
        self.assertEqual(res.data['pagination']['total'], 2)
