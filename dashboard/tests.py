from decimal import Decimal

from django.utils import timezone
from rest_framework import status
from rest_framework.test import APITestCase, APIClient

from chat.models import ChatMessage
from customers.models import Customer
from sales.models import Deal
from users.models import User


class DashboardStatsTests(APITestCase):
    def setUp(self):
        self.client = APIClient()
        self.manager = User.objects.create(name='مدیر', email='m@example.com', role='ceo', password='x')
        self.agent = User.objects.create(name='کارشناس', email='a@example.com', role='sales_agent', password='x')
        mine = Customer.objects.create(name='مشتری من', assigned_to=self.agent, status='active')
        Customer.objects.create(name='مشتری دیگر', assigned_to=self.manager)
        Deal.objects.create(title='معامله', customer=mine, assigned_to=self.agent, total_value=Decimal('1000'))
        ChatMessage.objects.create(sender=self.manager, receiver=self.agent, message='سلام')

    def test_non_manager_sees_own_figures(self):
        self.client.force_authenticate(user=self.agent)
        res = self.client.get('/api/dashboard/stats/')
        self.assertEqual(res.status_code, status.HTTP_200_OK, res.content)
        data = res.data['data']
        self.assertEqual(data['customers']['total_customers'], 1)
        self.assertEqual(data['customers']['active_customers'], 1)
        self.assertEqual(data['deals']['open_deals'], 1)
        self.assertEqual(data['unread_messages'], 1)
        self.assertEqual(data['period'], 'month')

    def test_manager_sees_everything(self):
        self.client.force_authenticate(user=self.manager)
        res = self.client.get('/api/dashboard/stats/?period=year')
        data = res.data['data']
        self.assertEqual(data['customers']['total_customers'], 2)
        new_lead = [s for s in data['pipelineOverview'] if s['stage_code'] == 'new_lead'][0]
        self.assertEqual(new_lead['deals_count'], 1)

    def test_deal_values_and_pipeline_per_stage(self):
        customer = Customer.objects.get(name='مشتری دیگر')
        Deal.objects.create(
            title='قرارداد بسته شده', customer=customer, assigned_to=self.manager,
            stage='closed_won', total_value=Decimal('2500'), actual_close_date=timezone.now(),
        )

        self.client.force_authenticate(user=self.manager)
        res = self.client.get('/api/dashboard/stats/')
        self.assertEqual(res.status_code, status.HTTP_200_OK, res.content)
        deals = res.data['data']['deals']
        self.assertEqual(deals['total_deals'], 2)
        self.assertEqual(deals['won_deals'], 1)
        self.assertEqual(Decimal(deals['total_value']), Decimal('3500'))
        self.assertEqual(Decimal(deals['won_value']), Decimal('2500'))

        pipeline = {s['stage_code']: s for s in res.data['data']['pipelineOverview']}
        self.assertEqual(pipeline['closed_won']['deals_count'], 1)
        self.assertEqual(Decimal(pipeline['closed_won']['total_value']), Decimal('2500'))
        self.assertEqual(Decimal(pipeline['negotiation']['total_value']), Decimal('0'))
        self.assertEqual(len(res.data['data']['salesTrend']), 1)
