from datetime import date, timedelta
from decimal import Decimal
from unittest import mock

import requests
from django.test import TestCase
from django.utils import timezone
from rest_framework import status
from rest_framework.test import APITestCase, APIClient

from users.models import User
from . import ai_service
from .models import DailyReport, to_persian_date


class PersianDateTests(TestCase):
    def test_gregorian_to_jalali(self):
        self.assertEqual(to_persian_date(date(2024, 3, 20)), '1403/01/01')


class FallbackAnalysisTests(TestCase):
    def _rows(self, count, hours):
        return [
            {'date': '2024-01-01', 'working_hours': hours, 'challenges': '', 'achievements': 'قرارداد'}
            for _ in range(count)
        ]

    def test_thresholds(self):
        text = ai_service.fallback_analysis('علی', '2024-01-01', '2024-01-31', self._rows(20, '8.00'))
        self.assertIn('✅ انضباط بالا در گزارش‌دهی', text)
        self.assertIn('✅ ساعات کاری مناسب', text)
        self.assertIn('✅ عدم گزارش چالش خاص', text)
        self.assertIn('🏆 ثبت دستاوردهای مثبت', text)
        self.assertIn('**مجموع ساعات کاری:** 160 ساعت', text)

        text = ai_service.fallback_analysis('علی', '2024-01-01', '2024-01-31', self._rows(10, '6.50'))
        self.assertIn('⚠️ انضباط متوسط در گزارش‌دهی', text)
        self.assertIn('⚠️ ساعات کاری متوسط', text)
        self.assertIn('**میانگین ساعات کاری روزانه:** 6.5 ساعت', text)

        text = ai_service.fallback_analysis('علی', '2024-01-01', '2024-01-31', self._rows(3, None))
        self.assertIn('❌ نیاز به بهبود در گزارش‌دهی', text)
        self.assertIn('❌ نیاز به بررسی ساعات کاری', text)
        self.assertIn('نامشخص ساعت', text)

    def test_prompt_lists_each_day(self):
        rows = [
            {'date': '2024-01-01', 'persian_date': '1402/10/11', 'work_description': 'تماس با مشتری',
             'working_hours': None, 'challenges': None, 'achievements': None,
             'tasks': [{'title': 'پیگیری'}, {'title': 'جلسه'}]},
        ]
        prompt = ai_service.build_analysis_prompt('علی', 'agent', '2024-01-01', '2024-01-07', rows)
        self.assertIn('تحلیل گزارشات کاری علی (agent)', prompt)
        self.assertIn('دوره: 2024-01-01 تا 2024-01-07 (1 روز)', prompt)
        self.assertIn('روز 1 (1402/10/11):', prompt)
        self.assertIn('- ساعات کاری: ثبت نشده', prompt)
        self.assertIn('- تسک‌ها: پیگیری، جلسه', prompt)


class DailyReportApiTests(APITestCase):
    def setUp(self):
        self.client = APIClient()
        self.ceo = User.objects.create(name='مدیرعامل', email='ceo@example.com', role='ceo', password='x')
        self.agent = User.objects.create(name='کارشناس', email='agent@example.com', role='agent', password='x')
        self.other = User.objects.create(name='همکار', email='other@example.com', role='agent', password='x')
        self.today = timezone.localdate()

    def test_ceo_cannot_submit(self):
        self.client.force_authenticate(user=self.ceo)
        res = self.client.post('/api/reports/', {'work_description': 'x'}, format='json')
        self.assertEqual(res.status_code, status.HTTP_403_FORBIDDEN)

    def test_submit_then_update_today(self):
        self.client.force_authenticate(user=self.agent)
        res = self.client.post('/api/reports/', {'work_description': 'تماس', 'working_hours': 7}, format='json')
        self.assertEqual(res.status_code, status.HTTP_201_CREATED, res.content)

        res = self.client.post('/api/reports/', {'work_description': 'تماس و جلسه'}, format='json')
        self.assertEqual(res.status_code, status.HTTP_200_OK)
        self.assertEqual(DailyReport.objects.filter(user=self.agent).count(), 1)

        report = DailyReport.objects.get(user=self.agent)
        self.assertEqual(report.work_description, 'تماس و جلسه')
        self.assertEqual(report.persian_date, to_persian_date(self.today))

        res = self.client.get('/api/reports/today/')
        self.assertEqual(res.data['data']['id'], report.id)

    def test_past_report_is_read_only(self):
        yesterday = self.today - timedelta(days=1)
        DailyReport.objects.create(user=self.agent, report_date=yesterday, work_description='دیروز')

        self.client.force_authenticate(user=self.agent)
        res = self.client.post('/api/reports/', {
            'work_description': 'تغییر',
            'report_date': yesterday.isoformat(),
        }, format='json')
        self.assertEqual(res.status_code, status.HTTP_403_FORBIDDEN)

    def test_invalid_date(self):
        self.client.force_authenticate(user=self.agent)
        res = self.client.post('/api/reports/', {'work_description': 'x', 'report_date': 'not-a-date'}, format='json')
        self.assertEqual(res.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(res.data['message'], 'فرمت تاریخ نامعتبر است')

    def test_non_manager_sees_only_own_reports(self):
        DailyReport.objects.create(user=self.agent, report_date=self.today, work_description='a')
        DailyReport.objects.create(user=self.other, report_date=self.today, work_description='b')

        self.client.force_authenticate(user=self.agent)
        res = self.client.get(f'/api/reports/?user_id={self.other.id}')
        self.assertEqual([r['user'] for r in res.data['data']], [self.agent.id])

        self.client.force_authenticate(user=self.ceo)
        res = self.client.get(f'/api/reports/?user_id={self.other.id}')
        self.assertEqual([r['user'] for r in res.data['data']], [self.other.id])


class ReportAnalysisApiTests(APITestCase):
    def setUp(self):
        self.client = APIClient()
        self.manager = User.objects.create(name='مدیر', email='m@example.com', role='sales_manager', password='x')
        self.agent = User.objects.create(name='رضا', email='r@example.com', role='agent', password='x')
        self.today = timezone.localdate()
        DailyReport.objects.create(
            user=self.agent, report_date=self.today, work_description='تماس',
            working_hours=Decimal('8'), achievements='فروش',
        )
        self.payload = {
            'user_id': self.agent.id,
            'start_date': (self.today - timedelta(days=7)).isoformat(),
            'end_date': self.today.isoformat(),
        }

    @mock.patch('reports.ai_service.requests.get')
    def test_ai_answer_is_returned(self, mock_get):
        mock_get.return_value.json.return_value = {'answer': 'عملکرد خوب'}
        mock_get.return_value.raise_for_status.return_value = None

        self.client.force_authenticate(user=self.manager)
        res = self.client.post('/api/reports/analyze/', self.payload, format='json')
        self.assertEqual(res.status_code, status.HTTP_200_OK, res.content)
        self.assertEqual(res.data['data']['analysis'], 'عملکرد خوب')
        self.assertNotIn('ai_error', res.data['data'])
        self.assertEqual(res.data['data']['reports_count'], 1)

        _, kwargs = mock_get.call_args
        self.assertIn('تحلیل گزارشات کاری رضا', kwargs['params']['text'])
        self.assertEqual(kwargs['timeout'], 60)

    @mock.patch('reports.ai_service.requests.get', side_effect=requests.exceptions.Timeout())
    def test_fallback_when_proxy_fails(self, mock_get):
        self.client.force_authenticate(user=self.manager)
        res = self.client.post('/api/reports/analyze/', self.payload, format='json')
        self.assertEqual(res.status_code, status.HTTP_200_OK)
        self.assertTrue(res.data['data']['ai_error'])
        self.assertIn('تحلیل خودکار گزارشات رضا', res.data['data']['analysis'])

    def test_agent_cannot_analyze_others(self):
        self.client.force_authenticate(user=self.agent)
        payload = dict(self.payload, user_id=self.manager.id)
        res = self.client.post('/api/reports/analyze/', payload, format='json')
        self.assertEqual(res.status_code, status.HTTP_403_FORBIDDEN)

    def test_no_reports_in_period(self):
        self.client.force_authenticate(user=self.manager)
        payload = dict(self.payload, start_date='2000-01-01', end_date='2000-01-31')
        res = self.client.post('/api/reports/analyze/', payload, format='json')
        self.assertEqual(res.status_code, status.HTTP_404_NOT_FOUND)

    @mock.patch('reports.ai_service.requests.get', side_effect=requests.exceptions.ConnectionError())
    def test_voice_command(self, mock_get):
        self.client.force_authenticate(user=self.manager)
        res = self.client.post('/api/voice-analysis/process/', {'text': 'گزارش رضا', 'employeeName': 'رضا'}, format='json')
        self.assertEqual(res.status_code, status.HTTP_200_OK)
        self.assertTrue(res.data['data']['employee_found'])
        self.assertTrue(res.data['data']['ai_error'])

        res = self.client.post('/api/voice-analysis/process/', {'text': 'x', 'employeeName': 'ناشناس'}, format='json')
        self.assertFalse(res.data['data']['employee_found'])
