from io import StringIO
from unittest import mock

from django.core.management import call_command
from django.db import DatabaseError
from django.test import TestCase
from rest_framework import status
from rest_framework.test import APITestCase, APIClient

from users.models import User
from .models import Module, UserModulePermission
from .navigation import build_navigation
from .policy import policy
from .resolver import accessible_modules, active_modules, update_or_grant_module


def seed_catalog():
    call_command('seed_modules', stdout=StringIO())
    return {m.name: m for m in Module.objects.all()}


class ResolverTests(TestCase):
    def setUp(self):
        self.modules = seed_catalog()
        self.manager = User.objects.create(name='مدیر فروش', email='sm@example.com', role='sales_manager', password='x')
        self.agent = User.objects.create(name='کارشناس', email='agent@example.com', role='agent', password='x')

    def test_manager_gets_full_catalog(self):
        names = [m['name'] for m in accessible_modules(self.manager)]
        self.assertEqual(names, [m['name'] for m in policy.default_catalog()])

    def test_non_manager_gets_grants_and_baseline_without_duplicates(self):
        UserModulePermission.objects.create(user=self.agent, module=self.modules['customers'], granted=True)
        UserModulePermission.objects.create(user=self.agent, module=self.modules['tasks'], granted=True)
        UserModulePermission.objects.create(user=self.agent, module=self.modules['chat'], granted=False)

        modules = accessible_modules(self.agent)
        names = [m['name'] for m in modules]
        self.assertEqual(sorted(names), sorted(['customers', 'dashboard', 'tasks', 'profile']))
        self.assertEqual(len({m['id'] for m in modules}), len(modules))

    def test_empty_catalog_falls_back_to_defaults(self):
        Module.objects.all().delete()
        self.assertEqual(active_modules(), policy.default_catalog())
        self.assertEqual(
            [m['name'] for m in accessible_modules(self.agent)],
            ['dashboard', 'tasks', 'profile'],
        )

    def test_unreadable_catalog_serves_default_catalog_to_managers(self):
        with mock.patch.object(Module.objects, 'filter', side_effect=DatabaseError('no such table')):
            with self.assertLogs('access.resolver', level='WARNING') as logs:
                modules = accessible_modules(self.manager)
        self.assertEqual(modules, policy.default_catalog())
        self.assertIn('serving default catalog', logs.output[0])

    def test_unreadable_permissions_serve_baseline(self):
        UserModulePermission.objects.create(user=self.agent, module=self.modules['customers'], granted=True)
        with mock.patch.object(Module.objects, 'filter', side_effect=DatabaseError('no such table')):
            with self.assertLogs('access.resolver', level='WARNING') as logs:
                modules = accessible_modules(self.agent)
        self.assertEqual(modules, policy.default_baseline())
        self.assertEqual([m['name'] for m in modules], ['dashboard', 'tasks', 'profile'])
        self.assertIn('serving baseline modules', logs.output[0])

    def test_revoke_without_row_stores_nothing(self):
        self.assertIsNone(update_or_grant_module(self.agent, self.modules['customers'], False))
        self.assertFalse(UserModulePermission.objects.exists())


class NavigationTests(TestCase):
    def test_groups_and_settings(self):
        navigation = build_navigation(policy.default_catalog())
        titles = [item['title'] for item in navigation]

        self.assertEqual(titles[0], 'داشبورد')
        self.assertIn('مدیریت فروش', titles)
        self.assertEqual(titles[-1], 'تنظیمات')
        self.assertEqual(len(navigation[-1]['children']), 2)

        team = next(item for item in navigation if item['title'] == 'مدیریت همکاران')
        self.assertIn('/dashboard/reports', [c['href'] for c in team['children']])
        self.assertNotIn('/dashboard/tasks', [item['href'] for item in navigation])

    def test_products_listed_under_sales_and_projects(self):
        modules = policy.default_catalog()
        modules.append({'id': 50, 'name': 'products', 'display_name': 'محصولات',
                        'route': '/dashboard/projects/products', 'icon': 'Package', 'sort_order': 50})
        navigation = {item['title']: item for item in build_navigation(modules)}

        for group in ('مدیریت فروش', 'پروژه‌ها و محصولات'):
            hrefs = [c['href'] for c in navigation[group]['children']]
            self.assertIn('/dashboard/projects/products', hrefs)
        self.assertNotIn('/dashboard/projects/products', [item['href'] for item in navigation.values()])

    def test_single_settings_module_is_top_level(self):
        modules = [m for m in policy.default_baseline()]
        modules.append({'id': 99, 'name': 'settings', 'display_name': 'تنظیمات عمومی',
                        'route': '/dashboard/settings', 'icon': 'Settings', 'sort_order': 99})
        modules.append({'id': 100, 'name': 'broken', 'display_name': 'x', 'route': '#', 'icon': None, 'sort_order': 1})

        navigation = build_navigation(modules)
        self.assertEqual(navigation[-1], {'title': 'تنظیمات', 'href': '/dashboard/settings', 'icon': 'Settings'})
        self.assertNotIn('#', [item['href'] for item in navigation])


class PermissionApiTests(APITestCase):
    def setUp(self):
        self.client = APIClient()
        self.modules = seed_catalog()
        self.ceo = User.objects.create(name='مدیرعامل', email='ceo@example.com', role='ceo', password='x')
        self.manager = User.objects.create(name='مدیر فروش', email='sm@example.com', role='sales_manager', password='x')
        self.agent = User.objects.create(name='کارشناس', email='agent@example.com', role='agent', password='x')

    def test_grant_then_toggle_updates_same_row(self):
        self.client.force_authenticate(user=self.ceo)
        payload = {'targetUserId': self.agent.id, 'moduleId': self.modules['customers'].id, 'granted': True}

        res = self.client.post('/api/permissions/', payload, format='json')
        self.assertEqual(res.status_code, status.HTTP_200_OK, res.content)
        self.assertEqual(res.data['message'], 'دسترسی اعطا شد')

        res = self.client.post('/api/permissions/', dict(payload, granted=False), format='json')
        self.assertEqual(res.data['message'], 'دسترسی لغو شد')

        rows = UserModulePermission.objects.filter(user=self.agent, module=self.modules['customers'])
        self.assertEqual(rows.count(), 1)
        self.assertFalse(rows.get().granted)

    def test_manager_grants_cannot_be_changed(self):
        self.client.force_authenticate(user=self.ceo)
        res = self.client.post('/api/permissions/', {
            'targetUserId': self.manager.id, 'moduleId': self.modules['customers'].id, 'granted': True,
        }, format='json')
        self.assertEqual(res.status_code, status.HTTP_403_FORBIDDEN)
        self.assertFalse(UserModulePermission.objects.exists())

    def test_non_manager_cannot_open_permission_screen(self):
        self.client.force_authenticate(user=self.agent)
        res = self.client.get('/api/permissions/')
        self.assertEqual(res.status_code, status.HTTP_403_FORBIDDEN)
        self.assertFalse(res.data['success'])

    def test_permission_screen_hides_baseline_only_modules(self):
        self.client.force_authenticate(user=self.ceo)
        res = self.client.get('/api/permissions/')
        names = [m['name'] for m in res.data['data']['modules']]
        self.assertNotIn('dashboard', names)
        self.assertNotIn('profile', names)
        self.assertEqual([u['id'] for u in res.data['data']['users']], [self.agent.id])

    def test_bulk_changes_roll_back_together(self):
        self.client.force_authenticate(user=self.ceo)
        res = self.client.post('/api/permissions/bulk/', {'changes': [
            {'targetUserId': self.agent.id, 'moduleId': self.modules['customers'].id, 'granted': True},
            {'targetUserId': self.agent.id, 'moduleId': 999999, 'granted': True},
        ]}, format='json')
        self.assertEqual(res.status_code, status.HTTP_404_NOT_FOUND)
        self.assertFalse(UserModulePermission.objects.exists())

    def test_current_user_modules_and_check(self):
        self.client.force_authenticate(user=self.agent)
        res = self.client.get('/api/auth/permissions/')
        self.assertFalse(res.data['data']['isManager'])
        self.assertEqual(
            sorted(m['name'] for m in res.data['data']['modules']),
            ['dashboard', 'profile', 'tasks'],
        )

        res = self.client.get('/api/permissions/check/?module=customers')
        self.assertFalse(res.data['data']['hasAccess'])

        res = self.client.get(f'/api/permissions/user-modules/?userId={self.ceo.id}')
        self.assertEqual(res.status_code, status.HTTP_403_FORBIDDEN)

    def test_missing_token_is_401(self):
        res = self.client.get('/api/auth/permissions/')
        self.assertEqual(res.status_code, status.HTTP_401_UNAUTHORIZED)
        self.assertEqual(res.data, {'success': False, 'message': 'توکن یافت نشد'})
