from django.conf import settings
from rest_framework import status
from rest_framework.test import APITestCase, APIClient

from .models import User


def make_user(name, email, role='agent', password='secret123', **extra):
    user = User(name=name, email=email, role=role, **extra)
    user.set_password(password)
    user.save()
    return user


class AuthenticationTests(APITestCase):
    def setUp(self):
        self.client = APIClient()
        self.user = make_user('کارشناس', 'agent@example.com')

    def test_login_sets_cookie_and_returns_token(self):
        res = self.client.post('/api/auth/login/', {
            'email': '  Agent@Example.com ',
            'password': 'secret123',
        }, format='json')

        self.assertEqual(res.status_code, status.HTTP_200_OK, res.content)
        self.assertTrue(res.data['success'])
        self.assertEqual(res.data['user']['email'], 'agent@example.com')
        self.assertNotIn('password', res.data['user'])

        cookie = res.cookies[settings.AUTH_COOKIE_NAME]
        self.assertEqual(cookie.value, res.data['token'])
        self.assertTrue(cookie['httponly'])

        self.user.refresh_from_db()
        self.assertIsNotNone(self.user.last_login)

    def test_cookie_authenticates_follow_up_requests(self):
        self.client.post('/api/auth/login/', {'email': 'agent@example.com', 'password': 'secret123'}, format='json')
        res = self.client.get('/api/auth/me/')
        self.assertEqual(res.status_code, status.HTTP_200_OK)
        self.assertEqual(res.data['data']['id'], self.user.id)

    def test_bearer_header_authenticates(self):
        res = self.client.post('/api/auth/login/', {'email': 'agent@example.com', 'password': 'secret123'}, format='json')
        client = APIClient()
        client.credentials(HTTP_AUTHORIZATION=f"Bearer {res.data['token']}")
        res = client.get('/api/auth/me/')
        self.assertEqual(res.data['data']['email'], 'agent@example.com')

    def test_wrong_password_is_401(self):
        res = self.client.post('/api/auth/login/', {'email': 'agent@example.com', 'password': 'nope'}, format='json')
        self.assertEqual(res.status_code, status.HTTP_401_UNAUTHORIZED)
        self.assertEqual(res.data['message'], 'ایمیل یا رمز عبور اشتباه است')
        self.assertNotIn(settings.AUTH_COOKIE_NAME, res.cookies)

    def test_inactive_user_cannot_login(self):
        make_user('غیرفعال', 'off@example.com', status='inactive')
        res = self.client.post('/api/auth/login/', {'email': 'off@example.com', 'password': 'secret123'}, format='json')
        self.assertEqual(res.status_code, status.HTTP_401_UNAUTHORIZED)

    def test_missing_fields(self):
        res = self.client.post('/api/auth/login/', {'email': 'agent@example.com'}, format='json')
        self.assertEqual(res.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(res.data['message'], 'ایمیل و رمز عبور الزامی است')

    def test_invalid_token_is_rejected(self):
        self.client.credentials(HTTP_AUTHORIZATION='Bearer not-a-token')
        res = self.client.get('/api/auth/me/')
        self.assertEqual(res.status_code, status.HTTP_401_UNAUTHORIZED)
        self.assertFalse(res.data['success'])

    def test_logout_clears_cookie(self):
        res = self.client.post('/api/auth/logout/')
        self.assertEqual(res.status_code, status.HTTP_200_OK)
        self.assertEqual(res.cookies[settings.AUTH_COOKIE_NAME].value, '')


class UserApiTests(APITestCase):
    def setUp(self):
        self.client = APIClient()
        self.ceo = make_user('مدیرعامل', 'ceo@example.com', role='ceo')
        self.agent = make_user('کارشناس', 'agent@example.com')

    def test_non_manager_cannot_list_users(self):
        self.client.force_authenticate(user=self.agent)
        res = self.client.get('/api/users/')
        self.assertEqual(res.status_code, status.HTTP_403_FORBIDDEN)

    def test_manager_creates_user_with_hashed_password(self):
        self.client.force_authenticate(user=self.ceo)
        res = self.client.post('/api/users/', {
            'name': 'جدید', 'email': 'New@Example.com', 'password': 'secret123', 'role': 'sales_agent',
        }, format='json')
        self.assertEqual(res.status_code, status.HTTP_201_CREATED, res.content)

        user = User.objects.get(email='new@example.com')
        self.assertNotEqual(user.password, 'secret123')
        self.assertTrue(user.check_password('secret123'))

        res = self.client.post('/api/users/', {
            'name': 'تکراری', 'email': 'new@example.com', 'password': 'secret123', 'role': 'agent',
        }, format='json')
        self.assertEqual(res.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(res.data['message'], 'کاربری با این ایمیل قبلاً ثبت شده است')

    def test_list_is_paginated_with_total(self):
        self.client.force_authenticate(user=self.ceo)
        res = self.client.get('/api/users/?limit=1')
        self.assertEqual(res.data['total'], 2)
        self.assertEqual(len(res.data['data']), 1)

    def test_delete_disables_user(self):
        self.client.force_authenticate(user=self.ceo)
        res = self.client.delete(f'/api/users/{self.agent.id}/')
        self.assertEqual(res.status_code, status.HTTP_200_OK)

        self.agent.refresh_from_db()
        self.assertEqual(self.agent.status, 'inactive')

        res = self.client.get('/api/users/')
        self.assertEqual([u['id'] for u in res.data['data']], [self.ceo.id])

    def test_cannot_disable_self(self):
        self.client.force_authenticate(user=self.ceo)
        res = self.client.delete(f'/api/users/{self.ceo.id}/')
        self.assertEqual(res.status_code, status.HTTP_400_BAD_REQUEST)

    def test_self_update_cannot_change_role(self):
        self.client.force_authenticate(user=self.agent)
        res = self.client.patch(f'/api/users/{self.agent.id}/', {'role': 'ceo'}, format='json')
        self.assertEqual(res.status_code, status.HTTP_403_FORBIDDEN)

        res = self.client.patch(f'/api/users/{self.agent.id}/', {'phone': '09120000000'}, format='json')
        self.assertEqual(res.status_code, status.HTTP_200_OK)

    def test_password_change(self):
        self.client.force_authenticate(user=self.agent)
        res = self.client.post('/api/profile/password/', {
            'current_password': 'wrong', 'new_password': 'another123',
        }, format='json')
        self.assertEqual(res.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(res.data['message'], 'رمز عبور فعلی اشتباه است')

        res = self.client.post('/api/profile/password/', {
            'current_password': 'secret123', 'new_password': 'another123',
        }, format='json')
        self.assertEqual(res.status_code, status.HTTP_200_OK)
        self.agent.refresh_from_db()
        self.assertTrue(self.agent.check_password('another123'))
