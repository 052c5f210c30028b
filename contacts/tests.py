from rest_framework import status
from rest_framework.test import APITestCase, APIClient

from users.models import User
from .models import Company, Contact, ContactActivity


class CompanyApiTests(APITestCase):
    def setUp(self):
        self.client = APIClient()
        self.user = User.objects.create(name='کارشناس', email='agent@example.com', role='agent', password='x')
        self.client.force_authenticate(user=self.user)

    def test_duplicate_name_is_rejected(self):
        res = self.client.post('/api/companies/', {'name': 'آلفا'}, format='json')
        self.assertEqual(res.status_code, status.HTTP_201_CREATED, res.content)
        self.assertEqual(res.data['data']['contacts_count'], 0)

        res = self.client.post('/api/companies/', {'name': ' آلفا '}, format='json')
        self.assertEqual(res.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(res.data['message'], 'شرکتی با این نام قبلاً ثبت شده است')
        self.assertEqual(Company.objects.count(), 1)

    def test_company_with_contacts_cannot_be_deleted(self):
        company = Company.objects.create(name='بتا')
        contact = Contact.objects.create(first_name='سارا', last_name='احمدی', company=company)

        res = self.client.delete(f'/api/companies/{company.id}/')
        self.assertEqual(res.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertTrue(Company.objects.filter(pk=company.pk).exists())

        contact.delete()
        res = self.client.delete(f'/api/companies/{company.id}/')
        self.assertEqual(res.status_code, status.HTTP_200_OK)
        self.assertFalse(Company.objects.exists())

    def test_list_counts_contacts(self):
        company = Company.objects.create(name='گاما')
        Contact.objects.create(first_name='علی', last_name='رضایی', company=company)
        Contact.objects.create(first_name='مریم', last_name='کریمی', company=company)

        res = self.client.get('/api/companies/')
        self.assertEqual(res.data['total'], 1)
        self.assertEqual(res.data['data'][0]['contacts_count'], 2)


class ContactApiTests(APITestCase):
    def setUp(self):
        self.client = APIClient()
        self.user = User.objects.create(name='کارشناس', email='agent@example.com', role='agent', password='x')
        self.client.force_authenticate(user=self.user)
        self.company = Company.objects.create(name='آلفا')

    def test_create_with_notes_logs_initial_activity(self):
        res = self.client.post('/api/contacts/', {
            'first_name': 'سارا',
            'last_name': 'احمدی',
            'email': 'Sara@Example.com',
            'company_id': str(self.company.id),
            'notes': 'آشنایی در نمایشگاه',
        }, format='json')
        self.assertEqual(res.status_code, status.HTTP_201_CREATED, res.content)

        contact = Contact.objects.get()
        self.assertEqual(contact.email, 'sara@example.com')
        self.assertEqual(contact.company, self.company)
        self.assertEqual(contact.assigned_to, self.user)

        activity = ContactActivity.objects.get()
        self.assertEqual(activity.activity_type, 'note')
        self.assertEqual(activity.company, self.company)

    def test_duplicate_email_stores_nothing(self):
        Contact.objects.create(first_name='سارا', last_name='احمدی', email='sara@example.com')
        res = self.client.post('/api/contacts/', {
            'first_name': 'سارا', 'last_name': 'دیگر', 'email': 'SARA@example.com', 'notes': 'x',
        }, format='json')
        self.assertEqual(res.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(res.data['message'], 'مخاطبی با این ایمیل قبلاً ثبت شده است')
        self.assertEqual(Contact.objects.count(), 1)
        self.assertFalse(ContactActivity.objects.exists())

    def test_individual_and_unknown_company(self):
        res = self.client.post('/api/contacts/', {
            'first_name': 'علی', 'last_name': 'رضایی', 'company_id': 'individual',
        }, format='json')
        self.assertEqual(res.status_code, status.HTTP_201_CREATED)
        self.assertIsNone(res.data['data']['company'])

        res = self.client.post('/api/contacts/', {
            'first_name': 'علی', 'last_name': 'رضایی', 'company_id': '99999',
        }, format='json')
        self.assertEqual(res.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(res.data['message'], 'شرکت یافت نشد')

        res = self.client.get('/api/contacts/?company_id=individual')
        self.assertEqual(res.data['total'], 1)

    def test_completed_call_updates_last_contact_date(self):
        contact = Contact.objects.create(first_name='علی', last_name='رضایی', company=self.company)

        res = self.client.post(f'/api/contacts/{contact.id}/activities/', {
            'activity_type': 'call', 'title': 'تماس پیگیری',
        }, format='json')
        self.assertEqual(res.status_code, status.HTTP_201_CREATED, res.content)
        contact.refresh_from_db()
        self.assertIsNotNone(contact.last_contact_date)

        activity_id = res.data['data']['id']
        res = self.client.delete(f'/api/contacts/{contact.id}/activities/{activity_id}/')
        self.assertEqual(res.status_code, status.HTTP_200_OK)
        self.assertFalse(ContactActivity.objects.exists())
