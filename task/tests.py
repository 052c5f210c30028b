import shutil
import tempfile

from django.core.files.uploadedfile import SimpleUploadedFile
from django.test import override_settings
from rest_framework import status
from rest_framework.test import APITestCase, APIClient

from users.models import User
from .models import Task, TaskAssignee, TaskFile, TaskHistory


MEDIA_ROOT = tempfile.mkdtemp()


@override_settings(MEDIA_ROOT=MEDIA_ROOT)
class TaskApiFlowTests(APITestCase):
    @classmethod
    def tearDownClass(cls):
        super().tearDownClass()
        shutil.rmtree(MEDIA_ROOT, ignore_errors=True)

    def setUp(self):
        self.client = APIClient()
        self.manager = User.objects.create(name='مدیر', email='manager@example.com', role='ceo', password='x')
        self.agent = User.objects.create(name='کارشناس', email='agent@example.com', role='agent', password='x')
        self.other = User.objects.create(name='دیگری', email='other@example.com', role='agent', password='x')

    def _create_task(self):
        self.client.force_authenticate(user=self.manager)
        res = self.client.post('/api/tasks/', {
            'title': 'پیگیری مشتری',
            'assigned_to': [self.agent.id],
            'priority': 'high',
        }, format='json')
        self.assertEqual(res.status_code, status.HTTP_201_CREATED, res.content)
        return Task.objects.get(pk=res.data['data']['id'])

    def test_create_requires_title_and_assignee(self):
        self.client.force_authenticate(user=self.manager)
        res = self.client.post('/api/tasks/', {'title': 'بدون مسئول', 'assigned_to': []}, format='json')
        self.assertEqual(res.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(res.data['message'], 'عنوان و حداقل یک فرد مسئول الزامی است')
        self.assertFalse(Task.objects.exists())

    def test_non_manager_cannot_create(self):
        self.client.force_authenticate(user=self.agent)
        res = self.client.post('/api/tasks/', {'title': 'x', 'assigned_to': [self.agent.id]}, format='json')
        self.assertEqual(res.status_code, status.HTTP_403_FORBIDDEN)
        self.assertEqual(res.data['message'], 'شما مجوز ایجاد وظیفه ندارید')

    def test_create_stores_assignees_and_defaults(self):
        task = self._create_task()
        self.assertEqual(task.status, 'pending')
        self.assertEqual(task.category, 'follow_up')
        self.assertEqual(task.assigned_by, self.manager)
        self.assertTrue(TaskAssignee.objects.filter(task=task, user=self.agent).exists())
        self.assertTrue(TaskHistory.objects.filter(task=task, action='create').exists())

    def test_list_is_scoped_for_non_managers(self):
        task = self._create_task()

        self.client.force_authenticate(user=self.agent)
        res = self.client.get('/api/tasks/')
        self.assertEqual(res.status_code, status.HTTP_200_OK)
        self.assertEqual([t['id'] for t in res.data['data']], [task.id])
        self.assertEqual(res.data['data'][0]['assigned_user_ids'], [self.agent.id])

        self.client.force_authenticate(user=self.other)
        res = self.client.get('/api/tasks/')
        self.assertEqual(res.data['data'], [])

    def test_assignee_completes_task(self):
        task = self._create_task()

        self.client.force_authenticate(user=self.agent)
        res = self.client.put('/api/tasks/', {
            'taskId': task.id,
            'status': 'completed',
            'completion_notes': 'انجام شد',
        }, format='json')
        self.assertEqual(res.status_code, status.HTTP_200_OK, res.content)

        task.refresh_from_db()
        self.assertEqual(task.status, 'completed')
        self.assertIsNotNone(task.completed_at)
        self.assertEqual(task.completion_notes, 'انجام شد')

    def test_status_update_requires_assignee_or_manager(self):
        task = self._create_task()

        self.client.force_authenticate(user=self.other)
        res = self.client.put('/api/tasks/status/', {'taskId': task.id, 'status': 'in_progress'}, format='json')
        self.assertEqual(res.status_code, status.HTTP_403_FORBIDDEN)
        self.assertEqual(res.data['message'], 'شما مجوز تغییر این وظیفه را ندارید')

        res = self.client.put('/api/tasks/status/', {'status': 'in_progress'}, format='json')
        self.assertEqual(res.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(res.data['message'], 'شناسه وظیفه و وضعیت الزامی است')

    def test_upload_and_delete_file(self):
        task = self._create_task()

        self.client.force_authenticate(user=self.agent)
        upload = SimpleUploadedFile('report.pdf', b'%PDF-1.4 test', content_type='application/pdf')
        res = self.client.post('/api/tasks/upload/', {'taskId': task.id, 'file': upload}, format='multipart')
        self.assertEqual(res.status_code, status.HTTP_200_OK, res.content)
        self.assertEqual(res.data['message'], 'فایل با موفقیت آپلود شد')

        task_file = TaskFile.objects.get(task=task)
        self.assertEqual(task_file.original_name, 'report.pdf')
        self.assertTrue(task_file.file.name.startswith('uploads/tasks/'))
        self.assertTrue(task_file.file.name.endswith('.pdf'))

        self.client.force_authenticate(user=self.other)
        res = self.client.delete(f'/api/tasks/upload/?fileId={task_file.id}')
        self.assertEqual(res.status_code, status.HTTP_403_FORBIDDEN)

        self.client.force_authenticate(user=self.agent)
        res = self.client.delete(f'/api/tasks/upload/?fileId={task_file.id}')
        self.assertEqual(res.status_code, status.HTTP_200_OK)
        self.assertFalse(TaskFile.objects.filter(pk=task_file.id).exists())

    def test_upload_by_non_assignee_is_forbidden(self):
        task = self._create_task()

        self.client.force_authenticate(user=self.other)
        upload = SimpleUploadedFile('a.txt', b'hello', content_type='text/plain')
        res = self.client.post('/api/tasks/upload/', {'taskId': task.id, 'file': upload}, format='multipart')
        self.assertEqual(res.status_code, status.HTTP_403_FORBIDDEN)
        self.assertFalse(TaskFile.objects.exists())

    def test_assignable_users_for_managers_only(self):
        self.client.force_authenticate(user=self.agent)
        res = self.client.get('/api/tasks/users/')
        self.assertEqual(res.status_code, status.HTTP_403_FORBIDDEN)

        self.client.force_authenticate(user=self.manager)
        res = self.client.get('/api/tasks/users/')
        self.assertEqual(res.status_code, status.HTTP_200_OK)
        self.assertEqual(len(res.data['data']), 3)
