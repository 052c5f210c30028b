"""
Management command to bootstrap a manager account
Usage: python manage.py create_manager --email ceo@example.com --name "مدیر عامل" --password secret
"""
from django.core.management.base import BaseCommand, CommandError

from access.policy import policy
from users.models import User


class Command(BaseCommand):
    help = 'Create (or reset) a manager account that can log in to the dashboard'

    def add_arguments(self, parser):
        parser.add_argument('--email', required=True)
        parser.add_argument('--name', default='مدیر سیستم')
        parser.add_argument('--password', required=True)
        parser.add_argument('--role', default='ceo')

    def handle(self, *args, **options):
        role = options['role']
        if not policy.is_manager(role):
            raise CommandError(f"'{role}' is not a manager role")
        if len(options['password']) < 6:
            raise CommandError('Password must be at least 6 characters')

        email = options['email'].strip().lower()
        user, created = User.objects.get_or_create(
            email=email,
            defaults={'name': options['name'], 'role': role, 'status': 'active'},
        )
        user.role = role
        user.status = 'active'
        user.set_password(options['password'])
        user.save()

        if created:
            self.stdout.write(self.style.SUCCESS(f'✓ Created manager: {user.email}'))
        else:
            self.stdout.write(f'- Manager already existed, password reset: {user.email}')
