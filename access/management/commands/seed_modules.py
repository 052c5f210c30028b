"""
Management command to load the default module catalog
Usage: python manage.py seed_modules [--update]
"""
from django.core.management.base import BaseCommand

from access.models import Module
from access.policy import policy


class Command(BaseCommand):
    help = 'Create the dashboard modules of the default catalog'

    def add_arguments(self, parser):
        parser.add_argument(
            '--update',
            action='store_true',
            help='Overwrite display name, route, icon and sort order of existing modules',
        )

    def handle(self, *args, **options):
        self.stdout.write(self.style.SUCCESS('\n=== Seeding modules ===\n'))

        created_count = 0
        for entry in policy.default_catalog():
            defaults = {
                'display_name': entry['display_name'],
                'route': entry['route'],
                'icon': entry['icon'],
                'sort_order': entry['sort_order'],
                'is_active': True,
            }
            if options['update']:
                module, created = Module.objects.update_or_create(name=entry['name'], defaults=defaults)
            else:
                module, created = Module.objects.get_or_create(name=entry['name'], defaults=defaults)

            if created:
                created_count += 1
                self.stdout.write(f'  ✓ Created: {module.name} ({module.display_name})')
            else:
                self.stdout.write(f'  - Exists: {module.name}')

        self.stdout.write(self.style.SUCCESS(f'\nCreated {created_count} new modules\n'))
