"""
Management command to seed the lookup tables

This command creates (or re-orders):
- Senior categories (Regular, Special assistance, age tiers)
- Application statuses (PENDING, APPROVED, REJECT)
- Remarks (NEW, TRANSFER, UPDATED, DECEASED, LOSS)

Usage:
    python manage.py seed_lookups
    python manage.py seed_lookups --admin-email admin@example.com --admin-password secret
"""

from django.core.management.base import BaseCommand
from django.db import transaction

from welfare.models import APPLICATION_STATUSES, REMARKS, Remarks, SeniorCategory, Status, User
from welfare.utils.category_helpers import SENIOR_CATEGORIES


class Command(BaseCommand):
    help = 'Seed senior categories, application statuses and remarks'

    def add_arguments(self, parser):
        parser.add_argument(
            '--admin-email',
            help='Also create an admin user with this email if none exists',
        )
        parser.add_argument(
            '--admin-password',
            help='Password for the admin user created with --admin-email',
        )

    @transaction.atomic
    def handle(self, *args, **options):
        self.stdout.write(self.style.SUCCESS('\n=== Seeding lookup tables ===\n'))

        self.seed_categories()
        self.seed_statuses()
        self.seed_remarks()

        if options.get('admin_email'):
            self.seed_admin(options['admin_email'], options.get('admin_password'))

        self.stdout.write(self.style.SUCCESS('\n[SUCCESS] Lookup tables seeded successfully!\n'))

    def seed_categories(self):
        self.stdout.write('Seeding Senior Categories...')
        for order, name in enumerate(SENIOR_CATEGORIES, 1):
            _, created = SeniorCategory.objects.update_or_create(name=name, defaults={'order': order})
            self._report(name, created)

    def seed_statuses(self):
        self.stdout.write('Seeding Statuses...')
        for name in APPLICATION_STATUSES:
            _, created = Status.objects.get_or_create(name=name)
            self._report(name, created)

    def seed_remarks(self):
        self.stdout.write('Seeding Remarks...')
        for name, order in REMARKS:
            _, created = Remarks.objects.update_or_create(name=name, defaults={'order': order})
            self._report(name, created)

    def seed_admin(self, email, password):
        if User.objects.filter(email=email).exists():
            self.stdout.write(self.style.WARNING(f'  Admin user {email} already exists, skipping'))
            return
        if not password:
            self.stdout.write(self.style.ERROR('  --admin-password is required to create the admin user'))
            return

        User.objects.create_superuser(email=email, password=password, first_name='Admin', last_name='User')
        self.stdout.write(self.style.SUCCESS(f'  [OK] Created admin user {email}'))

    def _report(self, name, created):
        if created:
            self.stdout.write(self.style.SUCCESS(f'  [OK] Created: {name}'))
        else:
            self.stdout.write(f'  - Exists: {name}')
