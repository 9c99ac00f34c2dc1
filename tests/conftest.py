from datetime import date
from decimal import Decimal
from unittest import mock

import pytest
from dateutil.relativedelta import relativedelta
from django.core.management import call_command
from django.utils import timezone


@pytest.fixture
def lookups(db):
    """Seeded categories, statuses and remarks"""
    call_command('seed_lookups', stdout=mock.MagicMock())

    from welfare.models import SeniorCategory
    return SeniorCategory.lookup()


@pytest.fixture
def admin_user(db):
    from welfare.models import User
    return User.objects.create_user(
        email='admin@welfare.test', password='pass12345',
        first_name='Ana', last_name='Admin', user_role='admin',
    )


@pytest.fixture
def staff_user(db):
    from welfare.models import User
    return User.objects.create_user(
        email='staff@welfare.test', password='pass12345',
        first_name='Sam', last_name='Staff', user_role='staff',
    )


@pytest.fixture
def admin_client(client, admin_user):
    client.force_login(admin_user)
    return client


@pytest.fixture
def staff_client(client, staff_user):
    client.force_login(staff_user)
    return client


@pytest.fixture
def benefit(db):
    from welfare.models import Benefit, BenefitRequirement
    benefit = Benefit.objects.create(name='Social Pension', tag='pension')
    BenefitRequirement.objects.create(benefit=benefit, name='Barangay certificate')
    return benefit


def birthdate_for_age(age, today=None):
    """A birthdate that makes someone ``age`` today (birthday a month ago)"""
    today = today or timezone.localdate()
    return today - relativedelta(years=age, months=1)


@pytest.fixture
def make_senior(lookups):
    """Create a senior directly, bypassing the service layer"""
    from welfare.models import Remarks, Senior

    counter = {'n': 0}

    def _make(age=70, pwd=False, low_income=False, gender='female', barangay='Poblacion', **fields):
        counter['n'] += 1
        birthdate = fields.pop('birthdate', None) or birthdate_for_age(age)
        values = {
            'firstname': f'Maria{counter["n"]}',
            'lastname': 'Santos',
            'age': str(age),
            'birthdate': birthdate,
            'gender': gender,
            'barangay': barangay,
            'purok': 'Purok 1',
            'pwd': pwd,
            'low_income': low_income,
            'remarks': Remarks.objects.get(name='NEW'),
        }
        values.update(fields)
        return Senior.objects.create(**values)

    return _make


@pytest.fixture
def make_application(lookups, benefit):
    from welfare.models import Application, SeniorCategory, Status

    def _make(senior, status='PENDING', category=None):
        return Application.objects.create(
            senior=senior,
            benefit=benefit,
            status=Status.objects.get(name=status),
            category=SeniorCategory.objects.get(name=category) if category else None,
        )

    return _make


@pytest.fixture
def cloudinary_upload():
    """Patch the Cloudinary SDK upload; every call succeeds"""
    def _upload(file, folder=None, public_id=None, **kwargs):
        return {
            'public_id': f'{folder}/{public_id}',
            'secure_url': f'https://res.cloudinary.com/test-cloud/{folder}/{public_id}',
        }

    with mock.patch('cloudinary.uploader.upload', side_effect=_upload) as upload:
        yield upload


@pytest.fixture
def fund_with_history(db, admin_user):
    """100000 total: 60000 on 2025-05-01 and 40000 on 2025-06-01"""
    from welfare.utils.fund_helpers import add_fund

    add_fund(Decimal('60000'), 'Provincial allocation', date(2025, 5, 1), created_by=admin_user)
    add_fund(Decimal('40000'), 'Municipal allocation', date(2025, 6, 1), created_by=admin_user)

    from welfare.utils.fund_helpers import get_government_fund
    return get_government_fund()
