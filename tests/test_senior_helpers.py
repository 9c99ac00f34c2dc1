from datetime import date, timedelta
from unittest import mock
import uuid

import pytest
from django.core.files.uploadedfile import SimpleUploadedFile
from django.utils import timezone

from tests.conftest import birthdate_for_age
from welfare.exceptions import ConfigurationError, NotFoundError, ValidationError
from welfare.models import Application, Notification, RegistrationDocument, Remarks, Senior, SeniorCategory
from welfare.utils.senior_helpers import (
    calculate_age,
    create_senior,
    initial_category_for,
    list_archived_seniors,
    list_seniors,
    permanent_delete_senior,
    refresh_senior_age,
    release_senior,
    restore_senior,
    soft_delete_senior,
    update_senior,
)


pytestmark = pytest.mark.django_db


def senior_data(**overrides):
    data = {
        'firstname': 'Lourdes',
        'lastname': 'Garcia',
        'birthdate': birthdate_for_age(72),
        'gender': 'female',
        'barangay': 'San Isidro',
        'purok': 'Purok 3',
        'contact_no': '09171234567',
        'emergency_no': '09181234567',
        'pwd': False,
        'low_income': True,
    }
    data.update(overrides)
    return data


def category_of(application):
    application.refresh_from_db()
    return application.category.name if application.category else None


def test_calculate_age():
    assert calculate_age('1945-06-15', today=date(2025, 6, 14)) == 79
    assert calculate_age(date(1945, 6, 15), today=date(2025, 6, 15)) == 80


class TestCreateSenior:

    def test_registers_with_new_remark_and_age(self, lookups, admin_user, staff_user):
        result = create_senior(senior_data(), created_by=staff_user)
        senior = result['senior']

        assert senior.remarks.name == 'NEW'
        assert senior.age == '72'
        assert senior.created_by == staff_user
        assert result['failed_uploads'] == []
        assert Notification.objects.filter(user=admin_user, notification_type='senior_registered').count() == 1

    def test_invalid_data_writes_nothing(self, lookups):
        with pytest.raises(ValidationError):
            create_senior(senior_data(contact_no='123'))
        with pytest.raises(ValidationError):
            create_senior(senior_data(emergency_no='09171234567'))
        with pytest.raises(ValidationError):
            create_senior(senior_data(birthdate=None))
        assert Senior.all_objects.count() == 0

    def test_remarks_not_seeded(self, db):
        with pytest.raises(ConfigurationError):
            create_senior(senior_data())

    def test_documents_uploaded_after_save(self, lookups, cloudinary_upload):
        files = {
            'birth_certificate': SimpleUploadedFile('birth.pdf', b'pdf'),
            'medical_assistance': [SimpleUploadedFile('a.jpg', b'a'), SimpleUploadedFile('b.jpg', b'b')],
        }
        result = create_senior(senior_data(), documents=files)

        assert len(result['documents']) == 3
        assert RegistrationDocument.objects.filter(senior=result['senior'], tag='medical_assistance').count() == 2

    def test_failed_upload_keeps_senior(self, lookups):
        import cloudinary.exceptions

        with mock.patch('cloudinary.uploader.upload', side_effect=cloudinary.exceptions.Error('offline')):
            result = create_senior(senior_data(), documents={'id_photo': SimpleUploadedFile('me.png', b'x')})

        assert result['failed_uploads'] == ['me.png']
        assert Senior.objects.filter(pk=result['senior'].pk).exists()


class TestUpdateSenior:

    def test_crossing_age_tier_moves_all_applications(self, make_senior, make_application):
        senior = make_senior(age=79)
        first = make_application(senior, category='Regular senior citizens')
        second = make_application(senior, status='APPROVED', category='Regular senior citizens')

        result = update_senior(senior.id, {'birthdate': birthdate_for_age(81)})

        assert result['senior'].age == '81'
        assert result['applications_updated'] == 2
        assert result['category_error'] is None
        assert category_of(first) == category_of(second) == 'Octogenarian (80-89)'

    def test_same_tier_touches_nothing(self, make_senior, make_application):
        senior = make_senior(age=82, birthdate=birthdate_for_age(82))
        application = make_application(senior, category='Octogenarian (80-89)')
        before = Application.objects.get(pk=application.pk).updated_at

        result = update_senior(senior.id, {'age': 85})

        assert result['applications_updated'] == 0
        assert Application.objects.get(pk=application.pk).updated_at == before

    def test_becoming_pwd(self, make_senior, make_application):
        senior = make_senior(age=70)
        application = make_application(senior, category='Regular senior citizens')

        update_senior(senior.id, {'pwd': True})

        assert category_of(application) == 'Special assistance cases'

    def test_leaving_pwd_returns_to_age_tier(self, make_senior, make_application):
        senior = make_senior(age=85, pwd=True)
        application = make_application(senior, category='Special assistance cases')

        result = update_senior(senior.id, {'pwd': False})

        assert result['applications_updated'] == 1
        assert category_of(application) == 'Octogenarian (80-89)'
        expected = SeniorCategory.objects.get(pk=initial_category_for(result['senior'], SeniorCategory.lookup()))
        assert category_of(application) == expected.name

    def test_absent_keys_are_ignored(self, make_senior):
        senior = make_senior(age=70, purok='Purok 9')
        update_senior(senior.id, {'barangay': 'Bagong Silang', 'purok': None})

        senior.refresh_from_db()
        assert senior.barangay == 'Bagong Silang'
        assert senior.purok == 'Purok 9'

    def test_remarks(self, make_senior):
        senior = make_senior()
        transfer = Remarks.objects.get(name='TRANSFER')

        update_senior(senior.id, {'remarks_id': transfer.id})

        senior.refresh_from_db()
        assert senior.remarks == transfer

    def test_missing_category_row_keeps_other_changes(self, make_senior, make_application, caplog):
        senior = make_senior(age=79)
        application = make_application(senior, category='Regular senior citizens')
        SeniorCategory.objects.filter(name='Octogenarian (80-89)').delete()

        result = update_senior(senior.id, {'birthdate': birthdate_for_age(81), 'purok': 'Purok 2'})

        senior.refresh_from_db()
        assert senior.age == '81'
        assert senior.purok == 'Purok 2'
        assert 'Octogenarian' in result['category_error']
        assert category_of(application) == 'Regular senior citizens'

    def test_unknown_senior(self, lookups):
        with pytest.raises(NotFoundError):
            update_senior(uuid.uuid4(), {'purok': 'x'})

    def test_invalid_update_writes_nothing(self, make_senior):
        senior = make_senior(contact_no='09171234567')
        with pytest.raises(ValidationError):
            update_senior(senior.id, {'contact_no': 'abc'})

        senior.refresh_from_db()
        assert senior.contact_no == '09171234567'


class TestRefreshAge:

    def test_birthday_moves_applications(self, make_senior, make_application):
        senior = make_senior(age=79, birthdate=birthdate_for_age(80))
        application = make_application(senior, category='Regular senior citizens')

        refresh_senior_age(senior)

        senior.refresh_from_db()
        assert senior.age == '80'
        assert category_of(application) == 'Octogenarian (80-89)'

    def test_idempotent(self, make_senior):
        senior = make_senior(age=75)
        before = Senior.objects.get(pk=senior.pk).updated_at

        refresh_senior_age(senior)
        refresh_senior_age(senior)

        assert Senior.objects.get(pk=senior.pk).updated_at == before

    def test_list_refreshes_ages(self, make_senior):
        make_senior(age=64, birthdate=birthdate_for_age(65))
        (senior,) = list_seniors()
        assert senior.age == '65'


class TestArchive:

    def test_soft_delete_and_restore(self, make_senior):
        senior = make_senior()

        soft_delete_senior(senior.id)
        assert not Senior.objects.filter(pk=senior.pk).exists()
        assert [s.pk for s in list_archived_seniors()] == [senior.pk]

        restore_senior(senior.id)
        assert Senior.objects.filter(pk=senior.pk).exists()

    def test_restore_requires_archived(self, make_senior):
        senior = make_senior()
        with pytest.raises(NotFoundError):
            restore_senior(senior.id)

    def test_permanent_delete_cascades(self, make_senior, make_application):
        senior = make_senior()
        make_application(senior)
        soft_delete_senior(senior.id)

        permanent_delete_senior(senior.id)

        assert Senior.all_objects.count() == 0
        assert Application.objects.count() == 0


class TestRelease:

    def test_release_three_days_later(self, make_senior, admin_user):
        senior = make_senior()
        now = timezone.now()

        released = release_senior(senior.id, now=now)

        assert released.released_at == now + timedelta(days=3)
        assert Notification.objects.filter(notification_type='release_scheduled').count() == 1

    def test_release_delay_setting(self, make_senior, settings):
        settings.WELFARE = {'RELEASE_DELAY_DAYS': 7}
        senior = make_senior()
        now = timezone.now()

        assert release_senior(senior.id, now=now).released_at == now + timedelta(days=7)

    def test_already_released(self, make_senior):
        senior = make_senior(released_at=timezone.now())

        with pytest.raises(ValidationError) as excinfo:
            release_senior(senior.id)
        assert excinfo.value.code == 'already_released'

    def test_release_filters(self, make_senior):
        make_senior(released_at=timezone.now())
        make_senior()

        assert len(list_seniors(release_status='Released')) == 1
        assert len(list_seniors(release_status='Pending')) == 1
