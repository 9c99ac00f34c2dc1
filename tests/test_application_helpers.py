import uuid

import pytest
from django.core.files.uploadedfile import SimpleUploadedFile

from tests.conftest import birthdate_for_age
from welfare.exceptions import ConfigurationError, NotFoundError, ValidationError
from welfare.models import Application, Notification, RegistrationDocument, Status
from welfare.utils.application_helpers import apply_for_benefit, list_applications, update_application_status


pytestmark = pytest.mark.django_db


class TestApplyForBenefit:

    def test_initial_categories(self, make_senior, benefit):
        regular = make_senior(age=70)
        octogenarian = make_senior(age=84)
        pwd = make_senior(age=91, pwd=True)

        result = apply_for_benefit(benefit.id, [regular.id, octogenarian.id, pwd.id])

        categories = {
            application.senior_id: application.category.name
            for application in Application.objects.select_related('category')
        }
        assert len(result['applications']) == 3
        assert categories == {
            regular.id: 'Regular senior citizens',
            octogenarian.id: 'Octogenarian (80-89)',
            pwd.id: 'Special assistance cases',
        }
        assert set(Application.objects.values_list('status__name', flat=True)) == {'PENDING'}

    def test_stale_age_is_refreshed_before_categorizing(self, make_senior, benefit):
        senior = make_senior(age=79, birthdate=birthdate_for_age(80))

        result = apply_for_benefit(benefit.id, [senior.id])

        (application,) = result['applications']
        assert application.category.name == 'Octogenarian (80-89)'
        senior.refresh_from_db()
        assert senior.age == '80'

    def test_duplicate_ids_apply_once(self, make_senior, benefit):
        senior = make_senior()
        apply_for_benefit(benefit.id, [senior.id, str(senior.id)])
        assert Application.objects.count() == 1

    def test_no_seniors(self, lookups, benefit):
        with pytest.raises(ValidationError):
            apply_for_benefit(benefit.id, [])

    def test_unknown_senior_writes_nothing(self, make_senior, benefit):
        senior = make_senior()
        with pytest.raises(NotFoundError):
            apply_for_benefit(benefit.id, [senior.id, uuid.uuid4()])
        assert Application.objects.count() == 0

    def test_unknown_benefit(self, make_senior):
        with pytest.raises(NotFoundError):
            apply_for_benefit(uuid.uuid4(), [make_senior().id])

    def test_statuses_not_seeded(self, make_senior, benefit):
        senior = make_senior()
        Status.objects.all().delete()
        with pytest.raises(ConfigurationError):
            apply_for_benefit(benefit.id, [senior.id])

    def test_requirement_documents_per_senior(self, make_senior, benefit, cloudinary_upload, admin_user, staff_user):
        first, second = make_senior(), make_senior()
        requirement = benefit.requirements.get()
        files = {
            f'requirement_{first.id}_{requirement.id}': SimpleUploadedFile('cert1.pdf', b'1'),
            f'requirement_{second.id}_{requirement.id}': SimpleUploadedFile('cert2.pdf', b'2'),
        }

        result = apply_for_benefit(benefit.id, [first.id, second.id], documents=files, created_by=staff_user)

        assert len(result['documents']) == 2
        document = RegistrationDocument.objects.get(senior=first)
        assert document.benefit_requirement == requirement
        assert document.tag == 'medical_assistance'
        assert Notification.objects.filter(user=admin_user, notification_type='application_submitted').exists()


class TestUpdateStatus:

    def test_approve_by_name(self, make_senior, make_application, admin_user):
        application = make_application(make_senior())

        update_application_status(application.id, 'APPROVED')

        application.refresh_from_db()
        assert application.status.name == 'APPROVED'
        assert Notification.objects.filter(
            notification_type='application_approved', related_application=application
        ).count() == 1

    def test_reject_with_reason_by_id(self, make_senior, make_application):
        application = make_application(make_senior())
        reject = Status.objects.get(name='REJECT')

        update_application_status(application.id, reject.id, rejection_reason='Incomplete documents')

        application.refresh_from_db()
        assert application.status == reject
        assert application.rejection_reason == 'Incomplete documents'

    def test_reason_kept_when_absent(self, make_senior, make_application):
        application = make_application(make_senior(), status='REJECT')
        Application.objects.filter(pk=application.pk).update(rejection_reason='Deceased')

        update_application_status(application.id, 'PENDING')

        application.refresh_from_db()
        assert application.rejection_reason == 'Deceased'

    def test_unknown_status(self, make_senior, make_application):
        application = make_application(make_senior())
        with pytest.raises(NotFoundError):
            update_application_status(application.id, 'ON_HOLD')

    def test_unknown_application(self, lookups):
        with pytest.raises(NotFoundError):
            update_application_status(uuid.uuid4(), 'APPROVED')


def test_list_applications_filters(make_senior, make_application):
    juan = make_senior(firstname='Juan')
    rosa = make_senior(firstname='Rosa')
    make_application(juan, status='APPROVED', category='Regular senior citizens')
    make_application(rosa, status='PENDING', category='Octogenarian (80-89)')
    archived = make_senior(firstname='Archie')
    make_application(archived)
    archived.delete()

    assert list_applications().count() == 2
    assert [a.senior.firstname for a in list_applications(name='jua')] == ['Juan']
    assert list_applications(status='PENDING,REJECT').get().senior == rosa
    assert list_applications(senior_category='Octogenarian (80-89)').get().senior == rosa
    assert list_applications(applied_benefit='Social Pension').count() == 2
