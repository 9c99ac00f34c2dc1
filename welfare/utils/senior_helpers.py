"""
Senior Services
===============

Registration, updates, archiving and benefit release for seniors.

Category reassignment after an update runs inside a savepoint: when the
category lookup is incomplete the senior's other changes are kept, the
reassignment is rolled back and the error is reported in the result.
"""

from datetime import timedelta
from dateutil.relativedelta import relativedelta
from django.db import transaction
from django.utils import timezone
import logging

from welfare.conf import welfare_settings
from welfare.exceptions import ConfigurationError, ValidationError
from welfare.utils.category_helpers import (
    CategoryChange,
    CategoryReconciler,
    initial_category_name,
    parse_age,
    resolve_category_id,
)
from welfare.utils.helpers import get_object_or_not_found, parse_date

logger = logging.getLogger(__name__)


SENIOR_FIELDS = [
    'firstname', 'middlename', 'lastname', 'email',
    'age', 'birthdate', 'gender',
    'barangay', 'purok',
    'contact_no', 'emergency_no', 'contact_person', 'contact_relationship',
    'pwd', 'low_income',
]

RELEASE_STATUS_RELEASED = 'Released'
RELEASE_STATUS_PENDING = 'Pending'


# =============================================================================
# AGE
# =============================================================================

def calculate_age(birthdate, today=None):
    """
    Whole years between birthdate and today

    Example:
        >>> calculate_age("1945-06-15", today=date(2025, 6, 14))
        79
    """
    birthdate = parse_date(birthdate, 'birthdate')
    if today is None:
        today = timezone.localdate()
    return relativedelta(today, birthdate).years


def refresh_senior_age(senior, today=None):
    """
    Bring the stored age up to date with the birthdate

    No-op unless the calculated age is greater than the stored one. When
    the age grows into a new tier the senior's applications follow.
    """
    stored_age = parse_age(senior.age)
    current_age = calculate_age(senior.birthdate, today)

    if current_age <= stored_age:
        return senior

    with transaction.atomic():
        senior.age = str(current_age)
        senior.save(update_fields=['age', 'updated_at'])

        change = CategoryChange(stored_age, current_age, senior.pwd, senior.pwd)
        try:
            with transaction.atomic():
                reconcile_senior_categories(senior, change)
        except ConfigurationError as e:
            logger.error(f"Age refresh for senior {senior.id}: category reassignment skipped: {e}")

    logger.info(f"Senior {senior.id} age refreshed: {stored_age} → {current_age}")
    return senior


# =============================================================================
# CATEGORIES
# =============================================================================

def reconcile_senior_categories(senior, change, reconciler=None, category_lookup=None):
    """
    Move all of a senior's applications to the category the rules choose

    Only applications whose category differs are touched, in one UPDATE.

    Returns:
        int: Number of applications updated

    Raises:
        ConfigurationError: If the chosen category is not seeded
    """
    from welfare.models import SeniorCategory

    if reconciler is None:
        reconciler = CategoryReconciler()
    if category_lookup is None:
        category_lookup = SeniorCategory.lookup()

    category_id = reconciler.resolve(change, category_lookup)
    if category_id is None:
        return 0

    updated = senior.applications.exclude(category_id=category_id).update(
        category_id=category_id,
        updated_at=timezone.now(),
    )
    if updated:
        logger.info(f"Senior {senior.id}: {updated} application(s) moved to category {category_id} ({change!r})")
    return updated


def initial_category_for(senior, category_lookup):
    """Category id for a new application: Special when PWD, else the age tier"""
    return resolve_category_id(initial_category_name(senior.age, senior.pwd), category_lookup)


# =============================================================================
# REGISTRATION & UPDATES
# =============================================================================

def _new_remark():
    from welfare.models import NEW_REMARK_ORDER, Remarks

    remark = Remarks.objects.filter(order=NEW_REMARK_ORDER).first()
    if remark is None:
        raise ConfigurationError(
            "Remarks 'NEW' not found. Run 'manage.py seed_lookups' to create the lookup tables."
        )
    return remark


def create_senior(data, documents=None, created_by=None):
    """
    Register a senior with the NEW remark and upload their documents

    Args:
        data: dict of Senior field values (see SENIOR_FIELDS)
        documents: request.FILES-like mapping of uploaded files
        created_by: Acting user

    Returns:
        dict: senior, documents, failed_uploads

    Raises:
        ValidationError: If the senior data is invalid (nothing is written)
        ConfigurationError: If the remarks table is not seeded
    """
    from welfare.models import Notification, Senior
    from welfare.utils.storage import save_senior_documents

    values = {field: data[field] for field in SENIOR_FIELDS if data.get(field) is not None}
    if not values.get('birthdate'):
        raise ValidationError({'birthdate': "Birth date is required"}, code='required')

    values['birthdate'] = parse_date(values['birthdate'], 'birthdate')
    values['age'] = str(calculate_age(values['birthdate']))

    with transaction.atomic():
        senior = Senior(remarks=_new_remark(), created_by=created_by, **values)
        senior.full_clean()
        senior.save()

        Notification.objects.notify_admins(
            'senior_registered',
            title="New senior registered",
            message=f"{senior.full_name} from {senior.barangay} was registered.",
            exclude_user=created_by,
            related_senior=senior,
        )

    logger.info(f"Senior registered: {senior.full_name} ({senior.id})")

    saved, failed = save_senior_documents(senior, documents)
    if failed:
        logger.warning(f"Senior {senior.id}: {len(failed)} document upload(s) failed")

    return {'senior': senior, 'documents': saved, 'failed_uploads': failed}


def update_senior(senior_id, payload):
    """
    Update a senior and reconcile their applications' categories

    Absent (None) keys are ignored. A new birthdate recomputes the age; an
    explicit age is stored as text.

    Returns:
        dict: senior, applications_updated, category_error (None when fine)

    Raises:
        NotFoundError: If the senior does not exist
        ValidationError: If the updated senior is invalid (nothing is written)
    """
    from welfare.models import Remarks, Senior

    payload = {key: value for key, value in payload.items() if value is not None}

    if payload.get('birthdate'):
        payload['birthdate'] = parse_date(payload['birthdate'], 'birthdate')
        payload['age'] = str(calculate_age(payload['birthdate']))
    elif 'age' in payload:
        payload['age'] = str(payload['age'])

    with transaction.atomic():
        senior = get_object_or_not_found(Senior.all_objects.select_for_update(), senior_id, label="Senior")
        old_age, old_pwd = senior.age, senior.pwd

        for field in SENIOR_FIELDS:
            if field in payload:
                setattr(senior, field, payload[field])

        remarks_id = payload.get('remarks_id') or payload.get('remarks')
        if remarks_id:
            senior.remarks = get_object_or_not_found(Remarks.objects.all(), remarks_id, label="Remarks")

        senior.full_clean()
        senior.save()

        change = CategoryChange(old_age, senior.age, old_pwd, senior.pwd)
        applications_updated, category_error = 0, None
        try:
            with transaction.atomic():
                applications_updated = reconcile_senior_categories(senior, change)
        except ConfigurationError as e:
            category_error = str(e)
            logger.error(f"Senior {senior.id} updated but category reassignment was rolled back: {e}")

        refresh_senior_age(senior)

    logger.info(f"Senior {senior.id} updated ({', '.join(sorted(payload)) or 'no fields'})")
    return {
        'senior': senior,
        'applications_updated': applications_updated,
        'category_error': category_error,
    }


# =============================================================================
# ARCHIVE / RESTORE / DELETE
# =============================================================================

@transaction.atomic
def soft_delete_senior(senior_id):
    """Archive a senior (sets deleted_at)"""
    from welfare.models import Senior

    senior = get_object_or_not_found(Senior.objects.all(), senior_id, label="Senior")
    senior.delete()
    logger.info(f"Senior {senior.id} archived")
    return senior


@transaction.atomic
def restore_senior(senior_id):
    """Bring an archived senior back"""
    from welfare.models import Senior

    senior = get_object_or_not_found(Senior.all_objects.archived(), senior_id, label="Archived senior")
    senior.restore()
    logger.info(f"Senior {senior.id} restored")
    return senior


@transaction.atomic
def permanent_delete_senior(senior_id):
    """Delete a senior with their applications and documents"""
    from welfare.models import Senior

    senior = get_object_or_not_found(Senior.all_objects.all(), senior_id, label="Senior")
    senior.hard_delete()
    logger.info(f"Senior {senior_id} permanently deleted")


# =============================================================================
# RELEASE
# =============================================================================

@transaction.atomic
def release_senior(senior_id, now=None, released_by=None):
    """
    Schedule a senior's benefit release RELEASE_DELAY_DAYS from now

    Raises:
        NotFoundError: If the senior does not exist
        ValidationError: code 'already_released' if released before
    """
    from welfare.models import Notification, Senior

    senior = get_object_or_not_found(Senior.objects.select_for_update(), senior_id, label="Senior")
    if senior.released_at:
        raise ValidationError("Senior is already released.", code='already_released')

    if now is None:
        now = timezone.now()
    senior.released_at = now + timedelta(days=welfare_settings.RELEASE_DELAY_DAYS)
    senior.save(update_fields=['released_at', 'updated_at'])

    Notification.objects.notify_admins(
        'release_scheduled',
        title="Benefit release scheduled",
        message=f"{senior.full_name} will be released on {senior.released_at:%a %b %d %Y}.",
        exclude_user=released_by,
        related_senior=senior,
    )

    logger.info(f"Senior {senior.id} release scheduled for {senior.released_at}")
    return senior


# =============================================================================
# QUERIES
# =============================================================================

def list_seniors(name=None, gender=None, purok=None, barangay=None, remarks=None, release_status=None):
    """Active seniors matching the filters, ages refreshed"""
    from welfare.models import Senior

    queryset = Senior.objects.select_related('remarks').prefetch_related(
        'documents__benefit_requirement__benefit',
        'applications__category',
        'applications__status',
        'applications__benefit',
    )

    if name:
        queryset = queryset.search(name)
    if gender in ('male', 'female'):
        queryset = queryset.filter(gender=gender)
    if purok:
        queryset = queryset.filter(purok=purok)
    if barangay:
        queryset = queryset.filter(barangay=barangay)
    if remarks:
        queryset = queryset.filter(remarks__name=remarks)
    if release_status == RELEASE_STATUS_RELEASED:
        queryset = queryset.released()
    elif release_status == RELEASE_STATUS_PENDING:
        queryset = queryset.pending_release()

    return [refresh_senior_age(senior) for senior in queryset]


def list_archived_seniors(name=None):
    """Archived seniors, optionally matching a name part"""
    from django.db.models import Q
    from welfare.models import Senior

    queryset = Senior.all_objects.archived().select_related('remarks').prefetch_related(
        'documents__benefit_requirement__benefit'
    )
    if name:
        queryset = queryset.filter(
            Q(firstname__icontains=name) | Q(middlename__icontains=name) | Q(lastname__icontains=name)
        )
    return [refresh_senior_age(senior) for senior in queryset]
