"""
Benefit Application Services
============================
"""

from django.db import transaction
from django.db.models import Q
import logging

from welfare.exceptions import ConfigurationError, ValidationError
from welfare.utils.helpers import get_object_or_not_found
from welfare.utils.senior_helpers import initial_category_for, refresh_senior_age

logger = logging.getLogger(__name__)


STATUS_NOTIFICATION_TYPES = {
    'PENDING': 'application_pending',
    'APPROVED': 'application_approved',
    'REJECT': 'application_rejected',
}


def _get_status(name):
    from welfare.models import Status

    status = Status.objects.filter(name=name).first()
    if status is None:
        raise ConfigurationError(
            f"Status '{name}' not found. Run 'manage.py seed_lookups' to create the lookup tables."
        )
    return status


def apply_for_benefit(benefit_id, senior_ids, documents=None, created_by=None):
    """
    File a PENDING application for each selected senior

    Each application starts in Special assistance cases for PWD seniors and
    in the senior's age tier otherwise. Stored ages are refreshed from the
    birthdate first. Requirement files are read from
    ``requirement_<senior_id>_<requirement_id>`` keys.

    Returns:
        dict: applications, documents, failed_uploads

    Raises:
        ValidationError: If no seniors are selected
        NotFoundError: If the benefit or a senior does not exist
        ConfigurationError: If statuses or categories are not seeded
    """
    from welfare.models import Application, Benefit, Notification, Senior, SeniorCategory, STATUS_PENDING
    from welfare.utils.storage import save_senior_documents

    senior_ids = list(dict.fromkeys(str(senior_id) for senior_id in (senior_ids or [])))
    if not senior_ids:
        raise ValidationError({'selected_senior_ids': "Select at least one senior"}, code='required')

    benefit = get_object_or_not_found(Benefit.objects.all(), benefit_id, label="Benefit")

    seniors = []
    for senior_id in senior_ids:
        seniors.append(get_object_or_not_found(Senior.objects.all(), senior_id, label=f"Senior {senior_id}"))

    pending = _get_status(STATUS_PENDING)
    category_lookup = SeniorCategory.lookup()

    with transaction.atomic():
        seniors = [refresh_senior_age(senior) for senior in seniors]
        applications = Application.objects.bulk_create([
            Application(
                senior=senior,
                benefit=benefit,
                status=pending,
                category_id=initial_category_for(senior, category_lookup),
            )
            for senior in seniors
        ])

        Notification.objects.notify_admins(
            'application_submitted',
            title=f"New {benefit.name} application(s)",
            message=f"{len(applications)} senior(s) applied for {benefit.name}.",
            exclude_user=created_by,
        )

    logger.info(f"{len(applications)} application(s) filed for benefit '{benefit.name}'")

    saved, failed = [], []
    if documents:
        for senior in seniors:
            prefix = f"requirement_{senior.id}_"
            senior_files = {
                key: documents.getlist(key) if hasattr(documents, 'getlist') else documents[key]
                for key in documents.keys()
                if key.startswith(prefix)
            }
            senior_saved, senior_failed = save_senior_documents(senior, senior_files)
            saved.extend(senior_saved)
            failed.extend(senior_failed)

    if failed:
        logger.warning(f"{len(failed)} requirement document upload(s) failed for benefit '{benefit.name}'")

    return {'applications': applications, 'documents': saved, 'failed_uploads': failed}


@transaction.atomic
def update_application_status(application_id, status, rejection_reason=None, updated_by=None):
    """
    Move an application to another status

    Args:
        status: Status name (PENDING / APPROVED / REJECT) or Status id
        rejection_reason: Stored as given; blank clears it

    Raises:
        NotFoundError: If the application or status does not exist
    """
    from welfare.models import Application, Notification, Status

    application = get_object_or_not_found(
        Application.objects.select_for_update().select_related('senior', 'benefit'),
        application_id,
        label="Application"
    )

    new_status = Status.objects.filter(name=status).first()
    if new_status is None:
        new_status = get_object_or_not_found(Status.objects.all(), status, label="Status")

    application.status = new_status
    update_fields = ['status', 'updated_at']
    if rejection_reason is not None:
        application.rejection_reason = rejection_reason or None
        update_fields.append('rejection_reason')
    application.save(update_fields=update_fields)

    notification_type = STATUS_NOTIFICATION_TYPES.get(new_status.name)
    if notification_type:
        Notification.objects.notify_admins(
            notification_type,
            title=f"Application {new_status.name.lower()}",
            message=f"{application.senior.full_name}'s {application.benefit.name} application is now {new_status.name}.",
            exclude_user=updated_by,
            related_senior=application.senior,
            related_application=application,
        )

    logger.info(f"Application {application.id} status → {new_status.name}")
    return application


def list_applications(name=None, applied_benefit=None, senior_category=None, status=None):
    """
    Applications for active seniors, newest first

    applied_benefit, senior_category and status take comma-separated names.
    """
    from welfare.models import Application

    queryset = Application.objects.for_active_seniors().select_related(
        'senior', 'benefit', 'status', 'category'
    ).latest_first()

    if name:
        queryset = queryset.filter(
            Q(senior__firstname__icontains=name) |
            Q(senior__middlename__icontains=name) |
            Q(senior__lastname__icontains=name)
        )
    if applied_benefit:
        queryset = queryset.filter(benefit__name__in=applied_benefit.split(','))
    if senior_category:
        queryset = queryset.filter(category__name__in=senior_category.split(','))
    if status:
        queryset = queryset.filter(status__name__in=status.split(','))

    return queryset

