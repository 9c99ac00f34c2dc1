"""
Custom QuerySets and Managers
==============================

Provides reusable query methods for common filtering operations
"""

from django.db import models
from django.db.models import Q, Sum
from django.utils import timezone
from decimal import Decimal


class SeniorQuerySet(models.QuerySet):
    """Custom QuerySet for Senior model"""

    def active(self):
        """Seniors that are not archived"""
        return self.filter(deleted_at__isnull=True)

    def archived(self):
        """Soft-deleted seniors"""
        return self.filter(deleted_at__isnull=False)

    def pwd(self):
        """Persons with disability"""
        return self.filter(pwd=True)

    def low_income(self):
        return self.filter(low_income=True)

    def regular(self):
        """Neither PWD nor low income"""
        return self.filter(pwd=False, low_income=False)

    def released(self):
        """Seniors whose benefit has been released"""
        return self.filter(released_at__isnull=False)

    def pending_release(self):
        return self.filter(released_at__isnull=True)

    def newly_registered(self):
        """Seniors still carrying the first remark (NEW)"""
        return self.filter(remarks__order=1)

    def with_applications(self):
        """Seniors with at least one benefit application"""
        return self.filter(applications__isnull=False).distinct()

    def search(self, term):
        """Match any name part, barangay or purok"""
        return self.filter(
            Q(firstname__icontains=term) |
            Q(middlename__icontains=term) |
            Q(lastname__icontains=term) |
            Q(barangay__icontains=term) |
            Q(purok__icontains=term)
        )

    def get_statistics(self):
        """Get senior statistics"""
        return {
            'total': self.count(),
            'pwd': self.pwd().count(),
            'low_income': self.low_income().count(),
            'regular': self.regular().count(),
            'newly_registered': self.newly_registered().count(),
            'with_applications': self.with_applications().count(),
            'released': self.released().count(),
        }


class SeniorManager(models.Manager):
    """Default manager for Senior: hides archived records"""

    def get_queryset(self):
        return SeniorQuerySet(self.model, using=self._db).filter(deleted_at__isnull=True)

    def search(self, term):
        return self.get_queryset().search(term)

    def released(self):
        return self.get_queryset().released()


class ApplicationQuerySet(models.QuerySet):
    """Custom QuerySet for Application model"""

    def with_status(self, *names):
        return self.filter(status__name__in=names)

    def open(self):
        """Applications that still count against the fund"""
        return self.with_status('PENDING', 'APPROVED')

    def for_active_seniors(self):
        return self.filter(senior__deleted_at__isnull=True)

    def latest_first(self):
        return self.order_by('-created_at')


class TransactionQuerySet(models.QuerySet):
    """Custom QuerySet for fund Transaction model"""

    def released(self):
        return self.filter(type='released')

    def between(self, start_date=None, end_date=None):
        qs = self
        if start_date:
            qs = qs.filter(date__date__gte=start_date)
        if end_date:
            qs = qs.filter(date__date__lte=end_date)
        return qs

    def total_amount(self):
        return self.aggregate(total=Sum('amount'))['total'] or Decimal('0.00')

    def total_released(self):
        return self.released().total_amount()


class FundHistoryQuerySet(models.QuerySet):
    """Custom QuerySet for FundHistory model"""

    def between(self, start_date=None, end_date=None):
        qs = self
        if start_date:
            qs = qs.filter(date__gte=start_date)
        if end_date:
            qs = qs.filter(date__lte=end_date)
        return qs

    def total_amount(self):
        return self.aggregate(total=Sum('amount'))['total'] or Decimal('0.00')


class NotificationQuerySet(models.QuerySet):
    """Custom QuerySet for Notification model"""

    def unread(self):
        return self.filter(is_read=False)

    def for_user(self, user):
        return self.filter(user=user)


class NotificationManager(models.Manager):
    """Custom Manager for Notification model"""

    def get_queryset(self):
        return NotificationQuerySet(self.model, using=self._db)

    def unread(self):
        return self.get_queryset().unread()

    def for_user(self, user):
        return self.get_queryset().for_user(user)

    def notify_admins(self, notification_type, title, message, exclude_user=None, **related):
        """Create one notification per active admin; returns the count"""
        from welfare.models import User

        admins = User.objects.admins()
        if exclude_user is not None:
            admins = admins.exclude(pk=exclude_user.pk)

        notifications = [
            self.model(
                user=admin,
                notification_type=notification_type,
                title=title,
                message=message,
                **related
            )
            for admin in admins
        ]
        self.bulk_create(notifications)
        return len(notifications)

    def mark_all_read(self, user):
        return self.get_queryset().for_user(user).unread().update(
            is_read=True,
            read_at=timezone.now()
        )
