from datetime import date, datetime

from dateutil.parser import isoparse, parse as parse_datetime
from django.core.exceptions import ValidationError
from django.utils import timezone

from welfare.exceptions import NotFoundError


# =============================================================================
# LOOKUPS
# =============================================================================

def get_object_or_not_found(queryset, pk, label=None):
    """
    Fetch a row by primary key or raise NotFoundError

    Malformed ids (e.g. not a UUID) count as not found.
    """
    model = queryset.model
    label = label or model._meta.verbose_name.capitalize()
    try:
        return queryset.get(pk=pk)
    except (model.DoesNotExist, ValidationError, ValueError):
        raise NotFoundError(f"{label} not found.") from None


# =============================================================================
# DATE PARSING
# =============================================================================

def parse_date(value, field='date'):
    """
    Accept a date, datetime, ISO string or MM/DD/YYYY string

    Raises:
        ValidationError: If the value cannot be read as a date
    """
    if value in (None, ''):
        return None
    if isinstance(value, datetime):
        if timezone.is_aware(value):
            value = timezone.localtime(value)
        return value.date()
    if isinstance(value, date):
        return value
    try:
        return isoparse(str(value)).date()
    except ValueError:
        pass
    try:
        return parse_datetime(str(value), dayfirst=False).date()
    except (ValueError, OverflowError):
        raise ValidationError({field: f"Invalid date: {value}"}, code='invalid_date') from None


def parse_datetime_value(value, field='date'):
    """Like parse_date but keeps the time; naive values use the current timezone"""
    if value in (None, ''):
        return None
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, date):
        parsed = datetime(value.year, value.month, value.day)
    else:
        try:
            parsed = parse_datetime(str(value))
        except (ValueError, OverflowError):
            raise ValidationError({field: f"Invalid date: {value}"}, code='invalid_date') from None
    if timezone.is_naive(parsed):
        parsed = timezone.make_aware(parsed)
    return parsed
