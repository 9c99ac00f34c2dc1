"""
Domain Exceptions
=================

Validation problems use Django's own ValidationError so that forms, model
validation and services all raise the same type.
"""

from django.core.exceptions import (
    ImproperlyConfigured,
    ObjectDoesNotExist,
    ValidationError,
)


class NotFoundError(ObjectDoesNotExist):
    """A senior, fund history record or application id does not exist"""


class ConfigurationError(ImproperlyConfigured):
    """An expected lookup row (category, status, remark) is missing, or a setting is invalid"""


class ConcurrentUpdateError(Exception):
    """The government fund changed between read and write"""


__all__ = [
    'ValidationError',
    'NotFoundError',
    'ConfigurationError',
    'ConcurrentUpdateError',
]
