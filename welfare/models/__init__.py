"""
Senior Welfare - Models Package
===============================

Imports and exposes all models for Django.
"""

from .base import (
    BaseModel,
    SoftDeleteModel,
    AuditedModel,
)

from .all_models import (

    # Constants
    STATUS_PENDING,
    STATUS_APPROVED,
    STATUS_REJECTED,
    APPLICATION_STATUSES,
    REMARKS,
    NEW_REMARK_ORDER,
    GENDER_CHOICES,
    DOCUMENT_TAG_CHOICES,

    # Users
    User,
    UserManager,

    # Lookups
    SeniorCategory,
    Status,
    Remarks,
    Benefit,
    BenefitRequirement,

    # Seniors & applications
    Senior,
    RegistrationDocument,
    Application,

    # Fund ledger
    GovernmentFund,
    FundHistory,
    Transaction,

    # Notifications
    Notification,
)

__all__ = [
    'BaseModel',
    'SoftDeleteModel',
    'AuditedModel',
    'STATUS_PENDING',
    'STATUS_APPROVED',
    'STATUS_REJECTED',
    'APPLICATION_STATUSES',
    'REMARKS',
    'NEW_REMARK_ORDER',
    'GENDER_CHOICES',
    'DOCUMENT_TAG_CHOICES',
    'User',
    'UserManager',
    'SeniorCategory',
    'Status',
    'Remarks',
    'Benefit',
    'BenefitRequirement',
    'Senior',
    'RegistrationDocument',
    'Application',
    'GovernmentFund',
    'FundHistory',
    'Transaction',
    'Notification',
]
