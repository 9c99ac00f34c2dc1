"""
Senior Welfare - Consolidated Models
====================================

All models in one module so migrations stay in a single app.
"""

from django.contrib.auth.models import AbstractUser, BaseUserManager
from django.core.exceptions import ValidationError
from django.core.validators import MinValueValidator, RegexValidator
from django.db import models
from django.utils import timezone
from cloudinary.models import CloudinaryField
from decimal import Decimal
import uuid

from .base import BaseModel, SoftDeleteModel, AuditedModel
from welfare.managers import (
    SeniorManager, SeniorQuerySet, ApplicationQuerySet,
    TransactionQuerySet, FundHistoryQuerySet, NotificationManager,
)


# =============================================================================
# LOOKUP CONSTANTS
# =============================================================================

STATUS_PENDING = 'PENDING'
STATUS_APPROVED = 'APPROVED'
STATUS_REJECTED = 'REJECT'

APPLICATION_STATUSES = [STATUS_PENDING, STATUS_APPROVED, STATUS_REJECTED]

# (name, order) - order 1 marks a freshly registered senior
REMARKS = [
    ('NEW', 1),
    ('TRANSFER', 2),
    ('UPDATED', 3),
    ('DECEASED', 4),
    ('LOSS', 5),
]
NEW_REMARK_ORDER = 1

GENDER_CHOICES = [
    ('male', 'Male'),
    ('female', 'Female'),
]

DOCUMENT_TAG_CHOICES = [
    ('birth_certificate', 'Birth Certificate'),
    ('certificate_of_residency', 'Certificate of Residency'),
    ('government_issued_id', 'Government Issued ID'),
    ('membership_certificate', 'Membership Certificate'),
    ('id_photo', 'ID Photo'),
    ('medical_assistance', 'Medical Assistance'),
    ('low_income', 'Proof of Low Income'),
]


# =============================================================================
# USER MODEL & MANAGER
# =============================================================================

class UserManager(BaseUserManager):
    """Custom user manager for email-based authentication"""

    def create_user(self, email, password=None, **extra_fields):
        if not email:
            raise ValueError('Email address is required')
        email = self.normalize_email(email)
        user = self.model(email=email, **extra_fields)
        if password:
            user.set_password(password)
        else:
            user.set_unusable_password()
        user.save(using=self._db)
        return user

    def create_superuser(self, email, password=None, **extra_fields):
        extra_fields.setdefault('is_staff', True)
        extra_fields.setdefault('is_superuser', True)
        extra_fields.setdefault('is_active', True)
        extra_fields.setdefault('user_role', 'admin')
        return self.create_user(email, password, **extra_fields)

    def admins(self):
        return self.filter(user_role='admin', is_active=True)


class User(AbstractUser):
    """
    Office user - email-based authentication

    Admins manage the fund and approve applications; staff register
    seniors and file applications.
    """

    ROLE_CHOICES = [
        ('admin', 'Administrator'),
        ('staff', 'Staff'),
    ]

    username = None
    email = models.EmailField(unique=True, db_index=True)
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    user_role = models.CharField(max_length=20, choices=ROLE_CHOICES, default='staff', db_index=True)

    phone_regex = RegexValidator(regex=r'^\+?\d{9,15}$')
    phone = models.CharField(validators=[phone_regex], max_length=17, blank=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    groups = models.ManyToManyField(
        'auth.Group',
        blank=True,
        related_name='welfare_user_set'
    )
    user_permissions = models.ManyToManyField(
        'auth.Permission',
        blank=True,
        related_name='welfare_user_set'
    )

    objects = UserManager()
    USERNAME_FIELD = 'email'
    REQUIRED_FIELDS = ['first_name', 'last_name']

    class Meta:
        ordering = ['-created_at']
        indexes = [
            models.Index(fields=['user_role', 'is_active'], name='welfare_use_user_ro_5a1c2e_idx'),
        ]

    def __str__(self):
        return f"{self.get_full_name() or self.email} ({self.get_user_role_display()})"


# =============================================================================
# LOOKUP TABLES
# =============================================================================

class SeniorCategory(BaseModel):
    """Benefit category an application is filed under"""

    name = models.CharField(max_length=100, unique=True)
    order = models.PositiveIntegerField(default=0)

    class Meta:
        verbose_name_plural = "Senior categories"
        ordering = ['order', 'name']

    def __str__(self):
        return self.name

    @classmethod
    def lookup(cls):
        """{name: id} mapping used by the category reconciler"""
        return dict(cls.objects.values_list('name', 'id'))


class Status(BaseModel):
    """Application status (PENDING / APPROVED / REJECT)"""

    name = models.CharField(max_length=50, unique=True)

    class Meta:
        verbose_name_plural = "Statuses"
        ordering = ['name']

    def __str__(self):
        return self.name


class Remarks(BaseModel):
    """Registration remark attached to a senior"""

    name = models.CharField(max_length=50, unique=True)
    order = models.PositiveIntegerField(unique=True)

    class Meta:
        verbose_name_plural = "Remarks"
        ordering = ['order']

    def __str__(self):
        return self.name


class Benefit(BaseModel):
    """A benefit program seniors can apply for"""

    name = models.CharField(max_length=150, unique=True)
    description = models.TextField(blank=True)
    tag = models.CharField(max_length=50, blank=True)

    class Meta:
        ordering = ['name']

    def __str__(self):
        return self.name


class BenefitRequirement(BaseModel):
    """Document a benefit application must include"""

    benefit = models.ForeignKey(
        Benefit,
        on_delete=models.CASCADE,
        related_name='requirements'
    )
    name = models.CharField(max_length=150)

    class Meta:
        ordering = ['benefit', 'name']
        constraints = [
            models.UniqueConstraint(
                fields=['benefit', 'name'],
                name='unique_requirement_per_benefit'
            ),
        ]

    def __str__(self):
        return f"{self.benefit.name}: {self.name}"


# =============================================================================
# SENIOR MODEL
# =============================================================================

class Senior(SoftDeleteModel):
    """
    Registered senior citizen (beneficiary)

    ``age`` is stored as text and recomputed from ``birthdate`` on read
    and on update (see welfare.utils.senior_helpers.refresh_senior_age).
    Archived seniors are hidden from ``objects``.
    """

    contact_regex = RegexValidator(
        regex=r'^\d{11}$',
        message="Contact number must be exactly 11 digits"
    )

    firstname = models.CharField(max_length=100)
    middlename = models.CharField(max_length=100, blank=True)
    lastname = models.CharField(max_length=100, db_index=True)
    email = models.EmailField(blank=True)

    age = models.CharField(max_length=3, blank=True)
    birthdate = models.DateField()
    gender = models.CharField(max_length=10, choices=GENDER_CHOICES)

    barangay = models.CharField(max_length=100, db_index=True)
    purok = models.CharField(max_length=100)

    contact_no = models.CharField(max_length=11, blank=True, validators=[contact_regex])
    emergency_no = models.CharField(max_length=11, blank=True, validators=[contact_regex])
    contact_person = models.CharField(max_length=150, blank=True)
    contact_relationship = models.CharField(max_length=100, blank=True)

    pwd = models.BooleanField(default=False, help_text="Person with disability")
    low_income = models.BooleanField(default=False)

    remarks = models.ForeignKey(
        Remarks,
        on_delete=models.PROTECT,
        related_name='seniors'
    )
    released_at = models.DateTimeField(
        null=True,
        blank=True,
        db_index=True,
        help_text="When the benefit is (to be) released"
    )

    created_by = models.ForeignKey(
        'User',
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='registered_seniors'
    )

    objects = SeniorManager()
    all_objects = SeniorQuerySet.as_manager()

    class Meta:
        ordering = ['-created_at']
        indexes = [
            models.Index(fields=['lastname', 'firstname'], name='welfare_sen_lastnam_3c9f1a_idx'),
            models.Index(fields=['pwd', 'low_income'], name='welfare_sen_pwd_7e2b4d_idx'),
        ]

    def __str__(self):
        return self.full_name

    @property
    def full_name(self):
        parts = [self.firstname, self.middlename, self.lastname]
        return ' '.join(part for part in parts if part)

    def clean(self):
        super().clean()
        if self.contact_no and self.emergency_no and self.contact_no == self.emergency_no:
            raise ValidationError({
                'emergency_no': "Emergency Contact must be different from Contact Number."
            })

    @property
    def latest_application(self):
        """The most recent application is the one shown everywhere"""
        return self.applications.select_related('benefit', 'status', 'category').order_by('-created_at').first()


class RegistrationDocument(BaseModel):
    """Uploaded document for a senior (registration or benefit requirement)"""

    senior = models.ForeignKey(
        Senior,
        on_delete=models.CASCADE,
        related_name='documents'
    )
    tag = models.CharField(max_length=50, db_index=True)
    file = CloudinaryField('document', resource_type='auto', null=True, blank=True)
    public_id = models.CharField(max_length=255, blank=True)
    file_name = models.CharField(max_length=255)
    image_url = models.URLField(max_length=500, blank=True)
    benefit_requirement = models.ForeignKey(
        BenefitRequirement,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='documents'
    )

    class Meta:
        ordering = ['-created_at']
        indexes = [
            models.Index(fields=['senior', 'tag'], name='welfare_reg_senior__1b5a9c_idx'),
        ]

    def __str__(self):
        return f"{self.tag} - {self.file_name}"


# =============================================================================
# APPLICATIONS
# =============================================================================

class Application(BaseModel):
    """
    Benefit application

    ``category`` is set once on creation and afterwards changed only by
    the category reconciler.
    """

    senior = models.ForeignKey(
        Senior,
        on_delete=models.CASCADE,
        related_name='applications'
    )
    benefit = models.ForeignKey(
        Benefit,
        on_delete=models.PROTECT,
        related_name='applications'
    )
    status = models.ForeignKey(
        Status,
        on_delete=models.PROTECT,
        related_name='applications'
    )
    category = models.ForeignKey(
        SeniorCategory,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='applications'
    )
    rejection_reason = models.TextField(blank=True, null=True)

    objects = ApplicationQuerySet.as_manager()

    class Meta:
        ordering = ['-created_at']
        indexes = [
            models.Index(fields=['senior', 'created_at'], name='welfare_app_senior__8d4e6f_idx'),
        ]

    def __str__(self):
        return f"{self.senior} - {self.benefit} ({self.status})"


# =============================================================================
# GOVERNMENT FUND
# =============================================================================

class GovernmentFund(BaseModel):
    """
    Total government fund (single row)

    ``current_balance`` is the cumulative sum of fund additions.
    ``version`` increases on every balance change and guards the
    conditional UPDATE in welfare.utils.fund_helpers.
    """

    current_balance = models.DecimalField(
        max_digits=15,
        decimal_places=2,
        default=Decimal('0.00')
    )
    version = models.PositiveBigIntegerField(default=0)

    class Meta:
        verbose_name = "Government fund"

    def __str__(self):
        return f"Government Fund: {self.current_balance}"


class FundHistory(AuditedModel):
    """
    A single addition to the government fund

    Previous/new balances are derived for display, never stored.
    """

    date = models.DateField(db_index=True)
    amount = models.DecimalField(
        max_digits=15,
        decimal_places=2,
        validators=[MinValueValidator(Decimal('0.01'))]
    )
    source = models.CharField(max_length=200, help_text="Where the fund came from")
    description = models.TextField(blank=True, null=True)
    receipt = CloudinaryField('receipt', resource_type='auto', null=True, blank=True)
    receipt_url = models.URLField(max_length=500, blank=True, null=True)

    objects = FundHistoryQuerySet.as_manager()

    class Meta:
        verbose_name_plural = "Fund history"
        ordering = ['-date', '-created_at']
        constraints = [
            models.CheckConstraint(
                condition=models.Q(amount__gt=0),
                name='fund_history_amount_positive'
            ),
        ]

    def __str__(self):
        return f"{self.date} {self.source}: {self.amount}"


class Transaction(BaseModel):
    """Benefit disbursement (released) or allocation (pending) against the fund"""

    TYPE_CHOICES = [
        ('released', 'Released'),
        ('pending', 'Pending'),
    ]

    date = models.DateTimeField(default=timezone.now, db_index=True)
    amount = models.DecimalField(
        max_digits=15,
        decimal_places=2,
        validators=[MinValueValidator(Decimal('0.01'))]
    )
    type = models.CharField(max_length=10, choices=TYPE_CHOICES, db_index=True)
    benefits = models.CharField(max_length=200)
    category = models.CharField(max_length=100)
    senior_name = models.CharField(max_length=200, blank=True, null=True)
    barangay = models.CharField(max_length=100, blank=True, null=True)
    description = models.TextField(blank=True, null=True)

    objects = TransactionQuerySet.as_manager()

    class Meta:
        ordering = ['-date']
        constraints = [
            models.CheckConstraint(
                condition=models.Q(amount__gt=0),
                name='transaction_amount_positive'
            ),
        ]

    def __str__(self):
        return f"{self.get_type_display()} {self.benefits}: {self.amount}"


# =============================================================================
# NOTIFICATIONS
# =============================================================================

class Notification(BaseModel):
    """User notifications"""

    NOTIFICATION_TYPE_CHOICES = [
        ('senior_registered', 'Senior Registered'),
        ('application_submitted', 'Application Submitted'),
        ('application_approved', 'Application Approved'),
        ('application_rejected', 'Application Rejected'),
        ('application_pending', 'Application Pending'),
        ('release_scheduled', 'Release Scheduled'),
        ('fund_added', 'Fund Added'),
    ]

    user = models.ForeignKey(
        'User',
        on_delete=models.CASCADE,
        related_name='notifications'
    )
    notification_type = models.CharField(
        max_length=50,
        choices=NOTIFICATION_TYPE_CHOICES,
        db_index=True
    )
    title = models.CharField(max_length=200)
    message = models.TextField()

    related_senior = models.ForeignKey(
        Senior,
        on_delete=models.CASCADE,
        null=True,
        blank=True,
        related_name='notifications'
    )
    related_application = models.ForeignKey(
        Application,
        on_delete=models.CASCADE,
        null=True,
        blank=True,
        related_name='notifications'
    )

    is_read = models.BooleanField(default=False, db_index=True)
    read_at = models.DateTimeField(null=True, blank=True)

    objects = NotificationManager()

    class Meta:
        ordering = ['-created_at']
        indexes = [
            models.Index(fields=['user', 'is_read'], name='welfare_not_user_id_4f7c3b_idx'),
        ]

    def __str__(self):
        return f"{self.title} - {self.user.email}"

    def mark_as_read(self):
        """Mark notification as read"""
        if not self.is_read:
            self.is_read = True
            self.read_at = timezone.now()
            self.save(update_fields=['is_read', 'read_at'])
