"""
Base Models and Mixins for Senior Welfare
=========================================

Provides:
- Common timestamp fields
- UUID primary keys
- Soft delete functionality (archived seniors)
- Audit trail support
"""

from django.db import models
from django.utils import timezone
import uuid


class BaseModel(models.Model):
    """
    Base model with common fields

    Features:
    - UUID primary key
    - Timestamp tracking (created, updated)
    """

    id = models.UUIDField(
        primary_key=True,
        default=uuid.uuid4,
        editable=False
    )

    created_at = models.DateTimeField(
        auto_now_add=True,
        db_index=True,
        help_text="When this record was created"
    )
    updated_at = models.DateTimeField(
        auto_now=True,
        help_text="When this record was last updated"
    )

    class Meta:
        abstract = True
        ordering = ['-created_at']


class SoftDeleteModel(BaseModel):
    """
    Base model with soft delete support

    Subclasses declare their own managers; ``objects`` must hide rows
    with ``deleted_at`` set and ``all_objects`` must not.
    """

    deleted_at = models.DateTimeField(
        null=True,
        blank=True,
        db_index=True,
        help_text="When this record was archived (null = not archived)"
    )

    class Meta:
        abstract = True
        ordering = ['-created_at']

    def delete(self, using=None, keep_parents=False, hard=False):
        """
        Soft delete by default, unless hard=True

        Usage:
            instance.delete()  # Archive
            instance.delete(hard=True)  # Hard delete
        """
        if hard:
            return super().delete(using=using, keep_parents=keep_parents)
        self.deleted_at = timezone.now()
        self.save(update_fields=['deleted_at', 'updated_at'])

    def hard_delete(self):
        """Permanently delete from database"""
        return super().delete()

    def restore(self):
        """Restore an archived record"""
        if self.deleted_at:
            self.deleted_at = None
            self.save(update_fields=['deleted_at', 'updated_at'])


class AuditedModel(BaseModel):
    """
    Base model with audit trail support

    Tracks who created the record
    """

    created_by = models.ForeignKey(
        'welfare.User',
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='%(class)s_created',
        help_text="User who created this record"
    )

    class Meta:
        abstract = True
        ordering = ['-created_at']
