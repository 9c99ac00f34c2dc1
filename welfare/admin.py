from django.contrib import admin
from .models import (
    User, SeniorCategory, Status, Remarks,
    Benefit, BenefitRequirement, Senior, RegistrationDocument,
    Application, GovernmentFund, FundHistory, Transaction, Notification
)

# ==============================================================================
# USERS & LOOKUPS
# ==============================================================================

@admin.register(User)
class UserAdmin(admin.ModelAdmin):
    list_display = ['email', 'get_full_name', 'user_role', 'is_active', 'created_at']
    list_filter = ['user_role', 'is_active']
    search_fields = ['email', 'first_name', 'last_name']
    readonly_fields = ['date_joined', 'last_login', 'created_at', 'updated_at']

    fieldsets = (
        ('Authentication', {
            'fields': ('email', 'password')
        }),
        ('Personal Info', {
            'fields': ('first_name', 'last_name', 'phone')
        }),
        ('Permissions', {
            'fields': ('user_role', 'is_active', 'is_staff', 'is_superuser')
        }),
        ('Timestamps', {
            'fields': ('date_joined', 'last_login', 'created_at', 'updated_at'),
            'classes': ('collapse',)
        }),
    )


@admin.register(SeniorCategory)
class SeniorCategoryAdmin(admin.ModelAdmin):
    list_display = ['name', 'order']
    ordering = ['order']


@admin.register(Status)
class StatusAdmin(admin.ModelAdmin):
    list_display = ['name', 'created_at']


@admin.register(Remarks)
class RemarksAdmin(admin.ModelAdmin):
    list_display = ['name', 'order']
    ordering = ['order']


class BenefitRequirementInline(admin.TabularInline):
    model = BenefitRequirement
    extra = 1


@admin.register(Benefit)
class BenefitAdmin(admin.ModelAdmin):
    list_display = ['name', 'tag', 'created_at']
    search_fields = ['name']
    inlines = [BenefitRequirementInline]


# ==============================================================================
# SENIORS & APPLICATIONS
# ==============================================================================

class RegistrationDocumentInline(admin.TabularInline):
    model = RegistrationDocument
    extra = 0
    fields = ['tag', 'file_name', 'image_url', 'benefit_requirement']
    readonly_fields = ['image_url']


class ApplicationInline(admin.TabularInline):
    model = Application
    extra = 0
    fields = ['benefit', 'status', 'category', 'rejection_reason']


@admin.register(Senior)
class SeniorAdmin(admin.ModelAdmin):
    list_display = ['lastname', 'firstname', 'age', 'gender', 'barangay',
                    'pwd', 'low_income', 'remarks', 'released_at', 'deleted_at']
    list_filter = ['gender', 'pwd', 'low_income', 'remarks', 'barangay']
    search_fields = ['firstname', 'middlename', 'lastname', 'barangay', 'purok']
    readonly_fields = ['age', 'created_at', 'updated_at', 'deleted_at']
    inlines = [RegistrationDocumentInline, ApplicationInline]

    def get_queryset(self, request):
        # Archived seniors stay visible to admins
        return Senior.all_objects.select_related('remarks')


@admin.register(Application)
class ApplicationAdmin(admin.ModelAdmin):
    list_display = ['senior', 'benefit', 'status', 'category', 'created_at']
    list_filter = ['status', 'benefit', 'category']
    search_fields = ['senior__firstname', 'senior__lastname']
    readonly_fields = ['created_at', 'updated_at']


# ==============================================================================
# GOVERNMENT FUND
# ==============================================================================

@admin.register(GovernmentFund)
class GovernmentFundAdmin(admin.ModelAdmin):
    list_display = ['current_balance', 'version', 'updated_at']
    readonly_fields = ['current_balance', 'version', 'created_at', 'updated_at']

    def has_add_permission(self, request):
        # Balance changes go through welfare.utils.fund_helpers
        return False


@admin.register(FundHistory)
class FundHistoryAdmin(admin.ModelAdmin):
    list_display = ['date', 'amount', 'source', 'created_by', 'created_at']
    list_filter = ['date']
    search_fields = ['source', 'description']
    readonly_fields = ['amount', 'receipt_url', 'created_by', 'created_at', 'updated_at']


@admin.register(Transaction)
class TransactionAdmin(admin.ModelAdmin):
    list_display = ['date', 'type', 'benefits', 'category', 'amount', 'senior_name', 'barangay']
    list_filter = ['type', 'category']
    search_fields = ['benefits', 'senior_name', 'barangay']
    date_hierarchy = 'date'


@admin.register(Notification)
class NotificationAdmin(admin.ModelAdmin):
    list_display = ['title', 'user', 'notification_type', 'is_read', 'created_at']
    list_filter = ['notification_type', 'is_read']
    search_fields = ['title', 'message', 'user__email']
    readonly_fields = ['created_at', 'read_at']
