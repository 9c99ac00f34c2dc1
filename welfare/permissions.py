"""
Permission System – Role-based Access Control
==============================================

Roles:   staff  →  admin

Every API view that mutates state should:
    checker = PermissionChecker(request.user)
    if not checker.<method>():  return a 403 JSON response

The decorators below do that and answer with JSON instead of redirecting,
since every endpoint of this app is called from the frontend.
"""

from functools import wraps
from django.http import JsonResponse


# =============================================================================
# CONSTANTS
# =============================================================================

class Roles:
    ADMIN = 'admin'
    STAFF = 'staff'


class Permissions:
    """Single source of truth.  Views must never hard-code role lists."""

    # ── government fund ──────────────────────────────────────────────
    CAN_VIEW_FUND        = [Roles.ADMIN, Roles.STAFF]
    CAN_MANAGE_FUND      = [Roles.ADMIN]
    CAN_SET_FUND_BALANCE = [Roles.ADMIN]
    CAN_RECORD_TRANSACTIONS = [Roles.ADMIN, Roles.STAFF]
    CAN_DELETE_TRANSACTIONS = [Roles.ADMIN]

    # ── seniors ──────────────────────────────────────────────────────
    CAN_REGISTER_SENIORS = [Roles.ADMIN, Roles.STAFF]
    CAN_EDIT_SENIORS     = [Roles.ADMIN, Roles.STAFF]
    CAN_ARCHIVE_SENIORS  = [Roles.ADMIN, Roles.STAFF]
    # Restore and permanent delete.  Admin only.
    CAN_MANAGE_ARCHIVE   = [Roles.ADMIN]
    CAN_RELEASE_BENEFITS = [Roles.ADMIN]

    # ── applications ─────────────────────────────────────────────────
    CAN_APPLY_FOR_BENEFITS     = [Roles.ADMIN, Roles.STAFF]
    CAN_CHANGE_APPLICATION_STATUS = [Roles.ADMIN]

    # ── reporting ────────────────────────────────────────────────────
    CAN_VIEW_REPORTS = [Roles.ADMIN, Roles.STAFF]


# =============================================================================
# PERMISSION CHECKER
# =============================================================================

class PermissionChecker:

    def __init__(self, user):
        self.user = user
        self.role = getattr(user, 'user_role', None) if user.is_authenticated else None

    # ── role helpers ─────────────────────────────────────────────────
    def is_admin(self):  return self.role == Roles.ADMIN or bool(getattr(self.user, 'is_superuser', False))
    def is_staff(self):  return self.role == Roles.STAFF

    def _has(self, allowed):
        if self.is_admin():
            return True
        return self.role in allowed

    # =========================================================================
    # GOVERNMENT FUND
    # =========================================================================

    def can_view_fund(self):               return self._has(Permissions.CAN_VIEW_FUND)
    def can_manage_fund(self):             return self._has(Permissions.CAN_MANAGE_FUND)
    def can_set_fund_balance(self):        return self._has(Permissions.CAN_SET_FUND_BALANCE)
    def can_record_transactions(self):     return self._has(Permissions.CAN_RECORD_TRANSACTIONS)
    def can_delete_transactions(self):     return self._has(Permissions.CAN_DELETE_TRANSACTIONS)

    # =========================================================================
    # SENIORS
    # =========================================================================

    def can_register_seniors(self):        return self._has(Permissions.CAN_REGISTER_SENIORS)
    def can_edit_seniors(self):            return self._has(Permissions.CAN_EDIT_SENIORS)
    def can_archive_seniors(self):         return self._has(Permissions.CAN_ARCHIVE_SENIORS)
    def can_manage_archive(self):          return self._has(Permissions.CAN_MANAGE_ARCHIVE)
    def can_release_benefits(self):        return self._has(Permissions.CAN_RELEASE_BENEFITS)

    # =========================================================================
    # APPLICATIONS & REPORTS
    # =========================================================================

    def can_apply_for_benefits(self):      return self._has(Permissions.CAN_APPLY_FOR_BENEFITS)
    def can_change_application_status(self): return self._has(Permissions.CAN_CHANGE_APPLICATION_STATUS)
    def can_view_reports(self):            return self._has(Permissions.CAN_VIEW_REPORTS)


# =============================================================================
# DECORATORS
# =============================================================================

def _unauthenticated():
    return JsonResponse({'msg': 'Authentication required.', 'code': 'not_authenticated'}, status=401)


def _forbidden():
    return JsonResponse(
        {'msg': 'You do not have permission to perform this action.', 'code': 'permission_denied'},
        status=403
    )


def api_login_required(view_func):
    """Like login_required, but answers 401 JSON instead of redirecting"""
    @wraps(view_func)
    def wrapper(request, *args, **kwargs):
        if not request.user.is_authenticated:
            return _unauthenticated()
        return view_func(request, *args, **kwargs)
    return wrapper


def permission_required(permission_check):
    def decorator(view_func):
        @wraps(view_func)
        def wrapper(request, *args, **kwargs):
            if not request.user.is_authenticated:
                return _unauthenticated()
            checker = PermissionChecker(request.user)
            if not getattr(checker, permission_check)():
                return _forbidden()
            return view_func(request, *args, **kwargs)
        return wrapper
    return decorator
