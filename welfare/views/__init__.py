from .fund_views import (
    fund_history,
    fund_history_delete,
    government_fund,
)

from .transaction_views import (
    transactions,
    transaction_delete,
)

from .senior_views import (
    seniors,
    senior_detail,
    senior_delete,
    senior_restore,
    senior_release,
    archived_seniors,
)

from .application_views import (
    applications,
    application_status,
    categories,
)

from .notification_views import (
    notifications,
    notification_read,
)

from .dashboard import (
    dashboard_stats,
    age_distribution,
    barangay_distribution,
    category_distribution,
)

from .report_views import (
    government_fund_pdf,
    released_seniors_pdf,
    fund_history_excel,
    transactions_excel,
)


__all__ = [
    # Fund Views
    "fund_history",
    "fund_history_delete",
    "government_fund",
    # Transaction Views
    "transactions",
    "transaction_delete",
    # Senior Views
    "seniors",
    "senior_detail",
    "senior_delete",
    "senior_restore",
    "senior_release",
    "archived_seniors",
    # Application Views
    "applications",
    "application_status",
    "categories",
    # Notification Views
    "notifications",
    "notification_read",
    # Dashboard
    "dashboard_stats",
    "age_distribution",
    "barangay_distribution",
    "category_distribution",
    # Reports
    "government_fund_pdf",
    "released_seniors_pdf",
    "fund_history_excel",
    "transactions_excel",
]
