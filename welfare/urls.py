from django.urls import path

from welfare.views import (
    fund_history,
    fund_history_delete,
    government_fund,
    transactions,
    transaction_delete,
    seniors,
    senior_detail,
    senior_delete,
    senior_restore,
    senior_release,
    archived_seniors,
    applications,
    application_status,
    categories,
    notifications,
    notification_read,
    dashboard_stats,
    age_distribution,
    barangay_distribution,
    category_distribution,
    government_fund_pdf,
    released_seniors_pdf,
    fund_history_excel,
    transactions_excel,
)


app_name = "welfare"

urlpatterns = [
    # =========================================================================
    # GOVERNMENT FUND
    # =========================================================================
    path('api/fund-history/', fund_history, name='fund_history'),
    path('api/fund-history/<uuid:history_id>/delete/', fund_history_delete, name='fund_history_delete'),
    path('api/government-fund/', government_fund, name='government_fund'),

    path('api/transactions/', transactions, name='transactions'),
    path('api/transactions/<uuid:transaction_id>/delete/', transaction_delete, name='transaction_delete'),

    # =========================================================================
    # SENIORS
    # =========================================================================
    path('api/seniors/', seniors, name='seniors'),
    path('api/seniors/release/', senior_release, name='senior_release'),
    path('api/seniors/archived/', archived_seniors, name='archived_seniors'),
    path('api/seniors/<uuid:senior_id>/', senior_detail, name='senior_detail'),
    path('api/seniors/<uuid:senior_id>/delete/', senior_delete, name='senior_delete'),
    path('api/seniors/<uuid:senior_id>/restore/', senior_restore, name='senior_restore'),

    # =========================================================================
    # APPLICATIONS
    # =========================================================================
    path('api/applications/', applications, name='applications'),
    path('api/applications/<uuid:application_id>/status/', application_status, name='application_status'),
    path('api/categories/', categories, name='categories'),

    # =========================================================================
    # NOTIFICATIONS
    # =========================================================================
    path('api/notifications/', notifications, name='notifications'),
    path('api/notifications/read/', notification_read, name='notification_read_all'),
    path('api/notifications/<uuid:notification_id>/read/', notification_read, name='notification_read'),

    # =========================================================================
    # DASHBOARD
    # =========================================================================
    path('api/dashboard/stats/', dashboard_stats, name='dashboard_stats'),
    path('api/dashboard/age-distribution/', age_distribution, name='age_distribution'),
    path('api/dashboard/barangay-distribution/', barangay_distribution, name='barangay_distribution'),
    path('api/dashboard/categories/', category_distribution, name='category_distribution'),

    # =========================================================================
    # REPORTS
    # =========================================================================
    path('reports/government-fund/pdf/', government_fund_pdf, name='government_fund_pdf'),
    path('reports/released-seniors/pdf/', released_seniors_pdf, name='released_seniors_pdf'),
    path('reports/fund-history/excel/', fund_history_excel, name='fund_history_excel'),
    path('reports/transactions/excel/', transactions_excel, name='transactions_excel'),
]
