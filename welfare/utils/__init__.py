"""
Welfare Utilities Package
=========================

Provides:
- Fund ledger calculations (pure)
- Category reconciliation rules (pure)
- Fund, senior and application services
- PDF export (WeasyPrint)
- Excel export (Pandas/openpyxl)

Import directly from submodules to avoid circular imports:
    from welfare.utils.fund_ledger import compute_available_balance
    from welfare.utils.senior_helpers import update_senior
    from welfare.utils.excel_export import export_fund_history_excel
"""
