"""
Report Views
============

PDF (WeasyPrint) and Excel (pandas/openpyxl) downloads
"""

from django.views.decorators.http import require_http_methods

from welfare.forms import DateRangeForm, TransactionFilterForm
from welfare.permissions import permission_required
from welfare.utils.excel_export import export_fund_history_excel, export_transactions_excel
from welfare.utils.fund_helpers import get_financial_transactions, get_fund_history
from welfare.utils.pdf_export import generate_government_fund_pdf, generate_released_seniors_pdf
from welfare.views.base import form_error_response, handle_service_errors


def _date_range(request):
    form = DateRangeForm(request.GET)
    if not form.is_valid():
        return form, None, None
    return form, form.cleaned_data.get('startDate'), form.cleaned_data.get('endDate')


@require_http_methods(['GET'])
@permission_required('can_view_reports')
@handle_service_errors
def government_fund_pdf(request):
    form, start_date, end_date = _date_range(request)
    if form.errors:
        return form_error_response(form)

    report = get_fund_history(start_date, end_date)
    rows = get_financial_transactions(start_date=start_date, end_date=end_date)
    return generate_government_fund_pdf(report, rows, start_date, end_date)


@require_http_methods(['GET'])
@permission_required('can_view_reports')
@handle_service_errors
def released_seniors_pdf(request):
    from welfare.models import Senior

    seniors = list(Senior.objects.released().select_related('remarks').order_by('barangay', 'lastname'))
    return generate_released_seniors_pdf(seniors)


@require_http_methods(['GET'])
@permission_required('can_view_reports')
@handle_service_errors
def fund_history_excel(request):
    form, start_date, end_date = _date_range(request)
    if form.errors:
        return form_error_response(form)

    report = get_fund_history(start_date, end_date)
    return export_fund_history_excel(report, start_date, end_date)


@require_http_methods(['GET'])
@permission_required('can_view_reports')
@handle_service_errors
def transactions_excel(request):
    form = TransactionFilterForm(request.GET)
    if not form.is_valid():
        return form_error_response(form)

    data = form.cleaned_data
    rows = get_financial_transactions(
        include_benefits=data['include_benefits'],
        type=data.get('type'),
        benefits=data.get('benefits'),
        category=data.get('category'),
        start_date=data.get('startDate'),
        end_date=data.get('endDate'),
    )
    return export_transactions_excel(rows, data.get('startDate'), data.get('endDate'))
