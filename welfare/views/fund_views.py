"""
Government Fund Views
=====================

Fund history (additions with running balances) and the total fund balance.
Staff can read; only admins change the fund.
"""

from django.http import JsonResponse
from django.views.decorators.http import require_http_methods
import logging

from welfare.forms import FundHistoryFilterForm, FundHistoryForm, GovernmentFundForm
from welfare.permissions import PermissionChecker, permission_required
from welfare.utils.fund_helpers import (
    add_fund,
    delete_fund_record,
    get_financial_transactions,
    get_fund_history,
    get_government_fund,
    set_fund_balance,
)
from welfare.utils.fund_ledger import summarize_fund
from welfare.views.base import (
    form_error_response,
    handle_service_errors,
    json_error,
    parse_request_data,
)
from welfare.views.serializers import serialize_fund_entry, serialize_fund_summary

logger = logging.getLogger(__name__)


# =============================================================================
# FUND HISTORY
# =============================================================================

@require_http_methods(['GET', 'POST'])
@permission_required('can_view_fund')
@handle_service_errors
def fund_history(request):
    """
    GET  - history with running balances (startDate, endDate, mode)
    POST - record a fund addition (admin)
    """
    if request.method == 'POST':
        return _create_fund_history(request)

    form = FundHistoryFilterForm(request.GET)
    if not form.is_valid():
        return form_error_response(form)

    report = get_fund_history(
        start_date=form.cleaned_data.get('startDate'),
        end_date=form.cleaned_data.get('endDate'),
        mode=form.cleaned_data.get('mode') or None,
    )

    return JsonResponse({
        'records': [serialize_fund_entry(entry) for entry in report['records']],
        'summary': serialize_fund_summary(report['summary']),
        'opening_balance': float(report['opening_balance']),
        'reconciled_mode': report['reconciled_mode'],
    })


def _create_fund_history(request):
    if not PermissionChecker(request.user).can_manage_fund():
        return json_error('Only administrators can add to the government fund.', 'permission_denied', 403)

    form = FundHistoryForm(parse_request_data(request), request.FILES)
    if not form.is_valid():
        return form_error_response(form)

    data = form.cleaned_data
    record = add_fund(
        amount=data['amount'],
        source=data['source'],
        date=data['date'],
        description=data.get('description'),
        receipt=data.get('receipt'),
        created_by=request.user,
    )

    return JsonResponse({
        'msg': 'Fund added successfully.',
        'record': {
            'id': str(record.id),
            'date': record.date.isoformat(),
            'amount': float(record.amount),
            'source': record.source,
            'description': record.description,
            'receipt_url': record.receipt_url,
        },
        'current_balance': float(get_government_fund().current_balance),
    }, status=201)


@require_http_methods(['DELETE', 'POST'])
@permission_required('can_manage_fund')
@handle_service_errors
def fund_history_delete(request, history_id):
    fund = delete_fund_record(history_id)
    return JsonResponse({
        'msg': 'Fund record deleted successfully.',
        'current_balance': float(fund.current_balance),
    })


# =============================================================================
# TOTAL FUND BALANCE
# =============================================================================

@require_http_methods(['GET', 'PUT'])
@permission_required('can_view_fund')
@handle_service_errors
def government_fund(request):
    """
    GET - total fund balance with released/pending totals
    PUT - override the total fund balance (admin)
    """
    if request.method == 'PUT':
        if not PermissionChecker(request.user).can_set_fund_balance():
            return json_error('Only administrators can change the fund balance.', 'permission_denied', 403)

        form = GovernmentFundForm(parse_request_data(request))
        if not form.is_valid():
            return form_error_response(form)
        set_fund_balance(form.cleaned_data['current_balance'])

    fund = get_government_fund()
    summary = summarize_fund(fund.current_balance, get_financial_transactions())

    return JsonResponse({
        'id': str(fund.id),
        'current_balance': float(fund.current_balance),
        'summary': serialize_fund_summary(summary),
        'updated_at': fund.updated_at.isoformat(),
    })
