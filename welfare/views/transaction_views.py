"""
Transaction Views
=================

Stored benefit transactions merged with release/pending rows derived from
seniors and open applications.
"""

from django.http import JsonResponse
from django.views.decorators.http import require_http_methods

from welfare.forms import TransactionFilterForm, TransactionForm
from welfare.permissions import PermissionChecker, permission_required
from welfare.utils.fund_helpers import create_transaction, delete_transaction, get_financial_transactions
from welfare.views.base import form_error_response, handle_service_errors, json_error, parse_request_data
from welfare.views.serializers import serialize_transaction_row


@require_http_methods(['GET', 'POST'])
@permission_required('can_view_fund')
@handle_service_errors
def transactions(request):
    """
    GET  - type, benefits, category, startDate, endDate, include_benefits
    POST - record a transaction
    """
    if request.method == 'POST':
        if not PermissionChecker(request.user).can_record_transactions():
            return json_error('You do not have permission to record transactions.', 'permission_denied', 403)

        form = TransactionForm(parse_request_data(request))
        if not form.is_valid():
            return form_error_response(form)

        record = create_transaction(**form.cleaned_data)
        return JsonResponse({
            'msg': 'Transaction recorded successfully.',
            'id': str(record.id),
        }, status=201)

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

    return JsonResponse({
        'transactions': [serialize_transaction_row(row) for row in rows],
        'count': len(rows),
    })


@require_http_methods(['DELETE', 'POST'])
@permission_required('can_delete_transactions')
@handle_service_errors
def transaction_delete(request, transaction_id):
    delete_transaction(transaction_id)
    return JsonResponse({'msg': 'Transaction deleted successfully.'})
