"""
Government Fund Services
========================

Every balance change runs in one transaction:

    lock fund row (select_for_update) → write history → conditional UPDATE
    of current_balance guarded by ``version``

A conditional UPDATE that matches no row raises ConcurrentUpdateError and
the whole transaction rolls back.
"""

from decimal import Decimal
from django.db import transaction
from django.db.models import F
from django.utils import timezone
import logging

from welfare.exceptions import ConcurrentUpdateError, ValidationError
from welfare.utils.fund_ledger import (
    build_fund_history_display,
    collect_financial_transactions,
    reconcile_running_balances,
    summarize_fund,
)
from welfare.utils.helpers import get_object_or_not_found, parse_date
from welfare.utils.money import MoneyCalculator, round_money

logger = logging.getLogger(__name__)


# =============================================================================
# FUND AGGREGATE
# =============================================================================

def get_government_fund():
    """
    Return the government fund row, creating it with a zero balance if missing
    """
    from welfare.models import GovernmentFund

    fund = GovernmentFund.objects.order_by('-created_at').first()
    if fund is None:
        fund = GovernmentFund.objects.create(current_balance=Decimal('0.00'))
        logger.info("Created government fund record with zero balance")
    return fund


def _lock_government_fund():
    from welfare.models import GovernmentFund

    fund = get_government_fund()
    return GovernmentFund.objects.select_for_update().get(pk=fund.pk)


def _write_balance(fund, **changes):
    """
    Conditional UPDATE on (pk, version); bumps version

    Raises:
        ConcurrentUpdateError: If another writer changed the row first
    """
    from welfare.models import GovernmentFund

    updated = GovernmentFund.objects.filter(pk=fund.pk, version=fund.version).update(
        version=F('version') + 1,
        updated_at=timezone.now(),
        **changes
    )
    if updated != 1:
        logger.warning(f"Government fund {fund.pk} changed concurrently (expected version {fund.version})")
        raise ConcurrentUpdateError("The government fund was modified by another request. Please retry.")

    fund.refresh_from_db(fields=['current_balance', 'version', 'updated_at'])
    return fund


def _validate_positive(amount, field):
    is_valid, error = MoneyCalculator.validate_amount(amount, allow_zero=False)
    if not is_valid:
        raise ValidationError({field: error}, code='invalid_amount')
    return round_money(amount)


@transaction.atomic
def set_fund_balance(new_balance):
    """
    Override the total fund balance (admin correction)

    Raises:
        ValidationError: If new_balance is not a positive amount
    """
    new_balance = _validate_positive(new_balance, 'current_balance')

    fund = _lock_government_fund()
    old_balance = fund.current_balance
    _write_balance(fund, current_balance=new_balance)

    logger.info(f"Government fund balance set: {old_balance} → {fund.current_balance}")
    return fund


# =============================================================================
# FUND HISTORY
# =============================================================================

def add_fund(amount, source, date, description=None, receipt=None, created_by=None):
    """
    Record a fund addition and raise the total fund balance by its amount

    Args:
        amount: Positive amount added
        source: Where the money came from
        date: Date of the addition
        description: Optional note
        receipt: Optional uploaded file (sent to Cloudinary)
        created_by: Acting user

    Returns:
        FundHistory: The new history record

    Raises:
        ValidationError: Before any write when amount/source/date are invalid
    """
    amount = _validate_positive(amount, 'amount')
    if not source or not str(source).strip():
        raise ValidationError({'source': "Source is required"}, code='required')
    date = parse_date(date)
    if date is None:
        raise ValidationError({'date': "Date is required"}, code='required')

    receipt_id, receipt_url = None, None
    if receipt:
        from welfare.utils.storage import upload_receipt
        receipt_id, receipt_url = upload_receipt(receipt)

    return _add_fund_record(amount, str(source).strip(), date, description, receipt_id, receipt_url, created_by)


@transaction.atomic
def _add_fund_record(amount, source, date, description, receipt_id, receipt_url, created_by):
    from welfare.models import FundHistory, Notification

    fund = _lock_government_fund()

    record = FundHistory.objects.create(
        date=date,
        amount=amount,
        source=source,
        description=description or None,
        receipt=receipt_id,
        receipt_url=receipt_url,
        created_by=created_by,
    )
    _write_balance(fund, current_balance=F('current_balance') + amount)

    Notification.objects.notify_admins(
        'fund_added',
        title="Government fund added",
        message=f"{MoneyCalculator.format_currency(amount)} added from {source}.",
        exclude_user=created_by,
    )

    logger.info(f"Fund added: {amount} from '{source}' on {date}. Total fund balance: {fund.current_balance}")
    return record


@transaction.atomic
def delete_fund_record(history_id):
    """
    Remove a fund addition and lower the total fund balance by its amount

    Raises:
        NotFoundError: If no record has this id (balance unchanged)
    """
    from welfare.models import FundHistory

    fund = _lock_government_fund()
    record = get_object_or_not_found(
        FundHistory.objects.select_for_update(), history_id, label="Fund history record"
    )

    amount = record.amount
    record.delete()
    _write_balance(fund, current_balance=F('current_balance') - amount)

    if fund.current_balance < 0:
        logger.warning(f"Government fund balance is negative after deleting {history_id}: {fund.current_balance}")
    logger.info(f"Fund record {history_id} deleted ({amount}). Total fund balance: {fund.current_balance}")
    return fund


# =============================================================================
# TRANSACTIONS
# =============================================================================

TRANSACTION_TYPES = ('released', 'pending')


def create_transaction(date, benefits, amount, type, category, description='', senior_name=None, barangay=None):
    """
    Record a benefit disbursement or allocation

    Raises:
        ValidationError: If amount is not positive or type is unknown
    """
    from welfare.models import Transaction
    from welfare.utils.helpers import parse_datetime_value

    amount = _validate_positive(amount, 'amount')
    if type not in TRANSACTION_TYPES:
        raise ValidationError({'type': f"Type must be one of: {', '.join(TRANSACTION_TYPES)}"}, code='invalid_type')
    for field, value in (('benefits', benefits), ('category', category)):
        if not value:
            raise ValidationError({field: f"{field.capitalize()} is required"}, code='required')

    record = Transaction.objects.create(
        date=parse_datetime_value(date) or timezone.now(),
        benefits=benefits,
        amount=amount,
        type=type,
        category=category,
        description=description or None,
        senior_name=senior_name or None,
        barangay=barangay or None,
    )
    logger.info(f"Transaction recorded: {type} {amount} for '{benefits}' ({category})")
    return record


@transaction.atomic
def delete_transaction(transaction_id):
    """
    Raises:
        NotFoundError: If no transaction has this id
    """
    from welfare.models import Transaction

    record = get_object_or_not_found(Transaction.objects.all(), transaction_id, label="Transaction")
    record.delete()
    logger.info(f"Transaction {transaction_id} deleted")


# =============================================================================
# READ MODELS
# =============================================================================

def get_financial_transactions(include_benefits=True, **filters):
    """
    Stored transactions (filtered) plus benefit release/pending rows

    Filters: type, benefits, category, start_date, end_date
    """
    from welfare.models import Application, Senior, Transaction

    queryset = Transaction.objects.all()
    if filters.get('type'):
        queryset = queryset.filter(type=filters['type'])
    if filters.get('benefits'):
        queryset = queryset.filter(benefits__icontains=filters['benefits'])
    if filters.get('category'):
        queryset = queryset.filter(category__icontains=filters['category'])
    queryset = queryset.between(parse_date(filters.get('start_date')), parse_date(filters.get('end_date')))

    if not include_benefits:
        return collect_financial_transactions(queryset)

    released_seniors = Senior.objects.released().order_by('-released_at')

    open_applications = Application.objects.open().for_active_seniors().select_related(
        'senior', 'benefit', 'category'
    )

    rows = collect_financial_transactions(queryset, released_seniors, open_applications)
    return [row for row in rows if _row_matches(row, filters)]


def _row_matches(row, filters):
    if filters.get('type') and row['type'] != filters['type']:
        return False
    if filters.get('benefits') and filters['benefits'].lower() not in (row['benefits'] or '').lower():
        return False
    if filters.get('category') and filters['category'].lower() not in (row['category'] or '').lower():
        return False

    row_date = parse_date(row['date'])
    start, end = parse_date(filters.get('start_date')), parse_date(filters.get('end_date'))
    if start and row_date < start:
        return False
    if end and row_date > end:
        return False
    return True


def get_fund_history(start_date=None, end_date=None, mode=None):
    """
    Fund history with running balances, oldest first

    Returns:
        dict: records, summary, opening_balance, reconciled_mode
    """
    from welfare.models import FundHistory

    start_date, end_date = parse_date(start_date, 'startDate'), parse_date(end_date, 'endDate')

    fund = get_government_fund()
    transactions = get_financial_transactions()
    summary = summarize_fund(fund.current_balance, transactions)

    history = list(FundHistory.objects.between(start_date, end_date).select_related('created_by'))
    opening_balance = Decimal('0.00')
    if start_date:
        opening_balance = FundHistory.objects.filter(date__lt=start_date).total_amount()

    records = build_fund_history_display(history, summary['available_balance'], opening_balance, mode)

    reconciled_mode = None
    if end_date is None:
        reconciled_mode = reconcile_running_balances(
            history, fund.current_balance, summary['available_balance'], opening_balance
        )
        if reconciled_mode is None and history:
            logger.warning(
                f"Fund history does not reconcile with total fund balance {fund.current_balance}"
            )

    return {
        'records': records,
        'summary': summary,
        'opening_balance': opening_balance,
        'reconciled_mode': reconciled_mode,
    }
