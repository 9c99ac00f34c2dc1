"""
Government Fund Ledger Calculations
===================================

Pure functions over a snapshot of fund history and transactions. They accept
model instances or plain dicts and never touch the database.

    available balance = total fund balance - total released

Running balances for the fund history can be built two ways:

    forward   oldest → newest, starting from an opening balance and adding
              each addition. The newest record's new balance equals the total
              fund balance.
    legacy    newest → oldest, starting from the available balance and adding
              each addition while walking back in time, then reversed for
              display. Kept for comparison with older reports.

reconcile_running_balances() reports which of the two agrees with the total
fund balance; settings.WELFARE['RUNNING_BALANCE_MODE'] picks the one shown.
"""

from datetime import date, datetime
from decimal import Decimal

from dateutil.parser import isoparse

from welfare.conf import welfare_settings
from welfare.exceptions import ConfigurationError
from welfare.utils.money import round_money, to_decimal


RELEASED = 'released'
PENDING = 'pending'

RUNNING_BALANCE_MODES = ('forward', 'legacy')

LEDGER_FIELDS = ('id', 'date', 'amount', 'source', 'description', 'receipt_url')


# =============================================================================
# HELPERS
# =============================================================================

def _field(record, name, default=None):
    if isinstance(record, dict):
        return record.get(name, default)
    return getattr(record, name, default)


def _as_date(value):
    """Normalise str/datetime/date to a date for ordering"""
    if isinstance(value, str):
        value = isoparse(value)
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    raise ValueError(f"Cannot order ledger record by date: {value!r}")


def _as_entry(record):
    """Copy a history record into a fresh dict so inputs are never mutated"""
    if isinstance(record, dict):
        entry = dict(record)
    else:
        entry = {name: getattr(record, name, None) for name in LEDGER_FIELDS}
    entry['amount'] = to_decimal(entry.get('amount'))
    return entry


def _sum_by_type(transactions, transaction_type):
    total = Decimal('0.00')
    for transaction in transactions:
        if _field(transaction, 'type') == transaction_type:
            total += to_decimal(_field(transaction, 'amount'))
    return total


# =============================================================================
# BALANCES
# =============================================================================

def total_released(transactions):
    """Sum of released transaction amounts"""
    return round_money(_sum_by_type(transactions, RELEASED))


def total_pending(transactions):
    """Sum of pending transaction amounts"""
    return round_money(_sum_by_type(transactions, PENDING))


def compute_available_balance(total_fund_balance, transactions):
    """
    Available balance = total fund balance - released amounts

    Pending transactions do not count. The result may be negative; that is a
    data-quality signal for the caller, not an error.

    Example:
        >>> compute_available_balance(100000, [
        ...     {'amount': 30000, 'type': 'released'},
        ...     {'amount': 20000, 'type': 'pending'},
        ... ])
        Decimal('70000.00')
    """
    return round_money(to_decimal(total_fund_balance) - _sum_by_type(transactions, RELEASED))


def summarize_fund(total_fund_balance, transactions):
    """
    Headline figures for the government fund page and report

    Returns:
        dict: total_fund_balance, total_released, total_pending,
              total_allocated, available_balance
    """
    transactions = list(transactions)
    released = total_released(transactions)
    pending = total_pending(transactions)

    return {
        'total_fund_balance': round_money(total_fund_balance),
        'total_released': released,
        'total_pending': pending,
        'total_allocated': round_money(released + pending),
        'available_balance': compute_available_balance(total_fund_balance, transactions),
    }


# =============================================================================
# RUNNING BALANCES
# =============================================================================

def compute_running_balances(history, available_balance):
    """
    Legacy running balances

    Walks the history newest first, starting from the available balance, and
    adds each amount to get the record's new balance. The list is returned
    oldest first.

    Args:
        history: FundHistory instances or dicts (any order)
        available_balance: Current available balance

    Returns:
        list: dicts with previous_balance and new_balance added
    """
    entries = sorted((_as_entry(r) for r in history), key=lambda e: _as_date(e['date']), reverse=True)

    running = to_decimal(available_balance)
    for entry in entries:
        entry['previous_balance'] = running
        entry['new_balance'] = running + entry['amount']
        running = entry['new_balance']

    entries.reverse()
    return entries


def compute_forward_running_balances(history, opening_balance=0):
    """
    Forward running balances, oldest first

    Args:
        history: FundHistory instances or dicts (any order)
        opening_balance: Balance before the earliest record (sum of earlier
                         additions when the history is a filtered window)

    Returns:
        list: dicts with previous_balance and new_balance added
    """
    entries = sorted((_as_entry(r) for r in history), key=lambda e: _as_date(e['date']))

    running = to_decimal(opening_balance)
    for entry in entries:
        entry['previous_balance'] = running
        entry['new_balance'] = running + entry['amount']
        running = entry['new_balance']

    return entries


def _newest_balance(entries, default):
    """new_balance of the most recent entry (entries are oldest first)"""
    if not entries:
        return to_decimal(default)
    newest = max(range(len(entries)), key=lambda i: (_as_date(entries[i]['date']), i))
    return entries[newest]['new_balance']


def reconcile_running_balances(history, total_fund_balance, available_balance, opening_balance=0):
    """
    Which interpretation agrees with the total fund balance

    The balance after the most recent addition must equal the total fund
    balance held by the GovernmentFund aggregate.

    Returns:
        'forward', 'legacy', or None when neither matches
    """
    history = list(history)
    target = round_money(total_fund_balance)

    forward = compute_forward_running_balances(history, opening_balance)
    if round_money(_newest_balance(forward, opening_balance)) == target:
        return 'forward'

    legacy = compute_running_balances(history, available_balance)
    if round_money(_newest_balance(legacy, available_balance)) == target:
        return 'legacy'

    return None


def build_fund_history_display(history, available_balance, opening_balance=0, mode=None):
    """
    Fund history with running balances, oldest first, using the configured mode

    Raises:
        ConfigurationError: If the mode is not one of RUNNING_BALANCE_MODES
    """
    if mode is None:
        mode = welfare_settings.RUNNING_BALANCE_MODE

    if mode == 'forward':
        return compute_forward_running_balances(history, opening_balance)
    if mode == 'legacy':
        return compute_running_balances(history, available_balance)

    raise ConfigurationError(
        f"Unknown RUNNING_BALANCE_MODE '{mode}'. Use one of: {', '.join(RUNNING_BALANCE_MODES)}"
    )


# =============================================================================
# FINANCIAL TRANSACTIONS
# =============================================================================

def _transaction_row(record):
    return {
        'id': str(_field(record, 'id', '')),
        'date': _field(record, 'date'),
        'benefits': _field(record, 'benefits', ''),
        'amount': to_decimal(_field(record, 'amount')),
        'type': _field(record, 'type'),
        'category': _field(record, 'category', ''),
        'senior_name': _field(record, 'senior_name') or '',
        'barangay': _field(record, 'barangay') or '',
        'description': _field(record, 'description') or '',
    }


def collect_financial_transactions(transactions, released_seniors=(), open_applications=(), benefit_amount=None):
    """
    Merge stored transactions with benefit releases and open applications

    Each released senior with an application becomes a 'released' row and
    each PENDING/APPROVED application a 'pending' row, both worth the
    standard benefit amount.

    Returns:
        list: transaction dicts, newest first
    """
    from welfare.utils.category_helpers import REGULAR_CATEGORY

    if benefit_amount is None:
        benefit_amount = welfare_settings.BENEFIT_AMOUNT
    benefit_amount = round_money(benefit_amount)

    rows = [_transaction_row(t) for t in transactions]

    for senior in released_seniors:
        application = getattr(senior, 'latest_application', None)
        if not senior.released_at or application is None:
            continue
        rows.append({
            'id': f"released-{senior.id}",
            'date': senior.released_at,
            'benefits': application.benefit.name,
            'amount': benefit_amount,
            'type': RELEASED,
            'category': application.category.name if application.category else REGULAR_CATEGORY,
            'senior_name': f"{senior.firstname} {senior.lastname}",
            'barangay': senior.barangay,
            'description': '',
        })

    for application in open_applications:
        rows.append({
            'id': f"pending-{application.id}",
            'date': application.created_at,
            'benefits': application.benefit.name,
            'amount': benefit_amount,
            'type': PENDING,
            'category': application.category.name if application.category else REGULAR_CATEGORY,
            'senior_name': f"{application.senior.firstname} {application.senior.lastname}",
            'barangay': 'N/A',
            'description': '',
        })

    rows.sort(key=lambda row: _as_date(row['date']), reverse=True)
    return rows
