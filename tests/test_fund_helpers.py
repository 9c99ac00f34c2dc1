from datetime import date, timedelta
from decimal import Decimal
import uuid

import pytest
from django.core.files.uploadedfile import SimpleUploadedFile
from django.utils import timezone

from welfare.exceptions import ConcurrentUpdateError, NotFoundError, ValidationError
from welfare.models import FundHistory, GovernmentFund, Notification, Transaction
from welfare.utils.fund_helpers import (
    _write_balance,
    add_fund,
    create_transaction,
    delete_fund_record,
    delete_transaction,
    get_financial_transactions,
    get_fund_history,
    get_government_fund,
    set_fund_balance,
)


pytestmark = pytest.mark.django_db


class TestGovernmentFund:

    def test_created_with_zero_balance(self):
        fund = get_government_fund()
        assert fund.current_balance == Decimal('0.00')
        assert GovernmentFund.objects.count() == 1
        assert get_government_fund().pk == fund.pk

    def test_set_balance_bumps_version(self):
        fund = get_government_fund()
        set_fund_balance('2500.50')

        fund.refresh_from_db()
        assert fund.current_balance == Decimal('2500.50')
        assert fund.version == 1

    @pytest.mark.parametrize('value', [0, -10, 'abc'])
    def test_set_balance_rejects_non_positive(self, value):
        with pytest.raises(ValidationError):
            set_fund_balance(value)
        assert get_government_fund().current_balance == Decimal('0.00')

    def test_stale_version_is_rejected(self):
        stale = get_government_fund()
        set_fund_balance(500)

        with pytest.raises(ConcurrentUpdateError):
            _write_balance(stale, current_balance=Decimal('1.00'))
        assert get_government_fund().current_balance == Decimal('500.00')


class TestAddFund:

    def test_adds_history_and_raises_balance(self, admin_user):
        record = add_fund('1500', 'LGU', '2025-06-01', description='Q2', created_by=admin_user)

        assert record.amount == Decimal('1500.00')
        assert record.date == date(2025, 6, 1)
        assert record.created_by == admin_user
        assert get_government_fund().current_balance == Decimal('1500.00')

    def test_other_admins_are_notified(self, admin_user, staff_user):
        add_fund('2000', 'Provincial allocation', '2025-06-01', created_by=staff_user)

        notification = Notification.objects.get(notification_type='fund_added')
        assert notification.user == admin_user
        assert notification.message == '₱2,000.00 added from Provincial allocation.'

    @pytest.mark.parametrize('amount', [0, -5, 'not-a-number'])
    def test_invalid_amount_writes_nothing(self, amount):
        with pytest.raises(ValidationError):
            add_fund(amount, 'LGU', '2025-06-01')
        assert FundHistory.objects.count() == 0
        assert get_government_fund().current_balance == Decimal('0.00')

    def test_source_and_date_are_required(self):
        with pytest.raises(ValidationError):
            add_fund(100, '  ', '2025-06-01')
        with pytest.raises(ValidationError):
            add_fund(100, 'LGU', None)
        with pytest.raises(ValidationError):
            add_fund(100, 'LGU', 'someday')
        assert FundHistory.objects.count() == 0

    def test_receipt_uploaded_to_cloudinary(self, cloudinary_upload):
        receipt = SimpleUploadedFile('receipt scan.pdf', b'%PDF-1.4', content_type='application/pdf')
        record = add_fund(100, 'LGU', '2025-06-01', receipt=receipt)

        assert cloudinary_upload.call_count == 1
        assert cloudinary_upload.call_args.kwargs['folder'] == 'government-fund/receipts'
        assert record.receipt_url.startswith('https://res.cloudinary.com/')


class TestDeleteFundRecord:

    def test_lowers_balance_by_amount(self):
        add_fund(95000, 'LGU', '2025-05-01')
        record = add_fund(5000, 'DSWD', '2025-06-01')
        assert get_government_fund().current_balance == Decimal('100000.00')

        fund = delete_fund_record(record.id)

        assert fund.current_balance == Decimal('95000.00')
        assert not FundHistory.objects.filter(pk=record.id).exists()

    def test_unknown_id_leaves_balance_unchanged(self, fund_with_history):
        with pytest.raises(NotFoundError):
            delete_fund_record(uuid.uuid4())
        with pytest.raises(NotFoundError):
            delete_fund_record('not-a-uuid')

        assert get_government_fund().current_balance == Decimal('100000.00')
        assert FundHistory.objects.count() == 2

    def test_balance_may_go_negative(self, caplog):
        record = add_fund(500, 'LGU', '2025-05-01')
        set_fund_balance(100)

        fund = delete_fund_record(record.id)

        assert fund.current_balance == Decimal('-400.00')
        assert 'negative' in caplog.text


class TestTransactions:

    def test_create_and_delete(self):
        record = create_transaction(
            date='2025-06-15T10:00:00', benefits='Social Pension', amount='1000',
            type='released', category='Regular senior citizens', senior_name='Juan Cruz',
        )
        assert record.amount == Decimal('1000.00')
        assert timezone.is_aware(record.date)

        delete_transaction(record.id)
        assert Transaction.objects.count() == 0

    def test_invalid_type(self):
        with pytest.raises(ValidationError):
            create_transaction(None, 'Pension', 100, 'refunded', 'Regular senior citizens')

    def test_delete_unknown(self):
        with pytest.raises(NotFoundError):
            delete_transaction(uuid.uuid4())

    def test_financial_transactions_include_benefit_rows(self, make_senior, make_application):
        create_transaction('2025-06-15', 'Medical', 2500, 'released', 'Special assistance cases')

        released = make_senior(age=81, released_at=timezone.now())
        make_application(released, status='APPROVED', category='Octogenarian (80-89)')
        waiting = make_senior(age=70)
        make_application(waiting, status='PENDING')
        rejected = make_senior(age=70)
        make_application(rejected, status='REJECT')

        rows = get_financial_transactions()

        assert len(rows) == 4
        assert sum(1 for row in rows if row['id'].startswith('released-')) == 1
        # The released senior's APPROVED application and the waiting PENDING one
        assert sum(1 for row in rows if row['id'].startswith('pending-')) == 2

    def test_filters(self, make_senior, make_application):
        create_transaction('2025-06-15', 'Medical', 2500, 'released', 'Special assistance cases')
        create_transaction('2025-01-15', 'Pension', 1000, 'pending', 'Regular senior citizens')

        rows = get_financial_transactions(include_benefits=False, type='released')
        assert [row['benefits'] for row in rows] == ['Medical']

        rows = get_financial_transactions(include_benefits=False, start_date='2025-06-01', end_date='2025-06-30')
        assert [row['benefits'] for row in rows] == ['Medical']

        rows = get_financial_transactions(include_benefits=False, category='regular')
        assert [row['benefits'] for row in rows] == ['Pension']


class TestFundHistoryReport:

    def test_forward_balances_end_at_total(self, fund_with_history):
        report = get_fund_history()

        assert [r['new_balance'] for r in report['records']] == [Decimal('60000.00'), Decimal('100000.00')]
        assert report['summary']['total_fund_balance'] == Decimal('100000.00')
        assert report['reconciled_mode'] == 'forward'

    def test_window_uses_opening_balance(self, fund_with_history):
        report = get_fund_history(start_date='2025-05-15')

        assert report['opening_balance'] == Decimal('60000.00')
        (record,) = report['records']
        assert record['previous_balance'] == Decimal('60000.00')
        assert record['new_balance'] == Decimal('100000.00')

    def test_legacy_mode(self, fund_with_history):
        report = get_fund_history(mode='legacy')
        # No releases: available balance equals the total fund balance
        assert report['records'][-1]['previous_balance'] == Decimal('100000.00')

    def test_end_date_skips_reconciliation(self, fund_with_history):
        report = get_fund_history(end_date=date(2025, 5, 31))
        assert len(report['records']) == 1
        assert report['reconciled_mode'] is None

    def test_mismatch_is_logged(self, fund_with_history, caplog):
        set_fund_balance(1)
        report = get_fund_history()
        assert report['reconciled_mode'] is None
        assert 'does not reconcile' in caplog.text
