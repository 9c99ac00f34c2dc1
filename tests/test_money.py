from decimal import Decimal

from welfare.utils.money import MoneyCalculator, format_currency, round_money, to_decimal


def test_to_decimal_avoids_float_noise():
    assert to_decimal(0.1) == Decimal('0.1')
    assert to_decimal(None) == Decimal('0.00')


def test_round_money_half_up():
    assert round_money('2.345') == Decimal('2.35')
    assert round_money(None) == Decimal('0.00')


def test_validate_amount():
    assert MoneyCalculator.validate_amount('100') == (True, "")
    assert MoneyCalculator.validate_amount(-1) == (False, "Amount cannot be negative")
    assert MoneyCalculator.validate_amount(0, allow_zero=False) == (False, "Amount must be greater than zero")
    assert MoneyCalculator.validate_amount('abc')[0] is False
    assert MoneyCalculator.validate_amount('NaN')[0] is False


def test_format_currency():
    assert format_currency(1234567.891) == '₱1,234,567.89'
    assert format_currency(-50) == '-₱50.00'
    assert MoneyCalculator.format_currency(10, symbol='$') == '$10.00'
