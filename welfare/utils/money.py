"""
Money Helpers
=============

Decimal conversion, peso rounding, amount validation and display
formatting for the government fund
"""

from decimal import Decimal, InvalidOperation, ROUND_HALF_UP


class MoneyCalculator:
    """
    Peso amounts as Decimal, always rounded half-up to centavos

    Usage:
        total = MoneyCalculator.round_money(123.456)  # 123.46
        label = MoneyCalculator.format_currency(1500)  # '₱1,500.00'
    """

    TWO_PLACES = Decimal('0.01')

    @staticmethod
    def to_decimal(amount):
        """
        Convert int, float, str or Decimal to Decimal without float noise

        None becomes 0.00.
        """
        if amount is None:
            return Decimal('0.00')
        if isinstance(amount, Decimal):
            return amount
        return Decimal(str(amount))

    @staticmethod
    def round_money(amount, places=None, rounding=ROUND_HALF_UP):
        """
        Quantize to centavos (or ``places``); None counts as zero

        Example:
            >>> MoneyCalculator.round_money('2.005')
            Decimal('2.01')
        """
        if amount is None:
            return Decimal('0.00')

        if places is None:
            places = MoneyCalculator.TWO_PLACES

        return MoneyCalculator.to_decimal(amount).quantize(places, rounding=rounding)

    @staticmethod
    def validate_amount(amount, allow_zero=True):
        """
        Check that amount parses and is not negative

        Fund additions and balance overrides pass allow_zero=False.

        Returns:
            tuple: (is_valid, error_message)
        """
        try:
            amount = MoneyCalculator.to_decimal(amount)
        except (InvalidOperation, TypeError, ValueError):
            return False, "Invalid amount format"

        if not amount.is_finite():
            return False, "Invalid amount format"

        if amount < 0:
            return False, "Amount cannot be negative"

        if amount == 0 and not allow_zero:
            return False, "Amount must be greater than zero"

        return True, ""

    @staticmethod
    def format_currency(amount, symbol=None):
        """
        Amount with the configured currency symbol and thousands separators

        Example:
            >>> MoneyCalculator.format_currency(1234567.89)
            '₱1,234,567.89'
        """
        if symbol is None:
            from welfare.conf import welfare_settings
            symbol = welfare_settings.CURRENCY_SYMBOL

        amount = MoneyCalculator.round_money(amount)
        sign = '-' if amount < 0 else ''
        return f"{sign}{symbol}{abs(amount):,.2f}"


# Module-level shortcuts
def to_decimal(amount):
    """Shortcut for MoneyCalculator.to_decimal"""
    return MoneyCalculator.to_decimal(amount)


def round_money(amount, places=None):
    """Shortcut for MoneyCalculator.round_money"""
    return MoneyCalculator.round_money(amount, places)


def format_currency(amount):
    """Shortcut for MoneyCalculator.format_currency"""
    return MoneyCalculator.format_currency(amount)
