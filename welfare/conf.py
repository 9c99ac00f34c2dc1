"""
App Settings
============

Reads the ``WELFARE`` dict from Django settings, falling back to defaults
for any key that is not set.
"""

from decimal import Decimal

from django.conf import settings


DEFAULTS = {
    'CATEGORY_RULE_ORDER': ['pwd', 'age_tier'],
    'RUNNING_BALANCE_MODE': 'forward',
    'RELEASE_DELAY_DAYS': 3,
    'BENEFIT_AMOUNT': Decimal('1000.00'),
    'CURRENCY_SYMBOL': '₱',
}


class WelfareSettings:
    """Attribute access to WELFARE settings, read on every lookup so tests can override them"""

    def __getattr__(self, name):
        if name not in DEFAULTS:
            raise AttributeError(f"Unknown welfare setting: {name}")
        user_settings = getattr(settings, 'WELFARE', {}) or {}
        return user_settings.get(name, DEFAULTS[name])


welfare_settings = WelfareSettings()
