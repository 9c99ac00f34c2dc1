"""
Government Fund Forms
=====================

Input validation for fund additions, balance overrides and transactions
"""

from django import forms
from django.core.exceptions import ValidationError
from decimal import Decimal

from welfare.utils.fund_ledger import RUNNING_BALANCE_MODES


TRANSACTION_TYPE_CHOICES = [
    ('released', 'Released'),
    ('pending', 'Pending'),
]


# =============================================================================
# BASE DATE RANGE FORM
# =============================================================================

class DateRangeForm(forms.Form):
    """Optional startDate / endDate query parameters"""

    startDate = forms.DateField(required=False)
    endDate = forms.DateField(required=False)

    def clean(self):
        cleaned_data = super().clean()
        start_date = cleaned_data.get('startDate')
        end_date = cleaned_data.get('endDate')

        if start_date and end_date and start_date > end_date:
            raise ValidationError('Start date cannot be after end date')

        return cleaned_data


class FundHistoryFilterForm(DateRangeForm):
    mode = forms.ChoiceField(
        required=False,
        choices=[('', 'Default')] + [(mode, mode.capitalize()) for mode in RUNNING_BALANCE_MODES]
    )


class TransactionFilterForm(DateRangeForm):
    type = forms.ChoiceField(required=False, choices=[('', 'All Types')] + TRANSACTION_TYPE_CHOICES)
    benefits = forms.CharField(required=False, max_length=200)
    category = forms.CharField(required=False, max_length=100)
    include_benefits = forms.BooleanField(required=False, initial=True)

    def clean_include_benefits(self):
        # Absent means include
        if 'include_benefits' not in self.data:
            return True
        return self.cleaned_data.get('include_benefits')


# =============================================================================
# FUND FORMS
# =============================================================================

class FundHistoryForm(forms.Form):
    """A fund addition"""

    amount = forms.DecimalField(max_digits=15, decimal_places=2, min_value=Decimal('0.01'))
    source = forms.CharField(max_length=255)
    date = forms.DateField()
    description = forms.CharField(required=False, widget=forms.Textarea)
    receipt = forms.FileField(required=False)

    def clean_source(self):
        source = self.cleaned_data.get('source', '').strip()
        if not source:
            raise ValidationError('Source is required')
        return source


class GovernmentFundForm(forms.Form):
    """Admin override of the total fund balance"""

    current_balance = forms.DecimalField(max_digits=15, decimal_places=2, min_value=Decimal('0.01'))


class TransactionForm(forms.Form):
    date = forms.DateTimeField(required=False)
    benefits = forms.CharField(max_length=200)
    amount = forms.DecimalField(max_digits=15, decimal_places=2, min_value=Decimal('0.01'))
    type = forms.ChoiceField(choices=TRANSACTION_TYPE_CHOICES)
    category = forms.CharField(max_length=100)
    description = forms.CharField(required=False, widget=forms.Textarea)
    senior_name = forms.CharField(required=False, max_length=255)
    barangay = forms.CharField(required=False, max_length=100)
