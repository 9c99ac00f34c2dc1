"""
Senior Forms
============

Registration and partial update of seniors, plus list filters
"""

from django import forms
from django.core.exceptions import ValidationError
from django.core.validators import RegexValidator
from django.utils import timezone

from welfare.models import GENDER_CHOICES
from welfare.utils.senior_helpers import RELEASE_STATUS_PENDING, RELEASE_STATUS_RELEASED


contact_validator = RegexValidator(
    regex=r'^\d{11}$',
    message='Contact number must be exactly 11 digits'
)


# =============================================================================
# SENIOR CREATE FORM
# =============================================================================

class SeniorForm(forms.Form):
    """Senior registration"""

    firstname = forms.CharField(max_length=100)
    middlename = forms.CharField(max_length=100, required=False)
    lastname = forms.CharField(max_length=100)
    email = forms.EmailField(required=False)

    birthdate = forms.DateField()
    gender = forms.ChoiceField(choices=GENDER_CHOICES)

    barangay = forms.CharField(max_length=100)
    purok = forms.CharField(max_length=100)

    contact_no = forms.CharField(max_length=11, required=False, validators=[contact_validator])
    emergency_no = forms.CharField(max_length=11, required=False, validators=[contact_validator])
    contact_person = forms.CharField(max_length=150, required=False)
    contact_relationship = forms.CharField(max_length=100, required=False)

    pwd = forms.BooleanField(required=False)
    low_income = forms.BooleanField(required=False)

    def clean_birthdate(self):
        birthdate = self.cleaned_data.get('birthdate')
        if birthdate and birthdate > timezone.localdate():
            raise ValidationError('Birth date cannot be in the future')
        return birthdate

    def clean(self):
        cleaned_data = super().clean()
        contact_no = cleaned_data.get('contact_no')
        emergency_no = cleaned_data.get('emergency_no')

        if contact_no and emergency_no and contact_no == emergency_no:
            self.add_error('emergency_no', 'Emergency number must differ from the contact number')

        return cleaned_data


# =============================================================================
# SENIOR UPDATE FORM
# =============================================================================

class SeniorUpdateForm(SeniorForm):
    """
    Partial update: every field is optional and only the keys present in the
    submitted data end up in ``payload``
    """

    age = forms.IntegerField(required=False, min_value=0, max_value=150)
    remarks_id = forms.UUIDField(required=False)

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        for field in self.fields.values():
            field.required = False

    @property
    def payload(self):
        return {key: value for key, value in self.cleaned_data.items() if key in self.data}


# =============================================================================
# SEARCH FORMS
# =============================================================================

class SeniorSearchForm(forms.Form):
    name = forms.CharField(required=False, max_length=100)
    gender = forms.ChoiceField(required=False, choices=[('', 'All')] + GENDER_CHOICES)
    purok = forms.CharField(required=False, max_length=100)
    barangay = forms.CharField(required=False, max_length=100)
    remarks = forms.CharField(required=False, max_length=50)
    releaseStatus = forms.ChoiceField(
        required=False,
        choices=[
            ('', 'All'),
            (RELEASE_STATUS_RELEASED, 'Released'),
            (RELEASE_STATUS_PENDING, 'Pending'),
        ]
    )


class SeniorReleaseForm(forms.Form):
    senior_id = forms.UUIDField()
