"""
Application Forms
=================
"""

from django import forms

from welfare.models import APPLICATION_STATUSES


class ApplicationForm(forms.Form):
    """Apply one benefit for several seniors at once"""

    benefit_id = forms.UUIDField()
    selected_senior_ids = forms.JSONField()

    def clean_selected_senior_ids(self):
        senior_ids = self.cleaned_data.get('selected_senior_ids')
        if isinstance(senior_ids, str):
            senior_ids = [senior_ids]
        if not isinstance(senior_ids, list) or not senior_ids:
            raise forms.ValidationError('Select at least one senior')
        return [str(senior_id) for senior_id in senior_ids]


class ApplicationStatusForm(forms.Form):
    status = forms.ChoiceField(choices=[(name, name) for name in APPLICATION_STATUSES])
    rejection_reason = forms.CharField(required=False, widget=forms.Textarea)

    def clean(self):
        cleaned_data = super().clean()
        # Keep "absent" (None) apart from "cleared" ('')
        if 'rejection_reason' not in self.data:
            cleaned_data['rejection_reason'] = None
        return cleaned_data


class ApplicationSearchForm(forms.Form):
    name = forms.CharField(required=False, max_length=100)
    appliedBenefit = forms.CharField(required=False)
    seniorCategory = forms.CharField(required=False)
    status = forms.CharField(required=False)
