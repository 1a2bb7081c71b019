"""
Forms for Clients module.
"""

from django import forms
from .models import Client


class ClientForm(forms.ModelForm):
    """
    Contact details of a client. The balance is not editable here; it only
    moves through the ledger.
    """
    class Meta:
        model = Client
        fields = ['shop_name', 'client_name', 'phone_number', 'address', 'email']

    def clean_phone_number(self):
        phone = self.cleaned_data['phone_number'].strip()
        digits = phone.replace('+', '').replace('-', '').replace(' ', '')
        if not digits.isdigit():
            raise forms.ValidationError("Phone number may only contain digits, spaces, '+' and '-'")
        return phone


class OpeningBalanceForm(forms.Form):
    balance = forms.DecimalField(max_digits=14, decimal_places=3, required=False)


class BalanceAdjustmentForm(forms.Form):
    """
    Manual correction posted to a client's ledger.
    """
    delta = forms.DecimalField(max_digits=14, decimal_places=3)
    description = forms.CharField(max_length=255)
    expected_version = forms.IntegerField(min_value=0, required=False)

    def clean_delta(self):
        delta = self.cleaned_data['delta']
        if delta == 0:
            raise forms.ValidationError("Adjustment must be non-zero")
        return delta


class ClientStatusForm(forms.Form):
    """Active flag from a JSON body; accepts booleans and "true"/"false"."""
    is_active = forms.NullBooleanField(required=False)

    def clean_is_active(self):
        value = self.cleaned_data['is_active']
        if value is None and self.data.get('is_active') not in (None, ''):
            raise forms.ValidationError("isActive must be true or false")
        return value
