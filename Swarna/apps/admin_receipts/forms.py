"""
Forms for Admin Receipts module.
"""

from decimal import Decimal

from django import forms

from apps.core.api import ValidationFailed, form_errors, snake_case_keys
from apps.core.forms import IsoDateField
from .models import AdminReceipt


class AdminReceiptForm(forms.ModelForm):
    given_date = IsoDateField(required=False)
    received_date = IsoDateField(required=False)

    class Meta:
        model = AdminReceipt
        fields = [
            'client', 'client_name', 'voucher_id', 'given_date', 'received_date',
            'manual_given_total', 'manual_received_total', 'manual_operation',
        ]

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        for name in ('voucher_id', 'manual_given_total', 'manual_received_total', 'manual_operation'):
            self.fields[name].required = False

    def clean(self):
        cleaned_data = super().clean()
        client = cleaned_data.get('client')
        if client and not cleaned_data.get('client_name'):
            cleaned_data['client_name'] = client.client_name
        if not client and not cleaned_data.get('client_name'):
            self.add_error('client_name', "Select a client or enter a client name")
        for name in ('manual_given_total', 'manual_received_total'):
            if cleaned_data.get(name) is None:
                cleaned_data[name] = AdminReceipt._meta.get_field(name).default
        if not cleaned_data.get('manual_operation'):
            cleaned_data['manual_operation'] = self.instance.manual_operation
        return cleaned_data


class AdminGivenItemForm(forms.Form):
    product_name = forms.CharField(max_length=255, error_messages={'required': "Product name is required"})
    pure_weight = forms.DecimalField(max_digits=12, decimal_places=3,
                                     error_messages={'required': "Pure weight is required"})
    pure_percent = forms.DecimalField(max_digits=5, decimal_places=2,
                                      error_messages={'required': "Pure percent is required"})
    melting = forms.DecimalField(max_digits=5, decimal_places=2,
                                 error_messages={'required': "Melting is required"})

    def clean_pure_weight(self):
        value = self.cleaned_data['pure_weight']
        if value <= 0:
            raise forms.ValidationError("Pure weight must be greater than 0")
        return value

    def clean_pure_percent(self):
        value = self.cleaned_data['pure_percent']
        if value <= 0 or value > 100:
            raise forms.ValidationError("Pure percent must be between 0 and 100")
        return value

    def clean_melting(self):
        value = self.cleaned_data['melting']
        if value <= 0 or value > 100:
            raise forms.ValidationError("Melting must be between 0 and 100")
        return value


class AdminReceivedItemForm(forms.Form):
    product_name = forms.CharField(max_length=255, error_messages={'required': "Product name is required"})
    final_ornaments_wt = forms.DecimalField(max_digits=12, decimal_places=3,
                                            error_messages={'required': "Final ornaments weight is required"})
    stone_weight = forms.DecimalField(max_digits=12, decimal_places=3, required=False, min_value=0)
    making_charge_percent = forms.DecimalField(max_digits=5, decimal_places=2, min_value=0,
                                               error_messages={'required': "Making charge percent is required"})

    def clean_final_ornaments_wt(self):
        value = self.cleaned_data['final_ornaments_wt']
        if value <= 0:
            raise forms.ValidationError("Final ornaments weight must be greater than 0")
        return value

    def clean(self):
        cleaned_data = super().clean()
        if cleaned_data.get('stone_weight') is None and 'stone_weight' not in self.errors:
            cleaned_data['stone_weight'] = Decimal('0')
        ornaments = cleaned_data.get('final_ornaments_wt')
        stone = cleaned_data.get('stone_weight')
        if ornaments is not None and stone is not None and stone > ornaments:
            self.add_error('stone_weight', "Stone weight cannot exceed ornaments weight")
        return cleaned_data


def clean_side(payload, form_class, key):
    """
    Validate one side's item list. Returns a list of cleaned dicts or raises
    ValidationFailed with errors keyed by ``key`` and item index.
    """
    if not isinstance(payload, list):
        raise ValidationFailed({key: "Items must be a list"})
    lines, errors = [], {}
    for index, raw in enumerate(payload):
        form = form_class(snake_case_keys(raw))
        if form.is_valid():
            lines.append(form.cleaned_data)
        else:
            errors[str(index)] = form_errors(form)
    if errors:
        raise ValidationFailed({key: errors})
    return lines
