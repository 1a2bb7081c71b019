"""
Forms for Receipts module.

The item forms hold the one set of validation rules used for both creating
and editing receipts.
"""

from decimal import Decimal

from django import forms

from apps.core.api import ValidationFailed, form_errors, snake_case_keys
from apps.core.forms import IsoDateField
from .calculator import GivenLine, ReceivedLine, is_blank_received
from .models import Receipt

RESERVED_TAGS = {'BALANCE'}
RESERVED_ITEM_NAMES = {'previous balance'}


class ReceiptForm(forms.ModelForm):
    """
    Receipt header. Items are validated separately by ``clean_items``.
    """
    issue_date = IsoDateField(error_messages={'required': "Date is required"})
    expected_balance_version = forms.IntegerField(min_value=0, required=False)

    class Meta:
        model = Receipt
        fields = ['client', 'metal_type', 'issue_date', 'voucher_id', 'payment_status', 'notes']
        error_messages = {
            'client': {'required': "Please select a client"},
            'metal_type': {'required': "Metal type is required"},
        }

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.fields['voucher_id'].required = False
        self.fields['payment_status'].required = False

    def clean_payment_status(self):
        return self.cleaned_data.get('payment_status') or Receipt.PAYMENT_PENDING


class ReceiptUpdateForm(ReceiptForm):
    """Edits keep the receipt on its original client."""

    class Meta(ReceiptForm.Meta):
        fields = ['metal_type', 'issue_date', 'voucher_id', 'payment_status', 'notes']


class GivenItemForm(forms.Form):
    item_name = forms.CharField(max_length=255, error_messages={'required': "Item name is required"})
    tag = forms.CharField(max_length=50, required=False)
    gross_wt = forms.DecimalField(max_digits=12, decimal_places=3,
                                  error_messages={'required': "Gross weight must be greater than 0"})
    stone_wt = forms.DecimalField(max_digits=12, decimal_places=3, required=False)
    melting_touch = forms.DecimalField(max_digits=5, decimal_places=2,
                                       error_messages={'required': "Melting % must be between 0 and 100"})
    stone_amt = forms.DecimalField(max_digits=12, decimal_places=2, required=False, min_value=0)
    date = IsoDateField(required=False)

    def clean_gross_wt(self):
        gross = self.cleaned_data['gross_wt']
        if gross <= 0:
            raise forms.ValidationError("Gross weight must be greater than 0")
        return gross

    def clean_stone_wt(self):
        stone = self.cleaned_data.get('stone_wt')
        if stone is None:
            return Decimal('0')
        if stone < 0:
            raise forms.ValidationError("Stone weight cannot be negative")
        return stone

    def clean_melting_touch(self):
        melting = self.cleaned_data['melting_touch']
        if melting <= 0 or melting > 100:
            raise forms.ValidationError("Melting % must be between 0 and 100")
        return melting

    def clean(self):
        cleaned_data = super().clean()
        gross = cleaned_data.get('gross_wt')
        stone = cleaned_data.get('stone_wt')
        if gross is not None and stone is not None and stone > gross:
            self.add_error('stone_wt', "Stone weight cannot exceed gross weight")

        tag = (cleaned_data.get('tag') or '').strip()
        name = (cleaned_data.get('item_name') or '').strip()
        if tag.upper() in RESERVED_TAGS or name.lower() in RESERVED_ITEM_NAMES:
            self.add_error(
                'item_name',
                "Previous balance is carried automatically and cannot be entered as an item",
            )
        return cleaned_data

    def to_line(self):
        data = self.cleaned_data
        return GivenLine(
            item_name=data['item_name'],
            tag=data.get('tag') or '',
            gross_wt=data['gross_wt'],
            stone_wt=data['stone_wt'],
            melting_touch=data['melting_touch'],
            stone_amt=data.get('stone_amt') or Decimal('0'),
            item_date=data.get('date'),
        )


class ReceivedItemForm(forms.Form):
    received_gold = forms.DecimalField(max_digits=12, decimal_places=3,
                                       error_messages={'required': "Received gold must be greater than 0"})
    melting = forms.DecimalField(max_digits=5, decimal_places=2,
                                 error_messages={'required': "Melting % must be between 0 and 100"})
    date = IsoDateField(required=False)

    def clean_received_gold(self):
        gold = self.cleaned_data['received_gold']
        if gold <= 0:
            raise forms.ValidationError("Received gold must be greater than 0")
        return gold

    def clean_melting(self):
        melting = self.cleaned_data['melting']
        if melting <= 0 or melting > 100:
            raise forms.ValidationError("Melting % must be between 0 and 100")
        return melting

    def to_line(self):
        data = self.cleaned_data
        return ReceivedLine(
            received_gold=data['received_gold'],
            melting=data['melting'],
            item_date=data.get('date'),
        )


def clean_items(given_payload, received_payload, stored_given=(), stored_received=()):
    """
    Validate raw item lists from a request body.

    Returns (given_lines, received_lines). Received rows with nothing
    entered are dropped. A side whose payload is None keeps its stored
    items, so an update may send one side only. Raises ValidationFailed
    with errors keyed by list name and item index.
    """
    for payload in (given_payload, received_payload):
        if payload is not None and not isinstance(payload, list):
            raise ValidationFailed({'items': "givenItems and receivedItems must be lists"})

    errors = {}
    given_lines = []
    for index, raw in enumerate(given_payload or []):
        form = GivenItemForm(snake_case_keys(raw))
        if form.is_valid():
            given_lines.append(form.to_line())
        else:
            errors.setdefault('givenItems', {})[str(index)] = form_errors(form)

    received_lines = []
    for index, raw in enumerate(received_payload or []):
        data = snake_case_keys(raw)
        if is_blank_received(data):
            continue
        form = ReceivedItemForm(data)
        if form.is_valid():
            received_lines.append(form.to_line())
        else:
            errors.setdefault('receivedItems', {})[str(index)] = form_errors(form)

    if errors:
        raise ValidationFailed(errors)
    if given_payload is None:
        given_lines = list(stored_given)
    if received_payload is None:
        received_lines = list(stored_received)
    if not given_lines and not received_lines:
        raise ValidationFailed({'items': "A receipt needs at least one given or received item"})
    return given_lines, received_lines
