"""
JSON API views for Admin Receipts module.

Request bodies mirror the work receipt screen:

    {
        "clientId": 1, "clientName": "...", "voucherId": "GA-2405-0001",
        "given": {"date": "...", "items": [...]},
        "received": {"date": "...", "items": [...]},
        "manualCalculation": {"givenTotal": 0, "receivedTotal": 0, "operation": "add"}
    }

Either side may be omitted; an omitted side keeps its stored items.
"""

from django.db import IntegrityError
from django.db.models import Q
from django.forms.models import model_to_dict
from django.http import JsonResponse
from django.shortcuts import get_object_or_404

from apps.core.api import ApiError, ApiView, ValidationFailed, form_errors, paginate, snake_case_keys
from apps.core.utils import log_audit_action, search_terms
from .calculator import STATUS_CHOICES
from .forms import AdminGivenItemForm, AdminReceiptForm, AdminReceivedItemForm, clean_side
from .models import AdminReceipt
from .services import generate_voucher_id, save_admin_receipt

VALID_STATUSES = {value for value, _ in STATUS_CHOICES}


def split_payload(data):
    """
    Flatten the nested request body into header values for the form and the
    per-side item lists (None when a side is absent).
    """
    header = {k: v for k, v in data.items() if k in ('client_name', 'voucher_id')}
    if 'client_id' in data:
        header['client'] = data['client_id']

    sides = {}
    for side in ('given', 'received'):
        section = data.get(side)
        if section is None:
            sides[side] = None
            continue
        section = snake_case_keys(section)
        if 'date' in section:
            header[f'{side}_date'] = section['date']
        sides[side] = section.get('items')

    manual = data.get('manual_calculation')
    if manual is not None:
        manual = snake_case_keys(manual)
        for key in ('given_total', 'received_total', 'operation'):
            if key in manual:
                header[f'manual_{key}'] = manual[key]
    return header, sides['given'], sides['received']


def clean_sides(given, received):
    given_items = received_items = None
    if given is not None:
        given_items = clean_side(given, AdminGivenItemForm, 'givenItems')
    if received is not None:
        received_items = clean_side(received, AdminReceivedItemForm, 'receivedItems')
    return given_items, received_items


def check_form(form):
    if form.is_valid():
        return
    if form.has_error('voucher_id', code='unique'):
        raise ApiError("Voucher ID already exists", errors=form_errors(form), status=409)
    raise ValidationFailed(form_errors(form))


def filter_admin_receipts(request, queryset):
    """Apply the ``clientId``, ``q``/``query`` and ``status`` query parameters."""
    client_id = request.GET.get('clientId')
    if client_id:
        if not client_id.isdigit():
            raise ApiError("clientId must be an integer")
        queryset = queryset.filter(client_id=int(client_id))

    query = search_terms(request, 'q', 'query')
    if query:
        queryset = queryset.filter(Q(client_name__icontains=query) | Q(voucher_id__icontains=query))

    status = request.GET.get('status')
    if status:
        if status not in VALID_STATUSES:
            raise ApiError(f"Unknown status '{status}'")
        queryset = queryset.filter(status=status)
    return queryset


class AdminReceiptListView(ApiView):
    """
    GET: list admin receipts (``clientId``, ``q``, ``status`` filters).
    POST: create an admin receipt.
    """

    def get(self, request):
        receipts, meta = paginate(request, filter_admin_receipts(request, AdminReceipt.objects.all()))
        return JsonResponse({'adminReceipts': [r.to_dict(include_items=False) for r in receipts], **meta})

    def post(self, request):
        header, given, received = split_payload(snake_case_keys(self.get_json()))
        form = AdminReceiptForm(header)
        check_form(form)
        given_items, received_items = clean_sides(given, received)

        try:
            receipt = save_admin_receipt(
                form.save(commit=False),
                given_items=given_items or [],
                received_items=received_items or [],
                user=request.user,
            )
        except IntegrityError:
            raise ApiError("Voucher ID already exists", status=409)

        log_audit_action(request, 'create', f"Created admin receipt {receipt.voucher_id}",
                         'admin_receipt', receipt.pk)
        return JsonResponse({'adminReceipt': receipt.to_dict()}, status=201)


class AdminReceiptDetailView(ApiView):
    def get(self, request, pk):
        receipt = get_object_or_404(AdminReceipt, pk=pk)
        return JsonResponse({'adminReceipt': receipt.to_dict()})

    def put(self, request, pk):
        receipt = get_object_or_404(AdminReceipt, pk=pk)
        header, given, received = split_payload(snake_case_keys(self.get_json()))

        values = model_to_dict(receipt, fields=AdminReceiptForm.Meta.fields)
        values.update(header)
        form = AdminReceiptForm(values, instance=receipt)
        check_form(form)
        given_items, received_items = clean_sides(given, received)

        try:
            receipt = save_admin_receipt(
                form.save(commit=False),
                given_items=given_items,
                received_items=received_items,
                user=request.user,
            )
        except IntegrityError:
            raise ApiError("Voucher ID already exists", status=409)

        log_audit_action(request, 'update', f"Updated admin receipt {receipt.voucher_id}",
                         'admin_receipt', receipt.pk)
        return JsonResponse({'adminReceipt': receipt.to_dict()})

    def delete(self, request, pk):
        self.require_staff()
        receipt = get_object_or_404(AdminReceipt, pk=pk)
        voucher_id, receipt_pk = receipt.voucher_id, receipt.pk
        receipt.delete()

        log_audit_action(request, 'delete', f"Deleted admin receipt {voucher_id}", 'admin_receipt', receipt_pk)
        return JsonResponse({'message': "Admin receipt deleted"})


class AdminReceiptSearchView(ApiView):
    def get(self, request):
        receipts = filter_admin_receipts(request, AdminReceipt.objects.all())
        return JsonResponse({'adminReceipts': [r.to_dict(include_items=False) for r in receipts]})


class GenerateVoucherIdView(ApiView):
    def get(self, request):
        return JsonResponse({'voucherId': generate_voucher_id()})
