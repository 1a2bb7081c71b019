"""
JSON API views for Receipts module.
"""

import logging

from django.db import IntegrityError
from django.db.models import Q
from django.forms.models import model_to_dict
from django.http import HttpResponse, JsonResponse
from django.shortcuts import get_object_or_404

from apps.clients.models import Client
from apps.clients.views import translate_balance_errors
from apps.core.api import ApiError, ApiView, ValidationFailed, form_errors, paginate, snake_case_keys
from apps.core.utils import log_audit_action, search_terms
from .calculator import STATUS_CHOICES
from .forms import ReceiptForm, ReceiptUpdateForm, clean_items
from .models import Receipt
from .services import create_receipt, delete_receipt, generate_voucher_id, update_receipt
from .utils import generate_receipt_pdf

logger = logging.getLogger(__name__)

VALID_STATUSES = {value for value, _ in STATUS_CHOICES}


def filter_receipts(queryset, query):
    """Substring match on client name, shop name and voucher id."""
    if not query:
        return queryset
    return queryset.filter(
        Q(client_info__clientName__icontains=query) |
        Q(client_info__shopName__icontains=query) |
        Q(client__client_name__icontains=query) |
        Q(client__shop_name__icontains=query) |
        Q(voucher_id__icontains=query)
    )


def check_receipt_form(form):
    if form.is_valid():
        return
    if form.has_error('voucher_id', code='unique'):
        raise ApiError("Voucher ID already exists", errors=form_errors(form), status=409)
    raise ValidationFailed(form_errors(form))


class ReceiptListView(ApiView):
    """
    GET: list receipts filtered by ``q``, ``status`` and ``clientId``.
    POST: create a receipt and post its balance delta to the client ledger.
    """

    def get(self, request):
        queryset = Receipt.objects.select_related('client')
        queryset = filter_receipts(queryset, search_terms(request, 'q', 'query'))

        status = request.GET.get('status')
        if status:
            if status not in VALID_STATUSES:
                raise ApiError(f"Unknown status '{status}'")
            queryset = queryset.filter(status=status)

        client_id = request.GET.get('clientId')
        if client_id:
            if not client_id.isdigit():
                raise ApiError("clientId must be an integer")
            queryset = queryset.filter(client_id=int(client_id))

        receipts, meta = paginate(request, queryset)
        return JsonResponse({
            'receipts': [r.to_dict(include_items=False) for r in receipts],
            **meta,
        })

    def post(self, request):
        data = snake_case_keys(self.get_json())
        if 'client_id' in data and 'client' not in data:
            data['client'] = data['client_id']

        form = ReceiptForm(data)
        check_receipt_form(form)
        given_lines, received_lines = clean_items(data.get('given_items'), data.get('received_items'))

        receipt = form.save(commit=False)
        try:
            with translate_balance_errors():
                receipt = create_receipt(
                    receipt, given_lines, received_lines,
                    user=request.user,
                    expected_version=form.cleaned_data.get('expected_balance_version'),
                )
        except IntegrityError:
            logger.warning("Voucher id collision while creating receipt %s", receipt.voucher_id)
            raise ApiError("Voucher ID already exists", status=409)

        log_audit_action(
            request, 'create',
            f"Created receipt {receipt.voucher_id} for {receipt.client}",
            'receipt', receipt.pk,
        )
        return JsonResponse({
            'receipt': receipt.to_dict(),
            'client': receipt.client.to_dict(),
        }, status=201)


class ReceiptSearchView(ApiView):
    def get(self, request):
        query = search_terms(request, 'query', 'q')
        receipts = filter_receipts(Receipt.objects.select_related('client'), query)
        return JsonResponse({'receipts': [r.to_dict(include_items=False) for r in receipts]})


class ClientReceiptsView(ApiView):
    def get(self, request, client_id):
        client = get_object_or_404(Client, pk=client_id)
        receipts = client.receipts.prefetch_related('given_items', 'received_items')
        return JsonResponse({
            'client': client.to_dict(),
            'receipts': [r.to_dict() for r in receipts],
        })


class GenerateVoucherIdView(ApiView):
    def get(self, request):
        return JsonResponse({'voucherId': generate_voucher_id()})


class ReceiptDetailView(ApiView):
    """
    GET/PUT/DELETE a single receipt. PUT replaces the item lists when either
    is sent; DELETE reverses the balance effect and is limited to staff.
    """

    def get_receipt(self, pk):
        return get_object_or_404(
            Receipt.objects.select_related('client').prefetch_related('given_items', 'received_items'),
            pk=pk,
        )

    def get(self, request, pk):
        return JsonResponse({'receipt': self.get_receipt(pk).to_dict()})

    def put(self, request, pk):
        receipt = self.get_receipt(pk)
        data = snake_case_keys(self.get_json())
        if 'client_id' in data and str(data['client_id']) != str(receipt.client_id):
            raise ApiError("A receipt cannot be moved to another client",
                           errors={'clientId': "Read-only field"})

        fields = ReceiptUpdateForm.Meta.fields
        values = model_to_dict(receipt, fields=fields)
        values.update({k: v for k, v in data.items() if k in fields or k == 'expected_balance_version'})
        form = ReceiptUpdateForm(values, instance=receipt)
        check_receipt_form(form)

        given_lines, received_lines = clean_items(
            data.get('given_items'), data.get('received_items'),
            stored_given=receipt.given_items.all(),
            stored_received=receipt.received_items.all(),
        )

        receipt = form.save(commit=False)
        try:
            with translate_balance_errors():
                receipt = update_receipt(
                    receipt, given_lines, received_lines,
                    user=request.user,
                    expected_version=form.cleaned_data.get('expected_balance_version'),
                )
        except IntegrityError:
            raise ApiError("Voucher ID already exists", status=409)

        log_audit_action(request, 'update', f"Updated receipt {receipt.voucher_id}", 'receipt', receipt.pk)
        receipt = self.get_receipt(receipt.pk)
        return JsonResponse({
            'receipt': receipt.to_dict(),
            'client': receipt.client.to_dict(),
        })

    def delete(self, request, pk):
        self.require_staff()
        receipt = self.get_receipt(pk)
        voucher_id, client = receipt.voucher_id, receipt.client
        receipt_pk = receipt.pk

        with translate_balance_errors():
            delete_receipt(receipt, user=request.user)

        log_audit_action(request, 'delete', f"Deleted receipt {voucher_id}", 'receipt', receipt_pk)
        client.refresh_from_db()
        return JsonResponse({'message': "Receipt deleted", 'client': client.to_dict()})


class ReceiptPdfView(ApiView):
    def get(self, request, pk):
        receipt = get_object_or_404(
            Receipt.objects.prefetch_related('given_items', 'received_items'), pk=pk,
        )
        try:
            pdf_buffer = generate_receipt_pdf(receipt)
        except Exception:
            logger.exception("PDF generation failed for receipt %s", receipt.voucher_id)
            raise ApiError("Could not generate PDF", status=500)

        response = HttpResponse(pdf_buffer, content_type='application/pdf')
        response['Content-Disposition'] = f'attachment; filename="receipt_{receipt.voucher_id}.pdf"'
        return response
