"""
JSON API views for Clients module.
"""

from contextlib import contextmanager

from django.db import transaction
from django.db.models import Q
from django.forms.models import model_to_dict
from django.http import JsonResponse
from django.shortcuts import get_object_or_404

from apps.core.api import ApiError, ApiView, ValidationFailed, form_errors, paginate, snake_case_keys
from apps.core.utils import log_audit_action, search_terms
from .forms import BalanceAdjustmentForm, ClientForm, ClientStatusForm, OpeningBalanceForm
from .models import BalanceEntry, Client
from .services import InactiveClientError, StaleBalanceError, adjust_balance, quantize_weight


@contextmanager
def translate_balance_errors():
    """Turn ledger exceptions into API errors."""
    try:
        yield
    except StaleBalanceError as exc:
        raise ApiError(str(exc), status=409)
    except InactiveClientError as exc:
        raise ApiError(str(exc), status=400)
    except Client.DoesNotExist:
        raise ApiError("Client not found", status=404)


def filter_clients(queryset, query):
    """Case-insensitive substring match on shop name, client name and phone."""
    if not query:
        return queryset
    return queryset.filter(
        Q(shop_name__icontains=query) |
        Q(client_name__icontains=query) |
        Q(phone_number__icontains=query)
    )


class ClientListView(ApiView):
    """
    GET: list clients (``q`` searches, ``includeInactive=1`` shows deactivated).
    POST: create a client, optionally with an opening balance.
    """

    def get(self, request):
        queryset = Client.objects.all()
        if request.GET.get('includeInactive') not in ('1', 'true'):
            queryset = queryset.filter(is_active=True)
        queryset = filter_clients(queryset, search_terms(request, 'q', 'query'))
        clients, meta = paginate(request, queryset)
        return JsonResponse({'clients': [c.to_dict() for c in clients], **meta})

    def post(self, request):
        data = snake_case_keys(self.get_json())
        form = ClientForm(data)
        opening = OpeningBalanceForm(data)
        form_ok, opening_ok = form.is_valid(), opening.is_valid()
        if not (form_ok and opening_ok):
            raise ValidationFailed({**form_errors(form), **form_errors(opening)})

        with transaction.atomic():
            client = form.save()
            balance = opening.cleaned_data.get('balance')
            if balance:
                client, _ = adjust_balance(
                    client.pk, balance, "Opening balance",
                    user=request.user, entry_type=BalanceEntry.OPENING,
                )

        log_audit_action(request, 'create', f"Created client {client}", 'client', client.pk)
        return JsonResponse({'client': client.to_dict()}, status=201)


class ClientSearchView(ApiView):
    def get(self, request):
        query = search_terms(request, 'query', 'q')
        clients = filter_clients(Client.objects.filter(is_active=True), query)
        return JsonResponse({'clients': [c.to_dict() for c in clients]})


class ClientDetailView(ApiView):
    """
    GET/PUT/DELETE a single client. DELETE deactivates (soft delete) and is
    limited to staff.
    """

    def get(self, request, pk):
        client = get_object_or_404(Client, pk=pk)
        return JsonResponse({'client': client.to_dict()})

    def put(self, request, pk):
        client = get_object_or_404(Client, pk=pk)
        data = snake_case_keys(self.get_json())

        if data.get('balance') not in (None, ''):
            try:
                submitted = quantize_weight(str(data['balance']))
            except (ArithmeticError, ValueError):
                raise ApiError("balance must be a number")
            if submitted != client.balance:
                raise ApiError(
                    "balance is read-only; post an adjustment to change it",
                    errors={'balance': "Read-only field"},
                )

        values = model_to_dict(client, fields=ClientForm.Meta.fields)
        values.update({k: v for k, v in data.items() if k in ClientForm.Meta.fields})
        status_form = ClientStatusForm(data)
        if not status_form.is_valid():
            raise ValidationFailed(form_errors(status_form))
        is_active = status_form.cleaned_data['is_active']
        if is_active is not None and is_active != client.is_active:
            self.require_staff()
            client.is_active = is_active

        form = ClientForm(values, instance=client)
        if not form.is_valid():
            raise ValidationFailed(form_errors(form))
        client = form.save()

        log_audit_action(request, 'update', f"Updated client {client}", 'client', client.pk)
        return JsonResponse({'client': client.to_dict()})

    def delete(self, request, pk):
        self.require_staff()
        client = get_object_or_404(Client, pk=pk)
        client.is_active = False
        client.save(update_fields=['is_active', 'updated_at'])

        log_audit_action(request, 'delete', f"Deactivated client {client}", 'client', client.pk)
        return JsonResponse({'message': "Client deactivated", 'client': client.to_dict()})


class ClientLedgerView(ApiView):
    def get(self, request, pk):
        client = get_object_or_404(Client, pk=pk)
        entries = client.entries.select_related('created_by')
        return JsonResponse({
            'client': client.to_dict(),
            'entries': [entry.to_dict() for entry in entries],
            'ledgerBalance': float(client.ledger_balance()),
        })


class ClientAdjustmentView(ApiView):
    """
    Manual balance correction. Staff only; ``expectedVersion`` guards
    against adjusting a balance that moved since the caller read it.
    """

    def post(self, request, pk):
        self.require_staff()
        client = get_object_or_404(Client, pk=pk)
        form = BalanceAdjustmentForm(snake_case_keys(self.get_json()))
        if not form.is_valid():
            raise ValidationFailed(form_errors(form))

        with translate_balance_errors():
            client, entry = adjust_balance(
                client.pk,
                form.cleaned_data['delta'],
                form.cleaned_data['description'],
                user=request.user,
                expected_version=form.cleaned_data.get('expected_version'),
            )

        log_audit_action(
            request, 'adjust',
            f"Adjusted balance of {client} by {entry.delta}: {entry.description}",
            'client', client.pk,
        )
        return JsonResponse({'client': client.to_dict(), 'entry': entry.to_dict()}, status=201)
