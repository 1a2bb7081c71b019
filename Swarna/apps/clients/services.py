"""
Balance ledger operations.

Every change to ``Client.balance`` goes through ``post_entry`` on a client
row locked with ``select_for_update`` inside ``transaction.atomic``. Callers
that write other records in the same transaction (receipts) lock the client
first with ``lock_client`` and post afterwards, so both commit together.
"""

import logging
from decimal import Decimal

from django.db import transaction

from .models import BalanceEntry, Client

logger = logging.getLogger(__name__)

WEIGHT_QUANTUM = Decimal('0.001')


class BalanceError(Exception):
    """Base class for ledger errors."""


class StaleBalanceError(BalanceError):
    """The caller's view of the balance is older than the stored one."""

    def __init__(self, client, expected_version):
        self.client = client
        self.expected_version = expected_version
        super().__init__(
            f"Balance for {client} changed (version {client.balance_version}, "
            f"expected {expected_version}); reload and retry"
        )


class InactiveClientError(BalanceError):
    """Balance movements are not accepted for deactivated clients."""

    def __init__(self, client):
        self.client = client
        super().__init__(f"Client {client} is inactive")


def quantize_weight(value):
    return Decimal(value).quantize(WEIGHT_QUANTUM)


def lock_client(client_id, expected_version=None, allow_inactive=False):
    """
    Fetch and lock a client row. Must run inside ``transaction.atomic()``.

    Raises Client.DoesNotExist, InactiveClientError or StaleBalanceError.
    """
    client = Client.objects.select_for_update().get(pk=client_id)
    if not allow_inactive and not client.is_active:
        raise InactiveClientError(client)
    if expected_version is not None and int(expected_version) != client.balance_version:
        logger.warning(
            "Stale balance version for client %s: expected %s, stored %s",
            client.pk, expected_version, client.balance_version,
        )
        raise StaleBalanceError(client, expected_version)
    return client


def post_entry(client, delta, entry_type, description='', receipt=None, user=None):
    """
    Append a ledger entry for a locked client and update its materialized
    balance from the locked row.
    """
    delta = quantize_weight(delta)
    client.balance = quantize_weight(client.balance + delta)
    client.balance_version += 1
    client.save(update_fields=['balance', 'balance_version', 'updated_at'])

    entry = BalanceEntry.objects.create(
        client=client,
        receipt=receipt,
        entry_type=entry_type,
        delta=delta,
        balance_after=client.balance,
        description=description[:255],
        created_by=user if user is not None and user.is_authenticated else None,
    )
    logger.info(
        "Ledger %s for client %s: %s -> balance %s (v%s)",
        entry_type, client.pk, delta, client.balance, client.balance_version,
    )
    return entry


def adjust_balance(client_id, delta, description, user=None, expected_version=None,
                   entry_type=BalanceEntry.ADJUSTMENT):
    """Post a standalone balance movement (manual adjustment or opening balance)."""
    with transaction.atomic():
        client = lock_client(client_id, expected_version=expected_version)
        entry = post_entry(client, delta, entry_type, description=description, user=user)
    return client, entry
