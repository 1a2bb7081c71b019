"""
Receipt write operations.

Each operation locks the client row, writes the receipt and its items, and
posts the resulting balance movement to the client's ledger in a single
transaction. The opening balance is read from the locked row, never from
the request.
"""

import logging

from django.conf import settings
from django.db import transaction

from apps.clients.models import BalanceEntry
from apps.clients.services import lock_client, post_entry
from apps.core.utils import next_voucher_id
from .models import GivenItem, ReceivedItem, Receipt

logger = logging.getLogger(__name__)


def generate_voucher_id(today=None):
    return next_voucher_id(Receipt.objects.all(), settings.RECEIPT_VOUCHER_PREFIX, today=today)


def _write_items(receipt, given_lines, received_lines):
    for position, line in enumerate(given_lines):
        GivenItem.objects.create(
            receipt=receipt,
            position=position,
            item_name=line.item_name,
            tag=line.tag,
            gross_wt=line.gross_wt,
            stone_wt=line.stone_wt,
            melting_touch=line.melting_touch,
            stone_amt=line.stone_amt,
            item_date=line.item_date,
        )
    for position, line in enumerate(received_lines):
        ReceivedItem.objects.create(
            receipt=receipt,
            position=position,
            received_gold=line.received_gold,
            melting=line.melting,
            item_date=line.item_date,
        )


def create_receipt(receipt, given_lines, received_lines, user=None, expected_version=None):
    """
    Save a new receipt (an unsaved instance carrying header fields) and post
    its balance delta.
    """
    with transaction.atomic():
        client = lock_client(receipt.client_id, expected_version=expected_version)

        receipt.client = client
        receipt.client_info = client.snapshot()
        receipt.opening_balance = client.balance
        if not receipt.voucher_id:
            receipt.voucher_id = generate_voucher_id(receipt.issue_date)
        if user is not None and user.is_authenticated:
            receipt.created_by = user
        receipt.apply_lines(given_lines, received_lines)
        receipt.save()
        _write_items(receipt, given_lines, received_lines)

        post_entry(
            client, receipt.balance_delta, BalanceEntry.RECEIPT,
            description=f"Receipt {receipt.voucher_id}",
            receipt=receipt, user=user,
        )

    logger.info("Created receipt %s for client %s (delta %s)",
                receipt.voucher_id, client.pk, receipt.balance_delta)
    return receipt


def update_receipt(receipt, given_lines, received_lines, user=None, expected_version=None):
    """
    Replace a receipt's items and post the difference between the new and
    the previously recorded delta.
    """
    with transaction.atomic():
        client = lock_client(receipt.client_id, expected_version=expected_version, allow_inactive=True)
        previous_delta = (
            Receipt.objects.select_for_update()
            .values_list('balance_delta', flat=True)
            .get(pk=receipt.pk)
        )

        receipt.apply_lines(given_lines, received_lines)
        receipt.save()
        receipt.given_items.all().delete()
        receipt.received_items.all().delete()
        _write_items(receipt, given_lines, received_lines)

        difference = receipt.balance_delta - previous_delta
        if difference:
            post_entry(
                client, difference, BalanceEntry.RECEIPT_UPDATE,
                description=f"Receipt {receipt.voucher_id} edited",
                receipt=receipt, user=user,
            )

    logger.info("Updated receipt %s (balance change %s)", receipt.voucher_id, difference)
    return receipt


def delete_receipt(receipt, user=None):
    """Reverse a receipt's balance effect and remove it."""
    with transaction.atomic():
        client = lock_client(receipt.client_id, allow_inactive=True)
        recorded_delta = (
            Receipt.objects.select_for_update()
            .values_list('balance_delta', flat=True)
            .get(pk=receipt.pk)
        )
        if recorded_delta:
            post_entry(
                client, -recorded_delta, BalanceEntry.RECEIPT_REVERSAL,
                description=f"Receipt {receipt.voucher_id} deleted",
                receipt=receipt, user=user,
            )
        receipt.delete()

    logger.info("Deleted receipt %s (reversed %s)", receipt.voucher_id, recorded_delta)
