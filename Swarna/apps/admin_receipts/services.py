"""
Admin receipt write operations.
"""

import logging

from django.conf import settings
from django.db import transaction

from apps.core.utils import next_voucher_id
from .models import AdminGivenItem, AdminReceivedItem, AdminReceipt

logger = logging.getLogger(__name__)


def generate_voucher_id(today=None):
    return next_voucher_id(AdminReceipt.objects.all(), settings.ADMIN_RECEIPT_VOUCHER_PREFIX, today=today)


def save_admin_receipt(receipt, given_items=None, received_items=None, user=None):
    """
    Save an admin receipt. A side whose item list is None is left as stored,
    so the given and received sides can be saved independently.
    """
    with transaction.atomic():
        if not receipt.voucher_id:
            receipt.voucher_id = generate_voucher_id()
        if receipt.pk is None and user is not None and user.is_authenticated:
            receipt.created_by = user
        receipt.save()

        if given_items is not None:
            receipt.given_items.all().delete()
            for position, data in enumerate(given_items):
                AdminGivenItem.objects.create(receipt=receipt, position=position, **data)
        if received_items is not None:
            receipt.received_items.all().delete()
            for position, data in enumerate(received_items):
                AdminReceivedItem.objects.create(receipt=receipt, position=position, **data)

        receipt.recalculate()
        receipt.save()

    logger.info("Saved admin receipt %s (%s)", receipt.voucher_id, receipt.status)
    return receipt
