"""
Models for the Admin Receipts module.

An admin receipt is a work sheet kept by the shop: pure metal handed over on
the given side, finished ornaments on the received side, and a free-form
manual calculation. It is not part of the client ledger.
"""

from decimal import Decimal

from django.conf import settings
from django.db import models

from apps.clients.models import Client
from apps.core.api import number
from apps.receipts.models import WEIGHT
from . import calculator


class AdminReceipt(models.Model):
    client = models.ForeignKey(Client, on_delete=models.SET_NULL, null=True, blank=True,
                               related_name='admin_receipts')
    client_name = models.CharField(max_length=255, blank=True)
    voucher_id = models.CharField(max_length=30, unique=True)

    given_date = models.DateField(null=True, blank=True)
    given_total_pure_weight = models.DecimalField(max_digits=12, decimal_places=3, default=Decimal('0'))
    given_total = models.DecimalField(max_digits=12, decimal_places=3, default=Decimal('0'))

    received_date = models.DateField(null=True, blank=True)
    received_total_ornaments_wt = models.DecimalField(max_digits=12, decimal_places=3, default=Decimal('0'))
    received_total_stone_weight = models.DecimalField(max_digits=12, decimal_places=3, default=Decimal('0'))
    received_total_sub_total = models.DecimalField(max_digits=12, decimal_places=3, default=Decimal('0'))
    received_total = models.DecimalField(max_digits=12, decimal_places=3, default=Decimal('0'))

    manual_given_total = models.DecimalField(max_digits=12, decimal_places=3, default=Decimal('0'))
    manual_received_total = models.DecimalField(max_digits=12, decimal_places=3, default=Decimal('0'))
    manual_operation = models.CharField(max_length=30, choices=calculator.OPERATION_CHOICES,
                                        default=calculator.SUBTRACT_GIVEN_RECEIVED)
    manual_result = models.DecimalField(max_digits=12, decimal_places=3, default=Decimal('0'))

    status = models.CharField(max_length=20, choices=calculator.STATUS_CHOICES, default=calculator.EMPTY)
    created_by = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.SET_NULL, null=True, blank=True,
                                   related_name='admin_receipts_created')
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'admin_receipts'
        ordering = ['-created_at']
        indexes = [
            models.Index(fields=['status'], name='admin_receipt_status_idx'),
        ]

    def __str__(self):
        return f"{self.voucher_id} - {self.client_name}"

    def recalculate(self):
        """Recompute side totals, manual result and status from stored items."""
        given = list(self.given_items.all())
        received = list(self.received_items.all())

        given_totals = calculator.given_side_totals(given)
        self.given_total_pure_weight = given_totals.total_pure_weight.quantize(WEIGHT)
        self.given_total = given_totals.total.quantize(WEIGHT)

        received_totals = calculator.received_side_totals(received)
        self.received_total_ornaments_wt = received_totals.total_ornaments_wt.quantize(WEIGHT)
        self.received_total_stone_weight = received_totals.total_stone_weight.quantize(WEIGHT)
        self.received_total_sub_total = received_totals.total_sub_total.quantize(WEIGHT)
        self.received_total = received_totals.total.quantize(WEIGHT)

        self.manual_result = calculator.manual_result(
            self.manual_given_total, self.manual_received_total, self.manual_operation,
        ).quantize(WEIGHT)
        self.status = calculator.derive_status(len(given), len(received))

    def to_dict(self, include_items=True):
        data = {
            'id': self.id,
            'voucherId': self.voucher_id,
            'clientId': self.client_id,
            'clientName': self.client_name,
            'status': self.status,
            'given': {
                'date': self.given_date.isoformat() if self.given_date else None,
                'totalPureWeight': number(self.given_total_pure_weight),
                'total': number(self.given_total),
            },
            'received': {
                'date': self.received_date.isoformat() if self.received_date else None,
                'totalOrnamentsWt': number(self.received_total_ornaments_wt),
                'totalStoneWeight': number(self.received_total_stone_weight),
                'totalSubTotal': number(self.received_total_sub_total),
                'total': number(self.received_total),
            },
            'manualCalculation': {
                'givenTotal': number(self.manual_given_total),
                'receivedTotal': number(self.manual_received_total),
                'operation': self.manual_operation,
                'result': number(self.manual_result),
            },
            'createdAt': self.created_at.isoformat() if self.created_at else None,
            'updatedAt': self.updated_at.isoformat() if self.updated_at else None,
        }
        if include_items:
            data['given']['items'] = [item.to_dict() for item in self.given_items.all()]
            data['received']['items'] = [item.to_dict() for item in self.received_items.all()]
        return data


class AdminGivenItem(models.Model):
    receipt = models.ForeignKey(AdminReceipt, on_delete=models.CASCADE, related_name='given_items')
    position = models.PositiveIntegerField(default=0)
    product_name = models.CharField(max_length=255)
    pure_weight = models.DecimalField(max_digits=12, decimal_places=3)
    pure_percent = models.DecimalField(max_digits=5, decimal_places=2)
    melting = models.DecimalField(max_digits=5, decimal_places=2)
    total = models.DecimalField(max_digits=12, decimal_places=3, editable=False)

    class Meta:
        db_table = 'admin_receipt_given_items'
        ordering = ['position', 'id']

    def __str__(self):
        return f"{self.product_name}: {self.total}"

    def save(self, *args, **kwargs):
        self.total = calculator.given_item_total(self.pure_weight, self.pure_percent, self.melting).quantize(WEIGHT)
        super().save(*args, **kwargs)

    def to_dict(self):
        return {
            'id': self.id,
            'productName': self.product_name,
            'pureWeight': number(self.pure_weight),
            'purePercent': number(self.pure_percent),
            'melting': number(self.melting),
            'total': number(self.total),
        }


class AdminReceivedItem(models.Model):
    receipt = models.ForeignKey(AdminReceipt, on_delete=models.CASCADE, related_name='received_items')
    position = models.PositiveIntegerField(default=0)
    product_name = models.CharField(max_length=255)
    final_ornaments_wt = models.DecimalField(max_digits=12, decimal_places=3)
    stone_weight = models.DecimalField(max_digits=12, decimal_places=3, default=Decimal('0'))
    making_charge_percent = models.DecimalField(max_digits=5, decimal_places=2)
    sub_total = models.DecimalField(max_digits=12, decimal_places=3, editable=False)
    total = models.DecimalField(max_digits=12, decimal_places=3, editable=False)

    class Meta:
        db_table = 'admin_receipt_received_items'
        ordering = ['position', 'id']

    def __str__(self):
        return f"{self.product_name}: {self.total}"

    def save(self, *args, **kwargs):
        sub_total, total = calculator.received_item_totals(
            self.final_ornaments_wt, self.stone_weight, self.making_charge_percent,
        )
        self.sub_total, self.total = sub_total.quantize(WEIGHT), total.quantize(WEIGHT)
        super().save(*args, **kwargs)

    def to_dict(self):
        return {
            'id': self.id,
            'productName': self.product_name,
            'finalOrnamentsWt': number(self.final_ornaments_wt),
            'stoneWeight': number(self.stone_weight),
            'makingChargePercent': number(self.making_charge_percent),
            'subTotal': number(self.sub_total),
            'total': number(self.total),
        }
