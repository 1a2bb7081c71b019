"""
Models for the Receipts module.

A receipt records metal given to the goldsmith and metal received back for
one client. Derived weights and totals are computed by
``apps.receipts.calculator``; the balance carried in from earlier receipts is
kept in ``opening_balance`` and never appears as a line item.
"""

from decimal import Decimal

from django.conf import settings
from django.db import models

from apps.clients.models import Client
from apps.core.api import number
from . import calculator

# Storage precision of weight and amount columns.
WEIGHT = Decimal('0.001')
AMOUNT = Decimal('0.01')


class Receipt(models.Model):
    PAYMENT_PENDING = 'pending'
    PAYMENT_PARTIAL = 'partial'
    PAYMENT_PAID = 'paid'
    PAYMENT_STATUS_CHOICES = [
        (PAYMENT_PENDING, 'Pending'),
        (PAYMENT_PARTIAL, 'Partially Paid'),
        (PAYMENT_PAID, 'Paid'),
    ]

    client = models.ForeignKey(Client, on_delete=models.PROTECT, related_name='receipts')
    client_info = models.JSONField(default=dict, blank=True, help_text="Client snapshot at issue time")
    voucher_id = models.CharField(max_length=30, unique=True)
    metal_type = models.CharField(max_length=30, default='Gold')
    issue_date = models.DateField()

    total_gross_wt = models.DecimalField(max_digits=12, decimal_places=3, default=Decimal('0'))
    total_stone_wt = models.DecimalField(max_digits=12, decimal_places=3, default=Decimal('0'))
    total_net_wt = models.DecimalField(max_digits=12, decimal_places=3, default=Decimal('0'))
    total_final_wt = models.DecimalField(max_digits=12, decimal_places=3, default=Decimal('0'))
    total_stone_amt = models.DecimalField(max_digits=12, decimal_places=2, default=Decimal('0'))
    total_received_final_wt = models.DecimalField(max_digits=12, decimal_places=3, default=Decimal('0'))

    opening_balance = models.DecimalField(max_digits=14, decimal_places=3, default=Decimal('0'))
    balance_delta = models.DecimalField(max_digits=14, decimal_places=3, default=Decimal('0'))

    status = models.CharField(max_length=20, choices=calculator.STATUS_CHOICES, default=calculator.INCOMPLETE)
    payment_status = models.CharField(max_length=20, choices=PAYMENT_STATUS_CHOICES, default=PAYMENT_PENDING)
    notes = models.TextField(blank=True)

    created_by = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.SET_NULL, null=True, blank=True,
                                   related_name='receipts_created')
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'receipts'
        ordering = ['-issue_date', '-created_at']
        indexes = [
            models.Index(fields=['client', '-issue_date'], name='receipt_client_date_idx'),
            models.Index(fields=['status'], name='receipt_status_idx'),
        ]

    def __str__(self):
        return f"{self.voucher_id} - {self.client_info.get('shopName') or self.client_id}"

    @property
    def closing_balance(self):
        return calculator.new_balance(self.opening_balance, self.balance_delta)

    def apply_lines(self, given_lines, received_lines):
        """Recompute totals, delta and status from the full item lists."""
        given = calculator.given_totals(given_lines, quantum=WEIGHT)
        received = calculator.received_totals(received_lines, quantum=WEIGHT)
        self.total_gross_wt = given.gross_wt.quantize(WEIGHT)
        self.total_stone_wt = given.stone_wt.quantize(WEIGHT)
        self.total_net_wt = given.net_wt.quantize(WEIGHT)
        self.total_final_wt = given.final_wt.quantize(WEIGHT)
        self.total_stone_amt = given.stone_amt.quantize(AMOUNT)
        self.total_received_final_wt = received.final_wt.quantize(WEIGHT)
        self.balance_delta = calculator.balance_delta(given.final_wt, received.final_wt).quantize(WEIGHT)
        self.status = calculator.derive_status(received_lines)

    def calculate_totals(self):
        """Recalculate totals from the stored items (without saving)."""
        self.apply_lines(list(self.given_items.all()), list(self.received_items.all()))

    def to_dict(self, include_items=True):
        data = {
            'id': self.id,
            'voucherId': self.voucher_id,
            'clientId': self.client_id,
            'clientInfo': self.client_info,
            'metalType': self.metal_type,
            'issueDate': self.issue_date.isoformat() if self.issue_date else None,
            'status': self.status,
            'paymentStatus': self.payment_status,
            'notes': self.notes,
            'totals': {
                'grossWt': number(self.total_gross_wt),
                'stoneWt': number(self.total_stone_wt),
                'netWt': number(self.total_net_wt),
                'finalWt': number(self.total_final_wt),
                'stoneAmt': number(self.total_stone_amt),
            },
            'receivedTotals': {
                'finalWt': number(self.total_received_final_wt),
            },
            'openingBalance': number(self.opening_balance),
            'balanceDelta': number(self.balance_delta),
            'closingBalance': number(self.closing_balance),
            'createdAt': self.created_at.isoformat() if self.created_at else None,
            'updatedAt': self.updated_at.isoformat() if self.updated_at else None,
        }
        if include_items:
            data['givenItems'] = [item.to_dict() for item in self.given_items.all()]
            data['receivedItems'] = [item.to_dict() for item in self.received_items.all()]
        return data


class GivenItem(models.Model):
    """
    Metal handed to the goldsmith. ``net_wt`` and ``final_wt`` are derived
    from the entered weights on save.
    """
    receipt = models.ForeignKey(Receipt, on_delete=models.CASCADE, related_name='given_items')
    position = models.PositiveIntegerField(default=0)
    item_name = models.CharField(max_length=255)
    tag = models.CharField(max_length=50, blank=True)
    gross_wt = models.DecimalField(max_digits=12, decimal_places=3)
    stone_wt = models.DecimalField(max_digits=12, decimal_places=3, default=Decimal('0'))
    melting_touch = models.DecimalField(max_digits=5, decimal_places=2)
    net_wt = models.DecimalField(max_digits=12, decimal_places=3, editable=False)
    final_wt = models.DecimalField(max_digits=12, decimal_places=3, editable=False)
    stone_amt = models.DecimalField(max_digits=12, decimal_places=2, default=Decimal('0'))
    item_date = models.DateField(null=True, blank=True)

    class Meta:
        db_table = 'receipt_given_items'
        ordering = ['position', 'id']

    def __str__(self):
        return f"{self.item_name}: {self.final_wt}"

    def save(self, *args, **kwargs):
        net_wt, final_wt = calculator.derive_given(self.gross_wt, self.stone_wt, self.melting_touch)
        self.net_wt, self.final_wt = net_wt.quantize(WEIGHT), final_wt.quantize(WEIGHT)
        super().save(*args, **kwargs)

    def to_dict(self):
        return {
            'id': self.id,
            'itemName': self.item_name,
            'tag': self.tag,
            'grossWt': number(self.gross_wt),
            'stoneWt': number(self.stone_wt),
            'meltingTouch': number(self.melting_touch),
            'netWt': number(self.net_wt),
            'finalWt': number(self.final_wt),
            'stoneAmt': number(self.stone_amt),
            'date': self.item_date.isoformat() if self.item_date else None,
        }


class ReceivedItem(models.Model):
    """
    Finished or returned metal handed back to the client.
    """
    receipt = models.ForeignKey(Receipt, on_delete=models.CASCADE, related_name='received_items')
    position = models.PositiveIntegerField(default=0)
    received_gold = models.DecimalField(max_digits=12, decimal_places=3)
    melting = models.DecimalField(max_digits=5, decimal_places=2)
    final_wt = models.DecimalField(max_digits=12, decimal_places=3, editable=False)
    item_date = models.DateField(null=True, blank=True)

    class Meta:
        db_table = 'receipt_received_items'
        ordering = ['position', 'id']

    def __str__(self):
        return f"{self.received_gold} @ {self.melting}%"

    def save(self, *args, **kwargs):
        self.final_wt = calculator.derive_received(self.received_gold, self.melting).quantize(WEIGHT)
        super().save(*args, **kwargs)

    def to_dict(self):
        return {
            'id': self.id,
            'receivedGold': number(self.received_gold),
            'melting': number(self.melting),
            'finalWt': number(self.final_wt),
            'date': self.item_date.isoformat() if self.item_date else None,
        }
