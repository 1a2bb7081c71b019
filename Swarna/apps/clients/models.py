"""
Models for the Clients module.

A client's ``balance`` is a materialized view of its ledger: every change is
recorded as an append-only ``BalanceEntry`` and applied through
``apps.clients.services``.
"""

from decimal import Decimal

from django.conf import settings
from django.db import models
from django.db.models import Sum

from apps.core.api import number


class Client(models.Model):
    """
    A goldsmith client (shop) with its running metal balance in grams.
    """
    shop_name = models.CharField(max_length=255)
    client_name = models.CharField(max_length=255)
    phone_number = models.CharField(max_length=20)
    address = models.TextField(blank=True)
    email = models.EmailField(blank=True)

    balance = models.DecimalField(max_digits=14, decimal_places=3, default=Decimal('0'),
                                  editable=False, help_text="Grams of fine metal owed")
    balance_version = models.PositiveIntegerField(default=0, editable=False,
                                                  help_text="Incremented on every balance change")

    is_active = models.BooleanField(default=True, help_text="Soft delete flag")
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'clients'
        ordering = ['shop_name', 'client_name']
        indexes = [
            models.Index(fields=['is_active', 'shop_name'], name='client_active_shop_idx'),
        ]

    def __str__(self):
        return f"{self.shop_name} ({self.client_name})"

    def ledger_balance(self):
        """Sum of all ledger deltas; always equals ``balance``."""
        total = self.entries.aggregate(total=Sum('delta'))['total']
        return total if total is not None else Decimal('0')

    def snapshot(self):
        """Denormalized copy stored on receipts."""
        return {
            'clientName': self.client_name,
            'shopName': self.shop_name,
            'phoneNumber': self.phone_number,
            'address': self.address,
        }

    def to_dict(self):
        return {
            'id': self.id,
            'shopName': self.shop_name,
            'clientName': self.client_name,
            'phoneNumber': self.phone_number,
            'address': self.address,
            'email': self.email,
            'balance': number(self.balance),
            'balanceVersion': self.balance_version,
            'isActive': self.is_active,
            'createdAt': self.created_at.isoformat() if self.created_at else None,
            'updatedAt': self.updated_at.isoformat() if self.updated_at else None,
        }


class BalanceEntry(models.Model):
    """
    One movement of a client's balance. Rows are written once and never
    changed; corrections are new rows.
    """
    OPENING = 'opening'
    RECEIPT = 'receipt'
    RECEIPT_UPDATE = 'receipt_update'
    RECEIPT_REVERSAL = 'receipt_reversal'
    ADJUSTMENT = 'adjustment'

    ENTRY_TYPE_CHOICES = [
        (OPENING, 'Opening Balance'),
        (RECEIPT, 'Receipt'),
        (RECEIPT_UPDATE, 'Receipt Update'),
        (RECEIPT_REVERSAL, 'Receipt Reversal'),
        (ADJUSTMENT, 'Manual Adjustment'),
    ]

    client = models.ForeignKey(Client, on_delete=models.PROTECT, related_name='entries')
    receipt = models.ForeignKey('receipts.Receipt', on_delete=models.SET_NULL, null=True, blank=True,
                                related_name='balance_entries')
    entry_type = models.CharField(max_length=20, choices=ENTRY_TYPE_CHOICES)
    delta = models.DecimalField(max_digits=14, decimal_places=3)
    balance_after = models.DecimalField(max_digits=14, decimal_places=3)
    description = models.CharField(max_length=255, blank=True)
    created_by = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.SET_NULL, null=True, blank=True,
                                   related_name='balance_entries')
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'client_balance_entries'
        ordering = ['created_at', 'id']
        verbose_name_plural = 'Balance entries'
        indexes = [
            models.Index(fields=['client', 'created_at'], name='entry_client_created_idx'),
        ]

    def __str__(self):
        return f"{self.client.shop_name}: {self.delta:+} ({self.get_entry_type_display()})"

    def save(self, *args, **kwargs):
        if self.pk is not None:
            raise ValueError("Balance entries are append-only")
        super().save(*args, **kwargs)

    def delete(self, *args, **kwargs):
        raise ValueError("Balance entries are append-only")

    def to_dict(self):
        return {
            'id': self.id,
            'clientId': self.client_id,
            'receiptId': self.receipt_id,
            'entryType': self.entry_type,
            'delta': number(self.delta),
            'balanceAfter': number(self.balance_after),
            'description': self.description,
            'createdBy': self.created_by.get_username() if self.created_by else None,
            'createdAt': self.created_at.isoformat() if self.created_at else None,
        }
