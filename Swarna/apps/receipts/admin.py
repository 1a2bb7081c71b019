"""
Admin configuration for Receipts module.

Receipts change client balances, so the admin shows them read-only; edits go
through the API where the ledger is kept in step.
"""

from django.contrib import admin
from .models import GivenItem, ReceivedItem, Receipt


class GivenItemInline(admin.TabularInline):
    model = GivenItem
    extra = 0
    can_delete = False
    fields = ('position', 'item_name', 'tag', 'gross_wt', 'stone_wt', 'net_wt',
              'melting_touch', 'final_wt', 'stone_amt', 'item_date')
    readonly_fields = fields

    def has_add_permission(self, request, obj=None):
        return False


class ReceivedItemInline(admin.TabularInline):
    model = ReceivedItem
    extra = 0
    can_delete = False
    fields = ('position', 'received_gold', 'melting', 'final_wt', 'item_date')
    readonly_fields = fields

    def has_add_permission(self, request, obj=None):
        return False


@admin.register(Receipt)
class ReceiptAdmin(admin.ModelAdmin):
    list_display = ('voucher_id', 'client', 'issue_date', 'metal_type', 'total_final_wt',
                    'total_received_final_wt', 'balance_delta', 'status', 'payment_status')
    list_filter = ('status', 'payment_status', 'metal_type', 'issue_date')
    search_fields = ('voucher_id', 'client__shop_name', 'client__client_name')
    date_hierarchy = 'issue_date'
    readonly_fields = ('client', 'client_info', 'voucher_id', 'issue_date', 'metal_type',
                       'total_gross_wt', 'total_stone_wt', 'total_net_wt', 'total_final_wt',
                       'total_stone_amt', 'total_received_final_wt', 'opening_balance',
                       'balance_delta', 'status', 'created_by', 'created_at', 'updated_at')
    fields = readonly_fields + ('payment_status', 'notes')
    inlines = [GivenItemInline, ReceivedItemInline]

    def has_add_permission(self, request):
        return False

    def has_delete_permission(self, request, obj=None):
        return False
