"""
Admin configuration for Clients module.
"""

from django.contrib import admin
from .models import BalanceEntry, Client


class BalanceEntryInline(admin.TabularInline):
    model = BalanceEntry
    extra = 0
    can_delete = False
    fields = ('created_at', 'entry_type', 'delta', 'balance_after', 'receipt', 'description', 'created_by')
    readonly_fields = fields

    def has_add_permission(self, request, obj=None):
        return False


@admin.register(Client)
class ClientAdmin(admin.ModelAdmin):
    list_display = ('shop_name', 'client_name', 'phone_number', 'balance', 'is_active', 'created_at')
    list_filter = ('is_active',)
    search_fields = ('shop_name', 'client_name', 'phone_number')
    readonly_fields = ('balance', 'balance_version', 'created_at', 'updated_at')
    inlines = [BalanceEntryInline]


@admin.register(BalanceEntry)
class BalanceEntryAdmin(admin.ModelAdmin):
    list_display = ('created_at', 'client', 'entry_type', 'delta', 'balance_after', 'receipt')
    list_filter = ('entry_type',)
    search_fields = ('client__shop_name', 'client__client_name', 'description')

    def has_add_permission(self, request):
        return False

    def has_change_permission(self, request, obj=None):
        return False

    def has_delete_permission(self, request, obj=None):
        return False
