from django.contrib import admin
from .models import AdminGivenItem, AdminReceivedItem, AdminReceipt


class AdminGivenItemInline(admin.TabularInline):
    model = AdminGivenItem
    extra = 0
    fields = ('position', 'product_name', 'pure_weight', 'pure_percent', 'melting', 'total')
    readonly_fields = ('total',)


class AdminReceivedItemInline(admin.TabularInline):
    model = AdminReceivedItem
    extra = 0
    fields = ('position', 'product_name', 'final_ornaments_wt', 'stone_weight',
              'making_charge_percent', 'sub_total', 'total')
    readonly_fields = ('sub_total', 'total')


@admin.register(AdminReceipt)
class AdminReceiptAdmin(admin.ModelAdmin):
    list_display = ('voucher_id', 'client_name', 'given_date', 'received_date',
                    'given_total', 'received_total', 'status')
    list_filter = ('status',)
    search_fields = ('voucher_id', 'client_name')
    readonly_fields = ('given_total_pure_weight', 'given_total', 'received_total_ornaments_wt',
                       'received_total_stone_weight', 'received_total_sub_total', 'received_total',
                       'manual_result', 'status', 'created_by', 'created_at', 'updated_at')
    inlines = [AdminGivenItemInline, AdminReceivedItemInline]

    def save_related(self, request, form, formsets, change):
        super().save_related(request, form, formsets, change)
        form.instance.recalculate()
        form.instance.save()
