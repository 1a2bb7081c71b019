"""
Django admin configuration for Core models.
"""

from django.contrib import admin
from .models import AuditLog


@admin.register(AuditLog)
class AuditLogAdmin(admin.ModelAdmin):
    list_display = ('timestamp', 'user', 'action_type', 'target_type', 'target_id', 'ip_address')
    list_filter = ('action_type', 'target_type')
    search_fields = ('log_message', 'target_id')
    readonly_fields = ('user', 'action_type', 'target_type', 'target_id', 'log_message',
                       'ip_address', 'timestamp')
    ordering = ('-timestamp',)

    def has_add_permission(self, request):
        return False
