"""
Core models for the Swarna application.
Contains models shared across all modules.
"""

from django.conf import settings
from django.db import models


class AuditLog(models.Model):
    """
    Audit trail for every create/update/delete performed through the API.
    """
    user = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.SET_NULL, null=True, blank=True,
                             related_name='audit_logs')
    action_type = models.CharField(max_length=50, db_index=True,
                                   help_text="e.g., create, update, delete, adjust")
    target_type = models.CharField(max_length=50, null=True, blank=True,
                                   help_text="e.g., client, receipt, admin_receipt")
    target_id = models.CharField(max_length=50, null=True, blank=True,
                                 help_text="ID of the target object")
    log_message = models.TextField()
    ip_address = models.GenericIPAddressField(null=True, blank=True)
    timestamp = models.DateTimeField(auto_now_add=True, db_index=True)

    class Meta:
        db_table = 'audit_logs'
        ordering = ['-timestamp']
        indexes = [
            models.Index(fields=['user', '-timestamp'], name='audit_user_ts_idx'),
            models.Index(fields=['action_type', '-timestamp'], name='audit_action_ts_idx'),
        ]

    def __str__(self):
        user_str = self.user.get_username() if self.user else "System"
        return f"{user_str} - {self.action_type} - {self.timestamp}"
