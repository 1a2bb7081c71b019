"""
Utility functions for the Swarna application.
Helper functions used across multiple modules.
"""

import logging

from django.utils import timezone

from .models import AuditLog

logger = logging.getLogger(__name__)


def log_audit_action(request, action_type, log_message, target_type=None,
                     target_id=None, user=None):
    """
    Create an audit log entry.

    Args:
        request: HTTP request object (used to get user and IP)
        action_type: Type of action (e.g., 'create', 'update', 'delete', 'adjust')
        log_message: Description of the action
        target_type: Type of object affected (e.g., 'client', 'receipt')
        target_id: ID of the affected object
        user: User object (optional, will use request.user if not provided)

    Returns:
        AuditLog object or None if creation failed
    """
    try:
        if user is None and hasattr(request, 'user') and request.user.is_authenticated:
            user = request.user

        target_id_str = str(target_id) if target_id is not None else None

        return AuditLog.objects.create(
            user=user,
            action_type=action_type,
            target_type=target_type,
            target_id=target_id_str,
            log_message=log_message,
            ip_address=get_client_ip(request),
        )

    except Exception as e:
        # Log error but don't fail the request
        logger.error(f"Failed to create audit log: {str(e)}")
        return None


def get_client_ip(request):
    """
    Get the client's IP address from the request.

    Args:
        request: HTTP request object

    Returns:
        String IP address or None
    """
    if request is None:
        return None
    x_forwarded_for = request.META.get('HTTP_X_FORWARDED_FOR')
    if x_forwarded_for:
        ip = x_forwarded_for.split(',')[0].strip()
    else:
        ip = request.META.get('REMOTE_ADDR')
    return ip or None


def next_voucher_id(queryset, prefix, today=None, field='voucher_id'):
    """
    Next sequential voucher number of the form PREFIX-YYMM-NNNN.

    The sequence restarts every month. Uniqueness is enforced by the
    database; callers generate inside the transaction that saves the row.
    """
    today = today or timezone.localdate()
    base = f"{prefix}-{today:%y%m}-"
    last = (
        queryset.filter(**{f'{field}__startswith': base})
        .order_by(f'-{field}')
        .values_list(field, flat=True)
        .first()
    )
    new_seq = 1
    if last:
        try:
            new_seq = int(last.rsplit('-', 1)[-1]) + 1
        except ValueError:
            new_seq = 1
    return f"{base}{new_seq:04d}"


def search_terms(request, *names):
    """Return the first non-blank query parameter among ``names``, stripped."""
    for name in names:
        value = (request.GET.get(name) or '').strip()
        if value:
            return value
    return ''
