from django.apps import AppConfig


class AdminReceiptsConfig(AppConfig):
    default_auto_field = 'django.db.models.BigAutoField'
    name = 'apps.admin_receipts'
    verbose_name = 'Admin Receipts'
