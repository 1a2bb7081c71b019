from decimal import Decimal

from django.conf import settings
from django.db import migrations, models
import django.db.models.deletion


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name='Client',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('shop_name', models.CharField(max_length=255)),
                ('client_name', models.CharField(max_length=255)),
                ('phone_number', models.CharField(max_length=20)),
                ('address', models.TextField(blank=True)),
                ('email', models.EmailField(blank=True, max_length=254)),
                ('balance', models.DecimalField(decimal_places=3, default=Decimal('0'), editable=False, help_text='Grams of fine metal owed', max_digits=14)),
                ('balance_version', models.PositiveIntegerField(default=0, editable=False, help_text='Incremented on every balance change')),
                ('is_active', models.BooleanField(default=True, help_text='Soft delete flag')),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
            ],
            options={
                'db_table': 'clients',
                'ordering': ['shop_name', 'client_name'],
                'indexes': [
                    models.Index(fields=['is_active', 'shop_name'], name='client_active_shop_idx'),
                ],
            },
        ),
        migrations.CreateModel(
            name='BalanceEntry',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('entry_type', models.CharField(choices=[('opening', 'Opening Balance'), ('receipt', 'Receipt'), ('receipt_update', 'Receipt Update'), ('receipt_reversal', 'Receipt Reversal'), ('adjustment', 'Manual Adjustment')], max_length=20)),
                ('delta', models.DecimalField(decimal_places=3, max_digits=14)),
                ('balance_after', models.DecimalField(decimal_places=3, max_digits=14)),
                ('description', models.CharField(blank=True, max_length=255)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('client', models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name='entries', to='clients.client')),
                ('created_by', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='balance_entries', to=settings.AUTH_USER_MODEL)),
            ],
            options={
                'db_table': 'client_balance_entries',
                'ordering': ['created_at', 'id'],
                'verbose_name_plural': 'Balance entries',
                'indexes': [
                    models.Index(fields=['client', 'created_at'], name='entry_client_created_idx'),
                ],
            },
        ),
    ]
