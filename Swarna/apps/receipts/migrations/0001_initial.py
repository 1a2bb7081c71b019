from decimal import Decimal

from django.conf import settings
from django.db import migrations, models
import django.db.models.deletion


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ('clients', '0001_initial'),
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name='Receipt',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('client_info', models.JSONField(blank=True, default=dict, help_text='Client snapshot at issue time')),
                ('voucher_id', models.CharField(max_length=30, unique=True)),
                ('metal_type', models.CharField(default='Gold', max_length=30)),
                ('issue_date', models.DateField()),
                ('total_gross_wt', models.DecimalField(decimal_places=3, default=Decimal('0'), max_digits=12)),
                ('total_stone_wt', models.DecimalField(decimal_places=3, default=Decimal('0'), max_digits=12)),
                ('total_net_wt', models.DecimalField(decimal_places=3, default=Decimal('0'), max_digits=12)),
                ('total_final_wt', models.DecimalField(decimal_places=3, default=Decimal('0'), max_digits=12)),
                ('total_stone_amt', models.DecimalField(decimal_places=2, default=Decimal('0'), max_digits=12)),
                ('total_received_final_wt', models.DecimalField(decimal_places=3, default=Decimal('0'), max_digits=12)),
                ('opening_balance', models.DecimalField(decimal_places=3, default=Decimal('0'), max_digits=14)),
                ('balance_delta', models.DecimalField(decimal_places=3, default=Decimal('0'), max_digits=14)),
                ('status', models.CharField(choices=[('complete', 'Complete'), ('incomplete', 'Incomplete')], default='incomplete', max_length=20)),
                ('payment_status', models.CharField(choices=[('pending', 'Pending'), ('partial', 'Partially Paid'), ('paid', 'Paid')], default='pending', max_length=20)),
                ('notes', models.TextField(blank=True)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('client', models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name='receipts', to='clients.client')),
                ('created_by', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='receipts_created', to=settings.AUTH_USER_MODEL)),
            ],
            options={
                'db_table': 'receipts',
                'ordering': ['-issue_date', '-created_at'],
                'indexes': [
                    models.Index(fields=['client', '-issue_date'], name='receipt_client_date_idx'),
                    models.Index(fields=['status'], name='receipt_status_idx'),
                ],
            },
        ),
        migrations.CreateModel(
            name='GivenItem',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('position', models.PositiveIntegerField(default=0)),
                ('item_name', models.CharField(max_length=255)),
                ('tag', models.CharField(blank=True, max_length=50)),
                ('gross_wt', models.DecimalField(decimal_places=3, max_digits=12)),
                ('stone_wt', models.DecimalField(decimal_places=3, default=Decimal('0'), max_digits=12)),
                ('melting_touch', models.DecimalField(decimal_places=2, max_digits=5)),
                ('net_wt', models.DecimalField(decimal_places=3, editable=False, max_digits=12)),
                ('final_wt', models.DecimalField(decimal_places=3, editable=False, max_digits=12)),
                ('stone_amt', models.DecimalField(decimal_places=2, default=Decimal('0'), max_digits=12)),
                ('item_date', models.DateField(blank=True, null=True)),
                ('receipt', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='given_items', to='receipts.receipt')),
            ],
            options={
                'db_table': 'receipt_given_items',
                'ordering': ['position', 'id'],
            },
        ),
        migrations.CreateModel(
            name='ReceivedItem',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('position', models.PositiveIntegerField(default=0)),
                ('received_gold', models.DecimalField(decimal_places=3, max_digits=12)),
                ('melting', models.DecimalField(decimal_places=2, max_digits=5)),
                ('final_wt', models.DecimalField(decimal_places=3, editable=False, max_digits=12)),
                ('item_date', models.DateField(blank=True, null=True)),
                ('receipt', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='received_items', to='receipts.receipt')),
            ],
            options={
                'db_table': 'receipt_received_items',
                'ordering': ['position', 'id'],
            },
        ),
    ]
