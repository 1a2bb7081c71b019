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
            name='AdminReceipt',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('client_name', models.CharField(blank=True, max_length=255)),
                ('voucher_id', models.CharField(max_length=30, unique=True)),
                ('given_date', models.DateField(blank=True, null=True)),
                ('given_total_pure_weight', models.DecimalField(decimal_places=3, default=Decimal('0'), max_digits=12)),
                ('given_total', models.DecimalField(decimal_places=3, default=Decimal('0'), max_digits=12)),
                ('received_date', models.DateField(blank=True, null=True)),
                ('received_total_ornaments_wt', models.DecimalField(decimal_places=3, default=Decimal('0'), max_digits=12)),
                ('received_total_stone_weight', models.DecimalField(decimal_places=3, default=Decimal('0'), max_digits=12)),
                ('received_total_sub_total', models.DecimalField(decimal_places=3, default=Decimal('0'), max_digits=12)),
                ('received_total', models.DecimalField(decimal_places=3, default=Decimal('0'), max_digits=12)),
                ('manual_given_total', models.DecimalField(decimal_places=3, default=Decimal('0'), max_digits=12)),
                ('manual_received_total', models.DecimalField(decimal_places=3, default=Decimal('0'), max_digits=12)),
                ('manual_operation', models.CharField(choices=[('subtract-given-received', 'Given - Received'), ('subtract-received-given', 'Received - Given'), ('add', 'Given + Received')], default='subtract-given-received', max_length=30)),
                ('manual_result', models.DecimalField(decimal_places=3, default=Decimal('0'), max_digits=12)),
                ('status', models.CharField(choices=[('complete', 'Complete'), ('incomplete', 'Incomplete'), ('empty', 'Empty')], default='empty', max_length=20)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('client', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='admin_receipts', to='clients.client')),
                ('created_by', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='admin_receipts_created', to=settings.AUTH_USER_MODEL)),
            ],
            options={
                'db_table': 'admin_receipts',
                'ordering': ['-created_at'],
                'indexes': [
                    models.Index(fields=['status'], name='admin_receipt_status_idx'),
                ],
            },
        ),
        migrations.CreateModel(
            name='AdminGivenItem',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('position', models.PositiveIntegerField(default=0)),
                ('product_name', models.CharField(max_length=255)),
                ('pure_weight', models.DecimalField(decimal_places=3, max_digits=12)),
                ('pure_percent', models.DecimalField(decimal_places=2, max_digits=5)),
                ('melting', models.DecimalField(decimal_places=2, max_digits=5)),
                ('total', models.DecimalField(decimal_places=3, editable=False, max_digits=12)),
                ('receipt', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='given_items', to='admin_receipts.adminreceipt')),
            ],
            options={
                'db_table': 'admin_receipt_given_items',
                'ordering': ['position', 'id'],
            },
        ),
        migrations.CreateModel(
            name='AdminReceivedItem',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('position', models.PositiveIntegerField(default=0)),
                ('product_name', models.CharField(max_length=255)),
                ('final_ornaments_wt', models.DecimalField(decimal_places=3, max_digits=12)),
                ('stone_weight', models.DecimalField(decimal_places=3, default=Decimal('0'), max_digits=12)),
                ('making_charge_percent', models.DecimalField(decimal_places=2, max_digits=5)),
                ('sub_total', models.DecimalField(decimal_places=3, editable=False, max_digits=12)),
                ('total', models.DecimalField(decimal_places=3, editable=False, max_digits=12)),
                ('receipt', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='received_items', to='admin_receipts.adminreceipt')),
            ],
            options={
                'db_table': 'admin_receipt_received_items',
                'ordering': ['position', 'id'],
            },
        ),
    ]
