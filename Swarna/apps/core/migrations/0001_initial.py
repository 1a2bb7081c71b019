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
            name='AuditLog',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('action_type', models.CharField(db_index=True, help_text='e.g., create, update, delete, adjust', max_length=50)),
                ('target_type', models.CharField(blank=True, help_text='e.g., client, receipt, admin_receipt', max_length=50, null=True)),
                ('target_id', models.CharField(blank=True, help_text='ID of the target object', max_length=50, null=True)),
                ('log_message', models.TextField()),
                ('ip_address', models.GenericIPAddressField(blank=True, null=True)),
                ('timestamp', models.DateTimeField(auto_now_add=True, db_index=True)),
                ('user', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='audit_logs', to=settings.AUTH_USER_MODEL)),
            ],
            options={
                'db_table': 'audit_logs',
                'ordering': ['-timestamp'],
                'indexes': [
                    models.Index(fields=['user', '-timestamp'], name='audit_user_ts_idx'),
                    models.Index(fields=['action_type', '-timestamp'], name='audit_action_ts_idx'),
                ],
            },
        ),
    ]
