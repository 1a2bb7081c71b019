import os
import django
from decouple import config

os.environ.setdefault('DJANGO_SETTINGS_MODULE', 'config.settings')
django.setup()

from django.contrib.auth import get_user_model

User = get_user_model()

username = config('ADMIN_USERNAME', default='admin')
password = config('ADMIN_PASSWORD', default='admin_password_123')

if not User.objects.filter(username=username).exists():
    print("Creating superuser...")
    User.objects.create_superuser(
        username=username,
        email=config('ADMIN_EMAIL', default='admin@example.com'),
        password=password,
    )
    print(f"Superuser created: {username} / {password}")
else:
    print("Superuser already exists.")
