"""
URL Configuration for Swarna project.
"""
from django.contrib import admin
from django.urls import path, include
from django.conf import settings
from django.conf.urls.static import static

urlpatterns = [
    path('admin/', admin.site.urls),

    # JSON API
    path('api/clients/', include('apps.clients.urls')),
    path('api/receipts/', include('apps.receipts.urls')),
    path('api/admin-receipts/', include('apps.admin_receipts.urls')),
    path('api/analytics/', include('apps.dashboard.urls')),
]

# Serve static files in development
if settings.DEBUG:
    urlpatterns += static(settings.STATIC_URL, document_root=settings.STATIC_ROOT)
