"""
URL configuration for Admin Receipts API.
"""

from django.urls import path
from . import views

app_name = 'admin_receipts'

urlpatterns = [
    path('', views.AdminReceiptListView.as_view(), name='list'),
    path('search/', views.AdminReceiptSearchView.as_view(), name='search'),
    path('generate-voucher-id/', views.GenerateVoucherIdView.as_view(), name='generate_voucher_id'),
    path('<int:pk>/', views.AdminReceiptDetailView.as_view(), name='detail'),
]
