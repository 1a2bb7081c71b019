"""
URL configuration for Receipts API.
"""

from django.urls import path
from . import views

app_name = 'receipts'

urlpatterns = [
    path('', views.ReceiptListView.as_view(), name='list'),
    path('search/', views.ReceiptSearchView.as_view(), name='search'),
    path('generate-voucher-id/', views.GenerateVoucherIdView.as_view(), name='generate_voucher_id'),
    path('client/<int:client_id>/', views.ClientReceiptsView.as_view(), name='by_client'),
    path('<int:pk>/', views.ReceiptDetailView.as_view(), name='detail'),
    path('<int:pk>/pdf/', views.ReceiptPdfView.as_view(), name='pdf'),
]
