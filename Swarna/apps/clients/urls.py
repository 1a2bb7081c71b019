"""
URL configuration for Clients API.
"""

from django.urls import path
from . import views

app_name = 'clients'

urlpatterns = [
    path('', views.ClientListView.as_view(), name='list'),
    path('search/', views.ClientSearchView.as_view(), name='search'),
    path('<int:pk>/', views.ClientDetailView.as_view(), name='detail'),
    path('<int:pk>/ledger/', views.ClientLedgerView.as_view(), name='ledger'),
    path('<int:pk>/adjustments/', views.ClientAdjustmentView.as_view(), name='adjust'),
]
