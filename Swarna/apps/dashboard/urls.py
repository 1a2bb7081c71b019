"""
URL configuration for dashboard analytics API.
"""

from django.urls import path
from . import views

app_name = 'dashboard'

urlpatterns = [
    path('dashboard/', views.DashboardStatsView.as_view(), name='stats'),
    path('sales/', views.SalesByDateView.as_view(), name='sales'),
    path('metal-types/', views.MetalTypeDistributionView.as_view(), name='metal_types'),
    path('yearly-comparison/', views.YearlyComparisonView.as_view(), name='yearly_comparison'),
]
