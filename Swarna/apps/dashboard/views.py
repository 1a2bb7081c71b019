"""
Analytics views for the dashboard.
Aggregates over receipts and client balances; all weights are fine-metal grams.
"""

import logging
from datetime import date, timedelta

from django.db.models import Count, Q, Sum
from django.db.models.functions import ExtractMonth
from django.http import JsonResponse
from django.utils import timezone
from django.utils.dateparse import parse_date

from apps.admin_receipts.models import AdminReceipt
from apps.clients.models import Client
from apps.core.api import ApiError, ApiView, number
from apps.receipts.calculator import COMPLETE, INCOMPLETE, ZERO
from apps.receipts.models import Receipt

logger = logging.getLogger(__name__)


def weight(value):
    return number(value if value is not None else ZERO)


def monthly_weights(year):
    """Given and received fine weight per month of ``year``, months 1-12."""
    rows = (
        Receipt.objects.filter(issue_date__year=year)
        .annotate(month=ExtractMonth('issue_date'))
        .values('month')
        .annotate(given=Sum('total_final_wt'), received=Sum('total_received_final_wt'), count=Count('id'))
        .order_by('month')
    )
    by_month = {row['month']: row for row in rows}
    result = []
    for month in range(1, 13):
        row = by_month.get(month, {})
        result.append({
            'month': month,
            'totalWeight': weight(row.get('given')),
            'receivedWeight': weight(row.get('received')),
            'count': row.get('count', 0),
        })
    return result


class DashboardStatsView(ApiView):
    def get(self, request):
        clients = Client.objects.aggregate(
            total=Count('id'),
            active=Count('id', filter=Q(is_active=True)),
            outstanding=Sum('balance', filter=Q(is_active=True)),
        )
        receipts = Receipt.objects.aggregate(
            total=Count('id'),
            complete=Count('id', filter=Q(status=COMPLETE)),
            incomplete=Count('id', filter=Q(status=INCOMPLETE)),
            given=Sum('total_final_wt'),
            received=Sum('total_received_final_wt'),
        )
        today = timezone.localdate()
        this_month = Receipt.objects.filter(issue_date__year=today.year, issue_date__month=today.month)

        recent = Receipt.objects.select_related('client')[:5]
        return JsonResponse({
            'totalClients': clients['total'],
            'activeClients': clients['active'],
            'outstandingBalance': weight(clients['outstanding']),
            'totalReceipts': receipts['total'],
            'receiptsByStatus': {
                COMPLETE: receipts['complete'],
                INCOMPLETE: receipts['incomplete'],
            },
            'receiptsThisMonth': this_month.count(),
            'totalGivenWeight': weight(receipts['given']),
            'totalReceivedWeight': weight(receipts['received']),
            'totalAdminReceipts': AdminReceipt.objects.count(),
            'recentReceipts': [r.to_dict(include_items=False) for r in recent],
        })


class MetalTypeDistributionView(ApiView):
    def get(self, request):
        rows = (
            Receipt.objects.values('metal_type')
            .annotate(count=Count('id'), weight=Sum('total_final_wt'))
            .order_by('-count', 'metal_type')
        )
        return JsonResponse({
            'metalTypes': [
                {'type': row['metal_type'], 'count': row['count'], 'totalWeight': weight(row['weight'])}
                for row in rows
            ],
        })


class SalesByDateView(ApiView):
    """Per-day given and received fine weight between ``startDate`` and ``endDate``."""

    def get(self, request):
        today = timezone.localdate()
        end = self._date_param('endDate', today)
        start = self._date_param('startDate', end - timedelta(days=29))
        if start > end:
            raise ApiError("startDate must not be after endDate")

        rows = (
            Receipt.objects.filter(issue_date__range=(start, end))
            .values('issue_date')
            .annotate(given=Sum('total_final_wt'), received=Sum('total_received_final_wt'), count=Count('id'))
            .order_by('issue_date')
        )
        return JsonResponse({
            'startDate': start.isoformat(),
            'endDate': end.isoformat(),
            'days': [
                {
                    'date': row['issue_date'].isoformat(),
                    'givenWeight': weight(row['given']),
                    'receivedWeight': weight(row['received']),
                    'count': row['count'],
                }
                for row in rows
            ],
        })

    def _date_param(self, name, default):
        raw = self.request.GET.get(name)
        if not raw:
            return default
        try:
            value = parse_date(raw[:10])
        except ValueError:
            value = None
        if value is None:
            raise ApiError(f"{name} must be a date (YYYY-MM-DD)")
        return value


class YearlyComparisonView(ApiView):
    def get(self, request):
        raw_year = request.GET.get('year')
        if raw_year:
            if not raw_year.isdigit():
                raise ApiError("year must be an integer")
            year = int(raw_year)
            if not date.min.year < year <= date.max.year:
                raise ApiError("year is out of range")
        else:
            year = timezone.localdate().year

        return JsonResponse({
            'year': year,
            'currentYear': monthly_weights(year),
            'previousYear': monthly_weights(year - 1),
        })
