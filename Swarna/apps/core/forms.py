"""
Form fields shared by the API forms.
"""

from django import forms
from django.utils import timezone
from django.utils.dateparse import parse_datetime


class IsoDateField(forms.DateField):
    """
    DateField that also accepts full ISO timestamps
    (``2024-05-01T00:00:00.000Z``). Aware timestamps are converted to the
    shop's time zone before the date is taken.
    """

    def to_python(self, value):
        if isinstance(value, str) and 'T' in value:
            try:
                parsed = parse_datetime(value.strip().replace('Z', '+00:00'))
            except ValueError:
                parsed = None
            if parsed is not None:
                if timezone.is_aware(parsed):
                    parsed = timezone.localtime(parsed)
                return parsed.date()
        return super().to_python(value)
