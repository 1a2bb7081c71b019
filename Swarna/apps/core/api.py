"""
Shared building blocks for the JSON API views.

Every API view extends ``ApiView``: it requires an authenticated user,
parses JSON bodies, and turns domain errors into ``{"message": ...}``
responses with the matching status code.
"""

import json
import logging
import re
from decimal import Decimal

from django.conf import settings
from django.contrib.auth.mixins import LoginRequiredMixin
from django.core.exceptions import PermissionDenied
from django.core.paginator import EmptyPage, Paginator
from django.http import Http404, JsonResponse
from django.views.generic import View

logger = logging.getLogger(__name__)

_CAMEL_BOUNDARY = re.compile(r'(?<!^)(?=[A-Z])')


class ApiError(Exception):
    """An error that maps directly onto an HTTP error response."""

    status = 400

    def __init__(self, message, errors=None, status=None):
        super().__init__(message)
        self.message = message
        self.errors = errors
        if status is not None:
            self.status = status

    def as_response(self):
        return json_error(self.message, status=self.status, errors=self.errors)


class ValidationFailed(ApiError):
    """Raised when submitted data fails form validation."""

    def __init__(self, errors, message="Validation failed"):
        super().__init__(message, errors=errors, status=400)


def json_error(message, status=400, errors=None):
    body = {'message': message}
    if errors:
        body['errors'] = errors
    return JsonResponse(body, status=status)


def camel_to_snake(name):
    return _CAMEL_BOUNDARY.sub('_', name).lower()


def snake_case_keys(data):
    """Convert the top-level camelCase keys of a payload dict to snake_case."""
    if not isinstance(data, dict):
        raise ApiError("Expected a JSON object")
    return {camel_to_snake(key): value for key, value in data.items()}


def number(value):
    """Render a Decimal (or None) as a JSON number."""
    if value is None:
        return None
    if isinstance(value, Decimal):
        return float(value)
    return value


def form_errors(form):
    """Flatten a Django form's errors into a field -> first message map."""
    return {field: errors[0] for field, errors in form.errors.items()}


def paginate(request, queryset):
    """
    Slice ``queryset`` by the ``page`` query parameter.

    Returns (objects, meta) where meta carries count/page/numPages.
    """
    paginator = Paginator(queryset, settings.API_PAGE_SIZE)
    try:
        page_number = int(request.GET.get('page') or 1)
    except (TypeError, ValueError):
        raise ApiError("page must be an integer")
    try:
        page = paginator.page(page_number)
    except EmptyPage:
        raise ApiError(f"Page {page_number} is out of range", status=404)
    meta = {
        'count': paginator.count,
        'page': page.number,
        'numPages': paginator.num_pages,
    }
    return list(page.object_list), meta


class ApiLoginRequiredMixin(LoginRequiredMixin):
    """LoginRequiredMixin that answers with 401 JSON instead of a redirect."""

    def handle_no_permission(self):
        if self.request.user.is_authenticated:
            return json_error("Permission denied", status=403)
        return json_error("Authentication required", status=401)


class ApiView(ApiLoginRequiredMixin, View):
    """Base class for JSON API endpoints."""

    def dispatch(self, request, *args, **kwargs):
        try:
            return super().dispatch(request, *args, **kwargs)
        except ApiError as exc:
            return exc.as_response()
        except Http404 as exc:
            return json_error(str(exc) or "Not found", status=404)
        except PermissionDenied as exc:
            return json_error(str(exc) or "Permission denied", status=403)

    def require_staff(self):
        if not self.request.user.is_staff:
            raise PermissionDenied("Only staff members can perform this action")

    def get_json(self):
        """Parse the request body as a JSON object."""
        if not self.request.body:
            return {}
        try:
            payload = json.loads(self.request.body)
        except (ValueError, UnicodeDecodeError):
            raise ApiError("Invalid JSON body")
        if not isinstance(payload, dict):
            raise ApiError("Expected a JSON object")
        return payload
