"""API viewset for bookings."""

from __future__ import annotations

import logging

from rest_framework import status, viewsets
from rest_framework.decorators import action
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from core import view_cache

from . import services
from .models import Booking
from .serializers import BookingSerializer, BookingSummarySerializer

logger = logging.getLogger(__name__)


def _status_filter(request, allowed) -> str | None:
    value = (request.query_params.get("status") or "all").strip().lower()
    return value if value in allowed else None


def _invalid_filter_response():
    return Response(
        {"detail": "Invalid status filter."},
        status=status.HTTP_400_BAD_REQUEST,
    )


class BookingViewSet(viewsets.ViewSet):
    """
    Bookings seen from both sides.

    ``list`` returns the caller's own bookings as a renter, ``received`` the
    bookings made on the caller's properties. Transitions are detail actions.
    """

    permission_classes = [IsAuthenticated]
    lookup_value_regex = "[0-9a-fA-F-]{36}"

    def list(self, request):
        status_filter = _status_filter(request, services.STATUS_FILTERS)
        if status_filter is None:
            return _invalid_filter_response()

        def _produce():
            bookings = services.get_user_bookings(request.user.id, status_filter)
            return list(BookingSerializer(bookings, many=True).data)

        payload = view_cache.cached_view(
            view_cache.USER_BOOKINGS, request.user.id, {"status": status_filter}, _produce
        )
        return Response(payload)

    @action(detail=False, methods=["get"], url_path="received")
    def received(self, request):
        status_filter = _status_filter(request, ("all", *Booking.Status.values))
        if status_filter is None:
            return _invalid_filter_response()

        def _produce():
            bookings = services.get_owner_received_bookings(request.user.id, status_filter)
            return list(BookingSerializer(bookings, many=True).data)

        payload = view_cache.cached_view(
            view_cache.OWNER_BOOKINGS, request.user.id, {"status": status_filter}, _produce
        )
        return Response(payload)

    @action(detail=False, methods=["get"], url_path="summary")
    def summary(self, request):
        def _produce():
            summary = services.get_user_bookings_summary(request.user.id)
            return dict(BookingSummarySerializer(summary).data)

        payload = view_cache.cached_view(view_cache.LAYOUT, request.user.id, None, _produce)
        return Response(payload)

    def _respond(self, result):
        return Response(result.as_dict(), status=result.http_status)

    @action(detail=True, methods=["post"], url_path="approve")
    def approve(self, request, pk=None):
        """Approve a pending booking (property owner only)."""
        return self._respond(services.approve_booking(pk, request.user.id))

    @action(detail=True, methods=["post"], url_path="reject")
    def reject(self, request, pk=None):
        """Reject a pending booking (property owner only)."""
        return self._respond(services.reject_booking(pk, request.user.id))

    @action(detail=True, methods=["post"], url_path="cancel")
    def cancel(self, request, pk=None):
        """Cancel a pending or approved booking (renter only)."""
        return self._respond(services.cancel_booking(pk, request.user.id))
