from __future__ import annotations

from datetime import timedelta

from django.db.models import Count
from django.utils import timezone
from rest_framework import serializers
from rest_framework.response import Response

from bookings.models import Booking
from contact.models import ContactMessage
from operator_core.api_base import OperatorAPIView
from properties.models import Property, PropertyReport
from users.models import RoleRequest, User


class OperatorDashboardSerializer(serializers.Serializer):
    total_users = serializers.IntegerField()
    total_properties = serializers.IntegerField()
    pending_properties = serializers.IntegerField()
    pending_role_requests = serializers.IntegerField()
    total_bookings = serializers.IntegerField()
    unseen_messages = serializers.IntegerField()
    pending_reports = serializers.IntegerField()
    users_by_role = serializers.DictField(child=serializers.IntegerField())
    users_by_status = serializers.DictField(child=serializers.IntegerField())
    properties_by_status = serializers.DictField(child=serializers.IntegerField())
    bookings_by_status = serializers.DictField(child=serializers.IntegerField())
    last_7d = serializers.DictField(child=serializers.IntegerField())


def _counts_by(qs, field: str, choices) -> dict[str, int]:
    counts = dict(qs.values(field).annotate(c=Count("pk")).values_list(field, "c"))
    return {value: counts.get(value, 0) for value in choices}


def get_admin_dashboard_stats() -> dict:
    """Headline counts for the admin overview page."""
    seven_days_ago = timezone.now() - timedelta(days=7)

    users_by_role = _counts_by(User.objects.all(), "role", User.Role.values)
    users_by_status = _counts_by(User.objects.all(), "status", User.Status.values)
    properties_by_status = _counts_by(Property.objects.all(), "status", Property.Status.values)
    bookings_by_status = _counts_by(Booking.objects.all(), "status", Booking.Status.values)

    return {
        "total_users": sum(users_by_role.values()),
        "total_properties": sum(properties_by_status.values()),
        "pending_properties": properties_by_status[Property.Status.PENDING],
        "pending_role_requests": RoleRequest.objects.filter(
            status=RoleRequest.Status.PENDING
        ).count(),
        "total_bookings": sum(bookings_by_status.values()),
        "unseen_messages": ContactMessage.objects.filter(
            status=ContactMessage.Status.UNSEEN
        ).count(),
        "pending_reports": PropertyReport.objects.filter(
            status=PropertyReport.Status.PENDING
        ).count(),
        "users_by_role": users_by_role,
        "users_by_status": users_by_status,
        "properties_by_status": properties_by_status,
        "bookings_by_status": bookings_by_status,
        "last_7d": {
            "new_users": User.objects.filter(date_joined__gte=seven_days_ago).count(),
            "new_properties": Property.objects.filter(created_at__gte=seven_days_ago).count(),
            "new_bookings": Booking.objects.filter(booking_date__gte=seven_days_ago).count(),
        },
    }


class OperatorDashboardView(OperatorAPIView):
    http_method_names = ["get"]

    def get(self, request):
        serializer = OperatorDashboardSerializer(get_admin_dashboard_stats())
        return Response(serializer.data)
