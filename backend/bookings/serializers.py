"""Serializers for booking-related API endpoints."""

from __future__ import annotations

from rest_framework import serializers

from .models import Booking


class BookingSerializer(serializers.ModelSerializer):
    """Booking row with the property and party details the dashboards show."""

    property_name = serializers.ReadOnlyField(source="property.title")
    property_image_url = serializers.ReadOnlyField(source="property.image_url")
    owner_id = serializers.ReadOnlyField(source="property.owner_id")
    owner_name = serializers.ReadOnlyField(source="property.owner.display_name")
    user_name = serializers.ReadOnlyField(source="user.display_name")
    user_email = serializers.ReadOnlyField(source="user.email")

    class Meta:
        model = Booking
        fields = [
            "id",
            "user",
            "property",
            "property_name",
            "property_image_url",
            "owner_id",
            "owner_name",
            "user_name",
            "user_email",
            "start_date",
            "end_date",
            "status",
            "booking_date",
        ]
        read_only_fields = fields


class BookingSummarySerializer(serializers.Serializer):
    total = serializers.IntegerField()
    upcoming = serializers.IntegerField()
    pending = serializers.IntegerField()
