import django_filters as filters
from django.utils import timezone

from bookings.models import Booking


class OperatorBookingFilter(filters.FilterSet):
    status = filters.ChoiceFilter(choices=Booking.Status.choices)
    booked_after = filters.IsoDateTimeFilter(field_name="booking_date", lookup_expr="gte")
    booked_before = filters.IsoDateTimeFilter(field_name="booking_date", lookup_expr="lte")
    owner = filters.NumberFilter(field_name="property__owner_id")
    renter = filters.NumberFilter(field_name="user_id")
    property = filters.UUIDFilter(field_name="property_id")
    upcoming = filters.BooleanFilter(method="filter_upcoming")

    class Meta:
        model = Booking
        fields = ["status", "owner", "renter", "property", "upcoming"]

    def filter_upcoming(self, queryset, name, value):
        if value is None:
            return queryset
        upcoming_q = {"status": Booking.Status.APPROVED, "start_date__gte": timezone.localdate()}
        if value:
            return queryset.filter(**upcoming_q)
        return queryset.exclude(**upcoming_q)
