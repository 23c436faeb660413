from django.urls import path

from operator_bookings.api import (
    OperatorBookingCancelView,
    OperatorBookingDeleteView,
    OperatorBookingListView,
)

app_name = "operator_bookings"

urlpatterns = [
    path("", OperatorBookingListView.as_view(), name="operator_booking_list"),
    path(
        "<uuid:pk>/cancel/",
        OperatorBookingCancelView.as_view(),
        name="operator_booking_cancel",
    ),
    path("<uuid:pk>/", OperatorBookingDeleteView.as_view(), name="operator_booking_delete"),
]
