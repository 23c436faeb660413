import pytest

from bookings.models import Booking
from notifications.models import Notification
from operator_core.models import OperatorAuditEvent
from operator_core.permissions import OPERATOR_MODERATOR, OPERATOR_SUPPORT

pytestmark = [pytest.mark.django_db, pytest.mark.usefixtures("enable_operator_routes")]

OPS_HOST = "ops.example.com"


@pytest.fixture
def ops(client_for, admin_user):
    return client_for(admin_user, host=OPS_HOST)


def test_list_filters_by_status_and_owner(ops, booking_factory, owner_user):
    pending = booking_factory()
    booking_factory(status=Booking.Status.CANCELLED, days_ahead=30)

    resp = ops.get("/api/operator/bookings/", {"status": "pending", "owner": owner_user.pk})

    assert resp.status_code == 200
    assert [row["id"] for row in resp.data["results"]] == [str(pending.id)]


def test_support_cancels_with_reason(client_for, operator_factory, booking_factory, renter_user):
    booking = booking_factory(status=Booking.Status.APPROVED)
    client = client_for(operator_factory(OPERATOR_SUPPORT), host=OPS_HOST)
    url = f"/api/operator/bookings/{booking.id}/cancel/"

    assert client.post(url, {}, format="json").status_code == 400

    resp = client.post(url, {"reason": "Property double booked"}, format="json")

    assert resp.status_code == 200, resp.data
    booking.refresh_from_db()
    assert booking.status == Booking.Status.CANCELLED
    assert Notification.objects.get(user=renter_user).title == "Booking Cancelled by Admin"
    assert OperatorAuditEvent.objects.get().entity_id == str(booking.id)


def test_cancel_cancelled_booking_conflicts(ops, booking_factory):
    booking = booking_factory(status=Booking.Status.CANCELLED)

    resp = ops.post(f"/api/operator/bookings/{booking.id}/cancel/", {"reason": "x"}, format="json")

    assert resp.status_code == 409
    assert not OperatorAuditEvent.objects.exists()


def test_delete_is_operator_admin_only(client_for, operator_factory, ops, booking_factory):
    booking = booking_factory()
    moderator = client_for(operator_factory(OPERATOR_MODERATOR), host=OPS_HOST)

    assert moderator.delete(f"/api/operator/bookings/{booking.id}/?reason=x").status_code == 403

    resp = ops.delete(f"/api/operator/bookings/{booking.id}/?reason=cleanup")

    assert resp.status_code == 200
    assert not Booking.objects.filter(pk=booking.pk).exists()
