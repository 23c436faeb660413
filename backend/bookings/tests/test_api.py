"""Integration tests for the bookings API endpoints."""

from __future__ import annotations

import pytest

from bookings.models import Booking
from notifications import tasks as notification_tasks
from notifications.models import Notification

pytestmark = pytest.mark.django_db


def test_bookings_require_authentication(api_client):
    resp = api_client.get("/api/bookings/")

    assert resp.status_code == 401


def test_renter_lists_own_bookings(client_for, booking_factory, renter_user, other_owner):
    mine = booking_factory()
    booking_factory(user=other_owner)

    resp = client_for(renter_user).get("/api/bookings/")

    assert resp.status_code == 200
    assert [row["id"] for row in resp.data] == [str(mine.id)]
    assert resp.data[0]["property_name"] == "Sunny Lake House"
    assert resp.data[0]["user_email"] == renter_user.email


def test_invalid_status_filter_is_rejected(client_for, renter_user):
    resp = client_for(renter_user).get("/api/bookings/", {"status": "archived"})

    assert resp.status_code == 400


def test_owner_approve_updates_cached_lists(client_for, booking_factory, owner_user, renter_user):
    booking = booking_factory()
    owner_client = client_for(owner_user)
    renter_client = client_for(renter_user)

    received = owner_client.get("/api/bookings/received/")
    assert received.data[0]["status"] == "pending"
    assert renter_client.get("/api/bookings/").data[0]["status"] == "pending"

    resp = owner_client.post(f"/api/bookings/{booking.id}/approve/")

    assert resp.status_code == 200
    assert resp.data == {
        "success": True,
        "message": "Booking approved successfully.",
        "booking_id": str(booking.id),
    }
    assert owner_client.get("/api/bookings/received/").data[0]["status"] == "approved"
    assert renter_client.get("/api/bookings/").data[0]["status"] == "approved"


def test_second_approve_is_a_conflict(client_for, booking_factory, owner_user):
    booking = booking_factory(status=Booking.Status.APPROVED)

    resp = client_for(owner_user).post(f"/api/bookings/{booking.id}/approve/")

    assert resp.status_code == 409
    assert resp.data["success"] is False
    assert resp.data["error"] == "invalid_state_transition"
    assert resp.data["message"] == "Booking is already approved."


def test_reject_by_non_owner_is_404(client_for, booking_factory, other_owner):
    booking = booking_factory()

    resp = client_for(other_owner).post(f"/api/bookings/{booking.id}/reject/")

    assert resp.status_code == 404
    assert resp.data["message"] == "Booking not found or you don't have permission."
    booking.refresh_from_db()
    assert booking.status == Booking.Status.PENDING


def test_reject_queues_status_email(client_for, booking_factory, owner_user, monkeypatch):
    booking = booking_factory()
    captured = []

    def _capture(renter_id, booking_id, status):
        captured.append((renter_id, booking_id, status))

    monkeypatch.setattr(notification_tasks.send_booking_status_email, "delay", _capture)

    resp = client_for(owner_user).post(f"/api/bookings/{booking.id}/reject/")

    assert resp.status_code == 200
    assert captured == [(booking.user_id, str(booking.id), Booking.Status.CANCELLED)]


def test_renter_cancel(client_for, booking_factory, renter_user):
    booking = booking_factory(status=Booking.Status.APPROVED)
    client = client_for(renter_user)

    resp = client.post(f"/api/bookings/{booking.id}/cancel/")
    assert resp.status_code == 200
    assert resp.data["message"] == "Booking cancelled successfully."

    again = client.post(f"/api/bookings/{booking.id}/cancel/")
    assert again.status_code == 409
    assert again.data["message"] == "Booking is already cancelled."
    assert not Notification.objects.exists()


def test_summary(client_for, booking_factory, renter_user):
    booking_factory()
    booking_factory(status=Booking.Status.APPROVED, days_ahead=9)

    resp = client_for(renter_user).get("/api/bookings/summary/")

    assert resp.status_code == 200
    assert resp.data == {"total": 2, "upcoming": 1, "pending": 1}
