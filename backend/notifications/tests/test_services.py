from __future__ import annotations

import logging

import pytest
from django.db import DatabaseError

from core.results import ErrorKind
from notifications import services
from notifications.models import Notification

pytestmark = pytest.mark.django_db


def test_emit_creates_unread_notification(renter_user):
    notification = services.emit_notification(
        renter_user.id,
        services.BOOKING_STATUS,
        "Booking Approved!",
        "Your booking was approved.",
        related_id=42,
    )

    assert notification is not None
    stored = Notification.objects.get(pk=notification.pk)
    assert stored.user_id == renter_user.id
    assert stored.status == Notification.Status.UNREAD
    assert stored.related_id == "42"


@pytest.mark.parametrize(
    "args",
    [
        (None, "booking_status", "Title", "Message"),
        ("user", "", "Title", "Message"),
        ("user", "booking_status", "", "Message"),
        ("user", "booking_status", "Title", ""),
    ],
)
def test_emit_refuses_incomplete_input(renter_user, args):
    user_id = renter_user.id if args[0] == "user" else args[0]

    assert services.emit_notification(user_id, *args[1:]) is None
    assert not Notification.objects.exists()


def test_emit_swallows_store_errors(renter_user, monkeypatch, caplog):
    def _boom(**kwargs):
        raise DatabaseError("disk full")

    monkeypatch.setattr(Notification.objects, "create", _boom)

    result = services.emit_notification(renter_user.id, "role_change", "Title", "Message")

    assert result is None
    assert "failed to emit" in caplog.text


def test_mark_read_flips_status(renter_user):
    notification = services.emit_notification(renter_user.id, "role_change", "T", "M")

    result = services.mark_notification_read(notification.pk, renter_user.id)

    assert result.success is True
    notification.refresh_from_db()
    assert notification.status == Notification.Status.READ


def test_mark_read_twice_succeeds(renter_user):
    notification = services.emit_notification(renter_user.id, "role_change", "T", "M")
    services.mark_notification_read(notification.pk, renter_user.id)

    result = services.mark_notification_read(notification.pk, renter_user.id)

    assert result.success is True
    assert result.message == "Notification already marked as read."


def test_mark_read_for_other_user_fails(renter_user, owner_user):
    notification = services.emit_notification(renter_user.id, "role_change", "T", "M")

    result = services.mark_notification_read(notification.pk, owner_user.id)

    assert result.success is False
    assert result.error == ErrorKind.NOT_FOUND_OR_UNAUTHORIZED
    notification.refresh_from_db()
    assert notification.status == Notification.Status.UNREAD


def test_mark_read_unknown_notification(renter_user):
    result = services.mark_notification_read(999999, renter_user.id)

    assert result.error == ErrorKind.NOT_FOUND_OR_UNAUTHORIZED


def test_mark_all_read(renter_user, owner_user):
    for _ in range(2):
        services.emit_notification(renter_user.id, "role_change", "T", "M")
    services.emit_notification(owner_user.id, "role_change", "T", "M")

    result = services.mark_all_notifications_read(renter_user.id)

    assert result.data["updated"] == 2
    assert Notification.objects.filter(status=Notification.Status.UNREAD).count() == 1


def test_queue_task_swallows_broker_errors(caplog):
    class _Task:
        name = "notifications.fake"

        def delay(self, *args):
            raise ConnectionError("broker down")

    with caplog.at_level(logging.INFO, logger="notifications.services"):
        services.queue_task(_Task(), 1)

    assert "could not be queued" in caplog.text
