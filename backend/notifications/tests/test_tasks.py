import pytest
from django.core import mail

from contact.models import ContactMessage
from notifications import tasks
from notifications.models import NotificationLog

pytestmark = pytest.mark.django_db


def test_booking_status_email_is_logged(booking_factory, renter_user):
    booking = booking_factory()

    tasks.send_booking_status_email(renter_user.id, str(booking.id), "cancelled")

    assert len(mail.outbox) == 1
    assert mail.outbox[0].subject == "Your booking for Sunny Lake House was rejected"
    log = NotificationLog.objects.get()
    assert log.type == "booking_status_update"
    assert log.status == NotificationLog.Status.SENT
    assert log.related_id == str(booking.id)


def test_email_without_recipient_is_logged_as_failed(booking_factory, renter_user):
    renter_user.email = ""
    renter_user.save(update_fields=["email"])
    booking = booking_factory()

    tasks.send_booking_status_email(renter_user.id, str(booking.id), "approved")

    assert mail.outbox == []
    log = NotificationLog.objects.get()
    assert log.status == NotificationLog.Status.FAILED
    assert log.error == "missing recipient email"


def test_send_failure_is_logged(booking_factory, renter_user, monkeypatch):
    booking = booking_factory()

    def _fail(self, fail_silently=False):
        raise RuntimeError("smtp unavailable")

    monkeypatch.setattr("django.core.mail.EmailMultiAlternatives.send", _fail)

    tasks.send_booking_status_email(renter_user.id, str(booking.id), "approved")

    log = NotificationLog.objects.get()
    assert log.status == NotificationLog.Status.FAILED
    assert log.error == "smtp unavailable"


def test_contact_reply_email():
    message = ContactMessage.objects.create(
        name="Guest",
        email="guest@example.com",
        subject="Parking",
        message="Is parking included with the flat?",
        reply_text="Yes, one space.",
        has_admin_reply=True,
    )

    tasks.send_contact_reply_email(message.pk)

    assert mail.outbox[0].to == ["guest@example.com"]
    assert mail.outbox[0].subject == "Re: Parking"
    assert "Yes, one space." in mail.outbox[0].body
