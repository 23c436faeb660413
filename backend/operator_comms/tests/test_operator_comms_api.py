import pytest
from django.core import mail

from contact.models import ContactMessage
from notifications.models import Notification, NotificationLog
from operator_core.models import OperatorAuditEvent
from operator_core.permissions import OPERATOR_MODERATOR

pytestmark = [pytest.mark.django_db, pytest.mark.usefixtures("enable_operator_routes")]

OPS_HOST = "ops.example.com"


@pytest.fixture
def ops(client_for, admin_user):
    return client_for(admin_user, host=OPS_HOST)


@pytest.fixture
def message(renter_user):
    return ContactMessage.objects.create(
        user=renter_user,
        name="Renter",
        email=renter_user.email,
        subject="Refund question",
        message="How long does a refund usually take?",
    )


@pytest.fixture
def guest_message():
    return ContactMessage.objects.create(
        name="Guest",
        email="guest@example.com",
        subject="Listing my flat",
        message="How do I list my flat on the site?",
    )


def test_list_messages_filters(ops, message, guest_message):
    registered = ops.get("/api/operator/messages/", {"registered": "true"})
    guests = ops.get("/api/operator/messages/", {"registered": "false"})
    search = ops.get("/api/operator/messages/", {"search": "refund"})

    assert [row["id"] for row in registered.data["results"]] == [message.pk]
    assert registered.data["results"][0]["user_name"] == "Renter"
    assert [row["id"] for row in guests.data["results"]] == [guest_message.pk]
    assert search.data["count"] == 1


def test_mark_seen(ops, message):
    resp = ops.post(f"/api/operator/messages/{message.pk}/seen/", {}, format="json")

    assert resp.status_code == 200
    message.refresh_from_db()
    assert message.status == ContactMessage.Status.SEEN
    assert OperatorAuditEvent.objects.get().reason == "Message reviewed"


def test_reply_notifies_and_emails(ops, message, renter_user):
    resp = ops.post(
        f"/api/operator/messages/{message.pk}/reply/",
        {"reply_text": "Refunds take five working days."},
        format="json",
    )

    assert resp.status_code == 200, resp.data
    assert resp.data["message"] == "Reply sent and saved successfully."
    message.refresh_from_db()
    assert message.reply_text == "Refunds take five working days."
    assert Notification.objects.get(user=renter_user).type == "contact_reply"
    assert mail.outbox[0].subject == "Re: Refund question"


def test_empty_reply_is_rejected(ops, message):
    resp = ops.post(f"/api/operator/messages/{message.pk}/reply/", {"reply_text": ""}, format="json")

    assert resp.status_code == 400
    assert not OperatorAuditEvent.objects.exists()


def test_moderator_cannot_reply(client_for, operator_factory, message):
    client = client_for(operator_factory(OPERATOR_MODERATOR), host=OPS_HOST)

    resp = client.post(f"/api/operator/messages/{message.pk}/reply/", {"reply_text": "Hi"})

    assert resp.status_code == 403


def test_delete_message_requires_reason(ops, guest_message):
    url = f"/api/operator/messages/{guest_message.pk}/"

    assert ops.delete(url).status_code == 400
    assert ops.delete(f"{url}?reason=Spam").status_code == 200
    assert not ContactMessage.objects.exists()


def test_email_log_list(ops, renter_user):
    NotificationLog.objects.create(
        type="contact_reply", status=NotificationLog.Status.FAILED, user=renter_user, error="boom"
    )
    NotificationLog.objects.create(type="booking_status_update", status=NotificationLog.Status.SENT)

    resp = ops.get("/api/operator/email-logs/", {"status": "failed"})

    assert resp.status_code == 200
    assert resp.data["count"] == 1
    assert resp.data["results"][0]["user_email"] == renter_user.email
