import pytest
from django.core import mail

from contact import services
from contact.models import ContactMessage
from core.results import ErrorKind
from notifications.models import Notification

pytestmark = pytest.mark.django_db

VALID = {
    "name": "Asha",
    "email": "asha@example.com",
    "subject": "Viewing times",
    "message": "Can I view the lake house this weekend?",
}


def test_guest_can_send_message(api_client):
    resp = api_client.post("/api/contact/", VALID, format="json")

    assert resp.status_code == 201
    assert resp.data["message"] == "Message sent successfully!"
    stored = ContactMessage.objects.get()
    assert stored.user_id is None
    assert stored.status == ContactMessage.Status.UNSEEN


def test_signed_in_sender_is_linked(client_for, renter_user):
    client = client_for(renter_user)

    client.post("/api/contact/", VALID, format="json")
    mine = client.get("/api/contact/mine/")

    assert ContactMessage.objects.get().user_id == renter_user.id
    assert [row["subject"] for row in mine.data] == ["Viewing times"]


def test_invalid_submission(api_client):
    resp = api_client.post("/api/contact/", {**VALID, "message": "hi"}, format="json")

    assert resp.status_code == 400
    assert "Message must be at least 10 characters." in resp.data["message"]
    assert not ContactMessage.objects.exists()


def test_reply_notifies_registered_sender_and_emails(renter_user):
    services.save_contact_message(VALID, user_id=renter_user.id)
    message = ContactMessage.objects.get()

    result = services.send_admin_reply(message.pk, {"reply_text": "Saturday at 10 works."})

    assert result.success is True
    message.refresh_from_db()
    assert message.has_admin_reply is True
    assert message.status == ContactMessage.Status.SEEN
    assert message.reply_timestamp is not None
    notice = Notification.objects.get(user=renter_user)
    assert notice.type == "contact_reply"
    assert mail.outbox[0].to == ["asha@example.com"]


def test_reply_to_guest_skips_notification():
    services.save_contact_message(VALID)
    message = ContactMessage.objects.get()

    result = services.send_admin_reply(message.pk, {"reply_text": "Yes."})

    assert result.success is True
    assert not Notification.objects.exists()
    assert len(mail.outbox) == 1


def test_reply_requires_text_and_existing_message():
    services.save_contact_message(VALID)
    message = ContactMessage.objects.get()

    assert services.send_admin_reply(message.pk, {"reply_text": ""}).error == ErrorKind.VALIDATION
    assert services.send_admin_reply(999999, {"reply_text": "Hello"}).error == (
        ErrorKind.NOT_FOUND_OR_UNAUTHORIZED
    )


def test_mark_seen_and_delete():
    services.save_contact_message(VALID)
    message = ContactMessage.objects.get()

    assert services.mark_message_seen(message.pk).success is True
    assert services.mark_message_seen(message.pk).message == "Message not found or already seen."
    assert services.delete_contact_message(message.pk).success is True
    assert services.delete_contact_message(message.pk).error == ErrorKind.NOT_FOUND_OR_UNAUTHORIZED
