"""Contact form submissions and the admin reply thread."""

from __future__ import annotations

import logging

from django.db import DatabaseError
from django.utils import timezone

from core import view_cache
from core.results import ActionResult, ErrorKind, validation_failure
from notifications import services as notifications
from notifications import tasks as notification_tasks

from .models import ContactMessage
from .serializers import AdminReplySerializer, ContactMessageCreateSerializer

logger = logging.getLogger(__name__)

REPLY_TITLE = "Admin replied to your message"


def _message_views(user_id=None) -> tuple[str, ...]:
    if user_id:
        return (view_cache.ADMIN_MESSAGES, view_cache.USER_MESSAGES)
    return (view_cache.ADMIN_MESSAGES,)


def save_contact_message(data: dict, user_id=None) -> ActionResult:
    serializer = ContactMessageCreateSerializer(data=data)
    if not serializer.is_valid():
        logger.info("contact: rejected submission: %s", serializer.errors)
        return validation_failure(serializer.errors)
    try:
        contact_message = ContactMessage.objects.create(
            user_id=user_id or None,
            status=ContactMessage.Status.UNSEEN,
            **serializer.validated_data,
        )
    except DatabaseError:
        logger.exception("contact: failed to save message from %s", data.get("email"))
        return ActionResult.fail(ErrorKind.STORE_FAILURE, "Database Error: Failed to send message.")

    logger.info("contact: saved message %s (user %s)", contact_message.pk, user_id or "guest")
    view_cache.invalidate_views(*_message_views(user_id))
    return ActionResult.ok("Message sent successfully!", message_id=contact_message.pk)


def get_user_contact_messages(user_id):
    return ContactMessage.objects.filter(user_id=user_id).order_by("-created_at", "-id")


def get_all_contact_messages(status_filter: str = "all"):
    qs = ContactMessage.objects.select_related("user")
    if status_filter in ContactMessage.Status.values:
        qs = qs.filter(status=status_filter)
    return qs.order_by("-created_at", "-id")


def mark_message_seen(message_id) -> ActionResult:
    try:
        updated = ContactMessage.objects.filter(
            pk=message_id, status=ContactMessage.Status.UNSEEN
        ).update(status=ContactMessage.Status.SEEN)
    except DatabaseError as exc:
        logger.exception("contact: mark seen failed for %s", message_id)
        return ActionResult.store_failure(exc, "Failed to update message.")
    if not updated:
        return ActionResult.fail(
            ErrorKind.NOT_FOUND_OR_UNAUTHORIZED, "Message not found or already seen."
        )
    view_cache.invalidate_views(view_cache.ADMIN_MESSAGES)
    return ActionResult.ok("Message marked as seen.")


def delete_contact_message(message_id) -> ActionResult:
    try:
        deleted, _ = ContactMessage.objects.filter(pk=message_id).delete()
    except DatabaseError as exc:
        logger.exception("contact: delete failed for %s", message_id)
        return ActionResult.store_failure(exc, "Failed to delete message.")
    if not deleted:
        return ActionResult.fail(ErrorKind.NOT_FOUND_OR_UNAUTHORIZED, "Message not found.")
    view_cache.invalidate_views(view_cache.ADMIN_MESSAGES, view_cache.USER_MESSAGES)
    return ActionResult.ok("Message deleted successfully.")


def send_admin_reply(message_id, data: dict) -> ActionResult:
    """
    Store an admin reply on a contact message and tell the sender.

    Registered senders get an in-app notification; every sender gets the reply
    by email. Both are best-effort.
    """
    serializer = AdminReplySerializer(data=data)
    if not serializer.is_valid():
        return validation_failure(serializer.errors)
    reply_text = serializer.validated_data["reply_text"]

    try:
        updated = ContactMessage.objects.filter(pk=message_id).update(
            reply_text=reply_text,
            reply_timestamp=timezone.now(),
            has_admin_reply=True,
            status=ContactMessage.Status.SEEN,
        )
        contact_message = ContactMessage.objects.filter(pk=message_id).first() if updated else None
    except DatabaseError as exc:
        logger.exception("contact: reply failed for %s", message_id)
        return ActionResult.store_failure(exc, "Failed to send reply.")
    if contact_message is None:
        return ActionResult.fail(
            ErrorKind.NOT_FOUND_OR_UNAUTHORIZED, "Message not found or could not be updated."
        )

    view_cache.invalidate_views(*_message_views(contact_message.user_id))
    if contact_message.user_id:
        notifications.emit_notification(
            contact_message.user_id,
            notifications.CONTACT_REPLY,
            REPLY_TITLE,
            f'An administrator has replied to your message regarding "{contact_message.subject}".',
            related_id=contact_message.pk,
        )
    else:
        logger.info("contact: message %s has no user, notification skipped", contact_message.pk)
    notifications.queue_task(notification_tasks.send_contact_reply_email, contact_message.pk)
    return ActionResult.ok("Reply sent and saved successfully.")
