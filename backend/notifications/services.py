"""Create and read in-app notifications."""

from __future__ import annotations

import logging

from django.db import DatabaseError

from core.results import ActionResult, ErrorKind

from .models import Notification

logger = logging.getLogger(__name__)

BOOKING_STATUS = "booking_status"
ROLE_CHANGE = "role_change"
ROLE_REQUEST_STATUS = "role_request_status"
ACCOUNT_STATUS = "account_status"
PROPERTY_STATUS = "property_status"
CONTACT_REPLY = "contact_reply"
PROPERTY_ENQUIRY = "property_enquiry"

NOT_FOUND_MESSAGE = "Notification not found or you don't have permission."

STATUS_FILTERS = ("all", "read", "unread")


def emit_notification(
    user_id,
    type_: str,
    title: str,
    message: str,
    related_id=None,
) -> Notification | None:
    """
    Insert one unread notification for ``user_id``.

    Best-effort: invalid input and store errors are logged and swallowed so the
    caller's already-applied change is never undone by a failed notice.
    """
    if not user_id or not type_ or not title or not message:
        logger.warning(
            "notifications: refusing to emit %r for user %s, missing required fields",
            type_,
            user_id,
        )
        return None
    try:
        notification = Notification.objects.create(
            user_id=user_id,
            type=type_,
            title=title,
            message=message,
            related_id=str(related_id) if related_id is not None else "",
        )
    except DatabaseError:
        logger.exception("notifications: failed to emit %s for user %s", type_, user_id)
        return None
    logger.info("notifications: emitted %s to user %s", type_, user_id)
    return notification


def queue_task(task, *args) -> None:
    """Queue a Celery task without failing the request if the broker is unavailable."""
    try:
        task.delay(*args)
    except Exception:
        logger.info("notifications: task %s could not be queued", task.name, exc_info=True)


def get_user_notifications(user_id, status_filter: str = "all"):
    qs = Notification.objects.filter(user_id=user_id)
    if status_filter in (Notification.Status.READ, Notification.Status.UNREAD):
        qs = qs.filter(status=status_filter)
    return qs.order_by("-created_at", "-id")


def mark_notification_read(notification_id, user_id) -> ActionResult:
    """Flip one of ``user_id``'s notifications from unread to read."""
    if not notification_id or not user_id:
        return ActionResult.fail(
            ErrorKind.NOT_FOUND_OR_UNAUTHORIZED,
            "Missing notification ID or user ID.",
        )
    try:
        updated = Notification.objects.filter(
            pk=notification_id,
            user_id=user_id,
            status=Notification.Status.UNREAD,
        ).update(status=Notification.Status.READ)
        if updated:
            return ActionResult.ok("Notification marked as read.")
        if Notification.objects.filter(pk=notification_id, user_id=user_id).exists():
            return ActionResult.ok("Notification already marked as read.")
    except DatabaseError as exc:
        logger.exception("notifications: mark read failed for %s", notification_id)
        return ActionResult.store_failure(exc, "Failed to update notification.")
    return ActionResult.fail(ErrorKind.NOT_FOUND_OR_UNAUTHORIZED, NOT_FOUND_MESSAGE)


def mark_all_notifications_read(user_id) -> ActionResult:
    try:
        updated = Notification.objects.filter(
            user_id=user_id,
            status=Notification.Status.UNREAD,
        ).update(status=Notification.Status.READ)
    except DatabaseError as exc:
        logger.exception("notifications: mark all read failed for user %s", user_id)
        return ActionResult.store_failure(exc, "Failed to update notifications.")
    return ActionResult.ok("All notifications marked as read.", updated=updated)
