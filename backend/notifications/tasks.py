from __future__ import annotations

import logging
from typing import Optional

from celery import shared_task
from django.conf import settings
from django.contrib.auth import get_user_model
from django.core.mail import EmailMultiAlternatives
from django.template.loader import render_to_string

from core.settings_resolver import get_str
from notifications.models import NotificationLog

logger = logging.getLogger(__name__)
User = get_user_model()


def _get_user(user_id: int) -> Optional[User]:
    try:
        return User.objects.get(pk=user_id)
    except User.DoesNotExist:
        logger.warning("notifications: user %s no longer exists", user_id)
        return None


def _render(template: str, context: dict) -> str:
    return render_to_string(template, context).strip()


def _email_context(extra: dict) -> dict:
    context = {
        "site_name": get_str("platformName", settings.PLATFORM_NAME),
        "site_url": (getattr(settings, "FRONTEND_ORIGIN", "") or "").rstrip("/"),
    }
    context.update(extra)
    return context


def _log_notification(
    type_: str,
    status: str,
    *,
    user_id: int | None = None,
    related_id: str = "",
    error: str | None = None,
) -> None:
    try:
        NotificationLog.objects.create(
            type=type_,
            status=status,
            user_id=user_id,
            related_id=related_id,
            error=error or "",
        )
    except Exception:
        logger.exception(
            "notifications: failed to persist notification log",
            extra={"type": type_, "status": status},
        )


def _send_email_logged(
    type_: str,
    *,
    to_email: str | None,
    subject: str,
    template: str,
    context: dict,
    user_id: int | None = None,
    related_id: str = "",
) -> bool:
    if not to_email:
        _log_notification(
            type_,
            NotificationLog.Status.FAILED,
            user_id=user_id,
            related_id=related_id,
            error="missing recipient email",
        )
        logger.warning("notifications: cannot send %s email without recipient", type_)
        return False

    body = _render(f"email/{template}", _email_context(context))
    message = EmailMultiAlternatives(
        subject=subject,
        body=body,
        from_email=settings.DEFAULT_FROM_EMAIL,
        to=[to_email],
    )
    try:
        message.send(fail_silently=False)
    except Exception as exc:
        logger.exception(
            "notifications: email send failed",
            extra={"type": type_, "related_id": related_id, "user_id": user_id},
        )
        _log_notification(
            type_,
            NotificationLog.Status.FAILED,
            user_id=user_id,
            related_id=related_id,
            error=str(exc) or exc.__class__.__name__,
        )
        return False

    _log_notification(
        type_,
        NotificationLog.Status.SENT,
        user_id=user_id,
        related_id=related_id,
    )
    return True


@shared_task(queue="emails")
def send_booking_status_email(renter_id: int, booking_id: str, new_status: str):
    """Tell the renter their booking request was approved or rejected."""
    from bookings.models import Booking

    renter = _get_user(renter_id)
    if not renter:
        return

    try:
        booking = Booking.objects.select_related("property").get(pk=booking_id)
    except Booking.DoesNotExist:
        logger.warning("notifications: booking %s no longer exists", booking_id)
        return

    property_title = getattr(booking.property, "title", "your property")
    status_word = "approved" if new_status == Booking.Status.APPROVED else "rejected"
    frontend_origin = (getattr(settings, "FRONTEND_ORIGIN", "") or "").rstrip("/")
    _send_email_logged(
        "booking_status_update",
        to_email=renter.email,
        subject=f"Your booking for {property_title} was {status_word}",
        template="booking_status_update.txt",
        context={
            "renter_name": renter.display_name,
            "property_title": property_title,
            "status_word": status_word,
            "start_date": booking.start_date,
            "end_date": booking.end_date,
            "cta_url": f"{frontend_origin}/dashboard/user/bookings" if frontend_origin else "",
        },
        user_id=renter_id,
        related_id=str(booking_id),
    )


@shared_task(queue="emails")
def send_contact_reply_email(contact_message_id: int):
    """Email an admin reply to the address a contact message was sent from."""
    from contact.models import ContactMessage

    try:
        contact_message = ContactMessage.objects.get(pk=contact_message_id)
    except ContactMessage.DoesNotExist:
        logger.warning("notifications: contact message %s no longer exists", contact_message_id)
        return

    _send_email_logged(
        "contact_reply",
        to_email=contact_message.email,
        subject=f"Re: {contact_message.subject}",
        template="contact_reply.txt",
        context={
            "sender_name": contact_message.name,
            "original_message": contact_message.message,
            "reply_text": contact_message.reply_text,
        },
        user_id=contact_message.user_id,
        related_id=str(contact_message.pk),
    )
