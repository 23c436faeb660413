"""
Booking lifecycle: owner approve/reject, renter cancel, admin cancel/delete.

Every transition follows the same sequence: load the booking scoped to the
acting identity, check the state machine, apply a conditional update, mark the
booking views stale and then notify the renter. The notification is a separate
best-effort write; a failure there never turns an applied transition into a
reported failure.
"""

from __future__ import annotations

import logging
import uuid

from django.db import DatabaseError
from django.db.models import Count, Q, QuerySet
from django.utils import timezone

from core import view_cache
from core.results import ActionResult, ErrorKind
from notifications import services as notifications
from notifications import tasks as notification_tasks

from .domain import ALLOWED_FROM, TARGET_STATUS, already_message, can_transition
from .models import Booking

logger = logging.getLogger(__name__)

NOT_FOUND_MESSAGE = "Booking not found or you don't have permission."

APPROVED_TITLE = "Booking Approved!"
REJECTED_TITLE = "Booking Rejected"
ADMIN_CANCELLED_TITLE = "Booking Cancelled by Admin"

STATUS_FILTERS = ("all", "upcoming", *Booking.Status.values)


def _parse_id(booking_id) -> uuid.UUID | None:
    try:
        return uuid.UUID(str(booking_id))
    except (TypeError, ValueError, AttributeError):
        return None


def _load_owner_booking(booking_id, owner_id) -> Booking | None:
    pk = _parse_id(booking_id)
    if pk is None:
        return None
    return (
        Booking.objects.select_related("property")
        .filter(pk=pk, property__owner_id=owner_id)
        .first()
    )


def _load_renter_booking(booking_id, user_id) -> Booking | None:
    pk = _parse_id(booking_id)
    if pk is None:
        return None
    return Booking.objects.select_related("property").filter(pk=pk, user_id=user_id).first()


def _load_any_booking(booking_id) -> Booking | None:
    pk = _parse_id(booking_id)
    if pk is None:
        return None
    return Booking.objects.select_related("property").filter(pk=pk).first()


def _apply_transition(booking: Booking, action: str) -> ActionResult | None:
    """
    Conditionally move ``booking`` to the action's target status.

    Returns a failure result when the stored status no longer allows the
    transition (another request got there first), otherwise ``None``.
    """
    target = TARGET_STATUS[action]
    updated = Booking.objects.filter(pk=booking.pk, status__in=ALLOWED_FROM[action]).update(
        status=target,
        updated_at=timezone.now(),
    )
    if updated:
        booking.status = target
        return None
    current = Booking.objects.filter(pk=booking.pk).values_list("status", flat=True).first()
    if current is None:
        return ActionResult.fail(ErrorKind.NOT_FOUND_OR_UNAUTHORIZED, NOT_FOUND_MESSAGE)
    logger.info("bookings: %s lost a race on %s, now %s", action, booking.pk, current)
    return ActionResult.fail(ErrorKind.INVALID_STATE_TRANSITION, already_message(current))


def _transition(booking_loader, booking_id, actor_id, action: str, fallback: str):
    """Shared load, check and write steps. Returns ``(booking, failure)``."""
    try:
        booking = booking_loader(booking_id, actor_id)
        if booking is None:
            return None, ActionResult.fail(ErrorKind.NOT_FOUND_OR_UNAUTHORIZED, NOT_FOUND_MESSAGE)
        if not can_transition(booking.status, action):
            return None, ActionResult.fail(
                ErrorKind.INVALID_STATE_TRANSITION,
                already_message(booking.status),
            )
        failure = _apply_transition(booking, action)
    except DatabaseError as exc:
        logger.exception("bookings: %s failed for booking %s", action, booking_id)
        return None, ActionResult.store_failure(exc, fallback)
    if failure is not None:
        return None, failure
    view_cache.invalidate_views(*view_cache.BOOKING_VIEWS)
    return booking, None


def _notify_renter(booking: Booking, title: str, message: str) -> None:
    notifications.emit_notification(
        booking.user_id,
        notifications.BOOKING_STATUS,
        title,
        message,
        related_id=booking.pk,
    )


def approve_booking(booking_id, owner_id) -> ActionResult:
    """Owner accepts a pending booking on one of their properties."""
    if not booking_id or not owner_id:
        return ActionResult.fail(ErrorKind.VALIDATION, "Missing booking ID or owner ID.")
    booking, failure = _transition(
        _load_owner_booking, booking_id, owner_id, "approve", "Failed to approve booking."
    )
    if failure is not None:
        return failure

    logger.info("bookings: owner %s approved booking %s", owner_id, booking.pk)
    _notify_renter(
        booking,
        APPROVED_TITLE,
        f'Your booking request for "{booking.property.title}" has been approved by the owner.',
    )
    notifications.queue_task(
        notification_tasks.send_booking_status_email,
        booking.user_id,
        str(booking.pk),
        booking.status,
    )
    return ActionResult.ok("Booking approved successfully.", booking_id=str(booking.pk))


def reject_booking(booking_id, owner_id) -> ActionResult:
    """Owner declines a pending booking. Rejected bookings are stored as cancelled."""
    if not booking_id or not owner_id:
        return ActionResult.fail(ErrorKind.VALIDATION, "Missing booking ID or owner ID.")
    booking, failure = _transition(
        _load_owner_booking, booking_id, owner_id, "reject", "Failed to reject booking."
    )
    if failure is not None:
        return failure

    logger.info("bookings: owner %s rejected booking %s", owner_id, booking.pk)
    _notify_renter(
        booking,
        REJECTED_TITLE,
        f'Unfortunately, your booking request for "{booking.property.title}" '
        "has been rejected by the owner.",
    )
    notifications.queue_task(
        notification_tasks.send_booking_status_email,
        booking.user_id,
        str(booking.pk),
        booking.status,
    )
    return ActionResult.ok("Booking rejected successfully.", booking_id=str(booking.pk))


def cancel_booking(booking_id, user_id) -> ActionResult:
    """Renter withdraws their own pending or approved booking. Nobody is notified."""
    if not booking_id or not user_id:
        return ActionResult.fail(ErrorKind.VALIDATION, "Missing booking ID or user ID.")
    booking, failure = _transition(
        _load_renter_booking, booking_id, user_id, "cancel", "Failed to cancel booking."
    )
    if failure is not None:
        return failure

    logger.info("bookings: user %s cancelled booking %s", user_id, booking.pk)
    return ActionResult.ok("Booking cancelled successfully.", booking_id=str(booking.pk))


def admin_cancel_booking(booking_id) -> ActionResult:
    """Cancel any non-cancelled booking on behalf of the platform and tell the renter."""
    try:
        booking = _load_any_booking(booking_id)
        if booking is None:
            return ActionResult.fail(ErrorKind.NOT_FOUND_OR_UNAUTHORIZED, "Booking not found.")
        if not can_transition(booking.status, "admin_cancel"):
            return ActionResult.fail(
                ErrorKind.INVALID_STATE_TRANSITION,
                already_message(booking.status),
            )
        failure = _apply_transition(booking, "admin_cancel")
    except DatabaseError as exc:
        logger.exception("bookings: admin cancel failed for booking %s", booking_id)
        return ActionResult.store_failure(exc, "Failed to cancel booking.")
    if failure is not None:
        return failure

    view_cache.invalidate_views(*view_cache.BOOKING_VIEWS)
    property_title = booking.property.title if booking.property_id else "a property"
    _notify_renter(
        booking,
        ADMIN_CANCELLED_TITLE,
        f'An administrator has cancelled your booking for "{property_title}". '
        "Please contact support if you have questions.",
    )
    return ActionResult.ok("Booking cancelled successfully by admin.", booking_id=str(booking.pk))


def delete_booking(booking_id) -> ActionResult:
    pk = _parse_id(booking_id)
    try:
        deleted = Booking.objects.filter(pk=pk).delete()[0] if pk else 0
    except DatabaseError as exc:
        logger.exception("bookings: delete failed for booking %s", booking_id)
        return ActionResult.store_failure(exc, "Failed to delete booking record.")
    if not deleted:
        return ActionResult.fail(
            ErrorKind.NOT_FOUND_OR_UNAUTHORIZED,
            "Booking record not found or already deleted.",
        )
    view_cache.invalidate_views(*view_cache.BOOKING_VIEWS)
    return ActionResult.ok("Booking record deleted successfully.")


def _with_related(qs: QuerySet[Booking]) -> QuerySet[Booking]:
    return qs.select_related("property", "property__owner", "user")


def get_user_bookings(user_id, status_filter: str = "all") -> QuerySet[Booking]:
    qs = _with_related(Booking.objects.filter(user_id=user_id))
    if status_filter == "upcoming":
        qs = qs.filter(status=Booking.Status.APPROVED, start_date__gte=timezone.localdate())
    elif status_filter in Booking.Status.values:
        qs = qs.filter(status=status_filter)
    return qs.order_by("-booking_date")


def get_owner_received_bookings(owner_id, status_filter: str = "all") -> QuerySet[Booking]:
    qs = _with_related(Booking.objects.filter(property__owner_id=owner_id))
    if status_filter in Booking.Status.values:
        qs = qs.filter(status=status_filter)
    return qs.order_by("-booking_date")


def get_all_bookings(status_filter: str = "all") -> QuerySet[Booking]:
    qs = _with_related(Booking.objects.all())
    if status_filter in Booking.Status.values:
        qs = qs.filter(status=status_filter)
    return qs.order_by("-booking_date")


def get_user_bookings_summary(user_id) -> dict[str, int]:
    today = timezone.localdate()
    return Booking.objects.filter(user_id=user_id).aggregate(
        total=Count("id"),
        upcoming=Count(
            "id",
            filter=Q(status=Booking.Status.APPROVED, start_date__gte=today),
        ),
        pending=Count("id", filter=Q(status=Booking.Status.PENDING)),
    )
