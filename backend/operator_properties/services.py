"""Admin moderation of property listings and the reports filed against them."""

from __future__ import annotations

import logging

from django.db import DatabaseError
from django.db.models import QuerySet
from django.utils import timezone

from core import view_cache
from core.results import ActionResult, ErrorKind
from notifications import services as notifications
from properties.models import Property, PropertyReport
from properties.services import PROPERTY_VIEWS, parse_property_id

logger = logging.getLogger(__name__)

NOT_PENDING_MESSAGE = "Property not found or already verified/rejected."


def get_admin_properties(status_filter: str = "all") -> QuerySet[Property]:
    qs = Property.objects.select_related("owner")
    if status_filter in Property.Status.values:
        qs = qs.filter(status=status_filter)
    return qs.order_by("-created_at")


def _moderate(property_id, target: str, rejection_reason: str = ""):
    """Move a pending property to ``target``. Returns ``(property, failure)``."""
    pk = parse_property_id(property_id)
    if pk is None:
        return None, ActionResult.fail(ErrorKind.NOT_FOUND_OR_UNAUTHORIZED, NOT_PENDING_MESSAGE)
    try:
        updated = Property.objects.filter(pk=pk, status=Property.Status.PENDING).update(
            status=target,
            rejection_reason=rejection_reason,
        )
        if not updated:
            current = Property.objects.filter(pk=pk).values_list("status", flat=True).first()
            kind = (
                ErrorKind.NOT_FOUND_OR_UNAUTHORIZED
                if current is None
                else ErrorKind.INVALID_STATE_TRANSITION
            )
            return None, ActionResult.fail(kind, NOT_PENDING_MESSAGE)
        prop = Property.objects.only("id", "owner_id", "title", "status").get(pk=pk)
    except DatabaseError as exc:
        logger.exception("operator_properties: moving %s to %s failed", property_id, target)
        return None, ActionResult.store_failure(exc, f"Failed to update property to {target}.")
    view_cache.invalidate_views(*PROPERTY_VIEWS)
    return prop, None


def approve_property(property_id) -> ActionResult:
    prop, failure = _moderate(property_id, Property.Status.VERIFIED)
    if failure is not None:
        return failure

    logger.info("operator_properties: verified property %s", prop.pk)
    notifications.emit_notification(
        prop.owner_id,
        notifications.PROPERTY_STATUS,
        "Property Approved",
        f'Your property "{prop.title}" has been verified by an admin.',
        related_id=prop.pk,
    )
    return ActionResult.ok("Property approved successfully.", property_id=str(prop.pk))


def reject_property(property_id, reason: str) -> ActionResult:
    reason = (reason or "").strip()
    if not reason:
        return ActionResult.fail(ErrorKind.VALIDATION, "Rejection reason is required.")
    prop, failure = _moderate(property_id, Property.Status.REJECTED, reason)
    if failure is not None:
        return failure

    logger.info("operator_properties: rejected property %s", prop.pk)
    notifications.emit_notification(
        prop.owner_id,
        notifications.PROPERTY_STATUS,
        "Property Rejected",
        f'Your property "{prop.title}" was rejected. Reason: {reason}',
        related_id=prop.pk,
    )
    return ActionResult.ok("Property rejected successfully.", property_id=str(prop.pk))


def delete_property(property_id) -> ActionResult:
    """Delete any property regardless of owner. Its bookings go with it."""
    pk = parse_property_id(property_id)
    try:
        snapshot = (
            Property.objects.filter(pk=pk).values("title", "owner_id", "status").first()
            if pk
            else None
        )
        deleted = Property.objects.filter(pk=pk).delete()[0] if snapshot else 0
    except DatabaseError as exc:
        logger.exception("operator_properties: delete failed for %s", property_id)
        return ActionResult.store_failure(exc, "Failed to delete property.")
    if not deleted:
        return ActionResult.fail(
            ErrorKind.NOT_FOUND_OR_UNAUTHORIZED,
            "Property not found or already deleted.",
        )

    logger.info("operator_properties: deleted property %s", property_id)
    view_cache.invalidate_views(*PROPERTY_VIEWS, *view_cache.BOOKING_VIEWS)
    return ActionResult.ok("Property deleted successfully.", property=snapshot)


def get_property_reports(status_filter: str = "all") -> QuerySet[PropertyReport]:
    qs = PropertyReport.objects.select_related("property", "property__owner", "reporter")
    if status_filter in PropertyReport.Status.values:
        qs = qs.filter(status=status_filter)
    return qs


def mark_report_reviewed(report_id) -> ActionResult:
    try:
        updated = PropertyReport.objects.filter(
            pk=report_id, status=PropertyReport.Status.PENDING
        ).update(status=PropertyReport.Status.REVIEWED, reviewed_at=timezone.now())
        exists = updated or PropertyReport.objects.filter(pk=report_id).exists()
    except DatabaseError as exc:
        logger.exception("operator_properties: reviewing report %s failed", report_id)
        return ActionResult.store_failure(exc, "Failed to update report.")
    if not updated:
        kind = ErrorKind.INVALID_STATE_TRANSITION if exists else ErrorKind.NOT_FOUND_OR_UNAUTHORIZED
        return ActionResult.fail(kind, "Report not found or already reviewed.")

    logger.info("operator_properties: report %s marked reviewed", report_id)
    return ActionResult.ok("Report marked as reviewed.", report_id=report_id)


def delete_report(report_id) -> ActionResult:
    try:
        snapshot = (
            PropertyReport.objects.filter(pk=report_id)
            .values("property_id", "reporter_id", "reason", "status")
            .first()
        )
        deleted = PropertyReport.objects.filter(pk=report_id).delete()[0] if snapshot else 0
    except DatabaseError as exc:
        logger.exception("operator_properties: deleting report %s failed", report_id)
        return ActionResult.store_failure(exc, "Failed to delete report.")
    if not deleted:
        return ActionResult.fail(
            ErrorKind.NOT_FOUND_OR_UNAUTHORIZED,
            "Report not found or already deleted.",
        )

    snapshot["property_id"] = str(snapshot["property_id"])
    logger.info("operator_properties: deleted report %s", report_id)
    return ActionResult.ok("Report deleted successfully.", report=snapshot)
