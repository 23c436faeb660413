"""Property catalogue queries and owner-side property management."""

from __future__ import annotations

import logging
import uuid
from decimal import Decimal, InvalidOperation

from django.conf import settings
from django.db import DatabaseError
from django.db.models import Count, Q, QuerySet

from core import view_cache
from core.results import ActionResult, ErrorKind, validation_failure
from notifications import services as notifications
from users.models import User

from .models import Property, PropertyReport
from .serializers import PropertyWriteSerializer

logger = logging.getLogger(__name__)

NOT_FOUND_MESSAGE = "Property not found or you don't have permission."

PROPERTY_VIEWS = (
    view_cache.OWNER_PROPERTIES,
    view_cache.BROWSE_PROPERTIES,
    view_cache.ADMIN_PROPERTIES,
    view_cache.LAYOUT,
    view_cache.HOME,
)


def _to_decimal(value) -> Decimal | None:
    if value in (None, ""):
        return None
    try:
        return Decimal(str(value))
    except (InvalidOperation, ValueError):
        return None


def _to_int(value, default: int) -> int:
    try:
        return max(int(value), 0)
    except (TypeError, ValueError):
        return default


def search_properties(qs: QuerySet[Property], filters: dict) -> QuerySet[Property]:
    city = (filters.get("city") or "").strip()
    if city:
        qs = qs.filter(city__icontains=city)
    min_price = _to_decimal(filters.get("min_price"))
    if min_price is not None:
        qs = qs.filter(price__gte=min_price)
    max_price = _to_decimal(filters.get("max_price"))
    if max_price is not None:
        qs = qs.filter(price__lte=max_price)
    property_type = (filters.get("property_type") or "").strip()
    if property_type:
        qs = qs.filter(property_type=property_type)
    search = (filters.get("search") or "").strip()
    if search:
        qs = qs.filter(
            Q(title__icontains=search) | Q(description__icontains=search) | Q(city__icontains=search)
        )
    return qs


def _has_amenities(prop: Property, wanted: list[str]) -> bool:
    have = {str(a).strip().lower() for a in prop.amenities or []}
    return all(a.lower() in have for a in wanted)


def get_public_properties(filters: dict | None = None) -> list[Property]:
    """
    Browse properties, verified ones by default.

    Amenity matching runs in Python over the JSON list so it behaves the same
    on every database backend.
    """
    filters = filters or {}
    status = (filters.get("status") or Property.Status.VERIFIED).strip()
    qs = Property.objects.select_related("owner").filter(status=status)
    qs = search_properties(qs, filters).order_by("-created_at")

    amenities = filters.get("amenities") or []
    if isinstance(amenities, str):
        amenities = [a for a in (part.strip() for part in amenities.split(",")) if a]
    max_limit = getattr(settings, "PROPERTY_PAGE_MAX_LIMIT", 100)
    limit = min(_to_int(filters.get("limit"), max_limit) or max_limit, max_limit)
    offset = _to_int(filters.get("offset"), 0)

    if not amenities:
        return list(qs[offset : offset + limit])
    matched = [prop for prop in qs if _has_amenities(prop, amenities)]
    return matched[offset : offset + limit]


def parse_property_id(property_id) -> uuid.UUID | None:
    try:
        return uuid.UUID(str(property_id))
    except (TypeError, ValueError, AttributeError):
        return None


def get_property(property_id) -> Property | None:
    pk = parse_property_id(property_id)
    if pk is None:
        return None
    return Property.objects.select_related("owner").filter(pk=pk).first()


def get_owner_properties(owner_id) -> QuerySet[Property]:
    return Property.objects.filter(owner_id=owner_id).order_by("-created_at")


def _placeholder_image_url() -> str:
    template = getattr(settings, "PROPERTY_PLACEHOLDER_IMAGE_URL", "")
    return template.format(seed=uuid.uuid4()) if template else ""


def add_property(owner_id, data: dict) -> ActionResult:
    if not owner_id:
        return ActionResult.fail(ErrorKind.VALIDATION, "Owner ID is missing.")
    serializer = PropertyWriteSerializer(data=data)
    if not serializer.is_valid():
        logger.info("properties: rejected new property for owner %s: %s", owner_id, serializer.errors)
        return validation_failure(serializer.errors)

    values = dict(serializer.validated_data)
    if not values.get("image_url"):
        values["image_url"] = _placeholder_image_url()
    try:
        prop = Property.objects.create(owner_id=owner_id, status=Property.Status.PENDING, **values)
    except DatabaseError as exc:
        logger.exception("properties: failed to add property for owner %s", owner_id)
        return ActionResult.store_failure(exc, "Failed to add property.")

    logger.info("properties: owner %s added property %s", owner_id, prop.pk)
    view_cache.invalidate_views(*PROPERTY_VIEWS)
    return ActionResult.ok(
        "Property added successfully and is pending verification.",
        property_id=str(prop.pk),
    )


def update_property(property_id, owner_id, data: dict) -> ActionResult:
    """Apply owner edits; a rejected property goes back into the verification queue."""
    if not property_id or not owner_id:
        return ActionResult.fail(ErrorKind.VALIDATION, "Missing property ID or owner ID.")
    pk = parse_property_id(property_id)
    prop = Property.objects.filter(pk=pk, owner_id=owner_id).first() if pk else None
    if prop is None:
        return ActionResult.fail(ErrorKind.NOT_FOUND_OR_UNAUTHORIZED, NOT_FOUND_MESSAGE)

    serializer = PropertyWriteSerializer(prop, data=data, partial=True)
    if not serializer.is_valid():
        return validation_failure(serializer.errors)

    requeued = prop.status == Property.Status.REJECTED
    try:
        for field_name, value in serializer.validated_data.items():
            setattr(prop, field_name, value)
        if requeued:
            prop.status = Property.Status.PENDING
            prop.rejection_reason = ""
        prop.save()
    except DatabaseError as exc:
        logger.exception("properties: failed to update property %s", property_id)
        return ActionResult.store_failure(exc, "Failed to update property.")

    view_cache.invalidate_views(*PROPERTY_VIEWS, *view_cache.BOOKING_VIEWS)
    message = "Property updated successfully."
    if requeued:
        message = f"{message} It is now pending verification again."
    return ActionResult.ok(message, property_id=str(prop.pk), status=prop.status)


def delete_property(property_id, owner_id) -> ActionResult:
    if not property_id or not owner_id:
        return ActionResult.fail(ErrorKind.VALIDATION, "Missing property ID or owner ID.")
    pk = parse_property_id(property_id)
    if pk is None:
        return ActionResult.fail(ErrorKind.NOT_FOUND_OR_UNAUTHORIZED, NOT_FOUND_MESSAGE)
    try:
        deleted, _ = Property.objects.filter(pk=pk, owner_id=owner_id).delete()
    except DatabaseError as exc:
        logger.exception("properties: failed to delete property %s", property_id)
        return ActionResult.store_failure(exc, "Failed to delete property.")
    if not deleted:
        return ActionResult.fail(ErrorKind.NOT_FOUND_OR_UNAUTHORIZED, NOT_FOUND_MESSAGE)

    logger.info("properties: owner %s deleted property %s", owner_id, property_id)
    view_cache.invalidate_views(*PROPERTY_VIEWS, *view_cache.BOOKING_VIEWS)
    return ActionResult.ok("Property deleted successfully.")


def request_property_pano(property_id, owner_id) -> ActionResult:
    if not property_id or not owner_id:
        return ActionResult.fail(ErrorKind.VALIDATION, "Missing property ID or owner ID.")
    pk = parse_property_id(property_id)
    if pk is None or not Property.objects.filter(pk=pk, owner_id=owner_id).exists():
        return ActionResult.fail(ErrorKind.NOT_FOUND_OR_UNAUTHORIZED, NOT_FOUND_MESSAGE)
    logger.info("properties: owner %s requested a 360 image for %s", owner_id, property_id)
    return ActionResult.ok("Request for 360° image sent to admin.")


def send_property_enquiry(property_id, user_id) -> ActionResult:
    """Tell both sides of an enquiry: the renter gets a receipt, the owner a lead."""
    prop = get_property(property_id)
    if prop is None:
        return ActionResult.fail(ErrorKind.NOT_FOUND_OR_UNAUTHORIZED, "Property not found.")
    if prop.owner_id == user_id:
        return ActionResult.fail(
            ErrorKind.VALIDATION, "You cannot enquire about your own property."
        )

    enquirer = User.objects.filter(pk=user_id).first()
    if enquirer is None:
        return ActionResult.fail(ErrorKind.NOT_FOUND_OR_UNAUTHORIZED, "User not found.")

    notifications.emit_notification(
        enquirer.pk,
        notifications.PROPERTY_ENQUIRY,
        f"Enquiry Sent: {prop.title}",
        f"You enquired about {prop.title} in {prop.city or 'an unlisted city'} "
        f"listed at {prop.price}. The owner has been notified.",
        related_id=prop.pk,
    )
    notifications.emit_notification(
        prop.owner_id,
        notifications.PROPERTY_ENQUIRY,
        f"New Enquiry: {prop.title}",
        f"{enquirer.display_name} ({enquirer.email}) has enquired about your property: "
        f"{prop.title}.",
        related_id=prop.pk,
    )
    logger.info("properties: user %s enquired about %s", user_id, prop.pk)
    return ActionResult.ok("Enquiry processed successfully.")


def submit_property_report(property_id, user_id, reason: str) -> ActionResult:
    reason = (reason or "").strip()
    if not reason:
        return ActionResult.fail(ErrorKind.VALIDATION, "A reason is required to report a property.")
    prop = get_property(property_id)
    if prop is None:
        return ActionResult.fail(ErrorKind.NOT_FOUND_OR_UNAUTHORIZED, "Property not found.")
    try:
        report = PropertyReport.objects.create(property=prop, reporter_id=user_id, reason=reason)
    except DatabaseError as exc:
        logger.exception("properties: failed to store report on %s", prop.pk)
        return ActionResult.store_failure(exc, "Failed to submit report.")
    logger.info("properties: user %s reported property %s", user_id, prop.pk)
    return ActionResult.ok("Report submitted successfully.", report_id=report.pk)


def get_owner_dashboard_stats(owner_id) -> dict[str, int]:
    from bookings.models import Booking

    property_stats = Property.objects.filter(owner_id=owner_id).aggregate(
        total=Count("id"),
        pending=Count("id", filter=Q(status=Property.Status.PENDING)),
        verified=Count("id", filter=Q(status=Property.Status.VERIFIED)),
    )
    booking_stats = Booking.objects.filter(property__owner_id=owner_id).aggregate(
        total=Count("id"),
        pending=Count("id", filter=Q(status=Booking.Status.PENDING)),
        approved=Count("id", filter=Q(status=Booking.Status.APPROVED)),
    )
    return {
        "total_properties": property_stats["total"],
        "pending_properties": property_stats["pending"],
        "verified_properties": property_stats["verified"],
        "total_bookings": booking_stats["total"],
        "pending_bookings": booking_stats["pending"],
        "approved_bookings": booking_stats["approved"],
    }
