"""Profile updates and the owner role upgrade flow for regular users."""

from __future__ import annotations

import logging

from django.contrib.auth import get_user_model
from django.db import DatabaseError

from core import view_cache
from core.results import ActionResult, ErrorKind, validation_failure
from notifications import services as notifications

from .models import RoleRequest
from .serializers import ProfileUpdateSerializer

User = get_user_model()
logger = logging.getLogger(__name__)

ROLE_REQUEST_SUBMITTED_TITLE = "Owner Role Request Submitted"
ROLE_REQUEST_SUBMITTED_MESSAGE = (
    "Your request to become a Property Owner has been submitted and is pending "
    "review by an administrator."
)


def get_user_profile(user_id):
    if not user_id:
        return None
    return User.objects.filter(pk=user_id).first()


def update_user_profile(user_id, data: dict) -> ActionResult:
    """Update the caller's name, mobile number and avatar URL."""
    if not user_id:
        return ActionResult.fail(ErrorKind.VALIDATION, "User ID is missing.")
    serializer = ProfileUpdateSerializer(data=data)
    if not serializer.is_valid():
        return validation_failure(serializer.errors)
    changes = serializer.validated_data
    if not changes:
        return ActionResult.fail(ErrorKind.VALIDATION, "No profile changes provided.")

    try:
        updated = User.objects.filter(pk=user_id).update(**changes)
    except DatabaseError as exc:
        logger.exception("users: failed to update profile for %s", user_id)
        return ActionResult.store_failure(exc, "Failed to update profile.")
    if not updated:
        return ActionResult.fail(
            ErrorKind.NOT_FOUND_OR_UNAUTHORIZED,
            "User not found or profile not changed.",
        )

    view_cache.invalidate_views(view_cache.LAYOUT, view_cache.ADMIN_USERS)
    return ActionResult.ok("Profile updated successfully.")


def check_existing_role_request(user_id) -> RoleRequest | None:
    """Return the user's most recent role request, if any."""
    if not user_id:
        return None
    return RoleRequest.objects.filter(user_id=user_id).order_by("-requested_at", "-id").first()


def request_owner_role_upgrade(user_id, user_notes: str = "") -> ActionResult:
    if not user_id:
        return ActionResult.fail(ErrorKind.VALIDATION, "User information is incomplete.")
    try:
        user = User.objects.filter(pk=user_id).only("id", "role", "status").first()
        if user is None:
            return ActionResult.fail(
                ErrorKind.NOT_FOUND_OR_UNAUTHORIZED,
                "User profile not found.",
            )
        if user.status != User.Status.ACTIVE:
            return ActionResult.fail(
                ErrorKind.INVALID_STATE_TRANSITION,
                f"Cannot request upgrade. Account status is: {user.status}.",
            )
        if user.role != User.Role.USER:
            return ActionResult.fail(
                ErrorKind.INVALID_STATE_TRANSITION,
                f"Role upgrade only available for 'user' role (current: {user.role}).",
            )

        existing = set(
            RoleRequest.objects.filter(
                user_id=user_id,
                requested_role=User.Role.OWNER,
                status__in=(RoleRequest.Status.PENDING, RoleRequest.Status.APPROVED),
            ).values_list("status", flat=True)
        )
        if RoleRequest.Status.PENDING in existing:
            return ActionResult.fail(
                ErrorKind.INVALID_STATE_TRANSITION,
                "You already have a role upgrade request pending review.",
            )
        if RoleRequest.Status.APPROVED in existing:
            return ActionResult.fail(
                ErrorKind.INVALID_STATE_TRANSITION,
                "Your role upgrade request was previously approved. If your role "
                "hasn't updated, please contact support.",
            )

        role_request = RoleRequest.objects.create(
            user_id=user_id,
            requested_role=User.Role.OWNER,
            user_notes=(user_notes or "").strip(),
        )
    except DatabaseError as exc:
        logger.exception("users: role request failed for user %s", user_id)
        return ActionResult.store_failure(exc, "Failed to submit request.")

    logger.info("users: user %s requested the owner role (request %s)", user_id, role_request.pk)
    view_cache.invalidate_views(view_cache.ADMIN_ROLE_REQUESTS, view_cache.LAYOUT)
    notifications.emit_notification(
        user_id,
        notifications.ROLE_REQUEST_STATUS,
        ROLE_REQUEST_SUBMITTED_TITLE,
        ROLE_REQUEST_SUBMITTED_MESSAGE,
        related_id=role_request.pk,
    )
    return ActionResult.ok(
        "Owner role request submitted successfully. It will be reviewed by an administrator.",
        request_id=role_request.pk,
    )
