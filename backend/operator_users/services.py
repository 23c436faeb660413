"""Admin-side account management and the owner role request queue."""

from __future__ import annotations

import logging

from django.contrib.auth import get_user_model
from django.db import DatabaseError, transaction
from django.utils import timezone

from core import view_cache
from core.results import ActionResult, ErrorKind
from notifications import services as notifications
from users.models import RoleRequest

User = get_user_model()
logger = logging.getLogger(__name__)

ASSIGNABLE_ROLES = (User.Role.USER, User.Role.OWNER)
ROLE_REQUEST_NOT_FOUND = "Request not found or already processed."

ROLE_REQUEST_APPROVED_MESSAGE = (
    "Congratulations! Your request to become a Property Owner has been approved. "
    "You can now access the Owner Dashboard and list properties."
)


def _get_user(user_id) -> User | None:
    try:
        return User.objects.filter(pk=int(user_id)).first()
    except (TypeError, ValueError):
        return None


def get_admin_users():
    return User.objects.all().order_by("-date_joined", "-id")


def update_user_role(user_id, new_role: str) -> ActionResult:
    """Switch a non-admin account between the ``user`` and ``owner`` roles."""
    if new_role == User.Role.ADMIN:
        return ActionResult.fail(
            ErrorKind.VALIDATION,
            "Changing role to Admin is not permitted via this action.",
        )
    if new_role not in ASSIGNABLE_ROLES:
        return ActionResult.fail(ErrorKind.VALIDATION, "Invalid role specified.")
    try:
        user = _get_user(user_id)
        if user is None:
            return ActionResult.fail(ErrorKind.NOT_FOUND_OR_UNAUTHORIZED, "User not found.")
        if user.role == User.Role.ADMIN:
            return ActionResult.fail(
                ErrorKind.INVALID_STATE_TRANSITION,
                "Cannot change the role of an Admin user.",
            )
        previous = user.role
        updated = (
            User.objects.filter(pk=user.pk)
            .exclude(role__in=(User.Role.ADMIN, new_role))
            .update(role=new_role)
        )
    except DatabaseError as exc:
        logger.exception("operator_users: role update failed for user %s", user_id)
        return ActionResult.store_failure(exc, "Failed to update user role.")
    if not updated:
        return ActionResult.fail(
            ErrorKind.INVALID_STATE_TRANSITION,
            "User not found or role was not changed.",
        )

    logger.info("operator_users: user %s role %s -> %s", user.pk, previous, new_role)
    view_cache.invalidate_views(view_cache.ADMIN_USERS, view_cache.LAYOUT)
    notifications.emit_notification(
        user.pk,
        notifications.ROLE_CHANGE,
        "User Role Updated",
        f"An administrator has updated your role to '{new_role}'.",
    )
    return ActionResult.ok(
        "User role updated successfully!",
        user_id=user.pk,
        previous_role=previous,
        role=new_role,
    )


def toggle_user_suspension(user_id) -> ActionResult:
    """Suspend an active account or reactivate a suspended one. Admins are never suspended."""
    try:
        user = _get_user(user_id)
        if user is None:
            return ActionResult.fail(ErrorKind.NOT_FOUND_OR_UNAUTHORIZED, "User not found.")
        if user.role == User.Role.ADMIN:
            return ActionResult.fail(
                ErrorKind.INVALID_STATE_TRANSITION,
                "Cannot suspend an admin user.",
            )
        previous = user.status
        new_status = (
            User.Status.ACTIVE if previous == User.Status.SUSPENDED else User.Status.SUSPENDED
        )
        updated = User.objects.filter(pk=user.pk, status=previous).update(
            status=new_status,
            is_active=new_status == User.Status.ACTIVE,
        )
    except DatabaseError as exc:
        logger.exception("operator_users: suspension toggle failed for user %s", user_id)
        return ActionResult.store_failure(exc, "Failed to update status.")
    if not updated:
        return ActionResult.fail(ErrorKind.INVALID_STATE_TRANSITION, "User status not changed.")

    logger.info("operator_users: user %s status %s -> %s", user.pk, previous, new_status)
    view_cache.invalidate_views(view_cache.ADMIN_USERS)
    notifications.emit_notification(
        user.pk,
        notifications.ACCOUNT_STATUS,
        f"Account {new_status.capitalize()}",
        f"An administrator has {new_status} your account.",
    )
    return ActionResult.ok(
        f"User {new_status}.",
        user_id=user.pk,
        previous_status=previous,
        new_status=new_status,
    )


def delete_user_account(user_id) -> ActionResult:
    try:
        user = _get_user(user_id)
        if user is None:
            return ActionResult.fail(ErrorKind.NOT_FOUND_OR_UNAUTHORIZED, "User not found.")
        if user.role == User.Role.ADMIN:
            return ActionResult.fail(
                ErrorKind.INVALID_STATE_TRANSITION,
                "Cannot delete an admin user via this action.",
            )
        snapshot = {"email": user.email, "role": user.role, "status": user.status}
        deleted, _ = User.objects.filter(pk=user.pk).exclude(role=User.Role.ADMIN).delete()
    except DatabaseError as exc:
        logger.exception("operator_users: delete failed for user %s", user_id)
        return ActionResult.store_failure(exc, "Failed to delete user.")
    if not deleted:
        return ActionResult.fail(
            ErrorKind.NOT_FOUND_OR_UNAUTHORIZED,
            "User not found or already deleted.",
        )

    logger.info("operator_users: deleted user %s", user_id)
    view_cache.invalidate_views(
        view_cache.ADMIN_USERS,
        view_cache.ADMIN_ROLE_REQUESTS,
        view_cache.ADMIN_PROPERTIES,
        view_cache.BROWSE_PROPERTIES,
        view_cache.HOME,
        *view_cache.BOOKING_VIEWS,
    )
    return ActionResult.ok("User account deleted successfully.", user=snapshot)


def get_role_requests(status_filter: str = "all"):
    qs = RoleRequest.objects.select_related("user")
    if status_filter in RoleRequest.Status.values:
        qs = qs.filter(status=status_filter)
    return qs.order_by("-requested_at", "-id")


def _get_pending_request(request_id) -> RoleRequest | None:
    try:
        pk = int(request_id)
    except (TypeError, ValueError):
        return None
    return (
        RoleRequest.objects.select_for_update()
        .filter(pk=pk, status=RoleRequest.Status.PENDING)
        .first()
    )


def approve_role_request(request_id, admin_notes: str = "") -> ActionResult:
    """Approve a pending request and promote its user to owner, atomically."""
    try:
        with transaction.atomic():
            role_request = _get_pending_request(request_id)
            if role_request is None:
                return ActionResult.fail(
                    ErrorKind.NOT_FOUND_OR_UNAUTHORIZED,
                    ROLE_REQUEST_NOT_FOUND,
                )
            RoleRequest.objects.filter(pk=role_request.pk).update(
                status=RoleRequest.Status.APPROVED,
                admin_notes=(admin_notes or "").strip() or "Approved",
                processed_at=timezone.now(),
            )
            promoted = User.objects.filter(pk=role_request.user_id).update(
                role=User.Role.OWNER,
                status=User.Status.ACTIVE,
                is_active=True,
            )
            if not promoted:
                transaction.set_rollback(True)
                return ActionResult.fail(
                    ErrorKind.NOT_FOUND_OR_UNAUTHORIZED,
                    "User not found for role update.",
                )
    except DatabaseError as exc:
        logger.exception("operator_users: approving role request %s failed", request_id)
        return ActionResult.store_failure(exc, "Approval failed.")

    logger.info(
        "operator_users: approved role request %s for user %s",
        role_request.pk,
        role_request.user_id,
    )
    view_cache.invalidate_views(
        view_cache.ADMIN_ROLE_REQUESTS,
        view_cache.ADMIN_USERS,
        view_cache.USER_MESSAGES,
        view_cache.LAYOUT,
    )
    notifications.emit_notification(
        role_request.user_id,
        notifications.ROLE_REQUEST_STATUS,
        "Owner Role Request Approved",
        ROLE_REQUEST_APPROVED_MESSAGE,
        related_id=role_request.pk,
    )
    return ActionResult.ok(
        "Role request approved and user updated.",
        request_id=role_request.pk,
        user_id=role_request.user_id,
    )


def reject_role_request(request_id, admin_notes: str) -> ActionResult:
    admin_notes = (admin_notes or "").strip()
    if not admin_notes:
        return ActionResult.fail(ErrorKind.VALIDATION, "Reason for rejection is required.")
    try:
        with transaction.atomic():
            role_request = _get_pending_request(request_id)
            if role_request is None:
                return ActionResult.fail(
                    ErrorKind.NOT_FOUND_OR_UNAUTHORIZED,
                    ROLE_REQUEST_NOT_FOUND,
                )
            RoleRequest.objects.filter(pk=role_request.pk).update(
                status=RoleRequest.Status.REJECTED,
                admin_notes=admin_notes,
                processed_at=timezone.now(),
            )
    except DatabaseError as exc:
        logger.exception("operator_users: rejecting role request %s failed", request_id)
        return ActionResult.store_failure(exc, "Rejection failed.")

    logger.info("operator_users: rejected role request %s", role_request.pk)
    view_cache.invalidate_views(
        view_cache.ADMIN_ROLE_REQUESTS,
        view_cache.USER_MESSAGES,
        view_cache.LAYOUT,
    )
    notifications.emit_notification(
        role_request.user_id,
        notifications.ROLE_REQUEST_STATUS,
        "Owner Role Request Rejected",
        f"Your request to become a Property Owner has been rejected. Reason: {admin_notes}",
        related_id=role_request.pk,
    )
    return ActionResult.ok(
        "Role request rejected.",
        request_id=role_request.pk,
        user_id=role_request.user_id,
    )
