import pytest
from django.contrib.auth import get_user_model

from notifications.models import Notification
from operator_core.models import OperatorAuditEvent
from operator_core.permissions import OPERATOR_MODERATOR, OPERATOR_SUPPORT
from users.models import RoleRequest

pytestmark = [pytest.mark.django_db, pytest.mark.usefixtures("enable_operator_routes")]

User = get_user_model()

OPS_HOST = "ops.example.com"


@pytest.fixture
def ops(client_for, admin_user):
    return client_for(admin_user, host=OPS_HOST)


def test_user_list_filters(ops, renter_user, owner_user, verified_property, booking_factory):
    booking_factory()

    resp = ops.get("/api/operator/users/", {"role": "owner"})

    assert resp.status_code == 200
    assert [row["email"] for row in resp.data["results"]] == [owner_user.email]
    assert resp.data["results"][0]["properties_count"] == 1

    renters = ops.get("/api/operator/users/", {"name": "renter"}).data["results"]
    assert renters[0]["bookings_count"] == 1


def test_change_role_requires_reason(ops, renter_user):
    resp = ops.post(f"/api/operator/users/{renter_user.pk}/role/", {"role": "owner"}, format="json")

    assert resp.status_code == 400
    assert resp.data["message"] == "reason is required"
    renter_user.refresh_from_db()
    assert renter_user.role == "user"


def test_change_role_notifies_and_audits(ops, renter_user, admin_user):
    resp = ops.post(
        f"/api/operator/users/{renter_user.pk}/role/",
        {"role": "owner", "reason": "Verified ownership documents"},
        format="json",
    )

    assert resp.status_code == 200, resp.data
    assert resp.data["message"] == "User role updated successfully!"
    renter_user.refresh_from_db()
    assert renter_user.role == "owner"
    notice = Notification.objects.get(user=renter_user)
    assert notice.type == "role_change"
    event = OperatorAuditEvent.objects.get()
    assert event.actor_id == admin_user.pk
    assert event.before_json == {"role": "user"}
    assert event.after_json == {"role": "owner"}


def test_cannot_promote_to_admin_or_touch_admins(ops, renter_user, admin_user):
    promote = ops.post(
        f"/api/operator/users/{renter_user.pk}/role/",
        {"role": "admin", "reason": "no"},
        format="json",
    )
    demote = ops.post(
        f"/api/operator/users/{admin_user.pk}/role/",
        {"role": "user", "reason": "no"},
        format="json",
    )

    assert promote.status_code == 400
    assert promote.data["message"] == "Changing role to Admin is not permitted via this action."
    assert demote.status_code == 409
    assert not OperatorAuditEvent.objects.exists()


def test_toggle_suspension_round_trip(ops, renter_user):
    url = f"/api/operator/users/{renter_user.pk}/toggle-suspension/"

    suspended = ops.post(url, {"reason": "Spam reports"}, format="json")
    renter_user.refresh_from_db()
    assert suspended.data["message"] == "User suspended."
    assert renter_user.status == "suspended"
    assert renter_user.is_active is False

    reactivated = ops.post(url, {"reason": "Appeal accepted"}, format="json")
    renter_user.refresh_from_db()
    assert reactivated.data["message"] == "User active."
    assert renter_user.status == "active"
    assert renter_user.is_active is True
    assert Notification.objects.filter(user=renter_user, type="account_status").count() == 2


def test_support_cannot_suspend(client_for, operator_factory, renter_user):
    support = operator_factory(OPERATOR_SUPPORT)

    resp = client_for(support, host=OPS_HOST).post(
        f"/api/operator/users/{renter_user.pk}/toggle-suspension/",
        {"reason": "x"},
        format="json",
    )

    assert resp.status_code == 403


def test_delete_user_needs_operator_admin(client_for, operator_factory, ops, renter_user):
    moderator = operator_factory(OPERATOR_MODERATOR)
    denied = client_for(moderator, host=OPS_HOST).delete(
        f"/api/operator/users/{renter_user.pk}/?reason=spam"
    )
    assert denied.status_code == 403

    resp = ops.delete(f"/api/operator/users/{renter_user.pk}/?reason=spam")

    assert resp.status_code == 200
    assert not User.objects.filter(pk=renter_user.pk).exists()
    event = OperatorAuditEvent.objects.get(action="operator.user.delete")
    assert event.before_json["email"] == renter_user.email


def test_approve_role_request(ops, renter_user):
    role_request = RoleRequest.objects.create(user=renter_user, user_notes="I own a flat.")

    resp = ops.post(f"/api/operator/role-requests/{role_request.pk}/approve/", {}, format="json")

    assert resp.status_code == 200, resp.data
    role_request.refresh_from_db()
    renter_user.refresh_from_db()
    assert role_request.status == RoleRequest.Status.APPROVED
    assert role_request.admin_notes == "Approved"
    assert role_request.processed_at is not None
    assert renter_user.role == "owner"
    assert Notification.objects.get(user=renter_user).title == "Owner Role Request Approved"

    again = ops.post(f"/api/operator/role-requests/{role_request.pk}/approve/", {}, format="json")
    assert again.status_code == 404
    assert again.data["message"] == "Request not found or already processed."


def test_reject_role_request_requires_notes(ops, renter_user):
    role_request = RoleRequest.objects.create(user=renter_user)
    url = f"/api/operator/role-requests/{role_request.pk}/reject/"

    missing = ops.post(url, {}, format="json")
    assert missing.status_code == 400
    assert missing.data["message"] == "Reason for rejection is required."

    resp = ops.post(url, {"admin_notes": "No proof of ownership."}, format="json")

    assert resp.status_code == 200
    role_request.refresh_from_db()
    renter_user.refresh_from_db()
    assert role_request.status == RoleRequest.Status.REJECTED
    assert role_request.admin_notes == "No proof of ownership."
    assert renter_user.role == "user"
    notice = Notification.objects.get(user=renter_user)
    assert notice.message.endswith("Reason: No proof of ownership.")


def test_role_request_list_filters(ops, renter_user, owner_user):
    RoleRequest.objects.create(user=renter_user)
    RoleRequest.objects.create(user=owner_user, status=RoleRequest.Status.APPROVED)

    resp = ops.get("/api/operator/role-requests/", {"status": "pending"})

    assert resp.data["count"] == 1
    assert resp.data["results"][0]["user_email"] == renter_user.email
    assert resp.data["results"][0]["user_role"] == "user"
