import pytest
from django.contrib.auth import get_user_model

from core.results import ErrorKind
from notifications.models import Notification
from users import services
from users.models import RoleRequest

pytestmark = pytest.mark.django_db

User = get_user_model()


def test_update_profile_normalizes_mobile(client_for, renter_user):
    resp = client_for(renter_user).patch(
        "/api/users/me/",
        {"name": "  Renter Person ", "mobile": "+94 (77) 123-4567"},
        format="json",
    )

    assert resp.status_code == 200, resp.data
    assert resp.data["message"] == "Profile updated successfully."
    assert resp.data["profile"]["name"] == "Renter Person"
    assert resp.data["profile"]["mobile"] == "+94771234567"


def test_update_profile_validation(renter_user):
    short = services.update_user_profile(renter_user.id, {"name": "A"})
    empty = services.update_user_profile(renter_user.id, {})
    bad_mobile = services.update_user_profile(renter_user.id, {"mobile": "call me"})

    assert short.error == ErrorKind.VALIDATION
    assert empty.message == "No profile changes provided."
    assert "Enter a valid mobile number." in bad_mobile.message


def test_request_owner_role(client_for, renter_user):
    client = client_for(renter_user)

    resp = client.post("/api/users/role-request/", {"user_notes": "I own two flats."}, format="json")

    assert resp.status_code == 201, resp.data
    role_request = RoleRequest.objects.get(user=renter_user)
    assert role_request.status == RoleRequest.Status.PENDING
    assert role_request.user_notes == "I own two flats."
    assert resp.data["request_id"] == role_request.pk
    assert Notification.objects.get(user=renter_user).title == "Owner Role Request Submitted"

    latest = client.get("/api/users/role-request/")
    assert latest.data["request"]["id"] == role_request.pk


def test_duplicate_pending_request_is_refused(renter_user):
    services.request_owner_role_upgrade(renter_user.id)

    result = services.request_owner_role_upgrade(renter_user.id)

    assert result.error == ErrorKind.INVALID_STATE_TRANSITION
    assert result.message == "You already have a role upgrade request pending review."
    assert RoleRequest.objects.count() == 1


def test_previously_approved_request_is_refused(renter_user):
    RoleRequest.objects.create(user=renter_user, status=RoleRequest.Status.APPROVED)

    result = services.request_owner_role_upgrade(renter_user.id)

    assert result.success is False
    assert result.message.startswith("Your role upgrade request was previously approved.")


def test_only_active_users_can_request(renter_user, owner_user):
    User.objects.filter(pk=renter_user.pk).update(status=User.Status.SUSPENDED)

    suspended = services.request_owner_role_upgrade(renter_user.id)
    owner = services.request_owner_role_upgrade(owner_user.id)

    assert suspended.message == "Cannot request upgrade. Account status is: suspended."
    assert owner.message == "Role upgrade only available for 'user' role (current: owner)."


def test_no_role_request_yet(client_for, renter_user):
    resp = client_for(renter_user).get("/api/users/role-request/")

    assert resp.data == {"request": None}
