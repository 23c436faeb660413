import pytest
from django.contrib.auth import get_user_model

from operator_settings.models import DbSetting

pytestmark = pytest.mark.django_db

User = get_user_model()

SIGNUP = {
    "email": "New.Renter@Example.com",
    "name": "New Renter",
    "password": "Str0ng-pass-123",
    "confirm_password": "Str0ng-pass-123",
}


def test_signup_creates_renter(api_client):
    resp = api_client.post("/api/users/signup/", SIGNUP, format="json")

    assert resp.status_code == 201, resp.data
    user = User.objects.get(email="new.renter@example.com")
    assert user.username == "newrenter"
    assert user.role == User.Role.USER
    assert user.status == User.Status.ACTIVE
    assert "password" not in resp.data


def test_signup_rejects_mismatched_passwords(api_client):
    resp = api_client.post(
        "/api/users/signup/", {**SIGNUP, "confirm_password": "different"}, format="json"
    )

    assert resp.status_code == 400
    assert resp.data["confirm_password"] == ["Passwords don't match."]


def test_signup_rejects_duplicate_email(api_client, renter_user):
    resp = api_client.post(
        "/api/users/signup/", {**SIGNUP, "email": renter_user.email.upper()}, format="json"
    )

    assert resp.status_code == 400
    assert "email" in resp.data


def test_signup_closed_by_platform_setting(api_client):
    DbSetting.objects.create(
        key="allowNewRegistrations",
        value_type=DbSetting.ValueType.BOOL,
        value_json=False,
    )

    resp = api_client.post("/api/users/signup/", SIGNUP, format="json")

    assert resp.status_code == 403
    assert resp.data["message"] == "New registrations are currently disabled."
    assert not User.objects.filter(email="new.renter@example.com").exists()


@pytest.mark.parametrize("field", ["identifier", "username"])
def test_login_with_email_or_username(api_client, owner_user, field):
    identifier = owner_user.email if field == "identifier" else owner_user.username

    resp = api_client.post(
        "/api/users/token/", {field: identifier, "password": "testpass"}, format="json"
    )

    assert resp.status_code == 200, resp.data
    assert {"access", "refresh"} <= set(resp.data)
    assert resp.data["role"] == "owner"


def test_login_wrong_password(api_client, renter_user):
    resp = api_client.post(
        "/api/users/token/",
        {"identifier": renter_user.email, "password": "nope"},
        format="json",
    )

    assert resp.status_code == 401


@pytest.mark.parametrize(
    "status, message",
    [
        (User.Status.PENDING, "Your account is pending approval."),
        (User.Status.SUSPENDED, "Your account has been suspended."),
    ],
)
def test_inactive_accounts_are_refused(api_client, renter_user, status, message):
    User.objects.filter(pk=renter_user.pk).update(status=status)

    resp = api_client.post(
        "/api/users/token/",
        {"identifier": renter_user.username, "password": "testpass"},
        format="json",
    )

    assert resp.status_code == 401
    assert resp.data["detail"] == message


def test_token_authenticates_me_endpoint(api_client, renter_user):
    token = api_client.post(
        "/api/users/token/",
        {"identifier": renter_user.username, "password": "testpass"},
        format="json",
    ).data["access"]
    api_client.credentials(HTTP_AUTHORIZATION=f"Bearer {token}")

    resp = api_client.get("/api/users/me/")

    assert resp.status_code == 200
    assert resp.data["email"] == renter_user.email
    assert resp.data["avatar_url"].startswith("https://")
