import pytest

from operator_settings.models import DbSetting

pytestmark = pytest.mark.django_db


@pytest.fixture
def maintenance_on():
    return DbSetting.objects.create(
        key="maintenanceMode",
        value_type=DbSetting.ValueType.BOOL,
        value_json=True,
    )


def test_status_endpoint_defaults(api_client, settings):
    resp = api_client.get("/api/maintenance/")

    assert resp.status_code == 200
    assert resp.json() == {
        "platform_name": settings.PLATFORM_NAME,
        "maintenance_mode": False,
        "allow_new_registrations": True,
    }


def test_public_api_is_blocked_during_maintenance(api_client, maintenance_on):
    resp = api_client.get("/api/properties/")

    assert resp.status_code == 503
    assert resp.json()["success"] is False


def test_status_and_login_stay_available(api_client, maintenance_on, renter_user):
    status_resp = api_client.get("/api/maintenance/")
    login = api_client.post(
        "/api/users/token/",
        {"identifier": renter_user.username, "password": "testpass"},
        format="json",
    )

    assert status_resp.json()["maintenance_mode"] is True
    assert login.status_code == 200
