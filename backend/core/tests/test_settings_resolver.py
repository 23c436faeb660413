from decimal import Decimal

import pytest

from core import settings_resolver
from operator_settings.models import DbSetting

pytestmark = pytest.mark.django_db


def _store(key, value, value_type=DbSetting.ValueType.STR):
    return DbSetting.objects.create(key=key, value_type=value_type, value_json=value)


def test_missing_key_returns_default():
    assert settings_resolver.get_str("platformName", "Fallback") == "Fallback"
    assert settings_resolver.get_bool("maintenanceMode", False) is False


def test_newest_row_wins():
    _store("platformName", "First")
    _store("platformName", "Second")

    assert settings_resolver.get_str("platformName", "x") == "Second"


def test_values_are_cached_until_cleared():
    _store("maintenanceMode", False, DbSetting.ValueType.BOOL)
    assert settings_resolver.get_bool("maintenanceMode") is False

    _store("maintenanceMode", True, DbSetting.ValueType.BOOL)
    assert settings_resolver.get_bool("maintenanceMode") is False

    settings_resolver.clear_settings_cache()
    assert settings_resolver.get_bool("maintenanceMode") is True


def test_typed_getters_reject_wrong_types():
    _store("maintenanceMode", "yes")
    _store("defaultBookingFee", "7.50", DbSetting.ValueType.DECIMAL)
    _store("platformName", 12)

    assert settings_resolver.get_bool("maintenanceMode", False) is False
    assert settings_resolver.get_decimal("defaultBookingFee") == Decimal("7.50")
    assert settings_resolver.get_str("platformName", "Default") == "Default"
    assert settings_resolver.get_int("platformName", 3) == 12


def test_store_errors_fall_back_to_default(monkeypatch):
    def _boom(key):
        raise RuntimeError("db unavailable")

    monkeypatch.setattr(settings_resolver, "_load", _boom)

    assert settings_resolver.get_str("platformName", "Default") == "Default"
