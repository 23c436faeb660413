"""Read and update the platform settings shown on the admin settings page."""

from __future__ import annotations

import logging
from decimal import Decimal

from django.conf import settings
from django.db import DatabaseError, transaction

from core import view_cache
from core.results import ActionResult, ErrorKind, validation_failure
from core.settings_resolver import clear_settings_cache
from operator_settings.models import DbSetting
from operator_settings.serializers import PlatformSettingsSerializer

logger = logging.getLogger(__name__)

DEFAULT_TERMS = "Please refer to the /terms page for the full terms and conditions."

SETTING_VALUE_TYPES = {
    "platformName": DbSetting.ValueType.STR,
    "logoUrl": DbSetting.ValueType.STR,
    "maintenanceMode": DbSetting.ValueType.BOOL,
    "allowNewRegistrations": DbSetting.ValueType.BOOL,
    "defaultBookingFee": DbSetting.ValueType.DECIMAL,
    "adminEmail": DbSetting.ValueType.STR,
    "termsAndConditions": DbSetting.ValueType.STR,
}


def default_platform_settings() -> dict:
    return {
        "platformName": settings.PLATFORM_NAME,
        "logoUrl": settings.PLATFORM_LOGO_URL,
        "maintenanceMode": False,
        "allowNewRegistrations": True,
        "defaultBookingFee": Decimal(str(settings.DEFAULT_BOOKING_FEE)),
        "adminEmail": settings.PLATFORM_ADMIN_EMAIL,
        "termsAndConditions": DEFAULT_TERMS,
    }


def _decode(key: str, value):
    if SETTING_VALUE_TYPES[key] == DbSetting.ValueType.DECIMAL:
        return Decimal(str(value))
    return value


def _encode(key: str, value):
    if SETTING_VALUE_TYPES[key] == DbSetting.ValueType.DECIMAL:
        return str(value)
    return value


def get_platform_settings() -> dict:
    """
    Current value of every platform setting.

    Keys without a stored row, and every key when the table can't be read,
    fall back to the defaults from Django settings.
    """
    current = default_platform_settings()
    try:
        rows = (
            DbSetting.objects.filter(key__in=SETTING_VALUE_TYPES)
            .order_by("key", "-updated_at", "-id")
            .values_list("key", "value_json")
        )
        seen: set[str] = set()
        for key, value in rows:
            if key in seen:
                continue
            seen.add(key)
            current[key] = _decode(key, value)
    except DatabaseError:
        logger.exception("settings: failed to read platform settings, using defaults")
        return default_platform_settings()
    return current


def update_platform_settings(data: dict, actor=None) -> ActionResult:
    """
    Apply a partial update. Only keys whose value actually changes get a new row.

    The result carries ``before``/``after`` maps of the changed keys so callers can audit them.
    """
    if not isinstance(data, dict) or not data:
        return ActionResult.fail(ErrorKind.VALIDATION, "No settings provided to update.")
    known = {key: value for key, value in data.items() if key in SETTING_VALUE_TYPES}
    if not known:
        return ActionResult.fail(ErrorKind.VALIDATION, "Invalid settings keys provided.")

    serializer = PlatformSettingsSerializer(data=known, partial=True)
    if not serializer.is_valid():
        return validation_failure(serializer.errors)

    current = get_platform_settings()
    changes = {
        key: value for key, value in serializer.validated_data.items() if current.get(key) != value
    }
    if not changes:
        return ActionResult.ok("No settings were changed (values might be the same).", changed=[])

    updated_by = actor if getattr(actor, "pk", None) else None
    try:
        with transaction.atomic():
            for key, value in changes.items():
                DbSetting.objects.create(
                    key=key,
                    value_type=SETTING_VALUE_TYPES[key],
                    value_json=_encode(key, value),
                    updated_by=updated_by,
                )
    except DatabaseError as exc:
        logger.exception("settings: failed to update %s", sorted(changes))
        return ActionResult.store_failure(exc, "Failed to update settings.")

    clear_settings_cache()
    view_cache.invalidate_views(view_cache.PLATFORM_SETTINGS, view_cache.LAYOUT, view_cache.HOME)
    logger.info("settings: updated %s", ", ".join(sorted(changes)))
    return ActionResult.ok(
        "Platform settings updated successfully.",
        changed=sorted(changes),
        before={key: _encode(key, current.get(key)) for key in changes},
        after={key: _encode(key, value) for key, value in changes.items()},
    )
