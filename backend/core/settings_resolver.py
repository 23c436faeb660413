"""
Runtime platform settings (maintenance mode, registrations, fees) read from
``operator_settings.DbSetting``.

Each key resolves to its newest row. Lookups, misses included, are cached
in-process for a few seconds because the maintenance middleware reads them on
every request.
"""

from __future__ import annotations

import copy
import logging
import time
from decimal import Decimal, InvalidOperation
from threading import Lock
from typing import Any

logger = logging.getLogger(__name__)

CACHE_TTL_SECONDS = 5.0

_MISSING = object()
_entries: dict[str, tuple[float, object]] = {}
_lock = Lock()


def clear_settings_cache() -> None:
    """Forget every cached lookup. Called after settings are written."""
    with _lock:
        _entries.clear()


def _cached(key: str, now: float) -> object | None:
    with _lock:
        entry = _entries.get(key)
        if entry is None:
            return None
        expires_at, value = entry
        if now >= expires_at:
            del _entries[key]
            return None
        return value


def _remember(key: str, now: float, value: object) -> None:
    with _lock:
        _entries[key] = (now + CACHE_TTL_SECONDS, value)


def _load(key: str) -> object:
    from django.apps import apps as django_apps

    if not django_apps.ready or not django_apps.is_installed("operator_settings"):
        return _MISSING
    DbSetting = django_apps.get_model("operator_settings", "DbSetting")
    row = (
        DbSetting.objects.filter(key=key)
        .order_by("-updated_at", "-id")
        .values_list("value_json", flat=True)
        .first()
    )
    return _MISSING if row is None else row


def get_setting(key: str, default: Any) -> Any:
    """Current value of ``key``, or ``default`` when unset or unreadable."""
    now = time.monotonic()
    value = _cached(key, now)
    if value is None:
        try:
            value = _load(key)
        except Exception:
            logger.warning("settings: could not read %s, using default", key, exc_info=True)
            value = _MISSING
        _remember(key, now, value)
    if value is _MISSING:
        return default
    return copy.deepcopy(value)


def get_bool(key: str, default: bool = False) -> bool:
    value = get_setting(key, default)
    return value if isinstance(value, bool) else default


def get_int(key: str, default: int = 0) -> int:
    value = get_setting(key, default)
    if isinstance(value, bool) or not isinstance(value, int):
        return default
    return value


def get_str(key: str, default: str = "") -> str:
    value = get_setting(key, default)
    return value if isinstance(value, str) else default


def get_decimal(key: str, default: Decimal = Decimal("0")) -> Decimal:
    """Decimal settings are stored as strings; plain numbers are accepted too."""
    value = get_setting(key, default)
    if isinstance(value, Decimal):
        return value
    if isinstance(value, bool) or not isinstance(value, (str, int, float)):
        return default
    try:
        return Decimal(str(value))
    except InvalidOperation:
        return default
