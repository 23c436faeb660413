"""
Versioned cache keys for read views.

Mutations call ``invalidate_views`` with the names of every view whose data they
touched; each name carries a version counter and cached entries embed the
version they were computed under, so a bump strands all of them at once.
"""

from __future__ import annotations

import logging
from typing import Iterable
from urllib.parse import urlencode

from django.conf import settings
from django.core.cache import cache
from django.http import QueryDict

logger = logging.getLogger(__name__)

VIEW_VERSION_KEY = "views:version:{view}"

OWNER_BOOKINGS = "bookings:owner"
USER_BOOKINGS = "bookings:user"
ADMIN_BOOKINGS = "bookings:admin"
LAYOUT = "layout"
HOME = "home"
OWNER_PROPERTIES = "properties:owner"
BROWSE_PROPERTIES = "properties:browse"
ADMIN_PROPERTIES = "properties:admin"
ADMIN_MESSAGES = "messages:admin"
USER_MESSAGES = "messages:user"
ADMIN_USERS = "users:admin"
ADMIN_ROLE_REQUESTS = "role-requests:admin"
PLATFORM_SETTINGS = "settings"

BOOKING_VIEWS = (OWNER_BOOKINGS, USER_BOOKINGS, ADMIN_BOOKINGS, LAYOUT)


def get_view_version(view: str) -> int:
    key = VIEW_VERSION_KEY.format(view=view)
    version = cache.get(key)
    if version is None:
        cache.add(key, 1, timeout=None)
        return 1
    try:
        return int(version)
    except (TypeError, ValueError):
        return 1


def _bump_version(view: str) -> None:
    key = VIEW_VERSION_KEY.format(view=view)
    try:
        cache.incr(key)
    except ValueError:
        cache.set(key, get_view_version(view) + 1, timeout=None)


def invalidate_views(*views: str) -> None:
    """Mark the named views stale. Never raises."""
    for view in dict.fromkeys(views):
        try:
            _bump_version(view)
        except Exception:
            logger.warning("view_cache: could not invalidate %s", view, exc_info=True)


def _normalize_params(params: QueryDict | dict | None) -> str:
    if not params:
        return ""
    items: list[tuple[str, str]] = []
    for key in sorted(params.keys()):
        values: Iterable = (
            params.getlist(key) if isinstance(params, QueryDict) else [params[key]]
        )
        for value in values:
            items.append((key, str(value)))
    return urlencode(items)


def view_cache_key(view: str, scope: object = "all", params: QueryDict | dict | None = None) -> str:
    normalized = _normalize_params(params)
    return f"views:{view}:v{get_view_version(view)}:{scope}:{normalized or 'all'}"


def view_cache_timeout() -> int:
    return getattr(settings, "VIEW_CACHE_TTL", 120)


def cached_view(view: str, scope: object, params, producer):
    """Return the cached payload for ``view`` or compute, store and return it."""
    key = view_cache_key(view, scope, params)
    payload = cache.get(key)
    if payload is not None:
        return payload
    payload = producer()
    cache.set(key, payload, view_cache_timeout())
    return payload
