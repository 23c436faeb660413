"""Shared pytest configuration and fixtures."""

from __future__ import annotations

import importlib
from datetime import date, timedelta
from decimal import Decimal
from typing import Callable

import pytest
from django.contrib.auth import get_user_model
from django.contrib.auth.models import Group
from django.core.cache import cache
from django.urls import clear_url_caches
from rest_framework.test import APIClient

import ownbroker.urls as ownbroker_urls
from bookings.models import Booking
from core.settings_resolver import clear_settings_cache
from properties.models import Property

User = get_user_model()

OPS_HOST = "ops.example.com"


@pytest.fixture(autouse=True)
def _reset_caches():
    cache.clear()
    clear_settings_cache()
    yield
    cache.clear()
    clear_settings_cache()


@pytest.fixture
def api_client():
    """DRF API client for request/response helpers."""
    return APIClient()


@pytest.fixture
def client_for() -> Callable[..., APIClient]:
    """Build an API client authenticated as ``user``, optionally for another host."""

    def _make(user=None, host: str | None = None) -> APIClient:
        client = APIClient()
        if host:
            client.defaults["HTTP_HOST"] = host
        if user is not None:
            client.force_authenticate(user=user)
        return client

    return _make


def _create_user(username: str, **extra) -> User:
    extra.setdefault("email", f"{username}@example.com")
    extra.setdefault("name", username.capitalize())
    return User.objects.create_user(username=username, password="testpass", **extra)


@pytest.fixture
def renter_user():
    return _create_user("renter", role=User.Role.USER)


@pytest.fixture
def owner_user():
    return _create_user("owner", role=User.Role.OWNER)


@pytest.fixture
def other_owner():
    return _create_user("otherowner", role=User.Role.OWNER)


@pytest.fixture
def admin_user():
    return _create_user("admin", role=User.Role.ADMIN, is_staff=True)


@pytest.fixture
def operator_factory() -> Callable[..., User]:
    """Staff account in the given operator group."""

    def _create(group_name: str, username: str | None = None) -> User:
        group, _ = Group.objects.get_or_create(name=group_name)
        user = _create_user(username or group_name, is_staff=True)
        user.groups.add(group)
        return user

    return _create


@pytest.fixture
def verified_property(owner_user):
    return Property.objects.create(
        owner=owner_user,
        title="Sunny Lake House",
        description="Three bedroom house next to the lake.",
        price=Decimal("1200.00"),
        city="Kandy",
        property_type=Property.PropertyType.HOUSE,
        amenities=["wifi", "parking"],
        status=Property.Status.VERIFIED,
    )


@pytest.fixture
def booking_factory(verified_property, renter_user) -> Callable[..., Booking]:
    def _create_booking(*, status=Booking.Status.PENDING, user=None, prop=None, days_ahead=5):
        start = date.today() + timedelta(days=days_ahead)
        return Booking.objects.create(
            user=user or renter_user,
            property=prop or verified_property,
            start_date=start,
            end_date=start + timedelta(days=3),
            status=status,
        )

    return _create_booking


@pytest.fixture
def enable_operator_routes(settings):
    settings.ENABLE_OPERATOR = True
    settings.OPS_ALLOWED_HOSTS = [OPS_HOST]
    settings.ALLOWED_HOSTS = [OPS_HOST, "public.example.com", "testserver"]
    clear_url_caches()
    importlib.reload(ownbroker_urls)
    yield OPS_HOST
    settings.ENABLE_OPERATOR = False
    clear_url_caches()
    importlib.reload(ownbroker_urls)
