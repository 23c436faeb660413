from decimal import Decimal

import pytest

from core import view_cache
from core.results import ErrorKind
from notifications.models import Notification
from properties import services
from properties.models import Property, PropertyReport

pytestmark = pytest.mark.django_db


def _payload(**overrides):
    data = {
        "title": "Quiet Studio Flat",
        "description": "Compact studio close to the station.",
        "price": "450.00",
        "city": "Colombo",
        "property_type": "apartment",
        "amenities": ["wifi"],
        "facing": "North-East",
    }
    data.update(overrides)
    return data


def test_add_property_starts_pending(owner_user, settings):
    settings.PROPERTY_PLACEHOLDER_IMAGE_URL = "https://img.example.com/{seed}.jpg"

    result = services.add_property(owner_user.id, _payload())

    assert result.success is True
    prop = Property.objects.get(pk=result.data["property_id"])
    assert prop.status == Property.Status.PENDING
    assert prop.facing == "north-east"
    assert prop.image_url.startswith("https://img.example.com/")


def test_add_property_validation_message(owner_user):
    result = services.add_property(owner_user.id, _payload(title="Flat", price="0"))

    assert result.success is False
    assert result.error == ErrorKind.VALIDATION
    assert result.message.startswith("Validation failed: ")
    assert "Title must be at least 5 characters." in result.message
    assert not Property.objects.exists()


def test_floor_cannot_exceed_total(owner_user):
    result = services.add_property(owner_user.id, _payload(floor_number=7, total_floors=3))

    assert result.error == ErrorKind.VALIDATION
    assert "Floor number cannot exceed total floors." in result.message


def test_update_rejected_property_requeues_it(owner_user):
    prop = Property.objects.create(
        owner=owner_user,
        title="Old Farmhouse",
        description="Needs a new roof but has a big garden.",
        price=Decimal("300"),
        status=Property.Status.REJECTED,
        rejection_reason="Photos missing",
    )

    result = services.update_property(prop.pk, owner_user.id, {"price": "350.00"})

    assert result.success is True
    assert result.message.endswith("pending verification again.")
    prop.refresh_from_db()
    assert prop.status == Property.Status.PENDING
    assert prop.rejection_reason == ""
    assert prop.price == Decimal("350.00")


def test_other_owner_cannot_update_or_delete(verified_property, other_owner):
    update = services.update_property(verified_property.pk, other_owner.id, {"price": "1.00"})
    delete = services.delete_property(verified_property.pk, other_owner.id)

    assert update.error == ErrorKind.NOT_FOUND_OR_UNAUTHORIZED
    assert delete.error == ErrorKind.NOT_FOUND_OR_UNAUTHORIZED
    assert Property.objects.filter(pk=verified_property.pk).exists()


def test_delete_property_invalidates_booking_views(verified_property, owner_user):
    before = view_cache.get_view_version(view_cache.OWNER_BOOKINGS)

    result = services.delete_property(verified_property.pk, owner_user.id)

    assert result.success is True
    assert view_cache.get_view_version(view_cache.OWNER_BOOKINGS) == before + 1


def test_update_property_invalidates_booking_views(verified_property, owner_user):
    before = {view: view_cache.get_view_version(view) for view in view_cache.BOOKING_VIEWS}

    result = services.update_property(
        verified_property.pk, owner_user.id, {"title": "Lakeside Villa"}
    )

    assert result.success is True
    for view, version in before.items():
        assert view_cache.get_view_version(view) == version + 1


@pytest.mark.parametrize("bad_id", ["-" * 36, "not-a-uuid", "", None, 42])
def test_malformed_ids_are_not_found(owner_user, bad_id):
    assert services.get_property(bad_id) is None
    if bad_id:
        assert (
            services.update_property(bad_id, owner_user.id, {"city": "Galle"}).error
            == ErrorKind.NOT_FOUND_OR_UNAUTHORIZED
        )
        assert (
            services.delete_property(bad_id, owner_user.id).error
            == ErrorKind.NOT_FOUND_OR_UNAUTHORIZED
        )
        assert (
            services.request_property_pano(bad_id, owner_user.id).error
            == ErrorKind.NOT_FOUND_OR_UNAUTHORIZED
        )

def test_public_listing_filters(verified_property, owner_user):
    Property.objects.create(
        owner=owner_user,
        title="Pending Cottage",
        description="Not yet reviewed by the team.",
        price=Decimal("100"),
        city="Kandy",
    )
    Property.objects.create(
        owner=owner_user,
        title="City Apartment",
        description="Top floor apartment in the centre.",
        price=Decimal("900"),
        city="Colombo",
        amenities=["WiFi"],
        status=Property.Status.VERIFIED,
    )

    assert [p.title for p in services.get_public_properties({"city": "kandy"})] == [
        "Sunny Lake House"
    ]
    assert {p.title for p in services.get_public_properties({"amenities": "wifi"})} == {
        "Sunny Lake House",
        "City Apartment",
    }
    assert [p.title for p in services.get_public_properties({"amenities": "wifi,parking"})] == [
        "Sunny Lake House"
    ]
    assert [p.title for p in services.get_public_properties({"max_price": "1000"})] == [
        "City Apartment"
    ]


def test_owner_dashboard_stats(verified_property, owner_user, booking_factory):
    booking_factory()

    stats = services.get_owner_dashboard_stats(owner_user.id)

    assert stats == {
        "total_properties": 1,
        "pending_properties": 0,
        "verified_properties": 1,
        "total_bookings": 1,
        "pending_bookings": 1,
        "approved_bookings": 0,
    }


def test_enquiry_notifies_renter_and_owner(verified_property, renter_user, owner_user):
    result = services.send_property_enquiry(verified_property.pk, renter_user.id)

    assert result.success is True
    assert result.message == "Enquiry processed successfully."
    renter_notice = Notification.objects.get(user=renter_user)
    owner_notice = Notification.objects.get(user=owner_user)
    assert renter_notice.type == owner_notice.type == "property_enquiry"
    assert renter_notice.title == "Enquiry Sent: Sunny Lake House"
    assert owner_notice.title == "New Enquiry: Sunny Lake House"
    assert renter_user.email in owner_notice.message
    assert owner_notice.related_id == str(verified_property.pk)


def test_owner_cannot_enquire_about_own_property(verified_property, owner_user):
    result = services.send_property_enquiry(verified_property.pk, owner_user.id)

    assert result.error == ErrorKind.VALIDATION
    assert not Notification.objects.exists()


def test_enquiry_on_missing_property(renter_user):
    result = services.send_property_enquiry("7d0c5b9e-6a1f-4d43-9a57-0f6c1b2e3d4f", renter_user.id)

    assert result.error == ErrorKind.NOT_FOUND_OR_UNAUTHORIZED
    assert result.message == "Property not found."


def test_submit_report_requires_reason(verified_property, renter_user):
    blank = services.submit_property_report(verified_property.pk, renter_user.id, "   ")
    stored = services.submit_property_report(
        verified_property.pk, renter_user.id, "  Photos do not match the listing.  "
    )

    assert blank.error == ErrorKind.VALIDATION
    assert stored.success is True
    report = PropertyReport.objects.get(pk=stored.data["report_id"])
    assert report.reason == "Photos do not match the listing."
    assert report.reporter == renter_user
    assert report.status == PropertyReport.Status.PENDING
