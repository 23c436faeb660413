"""Domain helpers for booking state transitions."""

from __future__ import annotations

from typing import Literal

from .models import Booking

BookingAction = Literal["approve", "reject", "cancel", "admin_cancel"]

# pending -> approved | cancelled; a renter (or an admin) may still cancel an
# approved booking. Nothing leaves cancelled.
ALLOWED_FROM: dict[str, tuple[str, ...]] = {
    "approve": (Booking.Status.PENDING,),
    "reject": (Booking.Status.PENDING,),
    "cancel": (Booking.Status.PENDING, Booking.Status.APPROVED),
    "admin_cancel": (Booking.Status.PENDING, Booking.Status.APPROVED),
}

TARGET_STATUS: dict[str, str] = {
    "approve": Booking.Status.APPROVED,
    "reject": Booking.Status.CANCELLED,
    "cancel": Booking.Status.CANCELLED,
    "admin_cancel": Booking.Status.CANCELLED,
}


def can_transition(current_status: str, action: BookingAction) -> bool:
    return current_status in ALLOWED_FROM[action]


def already_message(current_status: str) -> str:
    """Failure text for a transition attempted from an incompatible state."""
    return f"Booking is already {current_status}."
