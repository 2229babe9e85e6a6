# src/domain/permissions.py

from enum import Enum
from typing import Dict, FrozenSet, Set

from src.domain.state_machine import BookingStatus


class UserRole(str, Enum):
    USER = "user"
    ARTIST = "artist"
    ORGANIZER = "organizer"
    ADMIN = "admin"


class Capability(str, Enum):
    CREATE_BOOKING = "create_booking"
    VIEW_ARTIST_BOOKINGS = "view_artist_bookings"
    VIEW_ORGANIZER_BOOKINGS = "view_organizer_bookings"
    VIEW_ALL_BOOKINGS = "view_all_bookings"
    UPDATE_PAYMENT = "update_payment"
    CONFIRM_BOOKING = "confirm_booking"
    REJECT_BOOKING = "reject_booking"
    COMPLETE_BOOKING = "complete_booking"


class Relationship(str, Enum):
    """How a caller relates to one particular booking."""

    BOOKING_ARTIST = "booking_artist"
    BOOKING_CREATOR = "booking_creator"
    ADMIN = "admin"


ROLE_CAPABILITIES: Dict[UserRole, FrozenSet[Capability]] = {
    UserRole.USER: frozenset(),
    UserRole.ARTIST: frozenset(
        {
            Capability.VIEW_ARTIST_BOOKINGS,
            Capability.CONFIRM_BOOKING,
            Capability.REJECT_BOOKING,
        }
    ),
    UserRole.ORGANIZER: frozenset(
        {
            Capability.CREATE_BOOKING,
            Capability.VIEW_ORGANIZER_BOOKINGS,
            Capability.UPDATE_PAYMENT,
            Capability.COMPLETE_BOOKING,
        }
    ),
    UserRole.ADMIN: frozenset(
        {
            Capability.CREATE_BOOKING,
            Capability.VIEW_ORGANIZER_BOOKINGS,
            Capability.VIEW_ALL_BOOKINGS,
            Capability.UPDATE_PAYMENT,
            Capability.COMPLETE_BOOKING,
        }
    ),
}


_EVERYONE_INVOLVED: FrozenSet[Relationship] = frozenset(Relationship)

# Requested status -> relationships allowed to request it.
TRANSITION_GUARDS: Dict[BookingStatus, FrozenSet[Relationship]] = {
    BookingStatus.CONFIRMED: frozenset(
        {Relationship.BOOKING_ARTIST, Relationship.ADMIN}
    ),
    BookingStatus.REJECTED: frozenset(
        {Relationship.BOOKING_ARTIST, Relationship.ADMIN}
    ),
    BookingStatus.COMPLETED: frozenset(
        {Relationship.BOOKING_CREATOR, Relationship.ADMIN}
    ),
    BookingStatus.CANCELED: _EVERYONE_INVOLVED,
}


def has_capability(role: UserRole, capability: Capability) -> bool:
    return capability in ROLE_CAPABILITIES.get(role, frozenset())


def may_request_status(
    relationships: Set[Relationship],
    requested: BookingStatus,
) -> bool:
    """
    True if any of the caller's relationships to the booking
    authorises moving it to ``requested``.
    """
    allowed = TRANSITION_GUARDS.get(requested, _EVERYONE_INVOLVED)
    return bool(allowed & set(relationships))
