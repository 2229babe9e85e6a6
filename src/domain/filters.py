# src/domain/filters.py

from dataclasses import dataclass
from datetime import datetime

from src.domain.exceptions import InvalidRequestError
from src.domain.state_machine import BookingStatus

DEFAULT_PAGE = 1
DEFAULT_LIMIT = 10
MAX_LIMIT = 100


@dataclass(frozen=True)
class Page:
    """1-indexed page of results."""

    page: int = DEFAULT_PAGE
    limit: int = DEFAULT_LIMIT

    def __post_init__(self):
        if self.page < 1:
            raise InvalidRequestError("Page must be at least 1")
        if not 1 <= self.limit <= MAX_LIMIT:
            raise InvalidRequestError(f"Limit must be between 1 and {MAX_LIMIT}")

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit


@dataclass(frozen=True)
class ArtistBookingFilters:
    status: BookingStatus | None = None
    # Bookings starting at or after start_date and ending at or before end_date.
    start_date: datetime | None = None
    end_date: datetime | None = None


@dataclass(frozen=True)
class OrganizerBookingFilters:
    status: BookingStatus | None = None
    start_date: datetime | None = None
    end_date: datetime | None = None
    event_id: str | None = None


@dataclass(frozen=True)
class AdminBookingFilters:
    status: BookingStatus | None = None
    start_date: datetime | None = None
    end_date: datetime | None = None
    event_id: str | None = None
    artist_id: str | None = None
