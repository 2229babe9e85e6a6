# src/domain/booking_rules.py

from datetime import datetime, timezone
from uuid import UUID

from src.domain.exceptions import InvalidRequestError


def as_utc(value: datetime) -> datetime:
    """Naive timestamps are taken to be UTC already."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def parse_identifier(value: str, label: str) -> str:
    """
    Returns the canonical form of a record id, or raises
    InvalidRequestError("Invalid <label> ID format").
    """
    try:
        return str(UUID(str(value)))
    except (TypeError, ValueError, AttributeError) as exc:
        raise InvalidRequestError(f"Invalid {label} ID format") from exc


def ensure_valid_window(start_time: datetime, end_time: datetime) -> None:
    if as_utc(end_time) <= as_utc(start_time):
        raise InvalidRequestError("End time must be after start time")


def ensure_within_event_window(
    start_time: datetime,
    end_time: datetime,
    event_start: datetime,
    event_end: datetime,
) -> None:
    if as_utc(start_time) < as_utc(event_start) or as_utc(end_time) > as_utc(event_end):
        raise InvalidRequestError(
            "Booking time must be within event start and end time"
        )


def ensure_valid_payment(amount: float, deposit_amount: float | None) -> None:
    if amount <= 0:
        raise InvalidRequestError("Payment amount must be greater than zero")
    if deposit_amount is not None and deposit_amount >= amount:
        raise InvalidRequestError(
            "Deposit amount must be less than the total amount"
        )
