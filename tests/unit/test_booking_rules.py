# tests/unit/test_booking_rules.py

from datetime import datetime, timedelta, timezone
from uuid import uuid4

import pytest

from src.domain.booking_rules import (
    as_utc,
    ensure_valid_payment,
    ensure_valid_window,
    ensure_within_event_window,
    parse_identifier,
)
from src.domain.exceptions import InvalidRequestError
from src.domain.filters import Page

EVENT_START = datetime(2030, 6, 1, 18, 0, tzinfo=timezone.utc)
EVENT_END = EVENT_START + timedelta(hours=3)


def test_naive_timestamps_are_utc():
    naive = datetime(2030, 6, 1, 18, 0)
    assert as_utc(naive) == EVENT_START


def test_offset_timestamps_are_converted():
    plus_two = timezone(timedelta(hours=2))
    assert as_utc(datetime(2030, 6, 1, 20, 0, tzinfo=plus_two)) == EVENT_START


def test_booking_may_fill_the_whole_event():
    ensure_within_event_window(EVENT_START, EVENT_END, EVENT_START, EVENT_END)


@pytest.mark.parametrize(
    "start, end",
    [
        (EVENT_START - timedelta(minutes=1), EVENT_START + timedelta(hours=1)),
        (EVENT_START + timedelta(hours=1), EVENT_END + timedelta(minutes=1)),
    ],
)
def test_booking_outside_event_is_rejected(start, end):
    with pytest.raises(InvalidRequestError) as exc_info:
        ensure_within_event_window(start, end, EVENT_START, EVENT_END)
    assert str(exc_info.value) == "Booking time must be within event start and end time"


def test_event_times_read_back_without_zone_still_compare():
    ensure_within_event_window(
        EVENT_START,
        EVENT_END,
        EVENT_START.replace(tzinfo=None),
        EVENT_END.replace(tzinfo=None),
    )


def test_end_must_follow_start():
    with pytest.raises(InvalidRequestError):
        ensure_valid_window(EVENT_START, EVENT_START)


def test_deposit_must_be_below_amount():
    ensure_valid_payment(500, 499.99)
    with pytest.raises(InvalidRequestError):
        ensure_valid_payment(500, 500)
    with pytest.raises(InvalidRequestError):
        ensure_valid_payment(0, None)


def test_identifier_is_canonicalised():
    value = uuid4()
    assert parse_identifier(str(value).upper(), "booking") == str(value)


@pytest.mark.parametrize("bad", ["", "123", "not-a-uuid", None])
def test_malformed_identifier(bad):
    with pytest.raises(InvalidRequestError) as exc_info:
        parse_identifier(bad, "booking")
    assert str(exc_info.value) == "Invalid booking ID format"


def test_page_offsets():
    assert Page().offset == 0
    assert Page(page=3, limit=10).offset == 20


@pytest.mark.parametrize("page, limit", [(0, 10), (1, 0), (1, 101)])
def test_page_bounds(page, limit):
    with pytest.raises(InvalidRequestError):
        Page(page=page, limit=limit)
