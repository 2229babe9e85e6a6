# tests/unit/test_startup.py

from contextlib import contextmanager

import pytest
from sqlalchemy import create_engine
from sqlalchemy.engine import make_url
from sqlalchemy.exc import OperationalError

from src.main import wait_for_booking_store


class FlakyStore:
    url = make_url("postgresql://booking:secret@db:5432/artist_booking")

    def __init__(self, failures):
        self.failures = failures
        self.attempts = 0

    @contextmanager
    def connect(self):
        self.attempts += 1
        if self.attempts <= self.failures:
            raise OperationalError("SELECT 1", {}, Exception("connection refused"))
        yield self

    def execute(self, statement):
        return None


def test_store_reachable_immediately():
    bind = create_engine("sqlite://")
    assert wait_for_booking_store(bind, max_retries=3, retry_delay_seconds=0) == 1


def test_store_retried_until_reachable():
    store = FlakyStore(failures=2)
    delays = []

    attempt = wait_for_booking_store(store, max_retries=5, retry_delay_seconds=0.5, sleep=delays.append)

    assert attempt == 3
    assert delays == [0.5, 0.5]


def test_store_gives_up_after_max_retries(caplog):
    store = FlakyStore(failures=10)

    with pytest.raises(OperationalError):
        wait_for_booking_store(store, max_retries=3, retry_delay_seconds=0, sleep=lambda _: None)

    assert store.attempts == 3
    assert "secret" not in caplog.text
