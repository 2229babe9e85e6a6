import os

os.environ.setdefault("DATABASE_URL", "sqlite://")

from datetime import datetime, timedelta, timezone
from types import SimpleNamespace

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from src.application.booking_service import BookingService
from src.domain.permissions import UserRole
from src.infrastructure.db.models import Artist, Base, Event, User, Venue
from src.infrastructure.db.session import get_db
from src.main import app
from tests.helpers import make_draft


@pytest.fixture
def session_factory():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(engine)
    yield sessionmaker(bind=engine, autoflush=False, expire_on_commit=False)
    Base.metadata.drop_all(engine)
    engine.dispose()


@pytest.fixture
def db(session_factory):
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def service(db):
    return BookingService(db)


def _user(db, email, role):
    user = User(
        email=email,
        first_name=email.split("@")[0].title(),
        last_name="Test",
        role=role,
    )
    db.add(user)
    return user


@pytest.fixture
def world(db):
    """Users of every role, two artist profiles, one venue and one 8h event."""
    organizer = _user(db, "organizer@bookingtest.com", UserRole.ORGANIZER)
    other_organizer = _user(db, "other.organizer@bookingtest.com", UserRole.ORGANIZER)
    admin = _user(db, "admin@bookingtest.com", UserRole.ADMIN)
    artist_user = _user(db, "artist@bookingtest.com", UserRole.ARTIST)
    other_artist_user = _user(db, "other.artist@bookingtest.com", UserRole.ARTIST)
    profileless_artist = _user(db, "noprofile@bookingtest.com", UserRole.ARTIST)
    plain_user = _user(db, "user@bookingtest.com", UserRole.USER)
    db.flush()

    artist = Artist(
        user_id=artist_user.id,
        artist_name="Test Artist",
        genres=["rock", "jazz"],
        rate_amount=300,
    )
    other_artist = Artist(
        user_id=other_artist_user.id,
        artist_name="Other Artist",
        genres=["pop"],
        rate_amount=150,
    )
    venue = Venue(
        name="Test Venue",
        city="Test City",
        country="Test Country",
        capacity=500,
        owner_id=organizer.id,
    )
    db.add_all([artist, other_artist, venue])
    db.flush()

    event_start = (datetime.now(timezone.utc) + timedelta(days=7)).replace(
        minute=0, second=0, microsecond=0
    )
    event_end = event_start + timedelta(hours=8)
    event = Event(
        name="Test Event",
        start_time=event_start,
        end_time=event_end,
        status="published",
        venue_id=venue.id,
        organizer_id=organizer.id,
    )
    second_event = Event(
        name="Second Event",
        start_time=event_start + timedelta(days=1),
        end_time=event_end + timedelta(days=1),
        status="published",
        venue_id=venue.id,
        organizer_id=other_organizer.id,
    )
    db.add_all([event, second_event])
    db.commit()

    return SimpleNamespace(
        organizer=organizer,
        other_organizer=other_organizer,
        admin=admin,
        artist_user=artist_user,
        other_artist_user=other_artist_user,
        profileless_artist=profileless_artist,
        plain_user=plain_user,
        artist=artist,
        other_artist=other_artist,
        venue=venue,
        event=event,
        second_event=second_event,
        event_start=event_start,
        event_end=event_end,
    )


@pytest.fixture
def pending_booking(service, world, db):
    booking = service.create_booking(world.organizer.id, make_draft(world))
    db.commit()
    return booking


@pytest.fixture
def client(session_factory):
    def override_db():
        session = session_factory()
        try:
            yield session
            session.commit()
        except Exception:
            session.rollback()
            raise
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_db
    yield TestClient(app)
    app.dependency_overrides.clear()
