from datetime import datetime, timedelta, timezone

from sqlalchemy import select

from src.domain.permissions import UserRole
from src.infrastructure.db.models import Artist, Base, Event, User, Venue
from src.infrastructure.db.session import engine, get_db_session
from src.infrastructure.repositories.artist_repository import ArtistRepository
from src.infrastructure.repositories.user_repository import UserRepository


def _dt(days_from_now: int, hour: int) -> datetime:
    now = datetime.now(timezone.utc) + timedelta(days=days_from_now)
    return now.replace(hour=hour, minute=0, second=0, microsecond=0)


def _ensure_user(db, email: str, first_name: str, last_name: str, role: UserRole) -> User:
    user = UserRepository(db).get_by_email(email)
    if user:
        user.role = role
        return user
    user = User(email=email, first_name=first_name, last_name=last_name, role=role)
    db.add(user)
    db.flush()
    return user


def seed(db) -> dict:
    organizer = _ensure_user(db, "organizer@demo.test", "Olivia", "Organizer", UserRole.ORGANIZER)
    admin = _ensure_user(db, "admin@demo.test", "Adam", "Admin", UserRole.ADMIN)
    artist_user = _ensure_user(db, "artist@demo.test", "Ari", "Artist", UserRole.ARTIST)

    artist = ArtistRepository(db).get_by_user_id(artist_user.id)
    if not artist:
        artist = Artist(
            user_id=artist_user.id,
            artist_name="The Night Owls",
            genres=["jazz", "blues"],
            rate_amount=250,
            rate_currency="USD",
            rate_per="hour",
        )
        db.add(artist)
        db.flush()

    venue = db.execute(select(Venue).where(Venue.name == "Blue Room")).scalar_one_or_none()
    if not venue:
        venue = Venue(
            name="Blue Room",
            city="Austin",
            country="USA",
            capacity=350,
            owner_id=organizer.id,
        )
        db.add(venue)
        db.flush()

    event = db.execute(
        select(Event).where(Event.name == "Late Night Jazz")
    ).scalar_one_or_none()
    if not event:
        event = Event(
            name="Late Night Jazz",
            start_time=_dt(days_from_now=14, hour=19),
            end_time=_dt(days_from_now=14, hour=23),
            status="published",
            venue_id=venue.id,
            organizer_id=organizer.id,
        )
        db.add(event)
        db.flush()

    return {
        "organizer_id": organizer.id,
        "admin_id": admin.id,
        "artist_user_id": artist_user.id,
        "artist_id": artist.id,
        "event_id": event.id,
    }


def main() -> None:
    Base.metadata.create_all(bind=engine)
    with get_db_session() as db:
        ids = seed(db)
    for name, value in ids.items():
        print(f"{name}: {value}")


if __name__ == "__main__":
    main()
