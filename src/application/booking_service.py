import logging

from sqlalchemy.orm import Session

from src.application.commands import BookingDraft, Caller, PaymentUpdate
from src.domain.booking_rules import (
    as_utc,
    ensure_valid_payment,
    ensure_valid_window,
    ensure_within_event_window,
    parse_identifier,
)
from src.domain.exceptions import (
    ConflictError,
    ForbiddenError,
    InvalidRequestError,
    NotFoundError,
)
from src.domain.filters import (
    AdminBookingFilters,
    ArtistBookingFilters,
    OrganizerBookingFilters,
    Page,
)
from src.domain.permissions import Relationship, UserRole, may_request_status
from src.domain.state_machine import BookingStateMachine, BookingStatus
from src.infrastructure.db.errors import translate_store_errors
from src.infrastructure.db.models import Artist, Booking
from src.infrastructure.repositories.artist_repository import ArtistRepository
from src.infrastructure.repositories.booking_repository import BookingRepository
from src.infrastructure.repositories.event_repository import EventRepository
from src.infrastructure.repositories.user_repository import UserRepository

logger = logging.getLogger(__name__)

CONFLICT_MESSAGE = "Artist already has a booking during this time"


class BookingService:
    """Application service owning the booking lifecycle."""

    def __init__(self, db: Session):
        self.db = db
        self.booking_repository = BookingRepository(db)
        self.artist_repository = ArtistRepository(db)
        self.event_repository = EventRepository(db)
        self.user_repository = UserRepository(db)

    # ------------------------------------------------------------------
    # Creation
    # ------------------------------------------------------------------

    def create_booking(self, caller_id: str, draft: BookingDraft) -> Booking:
        event_id = parse_identifier(draft.event_id, "event")
        artist_id = parse_identifier(draft.artist_id, "artist")
        ensure_valid_window(draft.start_time, draft.end_time)
        if draft.set_duration < 1:
            raise InvalidRequestError("Set duration must be greater than 0 minutes")
        ensure_valid_payment(draft.amount, draft.deposit_amount)

        start_time = as_utc(draft.start_time)
        end_time = as_utc(draft.end_time)

        with translate_store_errors("create_booking"):
            event = self.event_repository.get_by_id(event_id)
            if not event:
                raise NotFoundError("Event not found")

            # Row lock keeps the conflict check and the insert atomic per artist.
            artist = self.artist_repository.lock_by_id(artist_id)
            if not artist:
                raise NotFoundError("Artist not found")

            ensure_within_event_window(
                start_time, end_time, event.start_time, event.end_time
            )

            conflicting = self.booking_repository.find_conflicting(
                artist_id, start_time, end_time
            )
            if conflicting:
                logger.warning(
                    "Booking conflict for artist %s: %s - %s overlaps booking %s",
                    artist_id,
                    start_time.isoformat(),
                    end_time.isoformat(),
                    conflicting.id,
                )
                raise ConflictError(CONFLICT_MESSAGE)

            booking = Booking(
                artist_id=artist_id,
                event_id=event_id,
                booked_by_id=caller_id,
                start_time=start_time,
                end_time=end_time,
                set_duration=draft.set_duration,
                special_requirements=draft.special_requirements,
                payment_amount=draft.amount,
                payment_currency=draft.currency or "USD",
                deposit_amount=draft.deposit_amount,
                contract_url=draft.contract_url,
                notes=draft.notes,
                status=BookingStatus.PENDING,
            )
            self.booking_repository.add(booking)

        logger.info(
            "Booking %s created for artist %s at event %s by %s",
            booking.id,
            artist_id,
            event_id,
            caller_id,
        )
        return booking

    # ------------------------------------------------------------------
    # Retrieval
    # ------------------------------------------------------------------

    def get_booking_by_id(self, booking_id: str) -> Booking:
        booking_id = parse_identifier(booking_id, "booking")

        with translate_store_errors("get_booking_by_id"):
            booking = self.booking_repository.get_by_id(booking_id)

        if not booking:
            raise NotFoundError("Booking not found")
        return booking

    def get_artist_profile(self, user_id: str) -> Artist:
        with translate_store_errors("get_artist_profile"):
            artist = self.artist_repository.get_by_user_id(user_id)

        if not artist:
            raise NotFoundError("Artist profile not found for this user")
        return artist

    # ------------------------------------------------------------------
    # Status transitions
    # ------------------------------------------------------------------

    def update_booking_status(
        self,
        booking_id: str,
        caller: Caller,
        new_status: BookingStatus | str,
    ) -> Booking:
        new_status = _coerce_status(new_status)
        booking = self.get_booking_by_id(booking_id)

        with translate_store_errors("update_booking_status"):
            relationships = self._relationships(booking, caller)

            if not may_request_status(relationships, new_status):
                logger.warning(
                    "User %s (%s) denied status change of booking %s to %s",
                    caller.id,
                    caller.role.value,
                    booking.id,
                    new_status.value,
                )
                raise ForbiddenError("You are not authorized to update this booking")

            previous = booking.status
            BookingStateMachine.validate_transition(previous, new_status)
            self.booking_repository.update_status(booking, new_status)
            self.db.flush()

        logger.info(
            "Booking %s status %s -> %s by %s",
            booking.id,
            previous.value,
            new_status.value,
            caller.id,
        )
        return booking

    def _relationships(self, booking: Booking, caller: Caller) -> set[Relationship]:
        relationships = set()

        if caller.role == UserRole.ADMIN:
            relationships.add(Relationship.ADMIN)

        if booking.booked_by_id == caller.id:
            relationships.add(Relationship.BOOKING_CREATOR)

        if caller.role == UserRole.ARTIST:
            artist = self.artist_repository.get_by_user_id(caller.id)
            if artist and artist.id == booking.artist_id:
                relationships.add(Relationship.BOOKING_ARTIST)

        return relationships

    # ------------------------------------------------------------------
    # Payment
    # ------------------------------------------------------------------

    def update_payment_status(
        self,
        booking_id: str,
        caller_id: str,
        update: PaymentUpdate,
    ) -> Booking:
        booking = self.get_booking_by_id(booking_id)

        with translate_store_errors("update_payment_status"):
            user = self.user_repository.get_by_id(caller_id)
            if not user:
                raise NotFoundError("User not found")

            is_admin = user.role == UserRole.ADMIN
            is_booker = booking.booked_by_id == caller_id
            is_organizer = user.role == UserRole.ORGANIZER

            if not (is_admin or is_booker or is_organizer):
                logger.warning(
                    "User %s denied payment update on booking %s",
                    caller_id,
                    booking.id,
                )
                raise ForbiddenError("You are not authorized to update this payment")

            self.booking_repository.update_payment(
                booking, update.status, update.deposit_paid
            )
            self.db.flush()

        logger.info(
            "Booking %s payment set to %s (deposit_paid=%s) by %s",
            booking.id,
            update.status.value,
            booking.deposit_paid,
            caller_id,
        )
        return booking

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def get_artist_bookings(
        self,
        artist_id: str,
        filters: ArtistBookingFilters | None = None,
        page: Page | None = None,
    ) -> list[Booking]:
        filters = filters or ArtistBookingFilters()
        page = page or Page()
        artist_id = parse_identifier(artist_id, "artist")

        with translate_store_errors("get_artist_bookings"):
            return self.booking_repository.list_bookings(
                offset=page.offset,
                limit=page.limit,
                artist_id=artist_id,
                status=filters.status,
                start_date=_utc_or_none(filters.start_date),
                end_date=_utc_or_none(filters.end_date),
            )

    def get_organizer_bookings(
        self,
        organizer_id: str,
        filters: OrganizerBookingFilters | None = None,
        page: Page | None = None,
    ) -> list[Booking]:
        filters = filters or OrganizerBookingFilters()
        page = page or Page()

        with translate_store_errors("get_organizer_bookings"):
            return self.booking_repository.list_bookings(
                offset=page.offset,
                limit=page.limit,
                booked_by_id=organizer_id,
                event_id=_id_or_none(filters.event_id, "event"),
                status=filters.status,
                start_date=_utc_or_none(filters.start_date),
                end_date=_utc_or_none(filters.end_date),
            )

    def get_all_bookings(
        self,
        filters: AdminBookingFilters | None = None,
        page: Page | None = None,
    ) -> list[Booking]:
        filters = filters or AdminBookingFilters()
        page = page or Page()

        with translate_store_errors("get_all_bookings"):
            return self.booking_repository.list_bookings(
                offset=page.offset,
                limit=page.limit,
                newest_first=True,
                artist_id=_id_or_none(filters.artist_id, "artist"),
                event_id=_id_or_none(filters.event_id, "event"),
                status=filters.status,
                start_date=_utc_or_none(filters.start_date),
                end_date=_utc_or_none(filters.end_date),
            )


def _coerce_status(value: BookingStatus | str) -> BookingStatus:
    try:
        return BookingStatus(value)
    except ValueError as exc:
        raise InvalidRequestError("Invalid booking status") from exc


def _utc_or_none(value):
    return as_utc(value) if value is not None else None


def _id_or_none(value: str | None, label: str) -> str | None:
    return parse_identifier(value, label) if value else None
