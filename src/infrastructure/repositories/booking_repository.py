# src/infrastructure/repositories/booking_repository.py

from datetime import datetime

from sqlalchemy import and_, or_, select
from sqlalchemy.orm import Session, selectinload

from src.domain.state_machine import ACTIVE_STATUSES, BookingStatus, PaymentStatus
from src.infrastructure.db.models import Booking, Event

_RELATED = (
    selectinload(Booking.artist),
    selectinload(Booking.event).selectinload(Event.venue),
    selectinload(Booking.booked_by),
)


class BookingRepository:

    def __init__(self, db: Session):
        self.db = db

    def get_by_id(
        self,
        booking_id: str,
    ) -> Booking | None:

        stmt = select(Booking).where(Booking.id == booking_id).options(*_RELATED)
        return self.db.execute(stmt).scalar_one_or_none()

    def find_conflicting(
        self,
        artist_id: str,
        start_time: datetime,
        end_time: datetime,
    ) -> Booking | None:
        """
        First active booking of the artist overlapping [start_time, end_time).

        Matches an existing booking that starts inside the new window,
        ends inside it, or encloses it entirely.
        """
        stmt = (
            select(Booking)
            .where(Booking.artist_id == artist_id)
            .where(Booking.status.in_(ACTIVE_STATUSES))
            .where(
                or_(
                    and_(
                        Booking.start_time >= start_time,
                        Booking.start_time < end_time,
                    ),
                    and_(
                        Booking.end_time > start_time,
                        Booking.end_time <= end_time,
                    ),
                    and_(
                        Booking.start_time < start_time,
                        Booking.end_time > end_time,
                    ),
                )
            )
            .limit(1)
        )
        return self.db.execute(stmt).scalar_one_or_none()

    def add(self, booking: Booking) -> Booking:
        self.db.add(booking)
        self.db.flush()
        return booking

    def update_status(
        self,
        booking: Booking,
        new_status: BookingStatus,
    ) -> None:

        booking.status = new_status

    def update_payment(
        self,
        booking: Booking,
        payment_status: PaymentStatus,
        deposit_paid: bool | None,
    ) -> None:

        booking.payment_status = payment_status
        if deposit_paid is not None:
            booking.deposit_paid = deposit_paid

    def list_bookings(
        self,
        *,
        offset: int,
        limit: int,
        newest_first: bool = False,
        artist_id: str | None = None,
        booked_by_id: str | None = None,
        event_id: str | None = None,
        status: BookingStatus | None = None,
        start_date: datetime | None = None,
        end_date: datetime | None = None,
    ) -> list[Booking]:
        stmt = select(Booking).options(*_RELATED)

        if artist_id:
            stmt = stmt.where(Booking.artist_id == artist_id)
        if booked_by_id:
            stmt = stmt.where(Booking.booked_by_id == booked_by_id)
        if event_id:
            stmt = stmt.where(Booking.event_id == event_id)
        if status:
            stmt = stmt.where(Booking.status == status)
        if start_date:
            stmt = stmt.where(Booking.start_time >= start_date)
        if end_date:
            stmt = stmt.where(Booking.end_time <= end_date)

        if newest_first:
            stmt = stmt.order_by(Booking.created_at.desc(), Booking.id)
        else:
            stmt = stmt.order_by(Booking.start_time, Booking.id)

        stmt = stmt.offset(offset).limit(limit)
        return list(self.db.execute(stmt).scalars().all())
