# src/infrastructure/db/models.py

from datetime import datetime, timezone
from uuid import uuid4

from sqlalchemy import (
    JSON,
    Boolean,
    CheckConstraint,
    DateTime,
    Enum,
    Float,
    ForeignKey,
    Index,
    Integer,
    String,
    Text,
    func,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from src.domain.permissions import UserRole
from src.domain.state_machine import BookingStatus, PaymentStatus
from src.infrastructure.db.session import Base


def _uuid() -> str:
    return str(uuid4())


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _enum_values(enum_cls):
    return [member.value for member in enum_cls]


class TimestampMixin:
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=_utcnow,
        server_default=func.now(),
        nullable=False,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=_utcnow,
        server_default=func.now(),
        onupdate=_utcnow,
        nullable=False,
    )


class User(TimestampMixin, Base):
    """Identity store record. Credentials live with the auth provider."""

    __tablename__ = "users"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=_uuid)
    email: Mapped[str] = mapped_column(String(255), nullable=False, unique=True)
    first_name: Mapped[str] = mapped_column(String(64), nullable=False)
    last_name: Mapped[str] = mapped_column(String(64), nullable=False)
    role: Mapped[UserRole] = mapped_column(
        Enum(UserRole, name="user_role", values_callable=_enum_values),
        nullable=False,
        default=UserRole.USER,
    )


class Venue(TimestampMixin, Base):
    __tablename__ = "venues"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=_uuid)
    name: Mapped[str] = mapped_column(String(128), nullable=False)
    city: Mapped[str] = mapped_column(String(64), nullable=False)
    country: Mapped[str] = mapped_column(String(64), nullable=False)
    capacity: Mapped[int] = mapped_column(Integer, nullable=False)
    owner_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("users.id"), nullable=False
    )

    __table_args__ = (
        CheckConstraint("capacity > 0", name="ck_venue_capacity_positive"),
    )


class Event(TimestampMixin, Base):
    __tablename__ = "events"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=_uuid)
    name: Mapped[str] = mapped_column(String(128), nullable=False)
    start_time: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    end_time: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    status: Mapped[str] = mapped_column(String(16), nullable=False, default="draft")
    venue_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("venues.id"), nullable=False
    )
    organizer_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("users.id"), nullable=False
    )

    venue: Mapped[Venue] = relationship()

    __table_args__ = (
        CheckConstraint("end_time > start_time", name="ck_event_window"),
    )


class Artist(TimestampMixin, Base):
    __tablename__ = "artists"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=_uuid)
    user_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("users.id"), nullable=False, unique=True
    )
    artist_name: Mapped[str] = mapped_column(String(128), nullable=False)
    genres: Mapped[list] = mapped_column(JSON, nullable=False, default=list)
    rate_amount: Mapped[float] = mapped_column(Float, nullable=False)
    rate_currency: Mapped[str] = mapped_column(String(8), nullable=False, default="USD")
    rate_per: Mapped[str] = mapped_column(String(16), nullable=False, default="hour")


class Booking(TimestampMixin, Base):
    """
    Booking of one artist for a time window inside one event.
    The engine controls status changes; the table stores current state.
    """

    __tablename__ = "bookings"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=_uuid)
    artist_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("artists.id"), nullable=False
    )
    event_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("events.id"), nullable=False
    )
    booked_by_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("users.id"), nullable=False
    )

    start_time: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    end_time: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    set_duration: Mapped[int] = mapped_column(Integer, nullable=False)
    special_requirements: Mapped[str | None] = mapped_column(Text, nullable=True)

    payment_amount: Mapped[float] = mapped_column(Float, nullable=False)
    payment_currency: Mapped[str] = mapped_column(String(8), nullable=False, default="USD")
    payment_status: Mapped[PaymentStatus] = mapped_column(
        Enum(PaymentStatus, name="payment_status", values_callable=_enum_values),
        nullable=False,
        default=PaymentStatus.PENDING,
    )
    deposit_amount: Mapped[float | None] = mapped_column(Float, nullable=True)
    deposit_paid: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)

    status: Mapped[BookingStatus] = mapped_column(
        Enum(BookingStatus, name="booking_status", values_callable=_enum_values),
        nullable=False,
        default=BookingStatus.PENDING,
    )

    contract_url: Mapped[str | None] = mapped_column(String(512), nullable=True)
    contract_signed_by_artist: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=False
    )
    contract_signed_by_organizer: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=False
    )
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)

    artist: Mapped[Artist] = relationship()
    event: Mapped[Event] = relationship()
    booked_by: Mapped[User] = relationship()

    __table_args__ = (
        CheckConstraint("end_time > start_time", name="ck_booking_window"),
        CheckConstraint("set_duration > 0", name="ck_booking_set_duration_positive"),
        CheckConstraint("payment_amount > 0", name="ck_booking_amount_positive"),
        CheckConstraint(
            "deposit_amount IS NULL OR deposit_amount < payment_amount",
            name="ck_booking_deposit_below_amount",
        ),
        Index("ix_bookings_artist_start", "artist_id", "start_time"),
        Index("ix_bookings_event", "event_id"),
        Index("ix_bookings_status", "status"),
        Index("ix_bookings_booked_by", "booked_by_id"),
    )
