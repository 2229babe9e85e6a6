# src/application/commands.py

from dataclasses import dataclass
from datetime import datetime

from src.domain.permissions import UserRole
from src.domain.state_machine import PaymentStatus


@dataclass(frozen=True)
class Caller:
    """Authenticated user on whose behalf the engine acts."""

    id: str
    role: UserRole


@dataclass(frozen=True)
class BookingDraft:
    artist_id: str
    event_id: str
    start_time: datetime
    end_time: datetime
    set_duration: int
    amount: float
    currency: str = "USD"
    deposit_amount: float | None = None
    special_requirements: str | None = None
    notes: str | None = None
    contract_url: str | None = None


@dataclass(frozen=True)
class PaymentUpdate:
    status: PaymentStatus
    # None leaves the deposit flag untouched.
    deposit_paid: bool | None = None
