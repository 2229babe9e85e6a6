from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic.alias_generators import to_camel

from src.domain.booking_rules import as_utc
from src.domain.state_machine import BookingStatus, PaymentStatus


class CamelModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


# -----------------------------
# Requests
# -----------------------------
class BookingDetailsRequest(CamelModel):
    start_time: datetime
    end_time: datetime
    set_duration: int = Field(ge=1)
    special_requirements: str | None = None

    @field_validator("start_time", "end_time")
    @classmethod
    def _to_utc(cls, value: datetime) -> datetime:
        return as_utc(value)

    @model_validator(mode="after")
    def _end_after_start(self):
        if self.end_time <= self.start_time:
            raise ValueError("End time must be after start time")
        return self


class PaymentRequest(CamelModel):
    amount: float = Field(gt=0)
    currency: str = "USD"
    deposit_amount: float | None = Field(default=None, ge=0)

    @model_validator(mode="after")
    def _deposit_below_amount(self):
        if self.deposit_amount is not None and self.deposit_amount >= self.amount:
            raise ValueError("Deposit amount must be less than the total amount")
        return self


class ContractRequest(CamelModel):
    url: str


class BookingCreateRequest(CamelModel):
    artist: str
    event: str
    booking_details: BookingDetailsRequest
    payment: PaymentRequest
    contract: ContractRequest | None = None
    notes: str | None = None


class BookingStatusRequest(CamelModel):
    status: BookingStatus


class PaymentStatusRequest(CamelModel):
    status: PaymentStatus
    deposit_paid: bool | None = None


# -----------------------------
# Responses
# -----------------------------
class ArtistRate(CamelModel):
    amount: float
    currency: str
    per: str


class ArtistSummary(CamelModel):
    id: str
    artist_name: str
    genres: list[str]
    rate: ArtistRate


class VenueSummary(CamelModel):
    id: str
    name: str
    city: str
    country: str


class EventDate(CamelModel):
    start: datetime
    end: datetime


class EventSummary(CamelModel):
    id: str
    name: str
    date: EventDate
    venue: VenueSummary


class UserSummary(CamelModel):
    id: str
    first_name: str
    last_name: str
    email: str


class BookingDetailsResponse(CamelModel):
    start_time: datetime
    end_time: datetime
    set_duration: int
    special_requirements: str | None = None


class PaymentResponse(CamelModel):
    amount: float
    currency: str
    status: PaymentStatus
    deposit_amount: float | None = None
    deposit_paid: bool


class ContractResponse(CamelModel):
    url: str
    signed_by_artist: bool
    signed_by_organizer: bool


class BookingResponse(CamelModel):
    id: str
    artist: ArtistSummary
    event: EventSummary
    booked_by: UserSummary
    booking_details: BookingDetailsResponse
    payment: PaymentResponse
    status: BookingStatus
    contract: ContractResponse | None = None
    notes: str | None = None
    created_at: datetime
    updated_at: datetime


class BookingPageResponse(CamelModel):
    results: list[BookingResponse]
    page: int
    limit: int
