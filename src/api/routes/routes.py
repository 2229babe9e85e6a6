from datetime import datetime

from fastapi import APIRouter, Depends, Query, status

from src.api.dependencies import get_booking_service, get_current_caller, require
from src.api.schemas.schemas import (
    ArtistRate,
    ArtistSummary,
    BookingCreateRequest,
    BookingDetailsResponse,
    BookingPageResponse,
    BookingResponse,
    BookingStatusRequest,
    ContractResponse,
    EventDate,
    EventSummary,
    PaymentResponse,
    PaymentStatusRequest,
    UserSummary,
    VenueSummary,
)
from src.application.booking_service import BookingService
from src.application.commands import BookingDraft, Caller, PaymentUpdate
from src.domain.filters import (
    DEFAULT_LIMIT,
    DEFAULT_PAGE,
    MAX_LIMIT,
    AdminBookingFilters,
    ArtistBookingFilters,
    OrganizerBookingFilters,
    Page,
)
from src.domain.permissions import Capability
from src.domain.state_machine import BookingStatus
from src.infrastructure.db.models import Booking


router = APIRouter()


def _booking_response(booking: Booking) -> BookingResponse:
    artist = booking.artist
    event = booking.event
    creator = booking.booked_by
    contract = None
    if booking.contract_url:
        contract = ContractResponse(
            url=booking.contract_url,
            signed_by_artist=booking.contract_signed_by_artist,
            signed_by_organizer=booking.contract_signed_by_organizer,
        )

    return BookingResponse(
        id=booking.id,
        artist=ArtistSummary(
            id=artist.id,
            artist_name=artist.artist_name,
            genres=list(artist.genres or []),
            rate=ArtistRate(
                amount=artist.rate_amount,
                currency=artist.rate_currency,
                per=artist.rate_per,
            ),
        ),
        event=EventSummary(
            id=event.id,
            name=event.name,
            date=EventDate(start=event.start_time, end=event.end_time),
            venue=VenueSummary.model_validate(event.venue),
        ),
        booked_by=UserSummary.model_validate(creator),
        booking_details=BookingDetailsResponse(
            start_time=booking.start_time,
            end_time=booking.end_time,
            set_duration=booking.set_duration,
            special_requirements=booking.special_requirements,
        ),
        payment=PaymentResponse(
            amount=booking.payment_amount,
            currency=booking.payment_currency,
            status=booking.payment_status,
            deposit_amount=booking.deposit_amount,
            deposit_paid=booking.deposit_paid,
        ),
        status=booking.status,
        contract=contract,
        notes=booking.notes,
        created_at=booking.created_at,
        updated_at=booking.updated_at,
    )


def _page_response(bookings: list[Booking], page: Page) -> BookingPageResponse:
    return BookingPageResponse(
        results=[_booking_response(item) for item in bookings],
        page=page.page,
        limit=page.limit,
    )


@router.get("/health")
def health():
    return {"message": "Artist booking engine is running"}


@router.post(
    "/bookings",
    response_model=BookingResponse,
    status_code=status.HTTP_201_CREATED,
)
def create_booking(
    request: BookingCreateRequest,
    caller: Caller = Depends(require(Capability.CREATE_BOOKING)),
    service: BookingService = Depends(get_booking_service),
):
    details = request.booking_details
    draft = BookingDraft(
        artist_id=request.artist,
        event_id=request.event,
        start_time=details.start_time,
        end_time=details.end_time,
        set_duration=details.set_duration,
        special_requirements=details.special_requirements,
        amount=request.payment.amount,
        currency=request.payment.currency,
        deposit_amount=request.payment.deposit_amount,
        contract_url=request.contract.url if request.contract else None,
        notes=request.notes,
    )
    booking = service.create_booking(caller.id, draft)
    return _booking_response(booking)


@router.get("/bookings", response_model=BookingPageResponse)
def list_all_bookings(
    status_filter: BookingStatus | None = Query(default=None, alias="status"),
    start_date: datetime | None = Query(default=None, alias="startDate"),
    end_date: datetime | None = Query(default=None, alias="endDate"),
    event_id: str | None = Query(default=None, alias="eventId"),
    artist_id: str | None = Query(default=None, alias="artistId"),
    page: int = Query(default=DEFAULT_PAGE, ge=1),
    limit: int = Query(default=DEFAULT_LIMIT, ge=1, le=MAX_LIMIT),
    caller: Caller = Depends(require(Capability.VIEW_ALL_BOOKINGS)),
    service: BookingService = Depends(get_booking_service),
):
    paging = Page(page=page, limit=limit)
    filters = AdminBookingFilters(
        status=status_filter,
        start_date=start_date,
        end_date=end_date,
        event_id=event_id,
        artist_id=artist_id,
    )
    return _page_response(service.get_all_bookings(filters, paging), paging)


@router.get("/bookings/artist", response_model=BookingPageResponse)
def list_artist_bookings(
    status_filter: BookingStatus | None = Query(default=None, alias="status"),
    start_date: datetime | None = Query(default=None, alias="startDate"),
    end_date: datetime | None = Query(default=None, alias="endDate"),
    page: int = Query(default=DEFAULT_PAGE, ge=1),
    limit: int = Query(default=DEFAULT_LIMIT, ge=1, le=MAX_LIMIT),
    caller: Caller = Depends(require(Capability.VIEW_ARTIST_BOOKINGS)),
    service: BookingService = Depends(get_booking_service),
):
    artist = service.get_artist_profile(caller.id)
    paging = Page(page=page, limit=limit)
    filters = ArtistBookingFilters(
        status=status_filter,
        start_date=start_date,
        end_date=end_date,
    )
    return _page_response(
        service.get_artist_bookings(artist.id, filters, paging), paging
    )


@router.get("/bookings/organizer", response_model=BookingPageResponse)
def list_organizer_bookings(
    status_filter: BookingStatus | None = Query(default=None, alias="status"),
    start_date: datetime | None = Query(default=None, alias="startDate"),
    end_date: datetime | None = Query(default=None, alias="endDate"),
    event_id: str | None = Query(default=None, alias="eventId"),
    page: int = Query(default=DEFAULT_PAGE, ge=1),
    limit: int = Query(default=DEFAULT_LIMIT, ge=1, le=MAX_LIMIT),
    caller: Caller = Depends(require(Capability.VIEW_ORGANIZER_BOOKINGS)),
    service: BookingService = Depends(get_booking_service),
):
    paging = Page(page=page, limit=limit)
    filters = OrganizerBookingFilters(
        status=status_filter,
        start_date=start_date,
        end_date=end_date,
        event_id=event_id,
    )
    return _page_response(
        service.get_organizer_bookings(caller.id, filters, paging), paging
    )


@router.get("/bookings/{booking_id}", response_model=BookingResponse)
def get_booking(
    booking_id: str,
    caller: Caller = Depends(get_current_caller),
    service: BookingService = Depends(get_booking_service),
):
    return _booking_response(service.get_booking_by_id(booking_id))


@router.patch("/bookings/{booking_id}/status", response_model=BookingResponse)
def update_booking_status(
    booking_id: str,
    request: BookingStatusRequest,
    caller: Caller = Depends(get_current_caller),
    service: BookingService = Depends(get_booking_service),
):
    booking = service.update_booking_status(booking_id, caller, request.status)
    return _booking_response(booking)


@router.patch("/bookings/{booking_id}/payment", response_model=BookingResponse)
def update_payment_status(
    booking_id: str,
    request: PaymentStatusRequest,
    caller: Caller = Depends(require(Capability.UPDATE_PAYMENT)),
    service: BookingService = Depends(get_booking_service),
):
    booking = service.update_payment_status(
        booking_id,
        caller.id,
        PaymentUpdate(status=request.status, deposit_paid=request.deposit_paid),
    )
    return _booking_response(booking)


def _quick_action(target: BookingStatus, capability: Capability | None):
    guard = require(capability) if capability else get_current_caller

    def _handler(
        booking_id: str,
        caller: Caller = Depends(guard),
        service: BookingService = Depends(get_booking_service),
    ) -> BookingResponse:
        booking = service.update_booking_status(booking_id, caller, target)
        return _booking_response(booking)

    return _handler


router.add_api_route(
    "/bookings/{booking_id}/confirm",
    _quick_action(BookingStatus.CONFIRMED, Capability.CONFIRM_BOOKING),
    methods=["PATCH"],
    response_model=BookingResponse,
)
router.add_api_route(
    "/bookings/{booking_id}/reject",
    _quick_action(BookingStatus.REJECTED, Capability.REJECT_BOOKING),
    methods=["PATCH"],
    response_model=BookingResponse,
)
router.add_api_route(
    "/bookings/{booking_id}/cancel",
    _quick_action(BookingStatus.CANCELED, None),
    methods=["PATCH"],
    response_model=BookingResponse,
)
router.add_api_route(
    "/bookings/{booking_id}/complete",
    _quick_action(BookingStatus.COMPLETED, Capability.COMPLETE_BOOKING),
    methods=["PATCH"],
    response_model=BookingResponse,
)
