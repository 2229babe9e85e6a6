class BookingEngineError(Exception):
    """
    Base exception for all domain-level errors
    raised by the booking engine.
    """

    status_code = 500

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class NotFoundError(BookingEngineError):
    """Raised when a referenced booking, event, artist or user does not exist."""

    status_code = 404


class InvalidRequestError(BookingEngineError):
    """Raised when a request breaks a structural or business rule."""

    status_code = 400


class ConflictError(BookingEngineError):
    """Raised when the artist already has an overlapping booking."""

    status_code = 409


class ForbiddenError(BookingEngineError):
    """Raised when the caller lacks the role or ownership a change requires."""

    status_code = 403


class StoreUnavailableError(BookingEngineError):
    """
    Raised when the backing store cannot be reached or times out.
    Retryable by the caller, never retried by the engine.
    """

    status_code = 503


class InvalidStateTransitionError(InvalidRequestError):
    """
    Raised when a booking status change is blocked by its current state.
    """

    def __init__(self, from_state: str, to_state: str, message: str):
        self.from_state = from_state
        self.to_state = to_state
        super().__init__(message)
