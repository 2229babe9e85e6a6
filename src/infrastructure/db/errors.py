# src/infrastructure/db/errors.py

import logging
from contextlib import contextmanager
from typing import Iterator

from sqlalchemy.exc import OperationalError, TimeoutError as SQLAlchemyTimeoutError

from src.domain.exceptions import StoreUnavailableError

logger = logging.getLogger(__name__)


@contextmanager
def translate_store_errors(operation: str) -> Iterator[None]:
    """
    Re-raises connection loss and pool timeouts as StoreUnavailableError
    so raw driver errors never cross the engine boundary.
    """
    try:
        yield
    except (OperationalError, SQLAlchemyTimeoutError) as exc:
        logger.exception("Store unavailable during %s", operation)
        raise StoreUnavailableError(
            "Booking store is temporarily unavailable. Please retry."
        ) from exc
