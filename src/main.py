import logging
import os
import time

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from sqlalchemy import text
from sqlalchemy.exc import OperationalError

from src.api.routes.routes import router
from src.domain.exceptions import BookingEngineError
from src.infrastructure.db.session import engine
from src.infrastructure.db.models import Base

logging.basicConfig(
    level=os.getenv("LOG_LEVEL", "INFO").upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

app = FastAPI(title="Artist Booking Engine")

app.include_router(router)


@app.exception_handler(BookingEngineError)
async def booking_engine_error_handler(request: Request, exc: BookingEngineError):
    return JSONResponse(
        status_code=exc.status_code,
        content={"detail": exc.message},
    )


def wait_for_booking_store(bind, max_retries: int, retry_delay_seconds: float, sleep=time.sleep) -> int:
    """Block until the booking store answers; returns the attempt that succeeded."""
    target = bind.url.render_as_string(hide_password=True)

    for attempt in range(1, max_retries + 1):
        try:
            with bind.connect() as conn:
                conn.execute(text("SELECT 1"))
        except OperationalError:
            if attempt == max_retries:
                logger.exception(
                    "Booking store %s unreachable after %s attempts; refusing to serve bookings",
                    target,
                    max_retries,
                )
                raise
            logger.warning(
                "Booking store %s not ready (%s/%s), next probe in %.1fs",
                target,
                attempt,
                max_retries,
                retry_delay_seconds,
            )
            sleep(retry_delay_seconds)
        else:
            logger.info("Booking store %s reachable on attempt %s", target, attempt)
            return attempt
    raise ValueError("max_retries must be at least 1")


@app.on_event("startup")
def on_startup() -> None:
    wait_for_booking_store(
        engine,
        max_retries=int(os.getenv("DB_CONNECT_MAX_RETRIES", "30")),
        retry_delay_seconds=float(os.getenv("DB_CONNECT_RETRY_DELAY", "1.5")),
    )
    Base.metadata.create_all(bind=engine)
