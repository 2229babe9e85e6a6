from fastapi import Depends, Header, HTTPException, status
from sqlalchemy.orm import Session

from src.application.booking_service import BookingService
from src.application.commands import Caller
from src.domain.permissions import Capability, has_capability
from src.infrastructure.db.session import get_db
from src.infrastructure.repositories.user_repository import UserRepository


def get_booking_service(db: Session = Depends(get_db)) -> BookingService:
    return BookingService(db)


def get_current_caller(
    x_user_id: str | None = Header(default=None),
    db: Session = Depends(get_db),
) -> Caller:
    """
    Resolves the caller forwarded by the authentication gateway.
    The role always comes from the identity store, never the request.
    """
    if not x_user_id:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="You are not logged in! Please log in to get access.",
        )

    user = UserRepository(db).get_by_id(x_user_id)
    if not user:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="The user belonging to this token no longer exists.",
        )
    return Caller(id=user.id, role=user.role)


def require(capability: Capability):
    def _check(caller: Caller = Depends(get_current_caller)) -> Caller:
        if not has_capability(caller.role, capability):
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail="You do not have permission to perform this action",
            )
        return caller

    return _check
