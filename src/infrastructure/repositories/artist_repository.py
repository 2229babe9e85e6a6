# src/infrastructure/repositories/artist_repository.py

from sqlalchemy import select
from sqlalchemy.orm import Session

from src.infrastructure.db.models import Artist


class ArtistRepository:

    def __init__(self, db: Session):
        self.db = db

    def get_by_id(self, artist_id: str) -> Artist | None:
        stmt = select(Artist).where(Artist.id == artist_id)
        return self.db.execute(stmt).scalar_one_or_none()

    def lock_by_id(self, artist_id: str) -> Artist | None:
        """
        SELECT ... FOR UPDATE
        Serialises booking creation per artist until the transaction ends.
        """
        stmt = (
            select(Artist)
            .where(Artist.id == artist_id)
            .with_for_update()
        )
        return self.db.execute(stmt).scalar_one_or_none()

    def get_by_user_id(self, user_id: str) -> Artist | None:
        stmt = select(Artist).where(Artist.user_id == user_id)
        return self.db.execute(stmt).scalar_one_or_none()
