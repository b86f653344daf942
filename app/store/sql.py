import logging
from typing import Optional

from sqlalchemy import func
from sqlmodel import SQLModel, select

from app.db.session import get_session, get_engine
from app.models import Chapter, Favorite, ReadingProgress, Series, User
from .base import CatalogStore

logger = logging.getLogger(__name__)


class SqlStore(CatalogStore):
    """SQLite-backed store; rows come back detached and safe to use after the session closes."""

    def __init__(self, engine=None):
        self.engine = engine or get_engine()
        SQLModel.metadata.create_all(self.engine)

    def _session(self):
        return get_session(self.engine)

    def _next_seq(self, session, model) -> int:
        current = session.exec(select(func.max(model.seq))).one()
        return (current or 0) + 1

    def _insert(self, row):
        with self._session() as session:
            if hasattr(row, "seq") and row.seq is None:
                row.seq = self._next_seq(session, type(row))
            session.add(row)
            session.commit()
            session.refresh(row)
            return row

    def _update(self, model, row_id: str, changes: dict):
        with self._session() as session:
            row = session.get(model, row_id)
            if not row:
                return None
            for key, value in changes.items():
                if key not in ("id", "seq"):
                    setattr(row, key, value)
            session.add(row)
            session.commit()
            session.refresh(row)
            return row

    def _delete(self, model, row_id: str) -> bool:
        with self._session() as session:
            row = session.get(model, row_id)
            if not row:
                return False
            session.delete(row)
            session.commit()
            return True

    # Users
    def get_user(self, user_id: str) -> Optional[User]:
        with self._session() as session:
            return session.get(User, user_id)

    def get_user_by_username(self, username: str) -> Optional[User]:
        with self._session() as session:
            return session.exec(select(User).where(User.username == username)).first()

    def create_user(self, user: User) -> User:
        return self._insert(user)

    # Series
    def list_series(self) -> list[Series]:
        with self._session() as session:
            return list(session.exec(select(Series).order_by(Series.seq)).all())

    def get_series(self, series_id: str) -> Optional[Series]:
        with self._session() as session:
            return session.get(Series, series_id)

    def create_series(self, series: Series) -> Series:
        return self._insert(series)

    def update_series(self, series_id: str, changes: dict) -> Optional[Series]:
        return self._update(Series, series_id, changes)

    def delete_series(self, series_id: str) -> bool:
        return self._delete(Series, series_id)

    # Chapters
    def list_chapters(self, series_id: str) -> list[Chapter]:
        with self._session() as session:
            return list(session.exec(
                select(Chapter)
                .where(Chapter.series_id == series_id)
                .order_by(Chapter.seq)
            ).all())

    def get_chapter(self, chapter_id: str) -> Optional[Chapter]:
        with self._session() as session:
            return session.get(Chapter, chapter_id)

    def create_chapter(self, chapter: Chapter) -> Chapter:
        return self._insert(chapter)

    def update_chapter(self, chapter_id: str, changes: dict) -> Optional[Chapter]:
        return self._update(Chapter, chapter_id, changes)

    def delete_chapter(self, chapter_id: str) -> bool:
        return self._delete(Chapter, chapter_id)

    # Favorites
    def list_favorites(self, user_id: str) -> list[Favorite]:
        with self._session() as session:
            return list(session.exec(select(Favorite).where(Favorite.user_id == user_id)).all())

    def add_favorite(self, user_id: str, series_id: str) -> Favorite:
        return self._insert(Favorite(user_id=user_id, series_id=series_id))

    def remove_favorite(self, user_id: str, series_id: str) -> bool:
        with self._session() as session:
            fav = session.exec(
                select(Favorite).where(Favorite.user_id == user_id, Favorite.series_id == series_id)
            ).first()
            if not fav:
                return False
            session.delete(fav)
            session.commit()
            return True

    # Reading progress
    def list_reading_progress(self, user_id: str) -> list[ReadingProgress]:
        with self._session() as session:
            return list(session.exec(
                select(ReadingProgress).where(ReadingProgress.user_id == user_id)
            ).all())

    def get_reading_progress(self, user_id: str, series_id: str) -> Optional[ReadingProgress]:
        with self._session() as session:
            return session.exec(
                select(ReadingProgress).where(
                    ReadingProgress.user_id == user_id,
                    ReadingProgress.series_id == series_id,
                )
            ).first()

    def upsert_reading_progress(self, user_id, series_id, chapter_id, current_page, last_read) -> ReadingProgress:
        with self._session() as session:
            row = session.exec(
                select(ReadingProgress).where(
                    ReadingProgress.user_id == user_id,
                    ReadingProgress.series_id == series_id,
                )
            ).first()

            if row:
                row.chapter_id = chapter_id
                row.current_page = current_page
                row.last_read = last_read
            else:
                row = ReadingProgress(
                    user_id=user_id,
                    series_id=series_id,
                    chapter_id=chapter_id,
                    current_page=current_page,
                    last_read=last_read,
                )
                logger.debug("new progress row for user=%s series=%s", user_id, series_id)
            session.add(row)
            session.commit()
            session.refresh(row)
            return row
