from typing import Optional

from app.models import Chapter, Favorite, ReadingProgress, Series, User
from .base import CatalogStore


def _apply(row, changes: dict):
    for key, value in changes.items():
        if key != "id":
            setattr(row, key, value)
    return row


class MemoryStore(CatalogStore):
    def __init__(self):
        self.users: dict[str, User] = {}
        self.series: dict[str, Series] = {}
        self.chapters: dict[str, Chapter] = {}
        self.favorites: dict[str, Favorite] = {}
        self.reading_progress: dict[str, ReadingProgress] = {}

    # Users
    def get_user(self, user_id: str) -> Optional[User]:
        return self.users.get(user_id)

    def get_user_by_username(self, username: str) -> Optional[User]:
        return next((u for u in self.users.values() if u.username == username), None)

    def create_user(self, user: User) -> User:
        self.users[user.id] = user
        return user

    # Series
    def list_series(self) -> list[Series]:
        return list(self.series.values())

    def get_series(self, series_id: str) -> Optional[Series]:
        return self.series.get(series_id)

    def create_series(self, series: Series) -> Series:
        self.series[series.id] = series
        return series

    def update_series(self, series_id: str, changes: dict) -> Optional[Series]:
        row = self.series.get(series_id)
        if not row:
            return None
        return _apply(row, changes)

    def delete_series(self, series_id: str) -> bool:
        return self.series.pop(series_id, None) is not None

    # Chapters
    def list_chapters(self, series_id: str) -> list[Chapter]:
        return [ch for ch in self.chapters.values() if ch.series_id == series_id]

    def get_chapter(self, chapter_id: str) -> Optional[Chapter]:
        return self.chapters.get(chapter_id)

    def create_chapter(self, chapter: Chapter) -> Chapter:
        self.chapters[chapter.id] = chapter
        return chapter

    def update_chapter(self, chapter_id: str, changes: dict) -> Optional[Chapter]:
        row = self.chapters.get(chapter_id)
        if not row:
            return None
        return _apply(row, changes)

    def delete_chapter(self, chapter_id: str) -> bool:
        return self.chapters.pop(chapter_id, None) is not None

    # Favorites
    def list_favorites(self, user_id: str) -> list[Favorite]:
        return [f for f in self.favorites.values() if f.user_id == user_id]

    def add_favorite(self, user_id: str, series_id: str) -> Favorite:
        fav = Favorite(user_id=user_id, series_id=series_id)
        self.favorites[fav.id] = fav
        return fav

    def remove_favorite(self, user_id: str, series_id: str) -> bool:
        fav = next(
            (f for f in self.favorites.values() if f.user_id == user_id and f.series_id == series_id),
            None,
        )
        if not fav:
            return False
        del self.favorites[fav.id]
        return True

    # Reading progress
    def list_reading_progress(self, user_id: str) -> list[ReadingProgress]:
        return [p for p in self.reading_progress.values() if p.user_id == user_id]

    def get_reading_progress(self, user_id: str, series_id: str) -> Optional[ReadingProgress]:
        return next(
            (p for p in self.reading_progress.values() if p.user_id == user_id and p.series_id == series_id),
            None,
        )

    def upsert_reading_progress(self, user_id, series_id, chapter_id, current_page, last_read) -> ReadingProgress:
        row = self.get_reading_progress(user_id, series_id)
        if row:
            row.chapter_id = chapter_id
            row.current_page = current_page
            row.last_read = last_read
            return row

        row = ReadingProgress(
            user_id=user_id,
            series_id=series_id,
            chapter_id=chapter_id,
            current_page=current_page,
            last_read=last_read,
        )
        self.reading_progress[row.id] = row
        return row
