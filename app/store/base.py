from abc import ABC, abstractmethod
from typing import Optional

from app.models import Chapter, Favorite, ReadingProgress, Series, User


class CatalogStore(ABC):
    """Keyed collections of catalog and per-user records.

    Lookups return ``None`` for an unknown id, deletes return ``False`` when
    nothing was removed. Nothing cascades: removing a series leaves its
    chapters, favorites and progress rows where they are.
    """

    # Users
    @abstractmethod
    def get_user(self, user_id: str) -> Optional[User]:
        pass

    @abstractmethod
    def get_user_by_username(self, username: str) -> Optional[User]:
        pass

    @abstractmethod
    def create_user(self, user: User) -> User:
        pass

    # Series
    @abstractmethod
    def list_series(self) -> list[Series]:
        pass

    @abstractmethod
    def get_series(self, series_id: str) -> Optional[Series]:
        pass

    @abstractmethod
    def create_series(self, series: Series) -> Series:
        pass

    @abstractmethod
    def update_series(self, series_id: str, changes: dict) -> Optional[Series]:
        pass

    @abstractmethod
    def delete_series(self, series_id: str) -> bool:
        pass

    # Chapters
    @abstractmethod
    def list_chapters(self, series_id: str) -> list[Chapter]:
        pass

    @abstractmethod
    def get_chapter(self, chapter_id: str) -> Optional[Chapter]:
        pass

    @abstractmethod
    def create_chapter(self, chapter: Chapter) -> Chapter:
        pass

    @abstractmethod
    def update_chapter(self, chapter_id: str, changes: dict) -> Optional[Chapter]:
        pass

    @abstractmethod
    def delete_chapter(self, chapter_id: str) -> bool:
        pass

    # Favorites
    @abstractmethod
    def list_favorites(self, user_id: str) -> list[Favorite]:
        pass

    @abstractmethod
    def add_favorite(self, user_id: str, series_id: str) -> Favorite:
        pass

    @abstractmethod
    def remove_favorite(self, user_id: str, series_id: str) -> bool:
        pass

    # Reading progress
    @abstractmethod
    def list_reading_progress(self, user_id: str) -> list[ReadingProgress]:
        pass

    @abstractmethod
    def get_reading_progress(self, user_id: str, series_id: str) -> Optional[ReadingProgress]:
        pass

    @abstractmethod
    def upsert_reading_progress(
        self,
        user_id: str,
        series_id: str,
        chapter_id: str,
        current_page: int,
        last_read: str,
    ) -> ReadingProgress:
        pass
