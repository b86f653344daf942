from datetime import datetime, timezone
from typing import Optional

from app.models import ReadingProgress
from app.store.base import CatalogStore


def now_iso() -> str:
    return datetime.now(timezone.utc).isoformat().replace("+00:00", "Z")


def save_progress(
    store: CatalogStore,
    user_id: str,
    series_id: str,
    chapter_id: str,
    current_page: int = 0,
    last_read: Optional[str] = None,
) -> ReadingProgress:
    return store.upsert_reading_progress(
        user_id=user_id,
        series_id=series_id,
        chapter_id=chapter_id,
        current_page=max(int(current_page or 0), 0),
        last_read=last_read or now_iso(),
    )


def resume_point(row, chapters) -> Optional[tuple]:
    """Chapter and clamped page to resume ``row`` from, or None when its chapter is gone."""
    if not row:
        return None
    chapter = next((ch for ch in chapters if ch.id == row.chapter_id), None)
    if chapter is None:
        return None
    total = max(len(chapter.pages or []), 1)
    return chapter, max(0, min(row.current_page, total - 1))
