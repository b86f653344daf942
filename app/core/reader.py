"""
Reading session: page and chapter navigation for one reader activation.

The session is plain Python. Hosts feed it input events (keys, clicks,
chapter picks) and fetch results, and observe it through callbacks. All
transitions are synchronous; fetch results are tagged with a ``LoadTicket``
and dropped when the session has moved on since the request was made.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Optional, Sequence

from app.client.api import FETCH_ERRORS

logger = logging.getLogger(__name__)

ZOOM_DEFAULT = 100
ZOOM_MIN = 50
ZOOM_MAX = 200
ZOOM_STEP = 10

KEY_ACTIONS = {
    "ArrowLeft": "retreat_page",
    "ArrowRight": "advance_page",
    "Escape": "toggle_controls",
}


class SessionStatus(str, Enum):
    LOADING = "loading"
    READY = "ready"
    NOT_FOUND = "not_found"
    ERROR = "error"


@dataclass(frozen=True)
class LoadTicket:
    series_id: str
    chapter_id: str
    generation: int


def sort_chapters(chapters: Sequence) -> list:
    # sorted() is stable: equal numbers keep their fetch order
    return sorted(chapters, key=lambda ch: ch.chapter_number)


def clamp(value: int, lo: int, hi: int) -> int:
    return max(lo, min(hi, value))


def hit_zone(x: float, width: float) -> str:
    """Left third goes back, right third goes forward, the middle toggles controls."""
    if width <= 0:
        return "center"
    third = width / 3
    if x < third:
        return "prev"
    if x >= width - third:
        return "next"
    return "center"


class ReadingSession:
    def __init__(
        self,
        series_id: str,
        chapter_id: str,
        on_progress: Optional[Callable[[float], None]] = None,
        on_reading_state: Optional[Callable[[bool], None]] = None,
        on_fullscreen: Optional[Callable[[bool], None]] = None,
        on_chapter_change: Optional[Callable[[str], None]] = None,
        on_page_change: Optional[Callable[[str, str, int], None]] = None,
        on_change: Optional[Callable[["ReadingSession"], None]] = None,
    ):
        self.series_id = series_id
        self.chapter_id = chapter_id

        self.on_progress = on_progress
        self.on_reading_state = on_reading_state
        self.on_fullscreen = on_fullscreen
        self.on_chapter_change = on_chapter_change
        self.on_page_change = on_page_change
        self.on_change = on_change

        self.series = None
        self.chapter = None
        self.sorted_chapters: list = []
        self.page_index = 0
        self.zoom = ZOOM_DEFAULT
        self.controls_visible = True
        self.fullscreen = False
        self.is_reading = False
        self.closed = False

        self.generation = 0
        self.error: Optional[str] = None
        self._series_missing = False
        self._chapter_missing = False
        self._last_position: Optional[tuple[str, int]] = None

    # -------------------- derived state --------------------

    @property
    def status(self) -> SessionStatus:
        if self._series_missing or self._chapter_missing:
            return SessionStatus.NOT_FOUND
        if self.error:
            return SessionStatus.ERROR
        if self.chapter is not None:
            return SessionStatus.READY
        return SessionStatus.LOADING

    @property
    def pages(self) -> list[str]:
        if self.chapter is None:
            return []
        return list(self.chapter.pages or [])

    @property
    def total_pages(self) -> int:
        return len(self.pages)

    @property
    def current_page_url(self) -> Optional[str]:
        pages = self.pages
        if not pages or self.page_index >= len(pages):
            return None
        return pages[self.page_index]

    @property
    def chapter_index(self) -> int:
        for i, ch in enumerate(self.sorted_chapters):
            if ch.id == self.chapter_id:
                return i
        return -1

    @property
    def prev_chapter(self):
        idx = self.chapter_index
        if idx > 0:
            return self.sorted_chapters[idx - 1]
        return None

    @property
    def next_chapter(self):
        idx = self.chapter_index
        if 0 <= idx < len(self.sorted_chapters) - 1:
            return self.sorted_chapters[idx + 1]
        return None

    @property
    def can_navigate(self) -> bool:
        return self.status != SessionStatus.NOT_FOUND

    @property
    def can_go_prev(self) -> bool:
        if not self.can_navigate:
            return False
        return self.page_index > 0 or self.prev_chapter is not None

    @property
    def can_go_next(self) -> bool:
        if not self.can_navigate:
            return False
        return self.page_index < self.total_pages - 1 or self.next_chapter is not None

    @property
    def progress_percent(self) -> float:
        total = self.total_pages
        if total <= 0:
            return 0
        return ((self.page_index + 1) / total) * 100

    # -------------------- lifecycle --------------------

    def activate(self):
        self.is_reading = True
        if self.on_reading_state:
            self.on_reading_state(True)
        self._notify()

    def deactivate(self):
        self.is_reading = False
        self.closed = True
        # anything still in flight belongs to a reader that is gone
        self.generation += 1
        if self.on_reading_state:
            self.on_reading_state(False)

    def ticket(self) -> LoadTicket:
        return LoadTicket(self.series_id, self.chapter_id, self.generation)

    def is_current(self, ticket: LoadTicket) -> bool:
        return (
            ticket.series_id == self.series_id
            and ticket.chapter_id == self.chapter_id
            and ticket.generation == self.generation
        )

    # -------------------- fetch results --------------------

    def apply_series(self, ticket: LoadTicket, series) -> bool:
        if ticket.series_id != self.series_id or self.closed:
            return False
        self.series = series
        self._series_missing = series is None
        self._notify()
        return True

    def apply_chapters(self, ticket: LoadTicket, chapters: Optional[Sequence]) -> bool:
        if ticket.series_id != self.series_id or self.closed:
            return False
        self.sorted_chapters = sort_chapters(chapters or [])
        self._notify()
        return True

    def apply_chapter(self, ticket: LoadTicket, chapter) -> bool:
        if not self.is_current(ticket) or self.closed:
            logger.debug("Dropping stale chapter result for %s", ticket.chapter_id)
            return False
        self.chapter = chapter
        self._chapter_missing = chapter is None
        self.error = None
        if self.total_pages:
            self.page_index = clamp(self.page_index, 0, self.total_pages - 1)
        else:
            self.page_index = 0
        self._notify()
        return True

    def apply_error(self, ticket: LoadTicket, exc: BaseException) -> bool:
        if not self.is_current(ticket) or self.closed:
            return False
        self.error = str(exc) or type(exc).__name__
        self._notify()
        return True

    # -------------------- navigation --------------------

    def advance_page(self) -> bool:
        if not self.can_navigate:
            return False
        if self.page_index < self.total_pages - 1:
            self.page_index += 1
            self._notify()
            return True
        nxt = self.next_chapter
        if nxt is not None:
            self._enter_chapter(nxt.id)
            return True
        return False

    def retreat_page(self) -> bool:
        if not self.can_navigate:
            return False
        if self.page_index > 0:
            self.page_index -= 1
            self._notify()
            return True
        prev = self.prev_chapter
        if prev is not None:
            # lands on page 0 of the previous chapter, not its last page
            self._enter_chapter(prev.id)
            return True
        return False

    def select_chapter(self, chapter_id: str):
        self._enter_chapter(chapter_id)

    def _enter_chapter(self, chapter_id: str):
        self.chapter_id = chapter_id
        self.page_index = 0
        self.generation += 1
        self.error = None
        self._chapter_missing = False
        # the chapter list already carries pages; show them until the fresh fetch lands
        self.chapter = next((ch for ch in self.sorted_chapters if ch.id == chapter_id), None)
        if self.on_chapter_change:
            self.on_chapter_change(chapter_id)
        self._notify()

    # -------------------- view state --------------------

    def set_zoom(self, delta: int) -> int:
        self.zoom = clamp(self.zoom + delta, ZOOM_MIN, ZOOM_MAX)
        self._notify()
        return self.zoom

    def zoom_in(self) -> int:
        return self.set_zoom(ZOOM_STEP)

    def zoom_out(self) -> int:
        return self.set_zoom(-ZOOM_STEP)

    def toggle_controls(self) -> bool:
        self.controls_visible = not self.controls_visible
        self._notify()
        return self.controls_visible

    def toggle_fullscreen(self) -> bool:
        self.fullscreen = not self.fullscreen
        # fire and forget: the host reports nothing back
        if self.on_fullscreen:
            self.on_fullscreen(self.fullscreen)
        self._notify()
        return self.fullscreen

    # -------------------- input --------------------

    def handle_key(self, key: str) -> bool:
        action = KEY_ACTIONS.get(key)
        if not action:
            return False
        getattr(self, action)()
        return True

    def handle_click(self, x: float, width: float) -> str:
        # without pages there are no side zones, the whole surface toggles controls
        zone = hit_zone(x, width) if self.total_pages else "center"
        if zone == "prev":
            self.retreat_page()
        elif zone == "next":
            self.advance_page()
        else:
            self.toggle_controls()
        return zone

    # -------------------- observers --------------------

    def _notify(self):
        if self.on_progress:
            self.on_progress(self.progress_percent)

        if self.status == SessionStatus.READY:
            position = (self.chapter_id, self.page_index)
            if position != self._last_position:
                self._last_position = position
                if self.on_page_change:
                    self.on_page_change(self.series_id, self.chapter_id, self.page_index)

        if self.on_change:
            self.on_change(self)


async def _fetch_into(session: ReadingSession, ticket: LoadTicket, coro, apply):
    try:
        result = await coro
    except FETCH_ERRORS as e:
        logger.warning("Fetch for %s/%s failed: %s", ticket.series_id, ticket.chapter_id, e)
        session.apply_error(ticket, e)
        return
    apply(ticket, result)


async def load_session(session: ReadingSession, client):
    """Fetch series, chapter list and chapter concurrently; apply each as it resolves."""
    ticket = session.ticket()
    await asyncio.gather(
        _fetch_into(session, ticket, client.get_series(ticket.series_id), session.apply_series),
        _fetch_into(session, ticket, client.get_chapters(ticket.series_id), session.apply_chapters),
        _fetch_into(session, ticket, client.get_chapter(ticket.chapter_id), session.apply_chapter),
    )


async def load_chapter(session: ReadingSession, client):
    ticket = session.ticket()
    await _fetch_into(session, ticket, client.get_chapter(ticket.chapter_id), session.apply_chapter)
