import asyncio
import logging
from typing import Optional

from app.client.api import FETCH_ERRORS

logger = logging.getLogger(__name__)


class ProgressReporter:
    """Persists reading position for one user, at most once per settled page.

    ``page_changed`` is wired to ``ReadingSession.on_page_change``. Repeats of
    the last persisted position are dropped and bursts of page turns collapse
    into a single upsert after ``delay`` seconds.
    """

    def __init__(self, client, user_id: str, delay: float = 0.5):
        self.client = client
        self.user_id = user_id
        self.delay = delay
        self.pending: Optional[tuple[str, str, int]] = None
        self.last_saved: Optional[tuple[str, str, int]] = None
        self._timer: Optional[asyncio.TimerHandle] = None
        self._task: Optional[asyncio.Task] = None

    def page_changed(self, series_id: str, chapter_id: str, page: int):
        position = (series_id, chapter_id, page)
        if position == self.last_saved:
            self.pending = None
            self._cancel_timer()
            return
        self.pending = position
        self._schedule()

    def _schedule(self):
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            # no loop: the write waits for an explicit flush()
            return
        self._cancel_timer()
        self._timer = loop.call_later(self.delay, self._fire)

    def _fire(self):
        self._timer = None
        self._task = asyncio.ensure_future(self.flush())

    def _cancel_timer(self):
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None

    async def flush(self) -> bool:
        self._cancel_timer()
        position = self.pending
        if position is None or position == self.last_saved:
            return False
        self.pending = None
        series_id, chapter_id, page = position
        try:
            await self.client.upsert_reading_progress(self.user_id, series_id, chapter_id, page)
        except FETCH_ERRORS as e:
            logger.warning("Could not save progress for %s/%s: %s", series_id, chapter_id, e)
            if self.pending is None:
                self.pending = position
            return False
        self.last_saved = position
        return True
