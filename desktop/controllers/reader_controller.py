from __future__ import annotations

import asyncio
import logging
from typing import Callable, Optional

from PySide6.QtCore import QThreadPool
from PySide6.QtGui import QPixmap
from PySide6.QtWidgets import QMainWindow

from app.client.api import NoctoonClient
from app.core.progress_reporter import ProgressReporter
from app.core.reader import ReadingSession, SessionStatus, load_chapter, load_session
from app.models.reader_entry import ReaderEntry
from app.services.page_loader import PageLoader, get_page_loader
from desktop.pages.reader_page import ReaderPage
from desktop.utils import READER_KEYS, pixmap_from_bytes, scale_for_zoom
from desktop.workers import ImageSignals, ImageWorker

logger = logging.getLogger(__name__)


class ReaderController:
    """Connects a ReaderPage to a ReadingSession; the session makes every navigation decision."""

    def __init__(
        self,
        window: QMainWindow,
        page: ReaderPage,
        client: NoctoonClient,
        threadpool: QThreadPool,
        get_user: Callable[[], Optional[object]],
        on_reading_state: Optional[Callable[[bool], None]] = None,
        on_exit: Optional[Callable[[], None]] = None,
        loader: Optional[PageLoader] = None,
    ):
        self.window = window
        self.page = page
        self.client = client
        self.threadpool = threadpool
        self.get_user = get_user
        self.on_reading_state = on_reading_state
        self.on_exit = on_exit
        self.loader = loader or get_page_loader()

        self.session: Optional[ReadingSession] = None
        self.reporter: Optional[ProgressReporter] = None
        self.original_pixmap: Optional[QPixmap] = None
        self._wanted_image: Optional[str] = None
        self._shown_image: Optional[str] = None
        self._tasks: set[asyncio.Future] = set()

        self.image_signals = ImageSignals()
        self.image_signals.done.connect(self._on_image)

        self.page.surfaceClicked.connect(self.handle_click)
        self.page.prevClicked.connect(self._retreat)
        self.page.nextClicked.connect(self._advance)
        self.page.zoomInClicked.connect(self._zoom_in)
        self.page.zoomOutClicked.connect(self._zoom_out)
        self.page.fullscreenClicked.connect(self._toggle_fullscreen)
        self.page.chapterSelected.connect(self._select_chapter)
        self.page.closeClicked.connect(self._exit)

    # -------------------- lifecycle --------------------

    def open(self, entry: ReaderEntry):
        self.close()

        user = self.get_user()
        self.reporter = ProgressReporter(self.client, user.id) if user else None

        self.session = ReadingSession(
            entry.series_id,
            entry.chapter_id,
            on_progress=self.page.set_progress,
            on_reading_state=self.on_reading_state,
            on_fullscreen=self._apply_fullscreen,
            on_chapter_change=self._on_chapter_change,
            on_page_change=self.reporter.page_changed if self.reporter else None,
            on_change=self._render,
        )
        # clamped once the chapter arrives
        self.session.page_index = max(entry.page, 0)
        self._wanted_image = None
        self._shown_image = None
        self.original_pixmap = None
        self.page.set_titles(entry.title, entry.chapter_title)
        self.page.show_message("Loading...")
        self.session.activate()
        self._spawn(load_session(self.session, self.client))

    def close(self):
        if not self.session:
            return
        if self.session.fullscreen:
            self.window.showNormal()
        self.session.deactivate()
        if self.reporter:
            self._spawn(self.reporter.flush())
        self.loader.cancel_prefetch()
        self.session = None

    def _exit(self):
        self.close()
        if self.on_exit:
            self.on_exit()

    def _spawn(self, coro):
        task = asyncio.ensure_future(coro)
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
        return task

    # -------------------- input --------------------

    def handle_key(self, key) -> bool:
        if not self.session:
            return False
        name = READER_KEYS.get(key)
        return bool(name) and self.session.handle_key(name)

    def handle_click(self, x: float, width: float):
        if self.session:
            self.session.handle_click(x, width)

    def _advance(self):
        if self.session:
            self.session.advance_page()

    def _retreat(self):
        if self.session:
            self.session.retreat_page()

    def _zoom_in(self):
        if self.session:
            self.session.zoom_in()

    def _zoom_out(self):
        if self.session:
            self.session.zoom_out()

    def _toggle_fullscreen(self):
        if self.session:
            self.session.toggle_fullscreen()

    def _select_chapter(self, chapter_id: str):
        if self.session and chapter_id != self.session.chapter_id:
            self.session.select_chapter(chapter_id)

    # -------------------- session callbacks --------------------

    def _on_chapter_change(self, chapter_id: str):
        self._spawn(load_chapter(self.session, self.client))

    def _apply_fullscreen(self, fullscreen: bool):
        if fullscreen:
            self.window.showFullScreen()
        else:
            self.window.showNormal()

    def _render(self, session: ReadingSession):
        if session is not self.session:
            return

        self.page.set_controls_visible(session.controls_visible)
        self.page.set_zoom(session.zoom)
        self.page.set_fullscreen(session.fullscreen)
        self.page.set_navigation(session.can_go_prev, session.can_go_next)
        self.page.set_page_info(session.page_index, session.total_pages)

        series_title = session.series.title if session.series else ""
        chapter_text = f"Chapter {session.chapter.chapter_number}" if session.chapter else ""
        self.page.set_titles(series_title, chapter_text)
        self.page.set_chapters(
            [(ch.id, f"Chapter {ch.chapter_number}") for ch in session.sorted_chapters],
            session.chapter_id,
        )

        status = session.status
        if status == SessionStatus.NOT_FOUND:
            self._wanted_image = None
            self.page.show_message("Chapter not found")
            return
        if status == SessionStatus.ERROR:
            self._wanted_image = None
            self.page.show_message(f"Could not load chapter: {session.error}")
            return
        if status == SessionStatus.LOADING:
            self.page.show_message("Loading...")
            return
        if not session.total_pages:
            self._wanted_image = None
            self.page.show_message("This chapter has no pages")
            return

        url = session.current_page_url
        if url != self._wanted_image:
            self._request_image(session, url)
        elif url == self._shown_image:
            self.apply_pixmap()

    # -------------------- images --------------------

    def _request_image(self, session: ReadingSession, url: str):
        self._wanted_image = url
        self.page.show_message("Loading page...")
        self.threadpool.start(ImageWorker(url, url, self.loader, self.image_signals))
        self.loader.prefetch_pages(session.chapter_id, session.pages, session.page_index)

    def _on_image(self, key: str, data, error: str):
        # a slow download for a page we already left
        if key != self._wanted_image or not self.session:
            return
        if error:
            self.page.show_message(f"Error loading page: {error}")
            return
        try:
            self.original_pixmap = pixmap_from_bytes(data)
        except OSError as e:
            self.page.show_message(f"Error loading page: {e}")
            return
        self._shown_image = key
        self.apply_pixmap()

    def apply_pixmap(self):
        if not self.original_pixmap or self.original_pixmap.isNull() or not self.session:
            return
        self.page.show_pixmap(scale_for_zoom(self.original_pixmap, self.page.viewport_height(), self.session.zoom))
