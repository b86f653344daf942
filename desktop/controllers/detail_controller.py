from __future__ import annotations

import asyncio
import logging
from typing import Callable, Optional

from PySide6.QtCore import QThreadPool

from app.client.api import FETCH_ERRORS, NoctoonClient
from app.core.reader import sort_chapters
from app.models.reader_entry import ReaderEntry
from app.services.page_loader import PageLoader, get_page_loader
from app.services.progress_services import resume_point
from desktop.controllers.library_controller import LibraryController
from desktop.pages.detail_page import DetailPage
from desktop.utils import pixmap_cover_crop, pixmap_from_bytes
from desktop.workers import ImageSignals, ImageWorker

logger = logging.getLogger(__name__)


class DetailController:
    def __init__(
        self,
        page: DetailPage,
        client: NoctoonClient,
        library: LibraryController,
        threadpool: QThreadPool,
        get_user: Callable[[], Optional[object]],
        open_reader: Callable[[ReaderEntry], None],
        loader: Optional[PageLoader] = None,
    ):
        self.page = page
        self.client = client
        self.library = library
        self.threadpool = threadpool
        self.get_user = get_user
        self.open_reader = open_reader
        self.loader = loader or get_page_loader()

        self.series = None
        self.chapters = []
        self._pending_id: Optional[str] = None

        self.cover_signals = ImageSignals()
        self.cover_signals.done.connect(self._on_cover)

        self.page.continueClicked.connect(self.continue_reading)
        self.page.openClicked.connect(self.open_first)
        self.page.chapterActivated.connect(self.open_chapter)
        self.page.favoriteClicked.connect(lambda: asyncio.ensure_future(self.toggle_favorite()))

    async def show_series(self, series_id: str):
        self._pending_id = series_id
        self.series = self.library.series_by_id(series_id)
        self.chapters = []
        self.page.clear()
        if self.series:
            self._render_header()

        try:
            series = await self.client.get_series(series_id)
            chapters = await self.client.get_chapters(series_id)
        except FETCH_ERRORS as e:
            logger.warning("Could not load series %s: %s", series_id, e)
            self.page.detail_sub.setText(f"Error loading series: {e}")
            return

        # another series was picked while we waited
        if self._pending_id != series_id:
            return
        if series is None:
            self.series = None
            self.page.detail_title.setText("Series not found")
            return

        self.series = series
        self.chapters = sort_chapters(chapters)
        self._render_header()
        self._render_chapters()

    def _render_header(self):
        s = self.series
        self.page.detail_title.setText(s.title)
        self.page.detail_meta.setText(
            f"{s.author or 'Unknown author'}  •  {s.status.capitalize()}  •  ★ {s.rating / 10:.1f}  •  {s.views:,} views"
        )
        self.page.detail_desc.setText(s.description or "")
        self.page.set_genres(s.genres)
        self.page.set_favorite(self.library.is_favorite(s.id))
        if s.cover_image:
            self.threadpool.start(ImageWorker(s.id, s.cover_image, self.loader, self.cover_signals))

    def _render_chapters(self):
        self.page.chapters_preview.clear()
        if not self.chapters:
            self.page.detail_sub.setText("No chapters yet")
            self.page.btn_open.setEnabled(False)
            self.page.btn_continue.setEnabled(False)
            return

        row = self.library.progress_for(self.series.id)
        target = self.continue_target()
        if target:
            ch, page = target
            self.page.detail_sub.setText(f"Continue: Chapter {ch.chapter_number}  •  p{page + 1}/{max(len(ch.pages), 1)}")
        else:
            self.page.detail_sub.setText(f"{len(self.chapters)} chapters")
        self.page.btn_open.setEnabled(True)
        self.page.btn_continue.setEnabled(target is not None)

        for ch in self.chapters:
            cur = row.current_page + 1 if row and row.chapter_id == ch.id else 0
            label = f"Chapter {ch.chapter_number}"
            if ch.title:
                label = f"{label}: {ch.title}"
            self.page.add_chapter_row(ch.id, label, min(cur, len(ch.pages)), len(ch.pages))

    async def toggle_favorite(self):
        user = self.get_user()
        if not self.series:
            return
        if not user:
            self.page.detail_sub.setText("Log in to keep favorites")
            return
        series_id = self.series.id
        try:
            if self.library.is_favorite(series_id):
                await self.client.remove_favorite(user.id, series_id)
                favorite = False
            else:
                await self.client.add_favorite(user.id, series_id)
                favorite = True
        except FETCH_ERRORS as e:
            logger.warning("Could not update favorite %s: %s", series_id, e)
            return
        self.library.mark_favorite(series_id, favorite)
        if self.series and self.series.id == series_id:
            self.page.set_favorite(favorite)

    def continue_target(self):
        if not self.series:
            return None
        return resume_point(self.library.progress_for(self.series.id), self.chapters)

    def _entry(self, chapter, page: int = 0) -> ReaderEntry:
        return ReaderEntry(
            series_id=self.series.id,
            chapter_id=chapter.id,
            page=page,
            title=self.series.title,
            chapter_title=f"Chapter {chapter.chapter_number}",
        )

    def open_first(self):
        if self.series and self.chapters:
            self.open_reader(self._entry(self.chapters[0]))

    def open_chapter(self, chapter_id: str):
        chapter = next((ch for ch in self.chapters if ch.id == chapter_id), None)
        if chapter:
            self.open_reader(self._entry(chapter))

    def continue_reading(self):
        target = self.continue_target()
        if target:
            self.open_reader(self._entry(*target))
        else:
            self.open_first()

    def _on_cover(self, series_id: str, data, error: str):
        if not self.series or series_id != self.series.id or error:
            return
        try:
            pix = pixmap_from_bytes(data)
        except OSError as e:
            logger.debug("Cover for %s is not an image: %s", series_id, e)
            return
        self.page.detail_cover.setPixmap(pixmap_cover_crop(pix, self.page.detail_cover.size()))
