from __future__ import annotations

import asyncio
import logging
from typing import Callable, Optional

from PySide6.QtCore import QThreadPool

from app.client.api import FETCH_ERRORS, NoctoonClient
from app.services.catalog_filter import SeriesFilter, filter_series
from app.services.page_loader import PageLoader, get_page_loader
from desktop.pages.catalog_page import CatalogPage
from desktop.utils import pixmap_cover_crop, pixmap_from_bytes
from desktop.widgets import MangaCard
from desktop.workers import ImageSignals, ImageWorker

logger = logging.getLogger(__name__)

MODES = ("catalog", "favorites", "reading")


class LibraryController:
    def __init__(
        self,
        page: CatalogPage,
        client: NoctoonClient,
        threadpool: QThreadPool,
        get_user: Callable[[], Optional[object]],
        on_select: Callable[[str], None],
        on_open: Callable[[str], None],
        on_continue: Callable[[str], None],
        loader: Optional[PageLoader] = None,
    ):
        self.page = page
        self.client = client
        self.threadpool = threadpool
        self.get_user = get_user
        self.on_select = on_select
        self.on_open = on_open
        self.on_continue = on_continue
        self.loader = loader or get_page_loader()

        self.rows = []
        self.favorites: set[str] = set()
        self.progress: dict = {}
        self.mode = "catalog"
        self.filter = SeriesFilter()
        self.cards: dict[str, MangaCard] = {}

        self.cover_signals = ImageSignals()
        self.cover_signals.done.connect(self._on_cover)

        self.page.queryChanged.connect(self.set_query)
        self.page.genresChanged.connect(self.set_genres)
        self.page.statusChanged.connect(self.set_status)
        self.page.resetClicked.connect(self.reset)

    # -------------------- data --------------------

    async def reload(self):
        try:
            self.rows = await self.client.list_series()
        except FETCH_ERRORS as e:
            logger.warning("Could not load catalog: %s", e)
            self.rows = []
        await self.reload_user_state()

    async def reload_user_state(self):
        user = self.get_user()
        if not user:
            self.favorites = set()
            self.progress = {}
            self.apply_filter()
            return
        try:
            favorites, progress = await asyncio.gather(
                self.client.list_favorites(user.id),
                self.client.list_reading_progress(user.id),
            )
        except FETCH_ERRORS as e:
            logger.warning("Could not load library for %s: %s", user.id, e)
            favorites, progress = [], []
        self.favorites = {f.series_id for f in favorites}
        self.progress = {p.series_id: p for p in progress}
        self.apply_filter()

    def series_by_id(self, series_id: str):
        return next((s for s in self.rows if s.id == series_id), None)

    def progress_for(self, series_id: str):
        return self.progress.get(series_id)

    def is_favorite(self, series_id: str) -> bool:
        return series_id in self.favorites

    def mark_favorite(self, series_id: str, is_favorite: bool):
        if is_favorite:
            self.favorites.add(series_id)
        else:
            self.favorites.discard(series_id)
        if self.mode == "favorites":
            self.apply_filter()

    # -------------------- filters --------------------

    def set_mode(self, mode: str):
        if mode not in MODES:
            return
        self.mode = mode
        self.apply_filter()

    def set_query(self, q: str):
        self.filter.query = q or ""
        self.apply_filter()

    def set_genres(self, genres: list):
        self.filter.genres = set(genres or [])
        self.apply_filter()

    def set_status(self, status: str):
        self.filter.status = status or "all"
        self.apply_filter()

    def reset(self):
        self.filter = SeriesFilter()
        self.page.reset_filters()
        self.apply_filter()

    def visible_rows(self) -> list:
        rows = list(self.rows)
        if self.mode == "favorites":
            rows = [s for s in rows if s.id in self.favorites]
        elif self.mode == "reading":
            rows = [s for s in rows if s.id in self.progress]
            rows.sort(key=lambda s: self.progress[s.id].last_read or "", reverse=True)
        return filter_series(rows, self.filter)

    def apply_filter(self):
        rows = self.visible_rows()
        self.page.set_result_count(len(rows), len(self.rows))

        self.page.grid.clear()
        self.cards = {}
        for s in rows:
            card = MangaCard(s.id, s.title, s.author or "")
            card.clicked.connect(self.on_select)
            card.openRequested.connect(self.on_open)
            card.continueRequested.connect(self.on_continue)
            card.btn_continue.setVisible(s.id in self.progress)
            self.page.grid.addWidget(card)
            self.cards[s.id] = card

            if s.cover_image:
                self.threadpool.start(ImageWorker(s.id, s.cover_image, self.loader, self.cover_signals))

    def _on_cover(self, series_id: str, data, error: str):
        card = self.cards.get(series_id)
        if not card:
            return
        if error:
            logger.debug("Cover for %s failed: %s", series_id, error)
            return
        try:
            pix = pixmap_from_bytes(data)
        except OSError as e:
            logger.debug("Cover for %s is not an image: %s", series_id, e)
            return
        card.set_cover_pixmap(pixmap_cover_crop(pix, card.cover.size()))
