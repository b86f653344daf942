import logging
from concurrent.futures import Future, ThreadPoolExecutor
from typing import Optional

import requests

from app.cache import ImageCache, get_image_cache

logger = logging.getLogger(__name__)


class PageLoader:
    """Serves page image bytes from the cache, downloading on a miss."""

    TIMEOUT = 20

    def __init__(self, image_cache: Optional[ImageCache] = None, max_workers: int = 4):
        self.image_cache = image_cache or get_image_cache()
        self._executor = ThreadPoolExecutor(max_workers=max_workers, thread_name_prefix="page-prefetch")
        self._prefetch_tasks: dict[str, Future] = {}

    def download(self, url: str) -> bytes:
        r = requests.get(url, timeout=self.TIMEOUT)
        r.raise_for_status()
        return r.content

    def load_page_bytes(self, url: str) -> bytes:
        if not url:
            raise ValueError("Page has no image URL")
        cached = self.image_cache.get(url)
        if cached is not None:
            return cached
        data = self.download(url)
        self.image_cache.put(url, data, save_to_disk=True)
        return data

    def prefetch_pages(self, chapter_id: str, pages: list[str], current_index: int, window: int = 2):
        start_idx = max(0, current_index - window)
        end_idx = min(len(pages), current_index + window + 1)
        wanted = {f"{chapter_id}_{i}" for i in range(start_idx, end_idx)}

        # pages that fell out of the window (or belong to another chapter) are not worth finishing
        for key in list(self._prefetch_tasks):
            if key not in wanted:
                self._prefetch_tasks.pop(key).cancel()

        for idx in range(start_idx, end_idx):
            if idx == current_index:
                continue
            key = f"{chapter_id}_{idx}"
            url = pages[idx]
            if key in self._prefetch_tasks or not url or self.image_cache.has(url):
                continue
            self._prefetch_tasks[key] = self._executor.submit(self._prefetch_page, url)

    def _prefetch_page(self, url: str):
        try:
            self.load_page_bytes(url)
        except (requests.RequestException, OSError) as e:
            logger.info("Prefetch failed for %s: %s", url, e)

    def cancel_prefetch(self):
        for task in self._prefetch_tasks.values():
            task.cancel()
        self._prefetch_tasks.clear()

    def close(self):
        self.cancel_prefetch()
        self._executor.shutdown(wait=False)


_global_loader: Optional[PageLoader] = None


def get_page_loader() -> PageLoader:
    global _global_loader
    if _global_loader is None:
        _global_loader = PageLoader()
    return _global_loader
