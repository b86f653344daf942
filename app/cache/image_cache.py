import hashlib
import logging
import threading
from collections import OrderedDict
from pathlib import Path
from typing import Optional

from app.core.config import CACHE_DIR

logger = logging.getLogger(__name__)


class ImageCache:
    """Two-level LRU for page image bytes: memory first, then ``*.cache`` files on disk."""

    def __init__(self,
                 max_memory_mb: int = 200,
                 max_disk_mb: int = 1000,
                 cache_dir: Optional[Path] = None):

        self.max_memory_bytes = max_memory_mb * 1024 * 1024
        self.max_disk_bytes = max_disk_mb * 1024 * 1024

        # shared by prefetch threads and Qt image workers
        self._lock = threading.RLock()
        self._memory_cache: OrderedDict[str, bytes] = OrderedDict()
        self._memory_size = 0

        self.cache_dir = Path(cache_dir or CACHE_DIR)
        self.cache_dir.mkdir(parents=True, exist_ok=True)

        self._disk_size = self._calculate_disk_usage()

    def _calculate_disk_usage(self) -> int:
        return sum(f.stat().st_size for f in self.cache_dir.glob("*.cache"))

    def _make_cache_key(self, identifier: str) -> str:
        return hashlib.md5(identifier.encode("utf-8")).hexdigest()

    def _get_cache_path(self, cache_key: str) -> Path:
        return self.cache_dir / f"{cache_key}.cache"

    def _evict_memory_lru(self, required_bytes: int):
        while self._memory_size + required_bytes > self.max_memory_bytes and self._memory_cache:
            _, data = self._memory_cache.popitem(last=False)
            self._memory_size -= len(data)

    def _evict_disk_lru(self, required_bytes: int, keep: Optional[Path] = None):
        if self._disk_size + required_bytes <= self.max_disk_bytes:
            return

        cache_files = sorted(self.cache_dir.glob("*.cache"), key=_atime)
        for file in cache_files:
            if self._disk_size + required_bytes <= self.max_disk_bytes:
                break
            if file == keep:
                continue
            try:
                size = file.stat().st_size
            except FileNotFoundError:
                continue
            file.unlink(missing_ok=True)
            self._disk_size -= size

    def _remember(self, cache_key: str, data: bytes):
        if len(data) > self.max_memory_bytes:
            return
        self._evict_memory_lru(len(data))
        self._memory_cache[cache_key] = data
        self._memory_size += len(data)

    def get(self, identifier: str) -> Optional[bytes]:
        cache_key = self._make_cache_key(identifier)

        with self._lock:
            if cache_key in self._memory_cache:
                self._memory_cache.move_to_end(cache_key)
                return self._memory_cache[cache_key]

            cache_path = self._get_cache_path(cache_key)
            try:
                data = cache_path.read_bytes()
            except FileNotFoundError:
                return None
            self._remember(cache_key, data)
            cache_path.touch()
            return data

    def put(self, identifier: str, data: bytes, save_to_disk: bool = True):
        cache_key = self._make_cache_key(identifier)
        with self._lock:
            old = self._memory_cache.pop(cache_key, None)
            if old is not None:
                self._memory_size -= len(old)
            self._remember(cache_key, data)

            if save_to_disk:
                cache_path = self._get_cache_path(cache_key)
                previous = cache_path.stat().st_size if cache_path.exists() else 0
                self._evict_disk_lru(len(data) - previous, keep=cache_path)
                cache_path.write_bytes(data)
                self._disk_size += len(data) - previous

    def has(self, identifier: str) -> bool:
        cache_key = self._make_cache_key(identifier)
        with self._lock:
            return cache_key in self._memory_cache or self._get_cache_path(cache_key).exists()

    def clear_memory(self):
        with self._lock:
            self._memory_cache.clear()
            self._memory_size = 0

    def clear_disk(self):
        with self._lock:
            for file in self.cache_dir.glob("*.cache"):
                file.unlink(missing_ok=True)
            self._disk_size = 0

    def clear_all(self):
        self.clear_memory()
        self.clear_disk()

    def get_stats(self) -> dict:
        with self._lock:
            return {
                "memory_items": len(self._memory_cache),
                "memory_size_mb": self._memory_size / (1024 * 1024),
                "memory_max_mb": self.max_memory_bytes / (1024 * 1024),
                "disk_size_mb": self._disk_size / (1024 * 1024),
                "disk_max_mb": self.max_disk_bytes / (1024 * 1024),
            }


def _atime(path: Path) -> float:
    try:
        return path.stat().st_atime
    except FileNotFoundError:
        return 0.0


_global_cache: Optional[ImageCache] = None


def get_image_cache() -> ImageCache:
    global _global_cache
    if _global_cache is None:
        _global_cache = ImageCache()
    return _global_cache
