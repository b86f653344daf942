import logging
from typing import Optional

from app.core.config import STORE_BACKEND
from .base import CatalogStore
from .memory import MemoryStore

logger = logging.getLogger(__name__)


def build_store(backend: str = STORE_BACKEND) -> CatalogStore:
    if backend == "sqlite":
        from .sql import SqlStore
        return SqlStore()
    if backend != "memory":
        raise ValueError(f"Unknown store backend: {backend}")
    return MemoryStore()


_global_store: Optional[CatalogStore] = None


def get_store() -> CatalogStore:
    global _global_store
    if _global_store is None:
        _global_store = build_store()
        logger.info("Using %s store", type(_global_store).__name__)
    return _global_store


def set_store(store: Optional[CatalogStore]):
    global _global_store
    _global_store = store


__all__ = ["CatalogStore", "MemoryStore", "build_store", "get_store", "set_store"]
