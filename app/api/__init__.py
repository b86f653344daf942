from fastapi import APIRouter

from . import auth, catalog, chapters, favorites, reading_progress, series

router = APIRouter(prefix="/api")
router.include_router(auth.router)
router.include_router(series.router)
router.include_router(chapters.router)
router.include_router(favorites.router)
router.include_router(reading_progress.router)
router.include_router(catalog.router)
