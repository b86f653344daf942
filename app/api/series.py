import logging

from fastapi import APIRouter, Depends

from app.api.deps import get_store
from app.core.errors import NotFound
from app.models import Series
from app.schemas import ChapterRead, SeriesCreate, SeriesRead, SeriesUpdate, Success
from app.store import CatalogStore

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/series", tags=["series"])


@router.get("", response_model=list[SeriesRead])
def list_series(store: CatalogStore = Depends(get_store)):
    return store.list_series()


@router.get("/{series_id}", response_model=SeriesRead)
def get_series(series_id: str, store: CatalogStore = Depends(get_store)):
    series = store.get_series(series_id)
    if not series:
        raise NotFound("Series not found")
    return series


@router.post("", response_model=SeriesRead, status_code=201)
def create_series(body: SeriesCreate, store: CatalogStore = Depends(get_store)):
    # rating and views always start at zero
    series = store.create_series(Series(**body.model_dump(), rating=0, views=0))
    logger.info("Created series %s (%s)", series.id, series.title)
    return series


@router.patch("/{series_id}", response_model=SeriesRead)
def update_series(series_id: str, body: SeriesUpdate, store: CatalogStore = Depends(get_store)):
    series = store.update_series(series_id, body.model_dump(exclude_unset=True))
    if not series:
        raise NotFound("Series not found")
    return series


@router.delete("/{series_id}", response_model=Success)
def delete_series(series_id: str, store: CatalogStore = Depends(get_store)):
    if not store.delete_series(series_id):
        raise NotFound("Series not found")
    return Success()


@router.get("/{series_id}/chapters", response_model=list[ChapterRead])
def list_chapters(series_id: str, store: CatalogStore = Depends(get_store)):
    return store.list_chapters(series_id)
