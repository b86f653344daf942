from typing import Optional

from fastapi import APIRouter, Depends, Query

from app.api.deps import get_store
from app.core.errors import ValidationError
from app.models import SERIES_STATUSES
from app.schemas import HomeSections, SeriesRead, UserLibrary
from app.services.catalog_filter import SeriesFilter, filter_series, home_sections
from app.services.library_service import get_user_library
from app.store import CatalogStore

router = APIRouter(tags=["catalog"])


@router.get("/catalog/search", response_model=list[SeriesRead])
def search(
    q: str = "",
    genres: Optional[list[str]] = Query(None),
    status: str = "all",
    store: CatalogStore = Depends(get_store),
):
    if status != "all" and status not in SERIES_STATUSES:
        raise ValidationError(f"Unknown status: {status}")
    # ?genres=Action&genres=Drama or ?genres=Action,Drama
    wanted = {g.strip() for raw in (genres or []) for g in raw.split(",") if g.strip()}
    return filter_series(store.list_series(), SeriesFilter(query=q, genres=wanted, status=status))


@router.get("/catalog/home", response_model=HomeSections)
def home(store: CatalogStore = Depends(get_store)):
    return HomeSections.model_validate(home_sections(store.list_series()))


@router.get("/users/{user_id}/library", response_model=UserLibrary)
def user_library(user_id: str, store: CatalogStore = Depends(get_store)):
    return UserLibrary.model_validate(get_user_library(store, user_id))
