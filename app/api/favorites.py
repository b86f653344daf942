from typing import Optional

from fastapi import APIRouter, Depends, Query

from app.api.deps import get_store
from app.core.errors import NotFound, ValidationError
from app.schemas import FavoriteCreate, FavoriteRead, Success
from app.store import CatalogStore

router = APIRouter(prefix="/favorites", tags=["favorites"])


@router.get("", response_model=list[FavoriteRead])
def list_favorites(user_id: Optional[str] = Query(None, alias="userId"), store: CatalogStore = Depends(get_store)):
    if not user_id:
        return []
    return store.list_favorites(user_id)


@router.post("", response_model=FavoriteRead, status_code=201)
def add_favorite(body: FavoriteCreate, store: CatalogStore = Depends(get_store)):
    return store.add_favorite(body.user_id, body.series_id)


@router.delete("/{series_id}", response_model=Success)
def remove_favorite(
    series_id: str,
    user_id: Optional[str] = Query(None, alias="userId"),
    store: CatalogStore = Depends(get_store),
):
    if not user_id:
        raise ValidationError("userId required")
    if not store.remove_favorite(user_id, series_id):
        raise NotFound("Favorite not found")
    return Success()
