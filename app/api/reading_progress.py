from typing import Optional

from fastapi import APIRouter, Depends, Query

from app.api.deps import get_store
from app.schemas import ProgressCreate, ProgressRead
from app.services.progress_services import save_progress
from app.store import CatalogStore

router = APIRouter(prefix="/reading-progress", tags=["reading-progress"])


@router.get("", response_model=list[ProgressRead])
def list_progress(user_id: Optional[str] = Query(None, alias="userId"), store: CatalogStore = Depends(get_store)):
    if not user_id:
        return []
    return store.list_reading_progress(user_id)


@router.post("", response_model=ProgressRead)
def upsert_progress(body: ProgressCreate, store: CatalogStore = Depends(get_store)):
    return save_progress(store, body.user_id, body.series_id, body.chapter_id, body.current_page)
