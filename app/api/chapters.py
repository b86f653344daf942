from fastapi import APIRouter, Depends

from app.api.deps import get_store
from app.core.errors import NotFound
from app.models import Chapter
from app.schemas import ChapterCreate, ChapterRead, ChapterUpdate, Success
from app.store import CatalogStore

router = APIRouter(prefix="/chapters", tags=["chapters"])


@router.get("/{chapter_id}", response_model=ChapterRead)
def get_chapter(chapter_id: str, store: CatalogStore = Depends(get_store)):
    chapter = store.get_chapter(chapter_id)
    if not chapter:
        raise NotFound("Chapter not found")
    return chapter


@router.post("", response_model=ChapterRead, status_code=201)
def create_chapter(body: ChapterCreate, store: CatalogStore = Depends(get_store)):
    return store.create_chapter(Chapter(**body.model_dump()))


@router.patch("/{chapter_id}", response_model=ChapterRead)
def update_chapter(chapter_id: str, body: ChapterUpdate, store: CatalogStore = Depends(get_store)):
    chapter = store.update_chapter(chapter_id, body.model_dump(exclude_unset=True))
    if not chapter:
        raise NotFound("Chapter not found")
    return chapter


@router.delete("/{chapter_id}", response_model=Success)
def delete_chapter(chapter_id: str, store: CatalogStore = Depends(get_store)):
    if not store.delete_chapter(chapter_id):
        raise NotFound("Chapter not found")
    return Success()
