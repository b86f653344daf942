from __future__ import annotations

import pytest

from app.db.seed import seed_demo_data
from app.db.session import make_engine
from app.models import Chapter, Series
from app.services import library_service
from app.services.progress_services import resume_point, save_progress
from app.store import MemoryStore, build_store
from app.store.sql import SqlStore


@pytest.fixture(params=["memory", "sqlite"])
def store(request, tmp_path):
    if request.param == "memory":
        return MemoryStore()
    return SqlStore(make_engine(tmp_path / "noctoon.db"))


def test_series_crud(store) -> None:
    created = store.create_series(Series(title="Lookism", genres=["Drama"]))
    assert created.id

    fetched = store.get_series(created.id)
    assert fetched.title == "Lookism"
    assert fetched.genres == ["Drama"]

    updated = store.update_series(created.id, {"title": "Lookism (2014)", "id": "hijack"})
    assert updated.title == "Lookism (2014)"
    assert updated.id == created.id

    assert store.delete_series(created.id) is True
    assert store.get_series(created.id) is None
    assert store.delete_series(created.id) is False
    assert store.update_series(created.id, {"title": "x"}) is None


def test_list_series_keeps_insertion_order(store) -> None:
    for title in ("B", "A", "C"):
        store.create_series(Series(title=title))
    assert [s.title for s in store.list_series()] == ["B", "A", "C"]


def test_chapters_listed_per_series(store) -> None:
    store.create_chapter(Chapter(id="c1", series_id="s1", chapter_number=1, pages=["a", "b"]))
    store.create_chapter(Chapter(id="c2", series_id="s2", chapter_number=1))
    assert [c.id for c in store.list_chapters("s1")] == ["c1"]
    assert store.get_chapter("c1").page_count == 2
    assert store.list_chapters("nobody") == []


def test_deleting_series_leaves_chapters(store) -> None:
    s = store.create_series(Series(title="Orphaned"))
    store.create_chapter(Chapter(id="c1", series_id=s.id, chapter_number=1))
    store.delete_series(s.id)
    assert store.get_chapter("c1") is not None


def test_favorites(store) -> None:
    store.add_favorite("u1", "s1")
    store.add_favorite("u1", "s2")
    store.add_favorite("u2", "s1")
    assert {f.series_id for f in store.list_favorites("u1")} == {"s1", "s2"}

    assert store.remove_favorite("u1", "s1") is True
    assert store.remove_favorite("u1", "s1") is False
    assert [f.series_id for f in store.list_favorites("u1")] == ["s2"]


def test_progress_upsert_keeps_one_row_per_user_and_series(store) -> None:
    first = save_progress(store, "u1", "s1", "c1", 2)
    second = save_progress(store, "u1", "s1", "c2", 5)

    rows = store.list_reading_progress("u1")
    assert len(rows) == 1
    assert second.id == first.id
    assert rows[0].chapter_id == "c2"
    assert rows[0].current_page == 5
    assert rows[0].last_read.endswith("Z")


def test_progress_is_separate_per_series(store) -> None:
    save_progress(store, "u1", "s1", "c1", 1)
    save_progress(store, "u1", "s2", "c9", 0)
    save_progress(store, "u2", "s1", "c1", 4)
    assert len(store.list_reading_progress("u1")) == 2
    assert store.get_reading_progress("u2", "s1").current_page == 4


def test_negative_page_is_stored_as_zero(store) -> None:
    row = save_progress(store, "u1", "s1", "c1", -3)
    assert row.current_page == 0


def test_resume_point_clamps_to_chapter(store) -> None:
    store.create_chapter(Chapter(id="c1", series_id="s1", chapter_number=1, pages=["a", "b"]))
    chapters = store.list_chapters("s1")
    row = save_progress(store, "u1", "s1", "c1", 9)
    chapter, page = resume_point(row, chapters)
    assert (chapter.id, page) == ("c1", 1)

    gone = save_progress(store, "u1", "s2", "gone", 0)
    assert resume_point(gone, chapters) is None
    assert resume_point(store.get_reading_progress("u1", "s3"), chapters) is None


def test_seed_is_idempotent(store) -> None:
    seed_demo_data(store)
    seed_demo_data(store)
    assert len(store.list_series()) == 8
    assert len(store.list_chapters("series-1")) == 3
    admin = store.get_user_by_username("admin")
    assert admin.id == "admin-1"
    assert admin.is_admin is True


def test_user_library(store) -> None:
    seed_demo_data(store)
    store.add_favorite("u1", "series-3")
    store.add_favorite("u1", "deleted-series")
    save_progress(store, "u1", "series-1", "ch-1", 0)

    lib = library_service.get_user_library(store, "u1")
    assert [s.id for s in lib["favorites"]] == ["series-3"]
    assert [s.id for s in lib["reading"]] == ["series-1"]


def test_build_store_rejects_unknown_backend() -> None:
    assert isinstance(build_store("memory"), MemoryStore)
    with pytest.raises(ValueError):
        build_store("redis")
