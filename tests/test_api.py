from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from app.main import create_app
from app.store import MemoryStore


@pytest.fixture
def store():
    return MemoryStore()


@pytest.fixture
def client(store):
    return TestClient(create_app(store, seed=True))


@pytest.fixture
def empty_client(store):
    return TestClient(create_app(store, seed=False))


def test_root(client) -> None:
    assert client.get("/").json() == {"message": "Noctoon API running"}


def test_list_series_uses_camel_case(client) -> None:
    res = client.get("/api/series")
    assert res.status_code == 200
    rows = res.json()
    assert len(rows) == 8
    first = rows[0]
    assert first["id"] == "series-1"
    assert first["coverImage"].startswith("https://")
    assert first["isFeatured"] is True
    assert "cover_image" not in first
    assert "seq" not in first


def test_get_series_404(client) -> None:
    res = client.get("/api/series/nope")
    assert res.status_code == 404
    assert res.json() == {"error": "Series not found"}


def test_create_series_defaults(empty_client) -> None:
    res = empty_client.post(
        "/api/series",
        json={"title": "Lookism", "coverImage": "https://x/c.jpg", "genres": ["Drama"], "isTrending": True},
    )
    assert res.status_code == 201
    body = res.json()
    assert body["title"] == "Lookism"
    assert body["coverImage"] == "https://x/c.jpg"
    assert body["rating"] == 0
    assert body["views"] == 0
    assert body["status"] == "ongoing"
    assert body["isTrending"] is True
    assert empty_client.get(f"/api/series/{body['id']}").status_code == 200


def test_create_series_rejects_invalid_body(empty_client) -> None:
    res = empty_client.post("/api/series", json={"description": "no title"})
    assert res.status_code == 400
    assert res.json()["error"] == "Invalid data"

    res = empty_client.post("/api/series", json={"title": "X", "status": "cancelled"})
    assert res.status_code == 400


def test_patch_and_delete_series(client) -> None:
    res = client.patch("/api/series/series-2", json={"rating": 99, "isFeatured": False})
    assert res.status_code == 200
    assert res.json()["rating"] == 99
    assert res.json()["isFeatured"] is False
    assert res.json()["title"] == "Tower of God"

    assert client.patch("/api/series/nope", json={"rating": 1}).status_code == 404

    assert client.delete("/api/series/series-2").json() == {"success": True}
    assert client.delete("/api/series/series-2").status_code == 404
    # chapters stay behind
    assert client.get("/api/chapters/ch-4").status_code == 200


def test_chapters_for_series(client) -> None:
    res = client.get("/api/series/series-1/chapters")
    assert res.status_code == 200
    rows = res.json()
    assert [c["chapterNumber"] for c in rows] == [1, 2, 3]
    assert rows[0]["seriesId"] == "series-1"
    assert len(rows[0]["pages"]) == 3
    assert client.get("/api/series/nope/chapters").json() == []


def test_chapter_crud(empty_client) -> None:
    res = empty_client.post("/api/chapters", json={"seriesId": "s1", "chapterNumber": 4, "pages": ["a"]})
    assert res.status_code == 201
    chapter_id = res.json()["id"]

    res = empty_client.patch(f"/api/chapters/{chapter_id}", json={"title": "Renamed"})
    assert res.json()["title"] == "Renamed"
    assert res.json()["pages"] == ["a"]

    assert empty_client.delete(f"/api/chapters/{chapter_id}").json() == {"success": True}
    assert empty_client.get(f"/api/chapters/{chapter_id}").status_code == 404
    assert empty_client.post("/api/chapters", json={"chapterNumber": 1}).status_code == 400


def test_favorites_flow(client) -> None:
    assert client.get("/api/favorites").json() == []

    res = client.post("/api/favorites", json={"userId": "u1", "seriesId": "series-3"})
    assert res.status_code == 201
    assert res.json()["seriesId"] == "series-3"

    rows = client.get("/api/favorites", params={"userId": "u1"}).json()
    assert [f["seriesId"] for f in rows] == ["series-3"]

    assert client.delete("/api/favorites/series-3", params={"userId": "u1"}).json() == {"success": True}
    assert client.delete("/api/favorites/series-3", params={"userId": "u1"}).status_code == 404
    assert client.delete("/api/favorites/series-3").status_code == 400


def test_favorite_requires_fields(client) -> None:
    res = client.post("/api/favorites", json={"userId": "u1"})
    assert res.status_code == 400


def test_reading_progress_upsert(client) -> None:
    payload = {"userId": "u1", "seriesId": "series-1", "chapterId": "ch-1", "currentPage": 2}
    res = client.post("/api/reading-progress", json=payload)
    assert res.status_code == 200
    first = res.json()
    assert first["currentPage"] == 2
    assert first["lastRead"]

    payload.update(chapterId="ch-2", currentPage=0)
    second = client.post("/api/reading-progress", json=payload).json()
    assert second["id"] == first["id"]

    rows = client.get("/api/reading-progress", params={"userId": "u1"}).json()
    assert len(rows) == 1
    assert rows[0]["chapterId"] == "ch-2"
    assert client.get("/api/reading-progress").json() == []


def test_reading_progress_requires_fields(client) -> None:
    res = client.post("/api/reading-progress", json={"userId": "u1", "seriesId": "series-1"})
    assert res.status_code == 400
    assert res.json()["error"] == "Invalid data"


def test_register_and_login(client) -> None:
    res = client.post("/api/auth/register", json={"username": "mira", "password": "pw", "email": "m@x.io"})
    assert res.status_code == 200
    user = res.json()["user"]
    assert user["username"] == "mira"
    assert "passwordHash" not in user
    assert "password" not in user

    res = client.post("/api/auth/login", json={"username": "mira", "password": "pw"})
    assert res.status_code == 200
    assert res.json()["user"]["id"] == user["id"]


def test_register_duplicate_username(client) -> None:
    res = client.post("/api/auth/register", json={"username": "admin", "password": "x"})
    assert res.status_code == 400
    assert res.json() == {"error": "Username already exists"}


def test_login_rejects_bad_credentials(client) -> None:
    res = client.post("/api/auth/login", json={"username": "admin", "password": "wrong"})
    assert res.status_code == 401
    assert res.json() == {"error": "Invalid credentials"}
    assert client.post("/api/auth/login", json={"username": "ghost", "password": "x"}).status_code == 401


def test_seeded_admin_can_log_in(client) -> None:
    res = client.post("/api/auth/login", json={"username": "admin", "password": "admin123"})
    assert res.json()["user"]["isAdmin"] is True


def test_catalog_search(client) -> None:
    res = client.get("/api/catalog/search", params={"q": "solo"})
    assert [s["title"] for s in res.json()] == ["Solo Leveling"]

    res = client.get("/api/catalog/search", params={"genres": "Romance,Mystery"})
    assert [s["id"] for s in res.json()] == ["series-2", "series-6"]

    res = client.get("/api/catalog/search?genres=Romance&genres=Mystery&status=ongoing")
    assert [s["id"] for s in res.json()] == ["series-2"]

    assert client.get("/api/catalog/search", params={"status": "dropped"}).status_code == 400


def test_catalog_home(client) -> None:
    body = client.get("/api/catalog/home").json()
    assert [s["id"] for s in body["featured"]] == ["series-1", "series-2", "series-3", "series-7"]
    assert "romance" in body["byGenre"]


def test_user_library(client) -> None:
    client.post("/api/favorites", json={"userId": "u1", "seriesId": "series-5"})
    client.post("/api/reading-progress", json={"userId": "u1", "seriesId": "series-1", "chapterId": "ch-1"})
    body = client.get("/api/users/u1/library").json()
    assert [s["id"] for s in body["favorites"]] == ["series-5"]
    assert [s["id"] for s in body["reading"]] == ["series-1"]


def test_unexpected_errors_become_500() -> None:
    class Broken(MemoryStore):
        def list_series(self):
            raise RuntimeError("disk on fire")

    client = TestClient(create_app(Broken(), seed=False), raise_server_exceptions=False)
    res = client.get("/api/series")
    assert res.status_code == 500
    assert res.json() == {"error": "Server error"}


def test_patch_series_rejects_null_for_required_fields(client) -> None:
    for field in ("title", "genres", "status", "rating", "isFeatured"):
        res = client.patch("/api/series/series-1", json={field: None})
        assert res.status_code == 400, field
        assert res.json()["error"] == "Invalid data"

    # nullable fields can still be cleared
    res = client.patch("/api/series/series-1", json={"author": None})
    assert res.status_code == 200
    assert res.json()["author"] is None

    res = client.get("/api/series")
    assert res.status_code == 200
    assert res.json()[0]["title"] == "Solo Leveling"


def test_patch_chapter_rejects_null_for_required_fields(client) -> None:
    for field in ("seriesId", "chapterNumber", "pages"):
        res = client.patch("/api/chapters/ch-1", json={field: None})
        assert res.status_code == 400, field

    res = client.patch("/api/chapters/ch-1", json={"title": None})
    assert res.status_code == 200

    res = client.get("/api/series/series-1/chapters")
    assert res.status_code == 200
    assert [c["chapterNumber"] for c in res.json()] == [1, 2, 3]
