import asyncio
import logging
from typing import Optional

import aiohttp

from app.core.config import API_URL
from app.schemas import ChapterRead, FavoriteRead, ProgressRead, SeriesRead, UserRead

logger = logging.getLogger(__name__)


class ApiError(Exception):
    def __init__(self, status: int, message: str):
        super().__init__(f"{status}: {message}")
        self.status = status
        self.message = message


FETCH_ERRORS = (ApiError, aiohttp.ClientError, asyncio.TimeoutError)


class NoctoonClient:
    """Async client for the Noctoon HTTP API, one ``ClientSession`` per instance."""

    TIMEOUT = 20

    def __init__(self, base_url: str = API_URL, session: Optional[aiohttp.ClientSession] = None):
        self.base_url = base_url.rstrip("/")
        self._session = session
        self._owns_session = session is None

    async def _get_session(self) -> aiohttp.ClientSession:
        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession(timeout=aiohttp.ClientTimeout(total=self.TIMEOUT))
            self._owns_session = True
        return self._session

    async def _request(self, method: str, endpoint: str, params: dict = None, json: dict = None, allow_404: bool = False):
        session = await self._get_session()
        url = f"{self.base_url}/api{endpoint}"
        async with session.request(method, url, params=params, json=json) as response:
            if response.status == 404 and allow_404:
                return None
            if response.status >= 400:
                try:
                    body = await response.json()
                    message = body.get("error") or response.reason
                except (aiohttp.ContentTypeError, ValueError):
                    message = response.reason or "request failed"
                raise ApiError(response.status, message)
            return await response.json()

    # -------------------- catalog --------------------

    async def list_series(self) -> list[SeriesRead]:
        data = await self._request("GET", "/series")
        return [SeriesRead.model_validate(item) for item in data]

    async def get_series(self, series_id: str) -> Optional[SeriesRead]:
        data = await self._request("GET", f"/series/{series_id}", allow_404=True)
        return SeriesRead.model_validate(data) if data else None

    async def get_chapters(self, series_id: str) -> list[ChapterRead]:
        data = await self._request("GET", f"/series/{series_id}/chapters")
        return [ChapterRead.model_validate(item) for item in data]

    async def get_chapter(self, chapter_id: str) -> Optional[ChapterRead]:
        data = await self._request("GET", f"/chapters/{chapter_id}", allow_404=True)
        return ChapterRead.model_validate(data) if data else None

    async def search(self, query: str = "", genres: list[str] = None, status: str = "all") -> list[SeriesRead]:
        params = {"q": query, "status": status}
        if genres:
            params["genres"] = ",".join(genres)
        data = await self._request("GET", "/catalog/search", params=params)
        return [SeriesRead.model_validate(item) for item in data]

    # -------------------- per user --------------------

    async def list_favorites(self, user_id: str) -> list[FavoriteRead]:
        data = await self._request("GET", "/favorites", params={"userId": user_id})
        return [FavoriteRead.model_validate(item) for item in data]

    async def add_favorite(self, user_id: str, series_id: str) -> FavoriteRead:
        data = await self._request("POST", "/favorites", json={"userId": user_id, "seriesId": series_id})
        return FavoriteRead.model_validate(data)

    async def remove_favorite(self, user_id: str, series_id: str) -> bool:
        data = await self._request("DELETE", f"/favorites/{series_id}", params={"userId": user_id}, allow_404=True)
        return bool(data and data.get("success"))

    async def list_reading_progress(self, user_id: str) -> list[ProgressRead]:
        data = await self._request("GET", "/reading-progress", params={"userId": user_id})
        return [ProgressRead.model_validate(item) for item in data]

    async def upsert_reading_progress(self, user_id: str, series_id: str, chapter_id: str, current_page: int) -> ProgressRead:
        payload = {
            "userId": user_id,
            "seriesId": series_id,
            "chapterId": chapter_id,
            "currentPage": current_page,
        }
        data = await self._request("POST", "/reading-progress", json=payload)
        return ProgressRead.model_validate(data)

    # -------------------- auth --------------------

    async def login(self, username: str, password: str) -> UserRead:
        data = await self._request("POST", "/auth/login", json={"username": username, "password": password})
        return UserRead.model_validate(data["user"])

    async def register(self, username: str, password: str, email: Optional[str] = None) -> UserRead:
        data = await self._request(
            "POST", "/auth/register", json={"username": username, "password": password, "email": email}
        )
        return UserRead.model_validate(data["user"])

    async def close(self):
        if self._owns_session and self._session and not self._session.closed:
            await self._session.close()

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()
