"""
Wire schemas for the HTTP API.

Keys travel as camelCase (``seriesId``, ``chapterNumber``...) while Python code
uses snake_case; every schema accepts both spellings on input.
"""

from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

SeriesStatus = Literal["ongoing", "completed", "hiatus"]


class ApiModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


# -------------------- Series --------------------

class SeriesCreate(ApiModel):
    title: str = Field(..., min_length=1)
    description: Optional[str] = None
    cover_image: Optional[str] = None
    author: Optional[str] = None
    artist: Optional[str] = None
    genres: list[str] = Field(default_factory=list)
    status: SeriesStatus = "ongoing"
    is_featured: bool = False
    is_trending: bool = False


class SeriesUpdate(ApiModel):
    title: Optional[str] = Field(None, min_length=1)
    description: Optional[str] = None
    cover_image: Optional[str] = None
    author: Optional[str] = None
    artist: Optional[str] = None
    genres: Optional[list[str]] = None
    status: Optional[SeriesStatus] = None
    rating: Optional[int] = Field(None, ge=0, le=100)
    views: Optional[int] = Field(None, ge=0)
    is_featured: Optional[bool] = None
    is_trending: Optional[bool] = None

    @field_validator("title", "genres", "status", "rating", "views", "is_featured", "is_trending")
    @classmethod
    def not_null(cls, value):
        # omit a field to leave it unchanged; null is not a value for these
        if value is None:
            raise ValueError("must not be null")
        return value


class SeriesRead(ApiModel):
    id: str
    title: str
    description: Optional[str] = None
    cover_image: Optional[str] = None
    author: Optional[str] = None
    artist: Optional[str] = None
    genres: list[str] = Field(default_factory=list)
    status: str = "ongoing"
    rating: int = 0
    views: int = 0
    is_featured: bool = False
    is_trending: bool = False


# -------------------- Chapters --------------------

class ChapterCreate(ApiModel):
    series_id: str = Field(..., min_length=1)
    chapter_number: int
    title: Optional[str] = None
    pages: list[str] = Field(default_factory=list)
    release_date: Optional[str] = None


class ChapterUpdate(ApiModel):
    series_id: Optional[str] = Field(None, min_length=1)
    chapter_number: Optional[int] = None
    title: Optional[str] = None
    pages: Optional[list[str]] = None
    release_date: Optional[str] = None

    @field_validator("series_id", "chapter_number", "pages")
    @classmethod
    def not_null(cls, value):
        if value is None:
            raise ValueError("must not be null")
        return value


class ChapterRead(ApiModel):
    id: str
    series_id: str
    chapter_number: int
    title: Optional[str] = None
    pages: list[str] = Field(default_factory=list)
    release_date: Optional[str] = None


# -------------------- Favorites / progress --------------------

class FavoriteCreate(ApiModel):
    user_id: str = Field(..., min_length=1)
    series_id: str = Field(..., min_length=1)


class FavoriteRead(ApiModel):
    id: str
    user_id: str
    series_id: str


class ProgressCreate(ApiModel):
    user_id: str = Field(..., min_length=1)
    series_id: str = Field(..., min_length=1)
    chapter_id: str = Field(..., min_length=1)
    current_page: int = Field(0, ge=0)


class ProgressRead(ApiModel):
    id: str
    user_id: str
    series_id: str
    chapter_id: str
    current_page: int = 0
    last_read: Optional[str] = None


# -------------------- Auth --------------------

class RegisterRequest(ApiModel):
    username: str = Field(..., min_length=1)
    password: str = Field(..., min_length=1)
    email: Optional[str] = None


class LoginRequest(ApiModel):
    username: str = Field(..., min_length=1)
    password: str = Field(..., min_length=1)


class UserRead(ApiModel):
    id: str
    username: str
    email: Optional[str] = None
    avatar: Optional[str] = None
    is_admin: bool = False


class UserEnvelope(ApiModel):
    user: UserRead


# -------------------- Views --------------------

class Success(ApiModel):
    success: bool = True


class HomeSections(ApiModel):
    featured: list[SeriesRead] = Field(default_factory=list)
    trending: list[SeriesRead] = Field(default_factory=list)
    recent: list[SeriesRead] = Field(default_factory=list)
    by_genre: dict[str, list[SeriesRead]] = Field(default_factory=dict)


class UserLibrary(ApiModel):
    favorites: list[SeriesRead] = Field(default_factory=list)
    reading: list[SeriesRead] = Field(default_factory=list)
