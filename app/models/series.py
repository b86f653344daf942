import uuid
from typing import Optional

from sqlalchemy import JSON, Column
from sqlmodel import SQLModel, Field

SERIES_STATUSES = ("ongoing", "completed", "hiatus")


def new_id() -> str:
    return str(uuid.uuid4())


class Series(SQLModel, table=True):
    id: str = Field(default_factory=new_id, primary_key=True)
    seq: Optional[int] = Field(default=None, index=True)
    title: str
    description: Optional[str] = None
    cover_image: Optional[str] = None
    author: Optional[str] = None
    artist: Optional[str] = None
    genres: list[str] = Field(default_factory=list, sa_column=Column(JSON))
    status: str = Field(default="ongoing")
    rating: int = Field(default=0)
    views: int = Field(default=0)
    is_featured: bool = Field(default=False)
    is_trending: bool = Field(default=False)

    def __repr__(self):
        return f"Series(id={self.id}, title={self.title!r})"
