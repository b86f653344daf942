from typing import Optional

from sqlalchemy import JSON, Column
from sqlmodel import SQLModel, Field

from .series import new_id


class Chapter(SQLModel, table=True):
    id: str = Field(default_factory=new_id, primary_key=True)
    seq: Optional[int] = Field(default=None, index=True)
    # not a foreign key: chapters may outlive their series
    series_id: str = Field(index=True)
    chapter_number: int
    title: Optional[str] = None
    pages: list[str] = Field(default_factory=list, sa_column=Column(JSON))
    release_date: Optional[str] = None

    @property
    def page_count(self) -> int:
        return len(self.pages or [])

    def __repr__(self):
        return f"Chapter(id={self.id}, series_id={self.series_id}, number={self.chapter_number})"
