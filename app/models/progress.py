from sqlmodel import SQLModel, Field

from .series import new_id


class ReadingProgress(SQLModel, table=True):
    __tablename__ = "reading_progress"

    id: str = Field(default_factory=new_id, primary_key=True)
    user_id: str = Field(index=True)
    series_id: str = Field(index=True)
    chapter_id: str
    current_page: int = Field(default=0)
    last_read: str


class Favorite(SQLModel, table=True):
    id: str = Field(default_factory=new_id, primary_key=True)
    user_id: str = Field(index=True)
    series_id: str = Field(index=True)
