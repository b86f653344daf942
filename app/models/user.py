from typing import Optional

from sqlmodel import SQLModel, Field

from .series import new_id


class User(SQLModel, table=True):
    id: str = Field(default_factory=new_id, primary_key=True)
    username: str = Field(index=True, unique=True)
    password_hash: str
    email: Optional[str] = None
    avatar: Optional[str] = None
    is_admin: bool = Field(default=False)
