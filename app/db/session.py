from pathlib import Path

from sqlmodel import SQLModel, create_engine, Session
from app.core.config import DB_PATH


def make_engine(db_path: Path = DB_PATH):
    db_path = Path(db_path)
    db_path.parent.mkdir(parents=True, exist_ok=True)
    return create_engine(f"sqlite:///{db_path}", echo=False)


_engine = None


def get_engine():
    global _engine
    if _engine is None:
        _engine = make_engine(DB_PATH)
    return _engine


def get_session(engine=None):
    return Session(engine or get_engine(), expire_on_commit=False)
