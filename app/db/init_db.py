import logging

from sqlmodel import SQLModel

from app.db.session import get_engine
from app.models import Series, Chapter, Favorite, ReadingProgress, User  # noqa: F401 (registers tables)
from app.db.seed import seed_demo_data
from app.store.sql import SqlStore

logger = logging.getLogger(__name__)


def init_db(seed: bool = True):
    engine = get_engine()
    SQLModel.metadata.create_all(engine)
    if seed:
        seed_demo_data(SqlStore(engine))
    logger.info("Database ready at %s", engine.url)
