from .series import Series, SERIES_STATUSES
from .chapter import Chapter
from .progress import Favorite, ReadingProgress
from .user import User

__all__ = ["Series", "SERIES_STATUSES", "Chapter", "Favorite", "ReadingProgress", "User"]
