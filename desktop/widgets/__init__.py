from .flow_layout import FlowLayout
from .genre_chips import GenreChips
from .manga_card import MangaCard

__all__ = ["FlowLayout", "GenreChips", "MangaCard"]
