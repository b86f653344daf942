from dataclasses import dataclass, field
from typing import Iterable

from app.models import Series

GENRES = (
    "Action",
    "Adventure",
    "Comedy",
    "Drama",
    "Fantasy",
    "Horror",
    "Mystery",
    "Romance",
    "Sci-Fi",
    "Slice of Life",
    "Sports",
    "Supernatural",
    "Thriller",
)

HOME_GENRE_TABS = ("action", "romance", "fantasy", "comedy")
RECENT_LIMIT = 12


@dataclass
class SeriesFilter:
    query: str = ""
    genres: set[str] = field(default_factory=set)
    status: str = "all"

    @property
    def is_active(self) -> bool:
        return bool(self.query or self.genres or self.status != "all")


def matches(series: Series, spec: SeriesFilter) -> bool:
    q = (spec.query or "").lower()
    if q:
        title = (series.title or "").lower()
        author = (series.author or "").lower()
        if q not in title and q not in author:
            return False

    if spec.genres and not set(series.genres or []) & set(spec.genres):
        return False

    if spec.status != "all" and series.status != spec.status:
        return False

    return True


def filter_series(series: Iterable[Series], spec: SeriesFilter) -> list[Series]:
    return [s for s in series if matches(s, spec)]


def home_sections(series: Iterable[Series]) -> dict:
    rows = list(series)
    recent = sorted(rows, key=lambda s: s.id or "", reverse=True)[:RECENT_LIMIT]
    by_genre = {
        g: [s for s in rows if any(x.lower() == g for x in (s.genres or []))]
        for g in HOME_GENRE_TABS
    }
    return {
        "featured": [s for s in rows if s.is_featured],
        "trending": [s for s in rows if s.is_trending],
        "recent": recent,
        "by_genre": by_genre,
    }
