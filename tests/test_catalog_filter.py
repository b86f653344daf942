from __future__ import annotations

from app.db.seed import DEMO_SERIES
from app.models import Series
from app.services.catalog_filter import GENRES, SeriesFilter, filter_series, home_sections


def _catalog() -> list[Series]:
    return [Series(**data) for data in DEMO_SERIES]


def test_empty_filter_keeps_everything_in_order() -> None:
    rows = _catalog()
    spec = SeriesFilter()
    assert spec.is_active is False
    assert filter_series(rows, spec) == rows


def test_query_matches_title_case_insensitively() -> None:
    result = filter_series(_catalog(), SeriesFilter(query="solo"))
    assert [s.title for s in result] == ["Solo Leveling"]


def test_query_matches_author() -> None:
    result = filter_series(_catalog(), SeriesFilter(query="son jeho"))
    assert {s.title for s in result} == {"Eleceed", "Noblesse"}


def test_genre_filter_is_any_of() -> None:
    result = filter_series(_catalog(), SeriesFilter(genres={"Romance"}))
    assert [s.title for s in result] == ["True Beauty"]

    result = filter_series(_catalog(), SeriesFilter(genres={"Romance", "Mystery"}))
    assert [s.title for s in result] == ["Tower of God", "True Beauty"]


def test_status_filter() -> None:
    result = filter_series(_catalog(), SeriesFilter(status="completed"))
    assert {s.title for s in result} == {"Solo Leveling", "True Beauty", "Noblesse"}


def test_filters_combine() -> None:
    spec = SeriesFilter(query="the", genres={"Comedy"}, status="ongoing")
    assert spec.is_active is True
    result = filter_series(_catalog(), spec)
    assert [s.title for s in result] == ["The God of High School"]


def test_no_match_returns_empty_list() -> None:
    assert filter_series(_catalog(), SeriesFilter(query="zzz")) == []


def test_genre_list_is_fixed() -> None:
    assert len(GENRES) == 13
    assert "Slice of Life" in GENRES


def test_home_sections() -> None:
    sections = home_sections(_catalog())
    assert [s.id for s in sections["featured"]] == ["series-1", "series-2", "series-3", "series-7"]
    assert [s.id for s in sections["trending"]] == ["series-1", "series-2", "series-4", "series-5"]
    assert sections["recent"][0].id == "series-8"
    assert [s.id for s in sections["by_genre"]["romance"]] == ["series-6"]
    assert set(sections["by_genre"]) == {"action", "romance", "fantasy", "comedy"}


def test_query_is_matched_as_typed() -> None:
    assert filter_series(_catalog(), SeriesFilter(query=" leveling ")) == []
    result = filter_series(_catalog(), SeriesFilter(query="SOLO LEV"))
    assert [s.title for s in result] == ["Solo Leveling"]
