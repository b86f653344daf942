from __future__ import annotations

import asyncio
from dataclasses import dataclass, field

from app.core.reader import (
    ZOOM_MAX,
    ZOOM_MIN,
    ReadingSession,
    SessionStatus,
    hit_zone,
    load_chapter,
    load_session,
    sort_chapters,
)


@dataclass
class FakeSeries:
    id: str
    title: str = "Solo Leveling"


@dataclass
class FakeChapter:
    id: str
    chapter_number: int
    pages: list = field(default_factory=list)
    series_id: str = "series-1"


CH1 = FakeChapter("ch-1", 1, ["p1a", "p1b", "p1c"])
CH2 = FakeChapter("ch-2", 2, ["p2a", "p2b"])
CH3 = FakeChapter("ch-3", 3, ["p3a"])
CHAPTERS = {ch.id: ch for ch in (CH1, CH2, CH3)}


class Recorder:
    def __init__(self):
        self.progress = []
        self.reading = []
        self.fullscreen = []
        self.chapters = []
        self.pages = []

    def session(self, series_id: str = "series-1", chapter_id: str = "ch-1") -> ReadingSession:
        return ReadingSession(
            series_id,
            chapter_id,
            on_progress=self.progress.append,
            on_reading_state=self.reading.append,
            on_fullscreen=self.fullscreen.append,
            on_chapter_change=self.chapters.append,
            on_page_change=lambda s, c, p: self.pages.append((s, c, p)),
        )


def _ready(rec: Recorder, chapter_id: str = "ch-1", chapters=(CH3, CH1, CH2)) -> ReadingSession:
    session = rec.session(chapter_id=chapter_id)
    session.activate()
    ticket = session.ticket()
    session.apply_series(ticket, FakeSeries("series-1"))
    session.apply_chapters(ticket, list(chapters))
    session.apply_chapter(ticket, CHAPTERS.get(chapter_id))
    return session


def test_sort_chapters_is_stable_for_equal_numbers() -> None:
    a = FakeChapter("a", 2)
    b = FakeChapter("b", 1)
    c = FakeChapter("c", 2)
    assert [ch.id for ch in sort_chapters([a, b, c])] == ["b", "a", "c"]


def test_hit_zone_thirds() -> None:
    assert hit_zone(10, 300) == "prev"
    assert hit_zone(150, 300) == "center"
    assert hit_zone(250, 300) == "next"
    assert hit_zone(5, 0) == "center"


def test_initial_state_is_loading() -> None:
    session = Recorder().session()
    assert session.status == SessionStatus.LOADING
    assert session.page_index == 0
    assert session.zoom == 100
    assert session.controls_visible is True
    assert session.fullscreen is False
    assert session.total_pages == 0
    assert session.progress_percent == 0


def test_activate_and_deactivate_report_reading_state() -> None:
    rec = Recorder()
    session = rec.session()
    session.activate()
    session.deactivate()
    assert rec.reading == [True, False]


def test_advance_through_pages_then_into_next_chapter() -> None:
    rec = Recorder()
    session = _ready(rec)
    assert session.status == SessionStatus.READY
    assert [ch.id for ch in session.sorted_chapters] == ["ch-1", "ch-2", "ch-3"]

    session.advance_page()
    session.advance_page()
    assert session.page_index == 2
    assert session.chapter_id == "ch-1"

    session.advance_page()
    assert session.chapter_id == "ch-2"
    assert session.page_index == 0
    assert rec.chapters == ["ch-2"]


def test_retreat_into_previous_chapter_lands_on_first_page() -> None:
    rec = Recorder()
    session = _ready(rec, chapter_id="ch-2")
    session.retreat_page()
    assert session.chapter_id == "ch-1"
    assert session.page_index == 0
    assert rec.chapters == ["ch-1"]


def test_bounds_at_first_and_last_chapter() -> None:
    rec = Recorder()
    first = _ready(rec)
    assert first.can_go_prev is False
    assert first.retreat_page() is False
    assert first.page_index == 0

    last = _ready(Recorder(), chapter_id="ch-3")
    assert last.can_go_next is False
    assert last.advance_page() is False
    assert last.chapter_id == "ch-3"


def test_progress_percent_follows_page() -> None:
    rec = Recorder()
    session = _ready(rec)
    assert round(session.progress_percent, 2) == 33.33
    session.advance_page()
    session.advance_page()
    assert session.progress_percent == 100
    assert rec.progress[-1] == 100


def test_progress_is_half_way_on_second_of_four_pages() -> None:
    four = FakeChapter("ch-4p", 1, ["a", "b", "c", "d"])
    session = Recorder().session(chapter_id="ch-4p")
    ticket = session.ticket()
    session.apply_chapters(ticket, [four])
    session.apply_chapter(ticket, four)
    session.advance_page()
    assert session.page_index == 1
    assert session.progress_percent == 50


def test_empty_chapter_still_crosses_chapter_boundaries() -> None:
    empty = FakeChapter("ch-empty", 2, [])
    chapters = [CH1, empty, CH3]

    rec = Recorder()
    session = rec.session(chapter_id="ch-empty")
    ticket = session.ticket()
    session.apply_chapters(ticket, chapters)
    session.apply_chapter(ticket, empty)
    assert session.can_go_next is True
    assert session.advance_page() is True
    assert session.chapter_id == "ch-3"
    assert session.page_index == 0

    session = rec.session(chapter_id="ch-empty")
    ticket = session.ticket()
    session.apply_chapters(ticket, chapters)
    session.apply_chapter(ticket, empty)
    assert session.retreat_page() is True
    assert session.chapter_id == "ch-1"
    assert rec.chapters == ["ch-3", "ch-1"]


def test_page_changes_reported_once_per_position() -> None:
    rec = Recorder()
    session = _ready(rec)
    session.toggle_controls()
    session.zoom_in()
    session.advance_page()
    assert rec.pages == [("series-1", "ch-1", 0), ("series-1", "ch-1", 1)]


def test_zoom_is_clamped() -> None:
    session = _ready(Recorder())
    for _ in range(20):
        session.zoom_in()
    assert session.zoom == ZOOM_MAX
    for _ in range(30):
        session.zoom_out()
    assert session.zoom == ZOOM_MIN
    session.zoom_in()
    assert session.zoom == ZOOM_MIN + 10


def test_fullscreen_toggle_notifies_host() -> None:
    rec = Recorder()
    session = _ready(rec)
    assert session.toggle_fullscreen() is True
    assert session.toggle_fullscreen() is False
    assert rec.fullscreen == [True, False]


def test_keys_map_to_navigation() -> None:
    session = _ready(Recorder())
    assert session.handle_key("ArrowRight") is True
    assert session.page_index == 1
    assert session.handle_key("ArrowLeft") is True
    assert session.page_index == 0
    assert session.handle_key("Escape") is True
    assert session.controls_visible is False
    assert session.handle_key("Enter") is False


def test_click_zones_drive_session() -> None:
    session = _ready(Recorder())
    assert session.handle_click(290, 300) == "next"
    assert session.page_index == 1
    assert session.handle_click(10, 300) == "prev"
    assert session.page_index == 0
    assert session.handle_click(150, 300) == "center"
    assert session.controls_visible is False


def test_click_on_empty_chapter_only_toggles_controls() -> None:
    empty = FakeChapter("ch-empty", 1, [])
    session = Recorder().session(chapter_id="ch-empty")
    ticket = session.ticket()
    session.apply_chapters(ticket, [empty])
    session.apply_chapter(ticket, empty)

    assert session.handle_click(5, 300) == "center"
    assert session.controls_visible is False
    assert session.page_index == 0
    assert session.progress_percent == 0


def test_unknown_chapter_is_not_found_and_blocks_navigation() -> None:
    session = Recorder().session(chapter_id="missing")
    ticket = session.ticket()
    session.apply_chapters(ticket, [CH1, CH2])
    session.apply_chapter(ticket, None)

    assert session.status == SessionStatus.NOT_FOUND
    assert session.can_go_next is False
    assert session.advance_page() is False
    assert session.retreat_page() is False


def test_unknown_series_is_not_found() -> None:
    session = Recorder().session(series_id="nope")
    session.apply_series(session.ticket(), None)
    assert session.status == SessionStatus.NOT_FOUND


def test_chapter_missing_from_list_has_no_chapter_neighbours() -> None:
    orphan = FakeChapter("ch-x", 9, ["only"])
    session = Recorder().session(chapter_id="ch-x")
    ticket = session.ticket()
    session.apply_chapters(ticket, [CH1, CH2])
    session.apply_chapter(ticket, orphan)

    assert session.chapter_index == -1
    assert session.prev_chapter is None
    assert session.next_chapter is None
    assert session.advance_page() is False


def test_stale_chapter_result_is_dropped() -> None:
    rec = Recorder()
    session = _ready(rec)
    old_ticket = session.ticket()
    session.select_chapter("ch-3")

    assert session.apply_chapter(old_ticket, CH1) is False
    assert session.chapter.id == "ch-3"
    assert session.apply_chapter(session.ticket(), CH3) is True


def test_results_after_deactivate_are_dropped() -> None:
    session = Recorder().session()
    ticket = session.ticket()
    session.deactivate()
    assert session.apply_series(ticket, FakeSeries("series-1")) is False
    assert session.apply_chapter(ticket, CH1) is False
    assert session.series is None


def test_start_page_is_clamped_when_chapter_arrives() -> None:
    session = Recorder().session(chapter_id="ch-2")
    session.page_index = 7
    session.apply_chapter(session.ticket(), CH2)
    assert session.page_index == 1


def test_fetch_error_sets_error_status() -> None:
    session = Recorder().session()
    session.apply_error(session.ticket(), RuntimeError("boom"))
    assert session.status == SessionStatus.ERROR
    assert session.error == "boom"


class FakeClient:
    def __init__(self, chapters=CHAPTERS, series_ids=("series-1",)):
        self.chapters = chapters
        self.series_ids = series_ids
        self.calls = []

    async def get_series(self, series_id):
        self.calls.append(("series", series_id))
        return FakeSeries(series_id) if series_id in self.series_ids else None

    async def get_chapters(self, series_id):
        self.calls.append(("chapters", series_id))
        return [ch for ch in self.chapters.values() if ch.series_id == series_id]

    async def get_chapter(self, chapter_id):
        self.calls.append(("chapter", chapter_id))
        return self.chapters.get(chapter_id)


def test_load_session_fetches_everything() -> None:
    client = FakeClient()
    session = Recorder().session(chapter_id="ch-2")
    asyncio.run(load_session(session, client))

    assert session.status == SessionStatus.READY
    assert session.series.id == "series-1"
    assert session.total_pages == 2
    assert session.prev_chapter.id == "ch-1"
    assert session.next_chapter.id == "ch-3"


def test_load_chapter_after_chapter_switch() -> None:
    client = FakeClient()
    session = Recorder().session()
    asyncio.run(load_session(session, client))
    session.select_chapter("ch-3")
    asyncio.run(load_chapter(session, client))

    assert session.chapter.id == "ch-3"
    assert ("chapter", "ch-3") in client.calls


def test_load_session_for_missing_chapter() -> None:
    session = Recorder().session(chapter_id="gone")
    asyncio.run(load_session(session, FakeClient()))
    assert session.status == SessionStatus.NOT_FOUND
