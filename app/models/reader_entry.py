from dataclasses import dataclass


@dataclass(frozen=True)
class ReaderEntry:
    """Where the reader opens: a chapter of a series, plus labels to show while it loads."""

    series_id: str
    chapter_id: str
    page: int = 0
    title: str = ""
    chapter_title: str = ""
