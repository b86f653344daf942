import logging

from app.models import Chapter, Series
from app.services.auth_service import create_user
from app.store.base import CatalogStore

logger = logging.getLogger(__name__)

IMG = "https://images.unsplash.com/photo-{}?w={}&h={}&fit=crop"
COVER = {
    "solo": "1578632767115-351597cf2477",
    "tower": "1518709268805-4e9042af9f23",
    "tbate": "1534447677768-be436bb09401",
    "orv": "1507003211169-0a1dd7228f2d",
    "eleceed": "1518791841217-8f162f1e1131",
    "beauty": "1522075469751-3a6694fb2f61",
    "gohs": "1571019613454-1cb2f99b2d8b",
    "noblesse": "1544005313-94ddf0286df2",
}


def _cover(key: str) -> str:
    return IMG.format(COVER[key], 400, 600)


def _page(key: str) -> str:
    return IMG.format(COVER[key], 800, 1200)


DEMO_SERIES = [
    dict(id="series-1", title="Solo Leveling", cover_image=_cover("solo"),
         description="Ten years after the Gates appeared, the weakest E-rank hunter is chosen by a mysterious System.",
         author="Chugong", artist="DUBU", genres=["Action", "Fantasy", "Adventure"],
         status="completed", rating=95, views=1250000, is_featured=True, is_trending=True),
    dict(id="series-2", title="Tower of God", cover_image=_cover("tower"),
         description="Bam enters the Tower to follow Rachel and has to pass floor after floor of tests.",
         author="SIU", artist="SIU", genres=["Action", "Fantasy", "Mystery"],
         status="ongoing", rating=92, views=980000, is_featured=True, is_trending=True),
    dict(id="series-3", title="The Beginning After The End", cover_image=_cover("tbate"),
         description="A king reborn into a world of magic, keeping every memory of his past life.",
         author="TurtleMe", artist="Fuyuki23", genres=["Fantasy", "Action", "Adventure"],
         status="ongoing", rating=94, views=850000, is_featured=True, is_trending=False),
    dict(id="series-4", title="Omniscient Reader's Viewpoint", cover_image=_cover("orv"),
         description="The only reader of a web novel finds himself living inside its story.",
         author="Sing Shong", artist="Sleepy-C", genres=["Action", "Fantasy", "Drama"],
         status="ongoing", rating=96, views=720000, is_featured=False, is_trending=True),
    dict(id="series-5", title="Eleceed", cover_image=_cover("eleceed"),
         description="A cat-loving teenager meets a powerful awakener stuck in the body of a cat.",
         author="Son Jeho", artist="ZHENA", genres=["Action", "Comedy", "Supernatural"],
         status="ongoing", rating=91, views=650000, is_featured=False, is_trending=True),
    dict(id="series-6", title="True Beauty", cover_image=_cover("beauty"),
         description="Makeup turns Jugyeong into someone else; only one classmate knows her real face.",
         author="Yaongyi", artist="Yaongyi", genres=["Romance", "Comedy", "Drama"],
         status="completed", rating=88, views=920000, is_featured=False, is_trending=False),
    dict(id="series-7", title="The God of High School", cover_image=_cover("gohs"),
         description="A tournament for the strongest high schooler hides far bigger plans.",
         author="Park Yongje", artist="Park Yongje", genres=["Action", "Comedy", "Supernatural"],
         status="ongoing", rating=89, views=780000, is_featured=True, is_trending=False),
    dict(id="series-8", title="Noblesse", cover_image=_cover("noblesse"),
         description="A noble vampire wakes after 820 years and enrolls in a modern school.",
         author="Son Jeho", artist="Lee Kwangsu", genres=["Action", "Supernatural", "Comedy"],
         status="completed", rating=90, views=1100000, is_featured=False, is_trending=False),
]

DEMO_CHAPTERS = [
    dict(id="ch-1", series_id="series-1", chapter_number=1, title="Awakening", release_date="2024-01-01",
         pages=[_page("solo"), _page("tower"), _page("tbate")]),
    dict(id="ch-2", series_id="series-1", chapter_number=2, title="The System", release_date="2024-01-08",
         pages=[_page("orv"), _page("eleceed")]),
    dict(id="ch-3", series_id="series-1", chapter_number=3, title="First Quest", release_date="2024-01-15",
         pages=[_page("beauty")]),
    dict(id="ch-4", series_id="series-2", chapter_number=1, title="The Tower", release_date="2024-01-01",
         pages=[_page("gohs"), _page("noblesse")]),
    dict(id="ch-5", series_id="series-2", chapter_number=2, title="The Test", release_date="2024-01-08",
         pages=[_page("solo")]),
]


def seed_demo_data(store: CatalogStore):
    if store.get_user_by_username("admin") is None:
        create_user(store, "admin", "admin123", email="admin@noctoon.com", user_id="admin-1", is_admin=True)

    added = 0
    for data in DEMO_SERIES:
        if store.get_series(data["id"]) is None:
            store.create_series(Series(**data))
            added += 1
    for data in DEMO_CHAPTERS:
        if store.get_chapter(data["id"]) is None:
            store.create_chapter(Chapter(**data))
            added += 1
    if added:
        logger.info("Seeded %d demo rows", added)
