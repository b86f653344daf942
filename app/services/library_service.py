from app.store.base import CatalogStore


def favorite_series_ids(store: CatalogStore, user_id: str) -> set[str]:
    return {f.series_id for f in store.list_favorites(user_id)}


def get_user_library(store: CatalogStore, user_id: str) -> dict:
    favorites = favorite_series_ids(store, user_id)
    reading = {p.series_id for p in store.list_reading_progress(user_id)}
    # catalog order; dangling ids drop out here
    rows = store.list_series()
    return {
        "favorites": [s for s in rows if s.id in favorites],
        "reading": [s for s in rows if s.id in reading],
    }
