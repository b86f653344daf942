from app.store import CatalogStore, get_store as _get_store


def get_store() -> CatalogStore:
    return _get_store()
