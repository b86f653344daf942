from .pixmaps import pixmap_cover_crop, pixmap_from_bytes, scale_for_zoom
from .qt_helpers import READER_KEYS

__all__ = ["pixmap_cover_crop", "pixmap_from_bytes", "scale_for_zoom", "READER_KEYS"]
