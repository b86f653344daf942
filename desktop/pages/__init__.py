from .catalog_page import CatalogPage
from .detail_page import DetailPage
from .reader_page import ReaderPage

__all__ = ["CatalogPage", "DetailPage", "ReaderPage"]
