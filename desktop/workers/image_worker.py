import requests
from PySide6.QtCore import QObject, Signal, QRunnable

from app.services.page_loader import PageLoader


class ImageSignals(QObject):
    done = Signal(str, object, str)


class ImageWorker(QRunnable):
    def __init__(self, key: str, url: str, loader: PageLoader, signals: ImageSignals):
        super().__init__()
        self.key = key
        self.url = url
        self.loader = loader
        self.signals = signals

    def run(self):
        try:
            data = self.loader.load_page_bytes(self.url)
            self.signals.done.emit(self.key, data, "")
        except (requests.RequestException, OSError, ValueError) as e:
            self.signals.done.emit(self.key, b"", str(e))
