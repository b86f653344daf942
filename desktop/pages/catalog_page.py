from PySide6.QtCore import Qt, Signal
from PySide6.QtWidgets import QWidget, QVBoxLayout, QHBoxLayout, QLabel, QLineEdit, QComboBox, QScrollArea, QPushButton

from app.services.catalog_filter import GENRES
from desktop.widgets import FlowLayout, GenreChips

STATUS_CHOICES = [
    ("All", "all"),
    ("Ongoing", "ongoing"),
    ("Completed", "completed"),
    ("Hiatus", "hiatus"),
]


class CatalogPage(QWidget):
    queryChanged = Signal(str)
    genresChanged = Signal(list)
    statusChanged = Signal(str)
    resetClicked = Signal()

    def __init__(self):
        super().__init__()

        self.search = QLineEdit()
        self.search.setPlaceholderText("Search title or author...")
        self.search.setClearButtonEnabled(True)
        self.search.textChanged.connect(self.queryChanged.emit)

        self.status = QComboBox()
        for label, value in STATUS_CHOICES:
            self.status.addItem(label, value)
        self.status.currentIndexChanged.connect(lambda i: self.statusChanged.emit(self.status.itemData(i)))

        self.btn_reset = QPushButton("Reset")
        self.btn_reset.clicked.connect(self.resetClicked.emit)

        filters = QHBoxLayout()
        filters.setSpacing(10)
        filters.addWidget(self.search, 1)
        filters.addWidget(self.status)
        filters.addWidget(self.btn_reset)

        self.genres = GenreChips(GENRES)
        self.genres.selectionChanged.connect(self.genresChanged.emit)

        self.result_lbl = QLabel("")
        self.result_lbl.setStyleSheet("color:#bdbdbd; font-weight:700;")

        self.grid_box = QWidget()
        self.grid = FlowLayout(self.grid_box, margin=4, spacing=14)
        self.grid_box.setLayout(self.grid)

        scroll = QScrollArea()
        scroll.setWidgetResizable(True)
        scroll.setFrameShape(QScrollArea.Shape.NoFrame)
        scroll.setWidget(self.grid_box)

        root = QVBoxLayout(self)
        root.setContentsMargins(12, 12, 12, 12)
        root.setSpacing(10)
        root.addLayout(filters)
        root.addWidget(self.genres)
        root.addWidget(self.result_lbl)
        root.addWidget(scroll, 1)

    def reset_filters(self):
        self.search.blockSignals(True)
        self.search.clear()
        self.search.blockSignals(False)
        self.status.blockSignals(True)
        self.status.setCurrentIndex(0)
        self.status.blockSignals(False)
        self.genres.clear_selection()

    def set_result_count(self, shown: int, total: int):
        if shown == total:
            self.result_lbl.setText(f"{total} series")
        else:
            self.result_lbl.setText(f"{shown} of {total} series")
