from PySide6.QtCore import Qt, Signal
from PySide6.QtGui import QPixmap
from PySide6.QtWidgets import (
    QWidget, QVBoxLayout, QHBoxLayout, QLabel, QPushButton, QComboBox, QScrollArea, QProgressBar, QFrame
)


class ReaderSurface(QLabel):
    """The page image; reports where it was clicked so the session can pick a zone."""

    clicked = Signal(float, float)

    def __init__(self):
        super().__init__()
        self.setAlignment(Qt.AlignmentFlag.AlignCenter)
        self.setStyleSheet("background: #000; color: #eaeaea;")

    def mousePressEvent(self, event):
        if event.button() == Qt.MouseButton.LeftButton:
            self.clicked.emit(event.position().x(), float(self.width()))
            event.accept()
            return
        super().mousePressEvent(event)


class ReaderPage(QWidget):
    surfaceClicked = Signal(float, float)
    prevClicked = Signal()
    nextClicked = Signal()
    zoomInClicked = Signal()
    zoomOutClicked = Signal()
    fullscreenClicked = Signal()
    closeClicked = Signal()
    chapterSelected = Signal(str)

    def __init__(self):
        super().__init__()
        self.setObjectName("ReaderPage")

        # top bar
        self.top_bar = QFrame()
        self.top_bar.setObjectName("ReaderBar")
        top = QHBoxLayout(self.top_bar)
        top.setContentsMargins(12, 8, 12, 8)

        self.btn_close = QPushButton("✕")
        self.series_lbl = QLabel("")
        self.series_lbl.setStyleSheet("font-weight:900;")
        self.chapter_lbl = QLabel("")
        self.chapter_lbl.setStyleSheet("color:#9a9a9a;")
        self.chapter_combo = QComboBox()
        self.chapter_combo.setMinimumWidth(160)

        titles = QVBoxLayout()
        titles.setSpacing(0)
        titles.addWidget(self.series_lbl)
        titles.addWidget(self.chapter_lbl)

        top.addWidget(self.btn_close)
        top.addLayout(titles)
        top.addStretch(1)
        top.addWidget(self.chapter_combo)

        # reading surface
        self.surface = ReaderSurface()
        self.scroll = QScrollArea()
        self.scroll.setAlignment(Qt.AlignmentFlag.AlignCenter)
        self.scroll.setFrameShape(QScrollArea.Shape.NoFrame)
        self.scroll.setWidgetResizable(True)
        self.scroll.setWidget(self.surface)
        self.scroll.setFocusPolicy(Qt.FocusPolicy.NoFocus)

        # bottom bar
        self.bottom_bar = QFrame()
        self.bottom_bar.setObjectName("ReaderBar")
        bottom = QHBoxLayout(self.bottom_bar)
        bottom.setContentsMargins(12, 8, 12, 8)

        self.btn_prev = QPushButton("‹")
        self.btn_next = QPushButton("›")
        self.btn_zoom_out = QPushButton("−")
        self.btn_zoom_in = QPushButton("+")
        self.zoom_lbl = QLabel("100%")
        self.zoom_lbl.setFixedWidth(48)
        self.zoom_lbl.setAlignment(Qt.AlignmentFlag.AlignCenter)
        self.page_lbl = QLabel("0 / 0")
        self.btn_fullscreen = QPushButton("⛶")

        bottom.addWidget(self.btn_prev)
        bottom.addStretch(1)
        bottom.addWidget(self.btn_zoom_out)
        bottom.addWidget(self.zoom_lbl)
        bottom.addWidget(self.btn_zoom_in)
        bottom.addSpacing(16)
        bottom.addWidget(self.page_lbl)
        bottom.addSpacing(16)
        bottom.addWidget(self.btn_fullscreen)
        bottom.addStretch(1)
        bottom.addWidget(self.btn_next)

        self.progress = QProgressBar()
        self.progress.setRange(0, 100)
        self.progress.setTextVisible(False)
        self.progress.setFixedHeight(4)

        root = QVBoxLayout(self)
        root.setContentsMargins(0, 0, 0, 0)
        root.setSpacing(0)
        root.addWidget(self.top_bar)
        root.addWidget(self.scroll, 1)
        root.addWidget(self.bottom_bar)
        root.addWidget(self.progress)

        self.surface.clicked.connect(self.surfaceClicked.emit)
        self.btn_prev.clicked.connect(self.prevClicked.emit)
        self.btn_next.clicked.connect(self.nextClicked.emit)
        self.btn_zoom_in.clicked.connect(self.zoomInClicked.emit)
        self.btn_zoom_out.clicked.connect(self.zoomOutClicked.emit)
        self.btn_fullscreen.clicked.connect(self.fullscreenClicked.emit)
        self.btn_close.clicked.connect(self.closeClicked.emit)
        self.chapter_combo.activated.connect(self._emit_chapter)

        for btn in (self.btn_close, self.btn_prev, self.btn_next, self.btn_zoom_in, self.btn_zoom_out, self.btn_fullscreen):
            btn.setFocusPolicy(Qt.FocusPolicy.NoFocus)

    def _emit_chapter(self, index: int):
        chapter_id = self.chapter_combo.itemData(index)
        if chapter_id:
            self.chapterSelected.emit(chapter_id)

    def viewport_height(self) -> int:
        return max(1, self.scroll.viewport().height())

    def set_titles(self, series_title: str, chapter_text: str):
        self.series_lbl.setText(series_title or "")
        self.chapter_lbl.setText(chapter_text or "")

    def set_chapters(self, chapters: list[tuple[str, str]], current_id: str):
        self.chapter_combo.blockSignals(True)
        self.chapter_combo.clear()
        for chapter_id, label in chapters:
            self.chapter_combo.addItem(label, chapter_id)
        idx = self.chapter_combo.findData(current_id)
        if idx >= 0:
            self.chapter_combo.setCurrentIndex(idx)
        self.chapter_combo.blockSignals(False)

    def set_controls_visible(self, visible: bool):
        self.top_bar.setVisible(visible)
        self.bottom_bar.setVisible(visible)

    def set_navigation(self, can_prev: bool, can_next: bool):
        self.btn_prev.setEnabled(can_prev)
        self.btn_next.setEnabled(can_next)

    def set_page_info(self, page_idx: int, total: int):
        self.page_lbl.setText(f"{page_idx + 1 if total else 0} / {total}")

    def set_zoom(self, zoom: int):
        self.zoom_lbl.setText(f"{zoom}%")

    def set_fullscreen(self, fullscreen: bool):
        self.btn_fullscreen.setText("🗗" if fullscreen else "⛶")

    def set_progress(self, percent: float):
        self.progress.setValue(int(round(percent)))

    def show_message(self, text: str):
        self.surface.setPixmap(QPixmap())
        self.surface.setText(text)

    def show_pixmap(self, pixmap: QPixmap):
        self.surface.setText("")
        self.surface.setPixmap(pixmap)
