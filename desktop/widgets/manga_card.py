from PySide6.QtCore import Qt, Signal
from PySide6.QtGui import QPixmap
from PySide6.QtWidgets import QWidget, QLabel, QPushButton, QVBoxLayout, QFrame


class MangaCard(QWidget):
    clicked = Signal(str)
    openRequested = Signal(str)
    continueRequested = Signal(str)

    def __init__(self, series_id: str, title: str, subtitle: str = ""):
        super().__init__()
        self.series_id = series_id
        self.title = title
        self.setAttribute(Qt.WidgetAttribute.WA_Hover, True)
        self.setMouseTracking(True)
        self.setFixedWidth(180)

        self.cover = QLabel()
        self.cover.setFixedSize(160, 220)
        self.cover.setAlignment(Qt.AlignmentFlag.AlignCenter)
        self.cover.setStyleSheet("border-radius:14px; background: rgba(255,255,255,0.06);")

        self.title_lbl = QLabel(title)
        self.title_lbl.setWordWrap(True)
        self.title_lbl.setAlignment(Qt.AlignmentFlag.AlignHCenter)
        self.title_lbl.setMaximumHeight(44)
        self.title_lbl.setStyleSheet("font-weight:700;")

        self.sub_lbl = QLabel(subtitle)
        self.sub_lbl.setAlignment(Qt.AlignmentFlag.AlignHCenter)
        self.sub_lbl.setStyleSheet("color:#9a9a9a; font-size:11px;")
        self.sub_lbl.setVisible(bool(subtitle))

        self.overlay = QFrame(self.cover)
        self.overlay.setVisible(False)
        self.overlay.setGeometry(0, 0, 160, 220)
        self.overlay.setStyleSheet("border-radius:14px; background: rgba(0,0,0,0.55);")

        overlay_layout = QVBoxLayout(self.overlay)
        overlay_layout.setContentsMargins(10, 10, 10, 10)
        overlay_layout.addStretch(1)

        self.btn_continue = QPushButton("Continue")
        self.btn_open = QPushButton("Read")
        self.btn_continue.setObjectName("CardPrimary")
        self.btn_open.setObjectName("CardSecondary")

        self.btn_continue.clicked.connect(lambda: self.continueRequested.emit(self.series_id))
        self.btn_open.clicked.connect(lambda: self.openRequested.emit(self.series_id))

        overlay_layout.addWidget(self.btn_continue)
        overlay_layout.addWidget(self.btn_open)

        root = QVBoxLayout(self)
        root.setContentsMargins(0, 0, 0, 0)
        root.setSpacing(6)
        root.addWidget(self.cover, alignment=Qt.AlignmentFlag.AlignHCenter)
        root.addWidget(self.title_lbl)
        root.addWidget(self.sub_lbl)

    def set_cover_pixmap(self, pixmap: QPixmap):
        if pixmap and not pixmap.isNull():
            self.cover.setPixmap(
                pixmap.scaled(
                    self.cover.size(),
                    Qt.AspectRatioMode.KeepAspectRatioByExpanding,
                    Qt.TransformationMode.SmoothTransformation
                )
            )

    def enterEvent(self, event):
        self.overlay.setVisible(True)
        super().enterEvent(event)

    def leaveEvent(self, event):
        self.overlay.setVisible(False)
        super().leaveEvent(event)

    def mousePressEvent(self, event):
        if event.button() == Qt.MouseButton.LeftButton:
            self.clicked.emit(self.series_id)
        super().mousePressEvent(event)
