from PySide6.QtCore import Qt

# Qt keys the reader understands, by the names ReadingSession.handle_key expects
READER_KEYS = {
    Qt.Key.Key_Left: "ArrowLeft",
    Qt.Key.Key_Right: "ArrowRight",
    Qt.Key.Key_Escape: "Escape",
}
