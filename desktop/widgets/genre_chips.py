from PySide6.QtCore import Signal
from PySide6.QtWidgets import QWidget, QToolButton
from .flow_layout import FlowLayout


class GenreChips(QWidget):
    """Checkable genre chips; emits the full selection whenever it changes."""

    selectionChanged = Signal(list)

    def __init__(self, genres=(), parent=None):
        super().__init__(parent)
        self.flow = FlowLayout(self, spacing=8)
        self.setLayout(self.flow)
        self._buttons: dict[str, QToolButton] = {}
        self.set_genres(list(genres))

    def set_genres(self, genres: list[str]):
        self.flow.clear()
        self._buttons = {}
        for g in genres:
            chip = QToolButton()
            chip.setText(g)
            chip.setObjectName("Chip")
            chip.setCheckable(True)
            chip.toggled.connect(self._emit_selection)
            self.flow.addWidget(chip)
            self._buttons[g] = chip
        self.setVisible(bool(genres))

    def selected(self) -> list[str]:
        return [g for g, b in self._buttons.items() if b.isChecked()]

    def clear_selection(self):
        for b in self._buttons.values():
            b.blockSignals(True)
            b.setChecked(False)
            b.blockSignals(False)
        self._emit_selection()

    def _emit_selection(self, *_):
        self.selectionChanged.emit(self.selected())
