from PySide6.QtCore import Qt, QRect, QPoint, QSize
from PySide6.QtWidgets import QLayout


class FlowLayout(QLayout):
    """Left-to-right layout that wraps onto a new row when the width runs out."""

    def __init__(self, parent=None, margin=0, spacing=8):
        super().__init__(parent)
        self._items = []
        self.setContentsMargins(margin, margin, margin, margin)
        self.setSpacing(spacing)

    def addItem(self, item):
        self._items.append(item)

    def count(self):
        return len(self._items)

    def itemAt(self, index):
        return self._items[index] if 0 <= index < len(self._items) else None

    def takeAt(self, index):
        return self._items.pop(index) if 0 <= index < len(self._items) else None

    def clear(self):
        while self.count():
            it = self.takeAt(0)
            w = it.widget() if it else None
            if w:
                w.setParent(None)
                w.deleteLater()

    def expandingDirections(self):
        return Qt.Orientation(0)

    def hasHeightForWidth(self):
        return True

    def heightForWidth(self, width):
        return self._arrange(QRect(0, 0, width, 0), dry_run=True)

    def setGeometry(self, rect):
        super().setGeometry(rect)
        self._arrange(rect, dry_run=False)

    def sizeHint(self):
        return self.minimumSize()

    def minimumSize(self):
        size = QSize()
        for it in self._items:
            size = size.expandedTo(it.minimumSize())
        left, top, right, bottom = self.getContentsMargins()
        return size + QSize(left + right, top + bottom)

    def _arrange(self, rect, dry_run):
        gap = self.spacing()
        left, top, right, bottom = self.getContentsMargins()
        area = rect.adjusted(left, top, -right, -bottom)

        x, y = area.x(), area.y()
        row_height = 0

        for it in self._items:
            hint = it.sizeHint()
            if x + hint.width() > area.right() and row_height > 0:
                x = area.x()
                y += row_height + gap
                row_height = 0
            if not dry_run:
                it.setGeometry(QRect(QPoint(x, y), hint))
            x += hint.width() + gap
            row_height = max(row_height, hint.height())

        return (y + row_height - rect.y()) + top + bottom
