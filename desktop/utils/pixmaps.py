from io import BytesIO

from PIL import Image
from PIL.ImageQt import ImageQt
from PySide6.QtCore import QSize, Qt
from PySide6.QtGui import QPixmap


def pixmap_from_bytes(data: bytes) -> QPixmap:
    if not data:
        return QPixmap()
    img = Image.open(BytesIO(data)).convert("RGBA")
    return QPixmap.fromImage(ImageQt(img))


def pixmap_cover_crop(pix: QPixmap, size: QSize) -> QPixmap:
    if pix.isNull():
        return QPixmap()
    pix = pix.scaled(size, Qt.AspectRatioMode.KeepAspectRatioByExpanding, Qt.TransformationMode.SmoothTransformation)
    x = max(0, (pix.width() - size.width()) // 2)
    y = max(0, (pix.height() - size.height()) // 2)
    return pix.copy(x, y, size.width(), size.height())


def scale_for_zoom(pix: QPixmap, viewport_height: int, zoom: int) -> QPixmap:
    # pages fit 90% of the viewport height at 100%
    target_h = max(1, int(viewport_height * 0.9 * zoom / 100))
    return pix.scaledToHeight(target_h, Qt.TransformationMode.SmoothTransformation)
