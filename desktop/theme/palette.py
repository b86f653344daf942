from PySide6.QtGui import QPalette, QColor, QFont
from PySide6.QtWidgets import QApplication


def apply_palette():
    app = QApplication.instance()
    if not app:
        return
    app.setStyle("Fusion")
    app.setFont(QFont("Inter", 12))
    pal = QPalette()
    pal.setColor(QPalette.ColorRole.Window, QColor("#101014"))
    pal.setColor(QPalette.ColorRole.Base, QColor("#15151b"))
    pal.setColor(QPalette.ColorRole.AlternateBase, QColor("#1b1b22"))
    pal.setColor(QPalette.ColorRole.Text, QColor("#eaeaea"))
    pal.setColor(QPalette.ColorRole.WindowText, QColor("#eaeaea"))
    pal.setColor(QPalette.ColorRole.Button, QColor("#1c1c24"))
    pal.setColor(QPalette.ColorRole.ButtonText, QColor("#eaeaea"))
    pal.setColor(QPalette.ColorRole.ToolTipBase, QColor("#1c1c24"))
    pal.setColor(QPalette.ColorRole.ToolTipText, QColor("#eaeaea"))
    pal.setColor(QPalette.ColorRole.Highlight, QColor("#ef5050"))
    pal.setColor(QPalette.ColorRole.HighlightedText, QColor("#ffffff"))
    app.setPalette(pal)
