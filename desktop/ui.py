import asyncio
import logging

from PySide6.QtCore import QThreadPool
from PySide6.QtWidgets import (
    QMainWindow, QWidget, QLabel, QHBoxLayout, QVBoxLayout, QSplitter, QLineEdit, QPushButton, QStackedWidget,
    QButtonGroup, QToolButton, QDialog, QFormLayout, QDialogButtonBox
)

from app.client.api import FETCH_ERRORS, ApiError, NoctoonClient
from app.models.reader_entry import ReaderEntry
from desktop.controllers.detail_controller import DetailController
from desktop.controllers.library_controller import LibraryController
from desktop.controllers.reader_controller import ReaderController
from desktop.pages import CatalogPage, DetailPage, ReaderPage
from desktop.theme import apply_theme

logger = logging.getLogger(__name__)


class LoginDialog(QDialog):
    def __init__(self, parent=None):
        super().__init__(parent)
        self.setWindowTitle("Log in to Noctoon")
        self.register = False

        self.username = QLineEdit()
        self.password = QLineEdit()
        self.password.setEchoMode(QLineEdit.EchoMode.Password)
        self.email = QLineEdit()
        self.email.setPlaceholderText("optional, for new accounts")

        form = QFormLayout()
        form.addRow("Username", self.username)
        form.addRow("Password", self.password)
        form.addRow("Email", self.email)

        buttons = QDialogButtonBox()
        btn_login = buttons.addButton("Log in", QDialogButtonBox.ButtonRole.AcceptRole)
        btn_register = buttons.addButton("Create account", QDialogButtonBox.ButtonRole.ActionRole)
        buttons.addButton(QDialogButtonBox.StandardButton.Cancel)
        btn_login.clicked.connect(self.accept)
        btn_register.clicked.connect(self._accept_register)
        buttons.rejected.connect(self.reject)

        root = QVBoxLayout(self)
        root.addLayout(form)
        root.addWidget(buttons)

    def _accept_register(self):
        self.register = True
        self.accept()

    def credentials(self):
        return self.username.text().strip(), self.password.text(), self.email.text().strip() or None


class MainWindow(QMainWindow):
    def __init__(self, client: NoctoonClient = None):
        super().__init__()
        apply_theme(self)
        self.setWindowTitle("Noctoon")
        self.resize(1200, 800)

        self.client = client or NoctoonClient()
        self.user = None
        self.threadpool = QThreadPool.globalInstance()

        # header
        mode_bar = QWidget()
        mode_layout = QHBoxLayout(mode_bar)
        mode_layout.setContentsMargins(0, 0, 0, 0)

        self.mode_group = QButtonGroup(self)
        self.mode_group.setExclusive(True)
        self.mode_buttons = {}
        for mode, label in (("catalog", "Catalog"), ("favorites", "Favorites"), ("reading", "Reading")):
            btn = QToolButton()
            btn.setText(label)
            btn.setCheckable(True)
            btn.clicked.connect(lambda _=False, m=mode: self.set_library_mode(m))
            self.mode_group.addButton(btn)
            mode_layout.addWidget(btn)
            self.mode_buttons[mode] = btn
        self.mode_buttons["catalog"].setChecked(True)
        mode_layout.addStretch(1)

        app_title = QLabel("Noctoon")
        app_title.setStyleSheet("font-weight:900; font-size:16px;")

        self.user_lbl = QLabel("Guest")
        self.user_lbl.setStyleSheet("color:#bdbdbd; font-weight:700;")
        self.btn_login = QPushButton("Log in")
        self.btn_login.clicked.connect(self.on_login_clicked)

        self.header = QWidget()
        self.header.setFixedHeight(52)
        header_layout = QHBoxLayout(self.header)
        header_layout.setContentsMargins(12, 10, 12, 10)
        header_layout.setSpacing(10)
        header_layout.addWidget(app_title)
        header_layout.addSpacing(8)
        header_layout.addWidget(mode_bar)
        header_layout.addStretch(1)
        header_layout.addWidget(self.user_lbl)
        header_layout.addWidget(self.btn_login)

        # pages
        self.catalog_page = CatalogPage()
        self.detail_page = DetailPage()
        self.reader_page = ReaderPage()

        self.splitter = QSplitter()
        self.splitter.addWidget(self.catalog_page)
        self.splitter.addWidget(self.detail_page)
        self.splitter.setStretchFactor(0, 3)
        self.splitter.setStretchFactor(1, 1)

        self.stack = QStackedWidget()
        self.stack.addWidget(self.splitter)
        self.stack.addWidget(self.reader_page)

        root = QWidget()
        root_layout = QVBoxLayout(root)
        root_layout.setContentsMargins(0, 0, 0, 0)
        root_layout.setSpacing(0)
        root_layout.addWidget(self.header)
        root_layout.addWidget(self.stack, 1)
        self.setCentralWidget(root)

        # controllers
        get_user = lambda: self.user
        self.library = LibraryController(
            self.catalog_page,
            self.client,
            self.threadpool,
            get_user,
            on_select=self.select_series,
            on_open=self.open_series,
            on_continue=self.continue_series,
        )
        self.detail = DetailController(
            self.detail_page,
            self.client,
            self.library,
            self.threadpool,
            get_user,
            open_reader=self.open_reader,
        )
        self.reader = ReaderController(
            self,
            self.reader_page,
            self.client,
            self.threadpool,
            get_user,
            on_reading_state=self.set_reading,
            on_exit=self.leave_reader,
        )

        self._tasks = set()
        self._spawn(self.library.reload())

    def _spawn(self, coro):
        task = asyncio.ensure_future(coro)
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
        return task

    # -------------------- browsing --------------------

    def set_library_mode(self, mode: str):
        if self.stack.currentIndex() != 0:
            self.leave_reader()
        self.library.set_mode(mode)
        self.mode_buttons[mode].setChecked(True)

    def select_series(self, series_id: str):
        self._spawn(self.detail.show_series(series_id))

    def open_series(self, series_id: str):
        self._spawn(self._open_after_detail(series_id, resume=False))

    def continue_series(self, series_id: str):
        self._spawn(self._open_after_detail(series_id, resume=True))

    async def _open_after_detail(self, series_id: str, resume: bool):
        await self.detail.show_series(series_id)
        if resume:
            self.detail.continue_reading()
        else:
            self.detail.open_first()

    # -------------------- reader --------------------

    def open_reader(self, entry: ReaderEntry):
        self.stack.setCurrentIndex(1)
        self.reader.open(entry)
        self.reader_page.setFocus()

    def leave_reader(self):
        self.reader.close()
        self.stack.setCurrentIndex(0)
        # progress saved while reading shows up in Continue and the badges
        self._spawn(self.library.reload_user_state())

    def set_reading(self, reading: bool):
        self.header.setVisible(not reading)

    # -------------------- account --------------------

    def on_login_clicked(self):
        if self.user:
            self.user = None
            self.user_lbl.setText("Guest")
            self.btn_login.setText("Log in")
            self._spawn(self.library.reload_user_state())
            return
        dlg = LoginDialog(self)
        if dlg.exec() != QDialog.DialogCode.Accepted:
            return
        username, password, email = dlg.credentials()
        self._spawn(self._authenticate(username, password, email, dlg.register))

    async def _authenticate(self, username: str, password: str, email, register: bool):
        try:
            if register:
                user = await self.client.register(username, password, email)
            else:
                user = await self.client.login(username, password)
        except ApiError as e:
            self.user_lbl.setText(e.message)
            return
        except FETCH_ERRORS as e:
            logger.warning("Login failed: %s", e)
            self.user_lbl.setText("Server unavailable")
            return
        self.user = user
        self.user_lbl.setText(user.username)
        self.btn_login.setText("Log out")
        await self.library.reload_user_state()

    # -------------------- events --------------------

    def keyPressEvent(self, event):
        if self.stack.currentIndex() == 1 and self.reader.handle_key(event.key()):
            event.accept()
            return
        super().keyPressEvent(event)

    def resizeEvent(self, event):
        super().resizeEvent(event)
        self.reader.apply_pixmap()

    def closeEvent(self, event):
        self.reader.close()
        self._spawn(self.client.close())
        super().closeEvent(event)
