import asyncio
import sys

from PySide6.QtWidgets import QApplication
from qasync import QEventLoop

from app.client.api import NoctoonClient
from app.core.config import API_URL
from desktop.ui import MainWindow


def main(api_url: str = API_URL):
    app = QApplication(sys.argv)

    loop = QEventLoop(app)
    asyncio.set_event_loop(loop)

    w = MainWindow(NoctoonClient(api_url))
    w.show()

    with loop:
        return loop.run_forever()


if __name__ == "__main__":
    sys.exit(main())
