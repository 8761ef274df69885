"""Allow running AerialTimer as a module: python -m aerialtimer."""

import sys

from PyQt6.QtWidgets import QApplication

from .database.db import init_db
from .logger import setup_logging, get_logger
from .app import AerialTimerApp


def main() -> None:
    setup_logging()
    init_db()
    get_logger().info("AerialTimer starting")

    app = QApplication(sys.argv)
    app.setApplicationName("AerialTimer")
    app.setOrganizationName("AerialTimer")

    window = AerialTimerApp()
    window.show()

    sys.exit(app.exec())


if __name__ == "__main__":
    main()
