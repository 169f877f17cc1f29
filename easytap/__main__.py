"""Allow running EasyTap as a module: python -m easytap."""

import logging
import sys

from PyQt6.QtWidgets import QApplication

from .log import configure_logging
from .app import EasyTapWindow


def main() -> None:
    configure_logging()
    log = logging.getLogger("easytap")
    log.info("=== EasyTap starting ===")

    app = QApplication(sys.argv)
    app.setApplicationName("EasyTap Timer")
    app.setOrganizationName("EasyTap")

    window = EasyTapWindow()
    window.show()

    sys.exit(app.exec())


if __name__ == "__main__":
    main()
