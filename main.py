"""
main.py – BoardSearch application entry point.
Configures logging, bootstraps the PySide6 QApplication and launches the
main window.
"""

import logging
import os
import sys

from PySide6.QtWidgets import QApplication, QMessageBox
from PySide6.QtCore import Qt

from main_window import MainWindow
from services.config import SearchConfig
from services.exceptions import ConfigError

LOG_FORMAT: str = "%(asctime)s %(levelname)-7s %(name)s: %(message)s"


def main() -> None:
    logging.basicConfig(
        level=os.environ.get("BOARDSEARCH_LOG_LEVEL", "INFO").upper(),
        format=LOG_FORMAT,
    )

    QApplication.setHighDpiScaleFactorRoundingPolicy(
        Qt.HighDpiScaleFactorRoundingPolicy.PassThrough
    )

    app = QApplication(sys.argv)
    app.setApplicationName("BoardSearch")
    app.setApplicationDisplayName("BoardSearch – Board Game Lookup")
    app.setOrganizationName("BoardSearch")

    try:
        config = SearchConfig.from_env()
    except ConfigError as exc:
        logging.getLogger(__name__).error("%s", exc)
        QMessageBox.critical(None, "Configuration Error", str(exc))
        sys.exit(2)

    window = MainWindow(config)
    window.show()

    sys.exit(app.exec())


if __name__ == "__main__":
    main()
