"""Allow running PomoBlocks as a module: python -m pomoblocks."""

import logging
import os
import sys

from PyQt6.QtWidgets import QApplication

from .database.db import init_db
from .app import PomoBlocksApp

logger = logging.getLogger("pomoblocks")


def main() -> None:
    logging.basicConfig(
        level=os.environ.get("POMOBLOCKS_LOG_LEVEL", "INFO").upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    init_db()
    logger.info("PomoBlocks ready")

    app = QApplication(sys.argv)
    app.setApplicationName("PomoBlocks")
    app.setOrganizationName("PomoBlocks")

    window = PomoBlocksApp()
    window.show()

    sys.exit(app.exec())


if __name__ == "__main__":
    main()
