"""Allow running BreakBank as a module: python -m breakbank."""

import logging
import sys

from PyQt6.QtWidgets import QApplication

from .app import BreakBankApp
from .settings import load_settings


def setup_logging(level: int = logging.INFO) -> logging.Logger:
    """Configure logging for the application."""
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    return logging.getLogger("breakbank")


def main() -> None:
    logger = setup_logging()
    settings = load_settings()

    app = QApplication(sys.argv)
    app.setApplicationName("BreakBank")
    app.setOrganizationName("BreakBank")

    try:
        window = BreakBankApp(settings)
    except ValueError as error:
        logger.error("Invalid timer settings: %s", error)
        sys.exit(2)
    window.show()
    logger.info("BreakBank ready")

    sys.exit(app.exec())


if __name__ == "__main__":
    main()
