from __future__ import annotations

import logging
import sys

from PySide6.QtGui import QFont
from PySide6.QtWidgets import QApplication, QMessageBox, QStyleFactory

from app.config import SETTINGS
from app.infra.db import init_db
from app.infra.logging import setup_logging
from app.infra.repository import TaskRepository
from app.infra.storage import SqlKeyValueStorage
from app.services.task_store import TaskStore
from app.services.theme_service import ThemeService
from app.ui.main_window import MainWindow

logger = logging.getLogger(__name__)


def build_store(storage: SqlKeyValueStorage) -> TaskStore:
    repo = TaskRepository(storage, key=SETTINGS.tasks_storage_key)
    store = TaskStore(repo, reject_past_due_dates=SETTINGS.reject_past_due_dates)
    store.load()
    return store


def main() -> None:
    setup_logging()
    try:
        init_db()
    except Exception as exc:  # noqa: BLE001
        logger.exception("Database initialisation failed")
        app = QApplication(sys.argv)
        QMessageBox.critical(None, "DB error", str(exc))
        return

    storage = SqlKeyValueStorage()
    store = build_store(storage)
    themes = ThemeService(storage, key=SETTINGS.theme_storage_key)

    app = QApplication(sys.argv)
    app.setStyle(QStyleFactory.create("Fusion"))
    app.setFont(QFont("Segoe UI", 10))

    window = MainWindow(store, themes)
    window.show()
    sys.exit(app.exec())


if __name__ == "__main__":
    main()
