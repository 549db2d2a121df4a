from __future__ import annotations

import logging

from sqlalchemy.exc import SQLAlchemyError

from app.domain.enums import Theme
from app.infra.storage import KeyValueStorage

logger = logging.getLogger(__name__)

DEFAULT_THEME_KEY = "focusboard-theme"


class ThemeService:
    def __init__(self, storage: KeyValueStorage, key: str = DEFAULT_THEME_KEY) -> None:
        self._storage = storage
        self._key = key

    def get_theme(self) -> Theme | None:
        try:
            stored = self._storage.get_item(self._key)
        except SQLAlchemyError:
            logger.exception("Failed to read theme preference")
            return None
        if stored in (Theme.DARK.value, Theme.LIGHT.value):
            return Theme(stored)
        return None

    def set_theme(self, raw: object) -> Theme:
        theme = Theme.DARK if raw == Theme.DARK.value else Theme.LIGHT
        try:
            self._storage.set_item(self._key, theme.value)
        except SQLAlchemyError:
            logger.exception("Failed to save theme preference")
        return theme

    def toggle(self, current: Theme) -> Theme:
        return self.set_theme(Theme.LIGHT if current == Theme.DARK else Theme.DARK)
