"""Light/dark theme preference."""
import logging

from worldclock.core.errors import StorageError
from worldclock.core.schemas import Theme
from worldclock.core.storage import THEME_KEY, KeyValueStore

logger = logging.getLogger(__name__)

DEFAULT_THEME = Theme.DARK


class ThemeController:
    """Owns the theme flag and writes every change to the store."""

    def __init__(self, store: KeyValueStore):
        self.store = store
        self.theme = DEFAULT_THEME

    def load(self) -> Theme:
        raw = self.store.get(THEME_KEY)
        if raw is None:
            self.theme = DEFAULT_THEME
            return self.theme
        try:
            self.theme = Theme(raw)
        except ValueError:
            logger.warning(f"Unknown saved theme {raw!r}, using {DEFAULT_THEME.value}")
            self.theme = DEFAULT_THEME
        return self.theme

    def set(self, theme: Theme) -> Theme:
        self.theme = Theme(theme)
        try:
            self.store.set(THEME_KEY, self.theme.value)
        except StorageError as e:
            logger.warning(f"Could not persist theme: {e}")
        return self.theme

    def toggle(self) -> Theme:
        return self.set(Theme.DARK if self.theme == Theme.LIGHT else Theme.LIGHT)
