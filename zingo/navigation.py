"""
Navigation and process-wide settings state.

Screens:
  WORKSPACES ⇄ BOARD
  WORKSPACES | BOARD → SETTINGS → back to where it was entered from

BOARD needs a selected workspace; entering it without one lands on
WORKSPACES instead.
"""
import logging
from dataclasses import replace
from enum import Enum
from typing import Callable, List, Optional

from .schema import Settings
from .store import FileStore

logger = logging.getLogger(__name__)


class Screen(Enum):
    WORKSPACES = "workspaces"
    BOARD = "board"
    SETTINGS = "settings"


class Navigator:
    """Observable holder of the active screen, selected workspace and settings."""

    def __init__(self, store: FileStore):
        self.store = store
        self.screen = Screen.WORKSPACES
        self.previous_screen: Optional[Screen] = None
        self.selected_workspace_id: Optional[str] = None
        self.settings = Settings.default()
        self._listeners: List[Callable[["Navigator"], None]] = []

    # ── Mirrored settings ────────────────────────────────────────────────────

    @property
    def folder_path(self) -> str:
        return self.settings.folder_path

    @property
    def dark_theme(self) -> bool:
        return self.settings.dark_theme

    @property
    def locale(self) -> str:
        return self.settings.locale

    def subscribe(self, callback: Callable[["Navigator"], None]) -> None:
        """callback(navigator) runs after every screen or settings change."""
        self._listeners.append(callback)

    def _notify(self) -> None:
        for callback in self._listeners:
            try:
                callback(self)
            except Exception:
                logger.exception("Error in navigation listener")

    # ── Screens ──────────────────────────────────────────────────────────────

    def navigate(self, screen: Screen, workspace_id: Optional[str] = None) -> Screen:
        """Switch screens. Returns the screen actually shown."""
        if screen == Screen.BOARD:
            workspace_id = workspace_id or self.selected_workspace_id
            if workspace_id is None:
                logger.debug("Board requested without a workspace, showing workspaces")
                screen = Screen.WORKSPACES
            else:
                self.selected_workspace_id = workspace_id

        if screen != self.screen:
            self.previous_screen = self.screen
            self.screen = screen
        self._notify()
        return self.screen

    def back(self) -> Screen:
        if self.screen == Screen.BOARD:
            return self.navigate(Screen.WORKSPACES)
        if self.screen == Screen.SETTINGS:
            return self.navigate(self.previous_screen or Screen.WORKSPACES)
        return self.screen

    # ── Settings ─────────────────────────────────────────────────────────────

    def load_settings(self) -> Settings:
        self.settings = self.store.load_settings()
        self._notify()
        return self.settings

    def update_settings(self, folder_path: str, dark_theme: bool, locale: str) -> Settings:
        """Mirror and persist new settings."""
        settings = Settings(folder_path=folder_path, dark_theme=dark_theme, locale=locale)
        self.store.save_settings(settings)
        self.settings = settings
        logger.info(f"Settings saved (dark_theme={dark_theme}, locale={locale})")
        self._notify()
        return settings

    def toggle_theme(self) -> bool:
        settings = replace(self.settings, dark_theme=not self.settings.dark_theme)
        self.store.save_settings(settings)
        self.settings = settings
        self._notify()
        return settings.dark_theme
