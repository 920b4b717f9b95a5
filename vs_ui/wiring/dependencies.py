from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from vs_app.api import AppSettings, ApplicationClient, RecordStore
from vs_common.api import configure_logging
from vs_ui.tui.system.facade import TUI
from vs_ui.tui.system.protocols import UI


@dataclass
class UIContext:
    """Container for UI services and state, initialized lazily."""

    headless: bool = False
    data_dir: Optional[Path] = None

    _ui: Optional[UI] = None
    _settings: Optional[AppSettings] = None
    _app_client: Optional[ApplicationClient] = None

    def configure(self, *, headless: bool, data_dir: Optional[Path]) -> None:
        """Apply global CLI options; drops services built for other options."""
        if headless != self.headless:
            self._ui = None
        self.headless = headless
        self.data_dir = data_dir
        self._settings = None
        self._app_client = None

    @property
    def ui(self) -> UI:
        if self._ui is None:
            if self.headless:
                from vs_ui.tui.system.headless import HeadlessUI

                self._ui = HeadlessUI()
            else:
                self._ui = TUI()
        return self._ui

    @ui.setter
    def ui(self, value: UI):
        self._ui = value

    @property
    def settings(self) -> AppSettings:
        if self._settings is None:
            self._settings = AppSettings.from_env(data_dir=self.data_dir)
        return self._settings

    @settings.setter
    def settings(self, value: AppSettings):
        self._settings = value

    @property
    def app_client(self) -> ApplicationClient:
        if self._app_client is None:
            settings = self.settings
            self._app_client = ApplicationClient(settings, RecordStore(settings.store_path))
        return self._app_client

    @app_client.setter
    def app_client(self, value: ApplicationClient):
        self._app_client = value


__all__ = [
    "UIContext",
    "configure_logging",
]
