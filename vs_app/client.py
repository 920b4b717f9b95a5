"""Application-level client implementation used by UI layers."""

from __future__ import annotations

from typing import Iterable

from vs_app.services.catalog_service import CatalogService
from vs_app.services.matching_service import MatchingService
from vs_app.services.profile_service import ProfileService
from vs_app.services.store import RecordStore
from vs_app.settings import AppSettings
from vs_core.engine import ChangeCallback, SelectionEngine


class ApplicationClient:
    """Bundle the services around one explicitly constructed record store."""

    def __init__(
        self,
        settings: AppSettings | None = None,
        store: RecordStore | None = None,
    ) -> None:
        self.settings = settings or AppSettings.from_env()
        self.store = store or RecordStore(self.settings.store_path)
        self.catalog = CatalogService(self.store, self.settings)
        self.profiles = ProfileService(self.store, self.catalog, self.settings)
        self.matching = MatchingService(self.profiles)

    def selection_engine(
        self,
        initial_values: Iterable[str] | None = None,
        *,
        on_change: ChangeCallback | None = None,
    ) -> SelectionEngine:
        return self.catalog.create_engine(initial_values, on_change=on_change)
