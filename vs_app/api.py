"""Stable application-layer API surface."""

from vs_app.client import ApplicationClient
from vs_app.services.catalog_service import CatalogService
from vs_app.services.matching_service import MatchingService
from vs_app.services.profile_service import ProfileService
from vs_app.services.store import TABLES, RecordStore
from vs_app.settings import AppSettings, default_data_dir

__all__ = [
    "AppSettings",
    "ApplicationClient",
    "CatalogService",
    "MatchingService",
    "ProfileService",
    "RecordStore",
    "TABLES",
    "default_data_dir",
]
