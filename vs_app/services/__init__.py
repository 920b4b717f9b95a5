"""Application-facing services for the UI."""

from vs_app.services.catalog_service import CatalogService
from vs_app.services.matching_service import MatchingService
from vs_app.services.profile_service import ProfileService
from vs_app.services.store import TABLES, RecordStore

__all__ = [
    "CatalogService",
    "MatchingService",
    "ProfileService",
    "RecordStore",
    "TABLES",
]
