"""Public API surface for vs_common."""

from vs_common.errors import (
    CatalogError,
    ConfigurationError,
    RecordNotFoundError,
    SelectionValidationError,
    StoreError,
    VSError,
    error_to_payload,
    wrap_error,
)
from vs_common.logging import LogSettings, configure_logging

__all__ = [
    "configure_logging",
    "LogSettings",
    "CatalogError",
    "ConfigurationError",
    "RecordNotFoundError",
    "SelectionValidationError",
    "StoreError",
    "VSError",
    "error_to_payload",
    "wrap_error",
]
