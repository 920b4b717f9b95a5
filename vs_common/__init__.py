"""Shared helpers for volunteer-skills."""

from vs_common.api import VSError, configure_logging

__all__ = ["configure_logging", "VSError"]
