"""Application-level facade between UI and the skill services."""

from vs_app.client import ApplicationClient
from vs_app.settings import AppSettings

__all__ = ["AppSettings", "ApplicationClient"]
