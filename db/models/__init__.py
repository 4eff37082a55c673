"""
Model package exports.

Import all SQLAlchemy models here so metadata registration works without
extra imports.
"""

from db.models.platform_alert import PlatformAlert
from db.models.scrape_log import ScrapeLog

__all__ = [
    "PlatformAlert",
    "ScrapeLog",
]
