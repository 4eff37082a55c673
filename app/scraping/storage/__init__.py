"""
Storage layer exports.
"""

from app.scraping.storage.base import ScrapeResultSink, StoredScrape
from app.scraping.storage.memory import InMemoryScrapeResultSink
from app.scraping.storage.sqlalchemy_storage import SQLAlchemyScrapeResultSink

__all__ = [
    "InMemoryScrapeResultSink",
    "SQLAlchemyScrapeResultSink",
    "ScrapeResultSink",
    "StoredScrape",
]
