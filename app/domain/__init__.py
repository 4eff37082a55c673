"""
app/domain package marker.
"""

from app.domain.platform_scraping import PlatformScrapeSummary

__all__ = [
    "PlatformScrapeSummary",
]
