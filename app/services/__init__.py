"""
app/services package marker.
"""

from app.services.platform_scraping_service import (
    PlatformScrapingService,
    get_platform_scraping_service,
)

__all__ = [
    "PlatformScrapingService",
    "get_platform_scraping_service",
]
