"""
app/api/routers package marker.
"""

from app.api.routers.platform_scraping import router as platform_scraping_router

__all__ = ["platform_scraping_router"]
