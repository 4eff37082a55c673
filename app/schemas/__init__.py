"""
app/schemas package marker.
"""

from app.schemas.platform_scraping import (
    PlatformConfigResponse,
    PlatformScrapeSummaryResponse,
    ScrapeBatchResponse,
    SelectorCountResponse,
    SelectorTestRequest,
    SelectorTestResponse,
)

__all__ = [
    "PlatformConfigResponse",
    "PlatformScrapeSummaryResponse",
    "ScrapeBatchResponse",
    "SelectorCountResponse",
    "SelectorTestRequest",
    "SelectorTestResponse",
]
