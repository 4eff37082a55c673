"""
app/schemas/platform_scraping.py

Request and response schemas for platform scraping operations.
"""

from __future__ import annotations

from pydantic import BaseModel, Field


class PlatformConfigResponse(BaseModel):
    name: str
    url: str
    candidate_selectors: list[str]
    expected_min_listings: int = Field(..., ge=0)
    timeout_ms: int = Field(..., gt=0)
    wait_for_selector: str | None = None
    enabled: bool


class PlatformScrapeSummaryResponse(BaseModel):
    """
    API response model for one platform scrape summary.
    """

    platform: str
    success: bool
    listings_found: int = Field(..., ge=0)
    expected_min_listings: int = Field(..., ge=0)
    selector_used: str
    html_hash: str
    response_time_ms: int = Field(..., ge=0)
    timestamp: str
    error: str | None = None
    stored: bool
    log_id: str | None = None
    content_changed: bool = False
    alerts: list[str] = Field(default_factory=list)
    errors: list[str] = Field(default_factory=list)


class ScrapeBatchResponse(BaseModel):
    total: int = Field(..., ge=0)
    successful: int = Field(..., ge=0)
    results: list[PlatformScrapeSummaryResponse]


class SelectorTestRequest(BaseModel):
    url: str = Field(..., min_length=1)
    selector: str = Field(..., min_length=1)


class SelectorCountResponse(BaseModel):
    selector: str
    count: int = Field(..., ge=0)


class SelectorTestResponse(BaseModel):
    """
    Tested selector count plus ranked well-known alternatives.
    """

    tested: str
    count: int = Field(..., ge=0)
    alternatives: list[SelectorCountResponse]
    best_selector: SelectorCountResponse | None = None
    html_length: int = Field(..., ge=0)
    sample_html: str | None = None
    fetch_path: str
