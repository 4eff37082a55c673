"""
app/domain/platform_scraping.py

Domain models for platform scraping orchestration.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from app.scraping.types import ScrapeOutcome


@dataclass(frozen=True)
class PlatformScrapeSummary:
    """
    Summary for one platform scrape run.
    """

    platform: str
    success: bool
    listings_found: int
    expected_min_listings: int
    selector_used: str
    html_hash: str
    response_time_ms: int
    timestamp: str
    error: str | None = None
    stored: bool = True
    log_id: str | None = None
    content_changed: bool = False
    alerts: list[str] = field(default_factory=list)
    errors: list[str] = field(default_factory=list)

    @classmethod
    def from_outcome(
        cls,
        *,
        platform: str,
        outcome: ScrapeOutcome,
        expected_min_listings: int,
        **extra: object,
    ) -> "PlatformScrapeSummary":
        return cls(
            platform=platform,
            success=outcome.success,
            listings_found=outcome.listings_found,
            expected_min_listings=expected_min_listings,
            selector_used=outcome.selector_used,
            html_hash=outcome.content_hash,
            response_time_ms=outcome.response_time_ms,
            timestamp=outcome.timestamp,
            error=outcome.error_message,
            **extra,  # type: ignore[arg-type]
        )
