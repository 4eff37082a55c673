"""
Alert classification for scrape outcomes.
"""

from __future__ import annotations

from dataclasses import dataclass

from app.scraping.types import ScrapeOutcome


class AlertType:
    NO_LISTINGS = "no_listings"
    LOW_LISTINGS = "low_listings"
    SCRAPE_FAILURE = "scrape_failure"
    SELECTOR_BROKEN = "selector_broken"


@dataclass(frozen=True)
class AlertDraft:
    """
    Alert to persist for one platform, not yet stored.
    """

    alert_type: str
    message: str


def classify_outcome(outcome: ScrapeOutcome, expected_min_listings: int) -> AlertDraft | None:
    """
    Map a scrape outcome onto at most one alert.

    Failed fetches win over listing counts; zero listings is reported apart
    from merely low counts.
    """

    if not outcome.success:
        return AlertDraft(
            alert_type=AlertType.SCRAPE_FAILURE,
            message=f"Scraping failed: {outcome.error_message or 'Unknown error'}",
        )
    if outcome.listings_found == 0:
        return AlertDraft(
            alert_type=AlertType.NO_LISTINGS,
            message="No listings found on the platform",
        )
    if outcome.listings_found < expected_min_listings:
        return AlertDraft(
            alert_type=AlertType.LOW_LISTINGS,
            message=(
                f"Only {outcome.listings_found} listings found, "
                f"expected at least {expected_min_listings}"
            ),
        )
    return None


def selector_broken_alert(outcome: ScrapeOutcome, *, content_changed: bool) -> AlertDraft | None:
    """
    Flag a likely broken selector: page markup changed and nothing matched.
    """

    if outcome.success and content_changed and outcome.listings_found == 0:
        return AlertDraft(
            alert_type=AlertType.SELECTOR_BROKEN,
            message=(
                f"Page content changed and selector '{outcome.selector_used}' "
                "no longer matches any listings"
            ),
        )
    return None
