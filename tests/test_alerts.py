"""
tests/test_alerts.py

Alert categories derived from scrape outcomes.
"""

from __future__ import annotations

from app.scraping.alerts import AlertType, classify_outcome, selector_broken_alert
from app.scraping.types import ScrapeOutcome


def _ok(count: int) -> ScrapeOutcome:
    return ScrapeOutcome.succeeded(listings_found=count, content_hash="h", selector_used=".a", response_time_ms=10)


def test_failure_alert() -> None:
    draft = classify_outcome(ScrapeOutcome.failed(error_message="HTTP 500", response_time_ms=3), 10)
    assert draft is not None
    assert draft.alert_type == AlertType.SCRAPE_FAILURE
    assert draft.message == "Scraping failed: HTTP 500"


def test_no_listings_alert() -> None:
    draft = classify_outcome(_ok(0), 10)
    assert draft is not None and draft.alert_type == AlertType.NO_LISTINGS


def test_low_listings_alert() -> None:
    draft = classify_outcome(_ok(4), 10)
    assert draft is not None
    assert draft.alert_type == AlertType.LOW_LISTINGS
    assert draft.message == "Only 4 listings found, expected at least 10"


def test_healthy_outcome_has_no_alert() -> None:
    assert classify_outcome(_ok(10), 10) is None
    assert classify_outcome(_ok(1), 0) is None


def test_selector_broken_needs_change_and_zero() -> None:
    assert selector_broken_alert(_ok(0), content_changed=True) is not None
    assert selector_broken_alert(_ok(0), content_changed=False) is None
    assert selector_broken_alert(_ok(3), content_changed=True) is None
