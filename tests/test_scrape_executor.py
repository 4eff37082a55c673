"""
tests/test_scrape_executor.py

End-to-end executor behaviour with stubbed HTTP: outcome invariants,
hashing, fallback success and the never-raise contract.
"""

from __future__ import annotations

import hashlib
import json
import logging

import pytest
import requests

from app.scraping.config.models import PlatformConfig
from app.scraping.evaluator import SelectorEvaluator
from app.scraping.executor import ScrapeExecutor, hash_content
from app.scraping.fetcher import ContentFetcher
from app.scraping.types import FetchPath, ScrapeOutcome
from tests.helpers import FakeClock, StubSession, listing_page, make_response

PROXY = "https://proxy.test/api/v1/"


def _executor(handler, *, api_key: str | None = None) -> ScrapeExecutor:
    fetcher = ContentFetcher(session_factory=StubSession(handler), proxy_api_key=api_key, proxy_endpoint=PROXY)
    return ScrapeExecutor(fetcher=fetcher, evaluator=SelectorEvaluator(), clock=FakeClock())


class TestSuccessfulScrape:
    def test_reference_scenario(self, platform_config: PlatformConfig) -> None:
        html = listing_page(foo=3, bar=12)
        executor = _executor(lambda url, kwargs: make_response(url, body=html))

        outcome = executor.execute(platform_config)

        assert outcome.success is True
        assert outcome.selector_used == ".bar"
        assert outcome.listings_found == 12
        assert outcome.error_message is None
        assert outcome.content_hash == hashlib.sha256(html.encode("utf-8")).hexdigest()
        assert outcome.response_time_ms > 0
        assert outcome.fetch_path is FetchPath.FALLBACK

    def test_zero_matches_is_still_success(self, platform_config: PlatformConfig) -> None:
        executor = _executor(lambda url, kwargs: make_response(url, body=listing_page(other=4)))

        outcome = executor.execute(platform_config)

        assert outcome.success is True
        assert outcome.listings_found == 0
        assert outcome.selector_used == ".bar"
        assert outcome.content_hash != ""

    def test_identical_content_hashes_identically(self, platform_config: PlatformConfig) -> None:
        html = listing_page(foo=2)
        executor = _executor(lambda url, kwargs: make_response(url, body=html))

        first = executor.execute(platform_config)
        second = executor.execute(platform_config)

        assert first.content_hash == second.content_hash == hash_content(html)

    def test_fallback_success_wins_over_primary_failure(self, platform_config: PlatformConfig) -> None:
        def handler(url, kwargs):
            if url == PROXY:
                return make_response(url, status_code=503, body="down")
            return make_response(url, body=listing_page(bar=11))

        outcome = _executor(handler, api_key="key").execute(platform_config)

        assert outcome.success is True
        assert outcome.listings_found == 11
        assert outcome.fetch_path is FetchPath.FALLBACK

    def test_wait_hint_defaults_to_first_candidate(self, platform_config: PlatformConfig) -> None:
        session = StubSession(lambda url, kwargs: make_response(url, body="<html></html>"))
        fetcher = ContentFetcher(session_factory=session, proxy_api_key="key", proxy_endpoint=PROXY)

        ScrapeExecutor(fetcher=fetcher).execute(platform_config)

        assert session.calls[0][1]["params"]["wait_for"] == ".foo"


    def test_second_run_carries_no_state_from_first(self, platform_config: PlatformConfig) -> None:
        seen: list[str | None] = []

        class CookieSettingSession(requests.Session):
            def get(self, url, **kwargs):
                seen.append(self.cookies.get("session"))
                self.cookies.set("session", "abc")
                return make_response(url, body=listing_page(foo=2))

        executor = ScrapeExecutor(fetcher=ContentFetcher(session_factory=CookieSettingSession))

        first = executor.execute(platform_config)
        second = executor.execute(platform_config)

        assert first.success and second.success
        assert seen == [None, None]


class TestFailedScrape:
    def test_http_500_on_both_paths(self, platform_config: PlatformConfig) -> None:
        executor = _executor(
            lambda url, kwargs: make_response(url, status_code=500, body="error"),
            api_key="key",
        )

        outcome = executor.execute(platform_config)

        assert outcome.success is False
        assert outcome.listings_found == 0
        assert outcome.content_hash == ""
        assert outcome.selector_used == ""
        assert outcome.error_message
        assert outcome.response_time_ms > 0

    def test_unexpected_errors_never_escape(self, platform_config: PlatformConfig) -> None:
        def handler(url, kwargs):
            return RuntimeError("stub exploded")

        executor = _executor(handler)

        outcome = executor.execute(platform_config)

        assert outcome.success is False
        assert "stub exploded" in (outcome.error_message or "")


def test_emits_structured_events(platform_config: PlatformConfig, caplog: pytest.LogCaptureFixture) -> None:
    executor = _executor(lambda url, kwargs: make_response(url, body=listing_page(foo=1)))

    with caplog.at_level(logging.INFO):
        executor.execute(platform_config)

    events = []
    for record in caplog.records:
        try:
            events.append(json.loads(record.getMessage())["event"])
        except (ValueError, KeyError):
            continue
    assert events[0] == "fetch_started"
    assert "fetch_fallback" in events
    assert events.count("selector_evaluated") == 2
    assert events[-1] == "outcome_ready"


class TestScrapeOutcomeInvariants:
    def test_failed_requires_message(self) -> None:
        outcome = ScrapeOutcome.failed(error_message="", response_time_ms=5)
        assert outcome.error_message == "Unknown error"

    def test_failed_cannot_carry_listings(self) -> None:
        with pytest.raises(ValueError):
            ScrapeOutcome(
                success=False,
                listings_found=3,
                content_hash="",
                selector_used="",
                response_time_ms=1,
                error_message="nope",
            )

    def test_success_cannot_carry_error(self) -> None:
        with pytest.raises(ValueError):
            ScrapeOutcome(
                success=True,
                listings_found=3,
                content_hash="abc",
                selector_used=".a",
                response_time_ms=1,
                error_message="nope",
            )

    def test_record_shape(self) -> None:
        ok = ScrapeOutcome.succeeded(listings_found=4, content_hash="abc", selector_used=".a", response_time_ms=12)
        failed = ScrapeOutcome.failed(error_message="HTTP 500", response_time_ms=7)

        assert set(ok.to_record()) == {"success", "listingsFound", "htmlHash", "responseTime", "timestamp"}
        assert failed.to_record()["error"] == "HTTP 500"
        assert failed.to_record()["htmlHash"] == ""
