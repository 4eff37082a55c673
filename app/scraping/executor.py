"""
Scrape executor: one platform config in, one scrape outcome out.
"""

from __future__ import annotations

import hashlib
import logging
import time
from collections.abc import Callable

from bs4 import BeautifulSoup

from app.scraping.config.models import PlatformConfig
from app.scraping.errors import FetchError
from app.scraping.evaluator import SelectorEvaluator
from app.scraping.fetcher import ContentFetcher
from app.scraping.logging_utils import log_event
from app.scraping.types import ScrapeOutcome

logger = logging.getLogger(__name__)


def hash_content(html: str) -> str:
    """
    SHA-256 hex digest of page HTML, used downstream for change detection.
    """

    return hashlib.sha256(html.encode("utf-8")).hexdigest()


class ScrapeExecutor:
    """
    Fetches a platform page, evaluates its candidate selectors and reports.

    ``execute`` never raises: every failure becomes an outcome with
    ``success=False`` so batch callers can run many configs side by side.
    The executor keeps no state between calls.
    """

    def __init__(
        self,
        *,
        fetcher: ContentFetcher,
        evaluator: SelectorEvaluator | None = None,
        clock: Callable[[], float] = time.monotonic,
        event_logger: logging.Logger | None = None,
    ) -> None:
        self.fetcher = fetcher
        self.evaluator = evaluator or SelectorEvaluator()
        self._clock = clock
        self._logger = event_logger or logger

    def execute(self, config: PlatformConfig) -> ScrapeOutcome:
        started = self._clock()
        log_event(
            self._logger,
            logging.INFO,
            "fetch_started",
            platform=config.name,
            url=config.url,
            proxy=self.fetcher.proxy_enabled,
        )

        try:
            fetched = self.fetcher.fetch(
                config.url,
                timeout_ms=config.timeout_ms,
                request_headers=config.request_headers,
                wait_for_selector=config.wait_hint,
            )
            content_hash = hash_content(fetched.html)
            soup = BeautifulSoup(fetched.html, "html.parser")
            evaluation = self.evaluator.evaluate(soup, config.candidate_selectors)
            outcome = ScrapeOutcome.succeeded(
                listings_found=evaluation.listings_found,
                content_hash=content_hash,
                selector_used=evaluation.selector_used,
                response_time_ms=self._elapsed_ms(started),
                fetch_path=fetched.path,
            )
        except FetchError as exc:
            outcome = ScrapeOutcome.failed(
                error_message=str(exc),
                response_time_ms=self._elapsed_ms(started),
            )
        except Exception as exc:  # noqa: BLE001
            outcome = ScrapeOutcome.failed(
                error_message=f"{exc.__class__.__name__}: {exc}",
                response_time_ms=self._elapsed_ms(started),
            )

        log_event(
            self._logger,
            logging.INFO if outcome.success else logging.ERROR,
            "outcome_ready",
            platform=config.name,
            success=outcome.success,
            listings_found=outcome.listings_found,
            selector_used=outcome.selector_used,
            response_time_ms=outcome.response_time_ms,
            fetch_path=outcome.fetch_path,
            error=outcome.error_message,
        )
        return outcome

    def _elapsed_ms(self, started: float) -> int:
        # A finished network round trip is never reported as 0 ms.
        return max(1, int(round((self._clock() - started) * 1000)))
