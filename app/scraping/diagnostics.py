"""
Interactive selector probe used when a platform selector stops matching.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from bs4 import BeautifulSoup

from app.scraping.evaluator import count_matches
from app.scraping.fetcher import ContentFetcher
from app.scraping.logging_utils import log_event
from app.scraping.types import FetchPath, SelectorMatch

logger = logging.getLogger(__name__)

ALTERNATIVE_SELECTORS: tuple[str, ...] = (
    '[data-test-id="search-result-item"]',
    ".search-result",
    ".object-list-item",
    'li[class*="search"]',
    'div[class*="listing"]',
    'li[data-test-id*="search"]',
    '[data-test-id*="result"]',
    'article[class*="search"]',
    "div[data-test-id]",
    ".property-list-item",
    ".room-card",
)

SAMPLE_HTML_CHARS = 200


@dataclass(frozen=True)
class SelectorProbeReport:
    url: str
    tested: str
    count: int
    alternatives: tuple[SelectorMatch, ...]
    best_selector: SelectorMatch | None
    html_length: int
    sample_html: str | None
    fetch_path: FetchPath


class SelectorProbe:
    """
    Counts one selector plus well-known listing patterns on a live page.
    """

    def __init__(
        self,
        *,
        fetcher: ContentFetcher,
        timeout_ms: int = 30000,
        alternatives: tuple[str, ...] = ALTERNATIVE_SELECTORS,
    ) -> None:
        self.fetcher = fetcher
        self.timeout_ms = timeout_ms
        self.alternatives = tuple(dict.fromkeys(alternatives))

    def probe(self, *, url: str, selector: str) -> SelectorProbeReport:
        """
        Fetch ``url`` and rank alternative selectors by match count.

        Raises ``FetchError`` when the page cannot be retrieved.
        """

        fetched = self.fetcher.fetch(url, timeout_ms=self.timeout_ms)
        soup = BeautifulSoup(fetched.html, "html.parser")

        count = count_matches(soup, selector)
        ranked = sorted(
            (SelectorMatch(selector=alt, count=count_matches(soup, alt)) for alt in self.alternatives),
            key=lambda match: match.count,
            reverse=True,
        )
        best = ranked[0] if ranked and ranked[0].count > 0 else None

        sample: str | None = None
        if count > 0:
            first = soup.select_one(selector)
            if first is not None:
                sample = first.decode_contents()[:SAMPLE_HTML_CHARS]

        log_event(
            logger,
            logging.INFO,
            "selector_probed",
            url=url,
            selector=selector,
            count=count,
            best_selector=best.selector if best else None,
            best_count=best.count if best else 0,
        )
        return SelectorProbeReport(
            url=url,
            tested=selector,
            count=count,
            alternatives=tuple(ranked),
            best_selector=best,
            html_length=len(fetched.html),
            sample_html=sample,
            fetch_path=fetched.path,
        )
