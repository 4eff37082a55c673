"""
Candidate selector evaluation against a parsed listing page.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence

from bs4 import BeautifulSoup
from soupsieve import SelectorSyntaxError

from app.scraping.logging_utils import log_event
from app.scraping.types import SelectorEvaluation, SelectorMatch

logger = logging.getLogger(__name__)

# A count at or above this is treated as a real listing grid rather than a
# stray match; evaluation stops at the first candidate that reaches it.
DEFAULT_CONFIDENCE_THRESHOLD = 10


def count_matches(soup: BeautifulSoup, selector: str) -> int:
    """
    Number of elements matching ``selector``; malformed selectors count as 0.
    """

    try:
        return len(soup.select(selector))
    except (SelectorSyntaxError, ValueError, NotImplementedError) as exc:
        log_event(
            logger,
            logging.WARNING,
            "selector_invalid",
            selector=selector,
            error=str(exc),
        )
        return 0


class SelectorEvaluator:
    """
    Picks the best-performing candidate selector for a document.
    """

    def __init__(
        self,
        *,
        confidence_threshold: int = DEFAULT_CONFIDENCE_THRESHOLD,
        event_logger: logging.Logger | None = None,
    ) -> None:
        if confidence_threshold < 1:
            raise ValueError("confidence_threshold must be at least 1.")
        self.confidence_threshold = confidence_threshold
        self._logger = event_logger or logger

    def evaluate(
        self,
        soup: BeautifulSoup,
        candidate_selectors: Sequence[str],
    ) -> SelectorEvaluation:
        if not candidate_selectors:
            raise ValueError("At least one candidate selector is required.")

        matches: list[SelectorMatch] = []
        best_selector = candidate_selectors[0]
        best_count = 0

        for selector in candidate_selectors:
            count = count_matches(soup, selector)
            matches.append(SelectorMatch(selector=selector, count=count))
            log_event(
                self._logger,
                logging.INFO,
                "selector_evaluated",
                selector=selector,
                count=count,
            )

            if count >= self.confidence_threshold:
                return SelectorEvaluation(
                    selector_used=selector,
                    listings_found=count,
                    matches=tuple(matches),
                    early_exit=True,
                )
            if count > best_count:
                best_selector = selector
                best_count = count

        if best_count == 0:
            # Nothing matched; report the last selector tried.
            best_selector = candidate_selectors[-1]

        return SelectorEvaluation(
            selector_used=best_selector,
            listings_found=best_count,
            matches=tuple(matches),
        )
