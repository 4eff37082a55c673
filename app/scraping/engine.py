"""
Platform monitoring engine.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from concurrent.futures import ThreadPoolExecutor

from app.domain.platform_scraping import PlatformScrapeSummary
from app.scraping.config.models import PlatformConfig
from app.scraping.executor import ScrapeExecutor
from app.scraping.logging_utils import log_event
from app.scraping.registry import ScraperRegistry
from app.scraping.storage import ScrapeResultSink
from app.scraping.types import ScrapeOutcome

logger = logging.getLogger(__name__)


class PlatformMonitoringEngine:
    """
    Scrapes a batch of platforms and hands every outcome to the result sink.

    Scrapes run concurrently on a thread pool; sink writes happen on the
    calling thread, in config order, so one DB session can be shared.
    """

    def __init__(
        self,
        *,
        configs: Sequence[PlatformConfig],
        executor: ScrapeExecutor,
        sink: ScrapeResultSink,
        max_workers: int = 4,
        registry: ScraperRegistry | None = None,
    ) -> None:
        self._configs = list(configs)
        self._executor = executor
        self._registry = registry or ScraperRegistry()
        self._sink = sink
        self._max_workers = max(1, max_workers)

    def run(self, *, platforms: Sequence[str] | None = None) -> list[PlatformScrapeSummary]:
        selected = self._select_platforms(configs=self._configs, platforms=platforms)
        if not selected:
            raise ValueError("No enabled platforms matched the run criteria.")

        workers = min(self._max_workers, len(selected))
        with ThreadPoolExecutor(max_workers=workers, thread_name_prefix="platform-scrape") as pool:
            outcomes = list(pool.map(self._scrape, selected))

        return [self._record(config, outcome) for config, outcome in zip(selected, outcomes)]

    def _scrape(self, config: PlatformConfig) -> ScrapeOutcome:
        scraper = self._registry.create_scraper(config=config, executor=self._executor)
        return scraper.scrape_listings()

    def _record(self, config: PlatformConfig, outcome: ScrapeOutcome) -> PlatformScrapeSummary:
        try:
            stored = self._sink.record(config, outcome)
        except Exception as exc:
            message = f"Failed to store outcome: {exc}"
            log_event(
                logger,
                logging.ERROR,
                "platform_scrape_failed",
                platform=config.name,
                error=str(exc),
            )
            return PlatformScrapeSummary.from_outcome(
                platform=config.name,
                outcome=outcome,
                expected_min_listings=config.expected_min_listings,
                stored=False,
                errors=[message],
            )

        summary = PlatformScrapeSummary.from_outcome(
            platform=config.name,
            outcome=outcome,
            expected_min_listings=config.expected_min_listings,
            stored=True,
            log_id=stored.log_id,
            content_changed=stored.content_changed,
            alerts=[draft.alert_type for draft in stored.alerts],
        )
        log_event(
            logger,
            logging.INFO,
            "platform_scrape_completed",
            platform=config.name,
            success=summary.success,
            listings_found=summary.listings_found,
            alerts=summary.alerts,
        )
        return summary

    @staticmethod
    def _select_platforms(
        *,
        configs: list[PlatformConfig],
        platforms: Sequence[str] | None,
    ) -> list[PlatformConfig]:
        enabled = [config for config in configs if config.enabled]
        if not platforms:
            return enabled

        normalized = {item.strip().lower() for item in platforms if item.strip()}
        if not normalized:
            return enabled
        return [config for config in enabled if config.name.lower() in normalized]
