"""
app/services/platform_scraping_service.py

Service orchestration for rental platform scraping.
"""

from __future__ import annotations

from collections.abc import Callable
from functools import lru_cache

import requests
from sqlalchemy.orm import Session

from app.domain.platform_scraping import PlatformScrapeSummary
from app.scraping.config import (
    PlatformConfig,
    PlatformScrapingSettings,
    get_platform_scraping_settings,
    load_platform_configs,
)
from app.scraping.diagnostics import SelectorProbe, SelectorProbeReport
from app.scraping.engine import PlatformMonitoringEngine
from app.scraping.errors import PlatformNotFoundError
from app.scraping.evaluator import SelectorEvaluator
from app.scraping.executor import ScrapeExecutor
from app.scraping.fetcher import ContentFetcher
from app.scraping.storage import ScrapeResultSink, SQLAlchemyScrapeResultSink


class PlatformScrapingService:
    """
    Runs platform scrapes and persists outcomes and alerts.
    """

    def __init__(
        self,
        *,
        settings: PlatformScrapingSettings | None = None,
        session_factory: Callable[[], requests.Session] = requests.Session,
    ) -> None:
        self._settings = settings or get_platform_scraping_settings()
        self._session_factory = session_factory

    @property
    def settings(self) -> PlatformScrapingSettings:
        return self._settings

    def list_platforms(self) -> list[PlatformConfig]:
        return load_platform_configs(
            config_path=self._settings.config_path,
            default_timeout_ms=self._settings.default_timeout_ms,
        )

    def build_fetcher(self) -> ContentFetcher:
        return ContentFetcher(
            session_factory=self._session_factory,
            proxy_api_key=self._settings.proxy_api_key,
            proxy_endpoint=self._settings.proxy_endpoint,
            proxy_overhead_ms=self._settings.proxy_overhead_ms,
            proxy_wait_ms=self._settings.proxy_wait_ms,
        )

    def build_executor(self) -> ScrapeExecutor:
        return ScrapeExecutor(
            fetcher=self.build_fetcher(),
            evaluator=SelectorEvaluator(confidence_threshold=self._settings.confidence_threshold),
        )

    def scrape(
        self,
        *,
        db: Session | None = None,
        platform: str | None = None,
        sink: ScrapeResultSink | None = None,
    ) -> list[PlatformScrapeSummary]:
        """
        Scrape every enabled platform, or only ``platform`` when given.

        Outcomes go to ``sink`` if provided, otherwise to the database.
        """

        configs = self.list_platforms()
        if platform and not any(config.name.lower() == platform.strip().lower() for config in configs):
            raise PlatformNotFoundError(f"Unknown platform '{platform}'.")
        if sink is None:
            if db is None:
                raise ValueError("Either a database session or a result sink is required.")
            sink = SQLAlchemyScrapeResultSink(session=db)

        engine = PlatformMonitoringEngine(
            configs=configs,
            executor=self.build_executor(),
            sink=sink,
            max_workers=self._settings.max_workers,
        )
        selected = [platform] if platform else None
        return engine.run(platforms=selected)

    def probe_selector(self, *, url: str, selector: str) -> SelectorProbeReport:
        probe = SelectorProbe(
            fetcher=self.build_fetcher(),
            timeout_ms=self._settings.default_timeout_ms,
        )
        return probe.probe(url=url, selector=selector)


@lru_cache(maxsize=1)
def get_platform_scraping_service() -> PlatformScrapingService:
    """
    Build and cache platform scraping service.
    """

    return PlatformScrapingService()
