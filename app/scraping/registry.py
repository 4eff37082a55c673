"""
Platform scraper class registry and factory.
"""

from __future__ import annotations

from collections.abc import Mapping

from app.scraping.config.models import PlatformConfig
from app.scraping.executor import ScrapeExecutor
from app.scraping.scrapers import FundaScraper, KamernetScraper, ParariusScraper, PlatformScraper


class ScraperRegistry:
    """
    Maps platform names to scraper classes; unknown platforms get the generic scraper.
    """

    def __init__(self, registrations: Mapping[str, type[PlatformScraper]] | None = None) -> None:
        builtins: dict[str, type[PlatformScraper]] = {
            "funda": FundaScraper,
            "pararius": ParariusScraper,
            "kamernet": KamernetScraper,
        }
        if registrations:
            builtins.update({key.strip().lower(): value for key, value in registrations.items()})
        self._registrations = builtins

    def register(self, *, platform_name: str, scraper_class: type[PlatformScraper]) -> None:
        if not issubclass(scraper_class, PlatformScraper):
            raise ValueError(f"Class '{scraper_class.__name__}' must inherit from PlatformScraper.")
        self._registrations[platform_name.strip().lower()] = scraper_class

    def resolve(self, platform_name: str) -> type[PlatformScraper]:
        return self._registrations.get(platform_name.strip().lower(), PlatformScraper)

    def create_scraper(
        self,
        *,
        config: PlatformConfig,
        executor: ScrapeExecutor,
    ) -> PlatformScraper:
        scraper_class = self.resolve(config.name)
        return scraper_class(config=config, executor=executor)
