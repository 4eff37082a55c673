"""
Per-platform scraper bound to one named configuration.
"""

from __future__ import annotations

from collections.abc import Sequence

from app.scraping.config.models import PlatformConfig
from app.scraping.errors import PlatformConfigError
from app.scraping.executor import ScrapeExecutor
from app.scraping.types import ScrapeOutcome


class PlatformScraper:
    """
    Runs the shared executor against a single platform's configuration.
    """

    platform_name: str = ""

    def __init__(
        self,
        *,
        config: PlatformConfig,
        executor: ScrapeExecutor,
    ) -> None:
        if self.platform_name and config.name.lower() != self.platform_name.lower():
            raise PlatformConfigError(
                f"{type(self).__name__} expects platform '{self.platform_name}', got '{config.name}'."
            )
        self.config = config
        self.executor = executor

    @classmethod
    def from_configs(
        cls,
        *,
        configs: Sequence[PlatformConfig],
        executor: ScrapeExecutor,
    ) -> "PlatformScraper":
        for config in configs:
            if config.name.lower() == cls.platform_name.lower():
                return cls(config=config, executor=executor)
        raise PlatformConfigError(f"No configuration found for platform '{cls.platform_name}'.")

    def scrape_listings(self) -> ScrapeOutcome:
        return self.executor.execute(self.config)
