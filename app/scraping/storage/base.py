"""
Storage layer interfaces for scrape outcomes.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field

from app.scraping.alerts import AlertDraft
from app.scraping.config.models import PlatformConfig
from app.scraping.types import ScrapeOutcome


@dataclass(frozen=True)
class StoredScrape:
    """
    What a sink persisted for one outcome.
    """

    platform: str
    log_id: str
    content_changed: bool = False
    alerts: list[AlertDraft] = field(default_factory=list)


class ScrapeResultSink(ABC):
    """
    Storage abstraction for scrape outcomes and derived alerts.
    """

    @abstractmethod
    def record(self, config: PlatformConfig, outcome: ScrapeOutcome) -> StoredScrape:
        """
        Persist one outcome and any alerts it triggers.
        """
