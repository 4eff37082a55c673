"""
In-process result sink for dry runs and tests.
"""

from __future__ import annotations

import threading
import uuid

from app.scraping.alerts import AlertDraft, classify_outcome, selector_broken_alert
from app.scraping.config.models import PlatformConfig
from app.scraping.storage.base import ScrapeResultSink, StoredScrape
from app.scraping.types import ScrapeOutcome


class InMemoryScrapeResultSink(ScrapeResultSink):
    """
    Keeps outcomes and alerts in lists keyed by platform name.
    """

    def __init__(self) -> None:
        self.outcomes: dict[str, list[ScrapeOutcome]] = {}
        self.alerts: dict[str, list[AlertDraft]] = {}
        self._lock = threading.Lock()

    def record(self, config: PlatformConfig, outcome: ScrapeOutcome) -> StoredScrape:
        with self._lock:
            history = self.outcomes.setdefault(config.name, [])
            content_changed = _hash_changed(history, outcome)
            history.append(outcome)

            drafts = [
                draft
                for draft in (
                    classify_outcome(outcome, config.expected_min_listings),
                    selector_broken_alert(outcome, content_changed=content_changed),
                )
                if draft is not None
            ]
            self.alerts.setdefault(config.name, []).extend(drafts)

        return StoredScrape(
            platform=config.name,
            log_id=str(uuid.uuid4()),
            content_changed=content_changed,
            alerts=drafts,
        )


def _hash_changed(history: list[ScrapeOutcome], outcome: ScrapeOutcome) -> bool:
    if not outcome.success:
        return False
    previous = next((item for item in reversed(history) if item.success), None)
    return previous is not None and previous.content_hash != outcome.content_hash
