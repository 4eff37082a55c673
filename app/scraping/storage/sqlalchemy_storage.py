"""
SQLAlchemy-backed result sink for scrape outcomes.
"""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.scraping.alerts import classify_outcome, selector_broken_alert
from app.scraping.config.models import PlatformConfig
from app.scraping.storage.base import ScrapeResultSink, StoredScrape
from app.scraping.types import ScrapeOutcome
from db.models.platform_alert import PlatformAlert
from db.models.scrape_log import ScrapeLog


class SQLAlchemyScrapeResultSink(ScrapeResultSink):
    """
    Persist scrape logs and derived alerts through the DB session.

    The previous successful log for the platform supplies the hash used to
    decide whether the page content changed.
    """

    def __init__(self, *, session: Session) -> None:
        self._session = session

    def record(self, config: PlatformConfig, outcome: ScrapeOutcome) -> StoredScrape:
        try:
            previous_hash = self._latest_hash(config.name)
            content_changed = (
                outcome.success
                and previous_hash is not None
                and previous_hash != outcome.content_hash
            )

            log = ScrapeLog(
                platform_name=config.name,
                success=outcome.success,
                listings_found=outcome.listings_found,
                html_hash=outcome.content_hash,
                selector_used=outcome.selector_used,
                error_message=outcome.error_message,
                response_time_ms=outcome.response_time_ms,
                fetch_path=outcome.fetch_path.value if outcome.fetch_path else None,
                content_changed=content_changed,
                scraped_at=datetime.fromisoformat(outcome.timestamp),
            )
            self._session.add(log)
            self._session.flush()

            drafts = [
                draft
                for draft in (
                    classify_outcome(outcome, config.expected_min_listings),
                    selector_broken_alert(outcome, content_changed=content_changed),
                )
                if draft is not None
            ]
            for draft in drafts:
                self._session.add(
                    PlatformAlert(
                        platform_name=config.name,
                        scrape_log_id=log.id,
                        alert_type=draft.alert_type,
                        message=draft.message,
                        resolved=False,
                    )
                )
            self._session.commit()
        except SQLAlchemyError:
            self._session.rollback()
            raise

        return StoredScrape(
            platform=config.name,
            log_id=str(log.id),
            content_changed=content_changed,
            alerts=drafts,
        )

    def _latest_hash(self, platform_name: str) -> str | None:
        statement = (
            select(ScrapeLog.html_hash)
            .where(ScrapeLog.platform_name == platform_name, ScrapeLog.success.is_(True))
            .order_by(ScrapeLog.scraped_at.desc())
            .limit(1)
        )
        return self._session.execute(statement).scalar_one_or_none()
