"""
app/scheduler/jobs.py

APScheduler-based periodic scraping of every enabled rental platform.

Schedule
--------
  scrape_all_platforms: every PLATFORM_SCRAPE_INTERVAL_MINUTES (default 60)

Lifecycle
----------
Call ``build_scheduler()`` once to get a configured ``BackgroundScheduler``.
Start it on app boot; shut it down gracefully on app shutdown.
The scheduler is wired into FastAPI via the ``lifespan`` context in main.py.
"""

from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Iterator

from apscheduler.schedulers.background import BackgroundScheduler
from sqlalchemy.orm import Session

from app.scraping.config import PlatformScrapingSettings, get_platform_scraping_settings
from app.services.platform_scraping_service import get_platform_scraping_service
from db.session import SessionLocal

logger = logging.getLogger(__name__)


@contextmanager
def _session_scope() -> Iterator[Session]:
    """Yield a fresh session and ensure it is closed on exit."""
    session: Session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


def run_scrape_all_platforms() -> None:
    """
    Scrape every enabled platform; failures are logged, never raised into the scheduler.
    """
    logger.info("Scheduler: scrape_all_platforms starting")
    service = get_platform_scraping_service()

    with _session_scope() as db:
        try:
            summaries = service.scrape(db=db)
        except Exception as exc:  # noqa: BLE001
            logger.warning("Scheduler: scrape_all_platforms failed: %s", exc)
            return

    successful = sum(1 for summary in summaries if summary.success)
    logger.info(
        "Scheduler: scrape_all_platforms complete successful=%d total=%d",
        successful,
        len(summaries),
    )


def build_scheduler(settings: PlatformScrapingSettings | None = None) -> BackgroundScheduler:
    """
    Build and register the periodic scrape job.

    Returns a configured but *not yet started* ``BackgroundScheduler``.
    """
    settings = settings or get_platform_scraping_settings()
    scheduler = BackgroundScheduler(timezone="UTC")

    scheduler.add_job(
        run_scrape_all_platforms,
        trigger="interval",
        minutes=settings.interval_minutes,
        id="scrape_all_platforms",
        name="Scrape all enabled rental platforms",
        replace_existing=True,
        max_instances=1,
        coalesce=True,
        misfire_grace_time=600,
    )

    return scheduler
