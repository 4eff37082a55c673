from __future__ import annotations

import logging
import os
from contextlib import asynccontextmanager
from collections.abc import AsyncIterator
from datetime import datetime, timezone

from fastapi import FastAPI


def _validate_env() -> None:
    """
    Validate required environment variables at startup.

    Raises RuntimeError listing every missing or invalid variable so the
    operator can fix all problems in one restart cycle.
    """

    from db.config import load_env_files

    load_env_files()

    errors: list[str] = []

    database_url = os.getenv("DATABASE_URL", "").strip()
    cloud_database_url = os.getenv("CLOUD_DATABASE_URL", "").strip()
    local_database_url = os.getenv("LOCAL_DATABASE_URL", "").strip()
    if not database_url and not cloud_database_url and not local_database_url:
        errors.append(
            "No database URL configured. Set DATABASE_URL, CLOUD_DATABASE_URL "
            "or LOCAL_DATABASE_URL."
        )

    timeout_raw = os.getenv("PLATFORM_SCRAPE_TIMEOUT_MS", "").strip()
    if timeout_raw and (not timeout_raw.isdigit() or int(timeout_raw) <= 0):
        errors.append(
            f"PLATFORM_SCRAPE_TIMEOUT_MS='{timeout_raw}' must be a positive integer."
        )

    if errors:
        raise RuntimeError(
            "Startup validation failed: missing or invalid environment variables:\n"
            + "\n".join(f"  - {e}" for e in errors)
        )

    if not os.getenv("SCRAPINGBEE_API_KEY", "").strip():
        logging.getLogger(__name__).warning(
            "SCRAPINGBEE_API_KEY not set; pages are fetched directly without JS rendering."
        )


def _check_database() -> None:
    """
    Confirm the database answers and holds the scrape log and alert tables.

    Tables are never created here; run ``scripts/init_db.py`` first.
    """

    from sqlalchemy import inspect as sa_inspect
    from sqlalchemy import text
    from sqlalchemy.exc import SQLAlchemyError

    import db.models  # noqa: F401  registers ORM models on Base.metadata
    from db.base import Base
    from db.session import get_engine

    engine = get_engine()
    try:
        with engine.connect() as connection:
            connection.execute(text("SELECT 1"))
        present = set(sa_inspect(engine).get_table_names())
    except SQLAlchemyError as exc:
        raise RuntimeError("Database unavailable.") from exc

    missing = sorted(set(Base.metadata.tables) - present)
    if missing:
        logging.getLogger(__name__).critical("Monitoring tables missing: %s", ", ".join(missing))
        raise RuntimeError(
            f"Database is missing {len(missing)} monitoring table(s): {', '.join(missing)}. "
            "Run scripts/init_db.py."
        )


@asynccontextmanager
async def _lifespan(application: FastAPI) -> AsyncIterator[None]:
    """Check the database, then run the scrape scheduler for the app lifetime."""
    _check_database()
    logging.getLogger(__name__).info("Database ready")

    from app.scheduler.jobs import build_scheduler
    from app.scraping.config import get_platform_scraping_settings

    settings = get_platform_scraping_settings()
    if not settings.scheduler_enabled:
        logging.getLogger(__name__).info("Scheduler disabled")
        yield
        return

    scheduler = build_scheduler(settings)
    scheduler.start()
    logging.getLogger(__name__).info("Scheduler started with %d jobs", len(scheduler.get_jobs()))
    try:
        yield
    finally:
        scheduler.shutdown(wait=True)
        logging.getLogger(__name__).info("Scheduler shut down")


def create_app() -> FastAPI:
    """
    Create and configure the FastAPI application.
    """

    from app.scraping.logging_utils import configure_logging

    _validate_env()
    configure_logging()

    application = FastAPI(
        title="Rental Platform Monitor API",
        version="1.0.0",
        lifespan=_lifespan,
    )

    from app.api.routers import platform_scraping_router

    application.include_router(platform_scraping_router)

    @application.get("/health")
    def healthcheck() -> dict[str, str]:
        return {"status": "ok", "timestamp": datetime.now(timezone.utc).isoformat()}

    return application


app = create_app()
