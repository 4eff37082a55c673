"""
Run rental platform scraping from CLI.
"""

from __future__ import annotations

import argparse
import json
from dataclasses import asdict

from app.scraping.logging_utils import configure_logging
from app.scraping.storage import InMemoryScrapeResultSink
from app.services.platform_scraping_service import PlatformScrapingService


def main() -> int:
    parser = argparse.ArgumentParser(description="Scrape configured rental platforms.")
    parser.add_argument(
        "--platform",
        dest="platform",
        default=None,
        help="Optional platform name from config file.",
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Keep outcomes in memory instead of writing to the database.",
    )
    args = parser.parse_args()

    configure_logging()

    service = PlatformScrapingService()
    if args.dry_run:
        summaries = service.scrape(platform=args.platform, sink=InMemoryScrapeResultSink())
    else:
        from db.session import SessionLocal

        with SessionLocal() as db:
            summaries = service.scrape(db=db, platform=args.platform)

    print(json.dumps([asdict(summary) for summary in summaries], indent=2))
    return 0 if all(summary.success for summary in summaries) else 1


if __name__ == "__main__":
    raise SystemExit(main())
