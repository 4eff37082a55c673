"""
Count a CSS selector on a live page and list better-matching alternatives.
"""

from __future__ import annotations

import argparse
import json

from app.scraping.errors import FetchError
from app.scraping.logging_utils import configure_logging
from app.services.platform_scraping_service import PlatformScrapingService


def main() -> int:
    parser = argparse.ArgumentParser(description="Test a listing selector against a URL.")
    parser.add_argument("url", help="Absolute URL of the listing page.")
    parser.add_argument("selector", help="CSS selector to count.")
    args = parser.parse_args()
    configure_logging()

    try:
        report = PlatformScrapingService().probe_selector(url=args.url, selector=args.selector)
    except FetchError as exc:
        print(json.dumps({"error": str(exc)}, indent=2))
        return 1

    payload = {
        "tested": report.tested,
        "count": report.count,
        "alternatives": [
            {"selector": match.selector, "count": match.count} for match in report.alternatives
        ],
        "best_selector": (
            {"selector": report.best_selector.selector, "count": report.best_selector.count}
            if report.best_selector
            else None
        ),
        "html_length": report.html_length,
        "sample_html": report.sample_html,
        "fetch_path": report.fetch_path.value,
    }
    print(json.dumps(payload, indent=2))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
