"""
Funda rental listings scraper.
"""

from __future__ import annotations

from app.scraping.scrapers.platform_scraper import PlatformScraper


class FundaScraper(PlatformScraper):
    platform_name = "Funda"
