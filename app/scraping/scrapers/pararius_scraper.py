"""
Pararius rental listings scraper.
"""

from __future__ import annotations

from app.scraping.scrapers.platform_scraper import PlatformScraper


class ParariusScraper(PlatformScraper):
    platform_name = "Pararius"
