"""
Scraper subclass exports.
"""

from app.scraping.scrapers.funda_scraper import FundaScraper
from app.scraping.scrapers.kamernet_scraper import KamernetScraper
from app.scraping.scrapers.pararius_scraper import ParariusScraper
from app.scraping.scrapers.platform_scraper import PlatformScraper

__all__ = ["FundaScraper", "KamernetScraper", "ParariusScraper", "PlatformScraper"]
