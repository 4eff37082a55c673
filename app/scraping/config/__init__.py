"""
Config helpers for platform scraping.
"""

from app.scraping.config.loader import (
    get_platform_scraping_settings,
    load_platform_configs,
    parse_candidate_selectors,
    parse_platform_config,
)
from app.scraping.config.models import PlatformConfig, PlatformScrapingSettings

__all__ = [
    "PlatformConfig",
    "PlatformScrapingSettings",
    "get_platform_scraping_settings",
    "load_platform_configs",
    "parse_candidate_selectors",
    "parse_platform_config",
]
