"""
Error types raised by the platform scraping layer.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from app.scraping.types import FetchAttempt


class ScrapingError(Exception):
    """
    Base class for scraping failures.
    """


class PlatformConfigError(ScrapingError, ValueError):
    """
    Raised when a platform configuration is missing or invalid.
    """


class FetchError(ScrapingError):
    """
    Raised when every fetch path for a URL failed.
    """

    def __init__(self, message: str, *, attempts: Sequence["FetchAttempt"] = ()) -> None:
        super().__init__(message)
        self.attempts = tuple(attempts)


class PlatformNotFoundError(ScrapingError, LookupError):
    """
    Raised when a requested platform has no configuration.
    """
