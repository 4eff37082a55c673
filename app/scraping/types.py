"""
Shared scraping runtime data models.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any


class FetchPath(str, Enum):
    """
    Retrieval path used for one fetch attempt.
    """

    PRIMARY = "primary"
    FALLBACK = "fallback"


@dataclass(frozen=True)
class FetchAttempt:
    """
    Result of one retrieval path: either the page HTML or the failure reason.
    """

    path: FetchPath
    html: str | None = None
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.html is not None and self.error is None


@dataclass(frozen=True)
class FetchResult:
    """
    Successful fetch with the ordered attempts that led to it.
    """

    html: str
    path: FetchPath
    attempts: tuple[FetchAttempt, ...] = ()


@dataclass(frozen=True)
class SelectorMatch:
    selector: str
    count: int


@dataclass(frozen=True)
class SelectorEvaluation:
    """
    Winning selector plus every count seen before evaluation stopped.
    """

    selector_used: str
    listings_found: int
    matches: tuple[SelectorMatch, ...] = ()
    early_exit: bool = False


def utc_timestamp() -> str:
    return datetime.now(timezone.utc).isoformat()


@dataclass(frozen=True)
class ScrapeOutcome:
    """
    Structured result of one scrape attempt.

    Build instances through ``succeeded`` / ``failed`` so the success and
    failure invariants always hold.
    """

    success: bool
    listings_found: int
    content_hash: str
    selector_used: str
    response_time_ms: int
    error_message: str | None = None
    timestamp: str = field(default_factory=utc_timestamp)
    fetch_path: FetchPath | None = None

    def __post_init__(self) -> None:
        if self.listings_found < 0:
            raise ValueError("listings_found must be non-negative.")
        if self.response_time_ms < 0:
            raise ValueError("response_time_ms must be non-negative.")
        if self.success:
            if self.error_message is not None:
                raise ValueError("Successful outcomes cannot carry an error message.")
        else:
            if self.listings_found != 0 or self.content_hash or self.selector_used:
                raise ValueError("Failed outcomes must have no listings, hash or selector.")
            if not self.error_message:
                raise ValueError("Failed outcomes require an error message.")

    @classmethod
    def succeeded(
        cls,
        *,
        listings_found: int,
        content_hash: str,
        selector_used: str,
        response_time_ms: int,
        fetch_path: FetchPath | None = None,
    ) -> "ScrapeOutcome":
        return cls(
            success=True,
            listings_found=listings_found,
            content_hash=content_hash,
            selector_used=selector_used,
            response_time_ms=response_time_ms,
            fetch_path=fetch_path,
        )

    @classmethod
    def failed(cls, *, error_message: str, response_time_ms: int) -> "ScrapeOutcome":
        return cls(
            success=False,
            listings_found=0,
            content_hash="",
            selector_used="",
            response_time_ms=response_time_ms,
            error_message=error_message or "Unknown error",
        )

    def to_record(self) -> dict[str, Any]:
        """
        Outcome in the shape persisted by result sinks and read by alerting.
        """

        record: dict[str, Any] = {
            "success": self.success,
            "listingsFound": self.listings_found,
            "htmlHash": self.content_hash,
            "responseTime": self.response_time_ms,
            "timestamp": self.timestamp,
        }
        if self.error_message is not None:
            record["error"] = self.error_message
        return record
