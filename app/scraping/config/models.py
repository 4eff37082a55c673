"""
Scraping configuration models.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from urllib.parse import urlparse

from app.scraping.errors import PlatformConfigError

DEFAULT_TIMEOUT_MS = 30000


@dataclass(frozen=True)
class PlatformConfig:
    """
    One monitored rental platform: target URL plus candidate listing selectors.

    ``candidate_selectors`` is ordered; earlier entries win ties.
    """

    name: str
    url: str
    candidate_selectors: tuple[str, ...]
    expected_min_listings: int = 0
    timeout_ms: int = DEFAULT_TIMEOUT_MS
    request_headers: dict[str, str] = field(default_factory=dict)
    wait_for_selector: str | None = None
    enabled: bool = True

    def __post_init__(self) -> None:
        name = self.name.strip() if isinstance(self.name, str) else ""
        if not name:
            raise PlatformConfigError("Platform name must be a non-empty string.")

        parsed = urlparse(self.url)
        if parsed.scheme not in {"http", "https"} or not parsed.netloc:
            raise PlatformConfigError(
                f"Platform '{name}' url must be an absolute http(s) URL, got '{self.url}'."
            )

        selectors = tuple(
            selector.strip()
            for selector in self.candidate_selectors
            if isinstance(selector, str) and selector.strip()
        )
        if not selectors:
            raise PlatformConfigError(
                f"Platform '{name}' requires at least one non-empty candidate selector."
            )
        if self.expected_min_listings < 0:
            raise PlatformConfigError(
                f"Platform '{name}' expected_min_listings must be non-negative."
            )
        if self.timeout_ms <= 0:
            raise PlatformConfigError(f"Platform '{name}' timeout_ms must be positive.")

        object.__setattr__(self, "name", name)
        object.__setattr__(self, "candidate_selectors", selectors)

    @property
    def wait_hint(self) -> str:
        """
        Selector the rendering proxy should wait for before returning HTML.
        """

        return self.wait_for_selector or self.candidate_selectors[0]


@dataclass(frozen=True)
class PlatformScrapingSettings:
    """
    Runtime settings for platform scraping.
    """

    config_path: str
    proxy_api_key: str | None
    proxy_endpoint: str
    default_timeout_ms: int
    proxy_overhead_ms: int
    proxy_wait_ms: int
    confidence_threshold: int
    max_workers: int
    interval_minutes: int
    scheduler_enabled: bool
