"""
Environment + JSON config loader for platform scraping.
"""

from __future__ import annotations

import json
import os
from functools import lru_cache
from pathlib import Path

from app.scraping.config.models import DEFAULT_TIMEOUT_MS, PlatformConfig, PlatformScrapingSettings
from app.scraping.errors import PlatformConfigError
from db.config import load_env_files

DEFAULT_PROXY_ENDPOINT = "https://app.scrapingbee.com/api/v1/"

_OPENING = {"[": "]", "(": ")"}


def _get_bool_env(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "on"}


def _get_int_env(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def _get_str_env(name: str, default: str) -> str:
    raw = os.getenv(name)
    if raw is None:
        return default
    stripped = raw.strip()
    return stripped if stripped else default


def _get_optional_str_env(name: str) -> str | None:
    raw = os.getenv(name)
    if raw is None:
        return None
    stripped = raw.strip()
    return stripped or None


def _project_root() -> Path:
    return Path(__file__).resolve().parents[3]


def _resolve_config_path(raw_path: str) -> Path:
    candidate = Path(raw_path)
    if candidate.is_absolute():
        return candidate
    return (_project_root() / candidate).resolve()


@lru_cache(maxsize=1)
def get_platform_scraping_settings() -> PlatformScrapingSettings:
    """
    Return cached scraper settings from environment variables.
    """

    load_env_files()
    config_path = _get_str_env(
        "PLATFORM_SCRAPE_CONFIG_PATH",
        "app/scraping/config/platforms.json",
    )
    return PlatformScrapingSettings(
        config_path=str(_resolve_config_path(config_path)),
        proxy_api_key=_get_optional_str_env("SCRAPINGBEE_API_KEY"),
        proxy_endpoint=_get_str_env("SCRAPINGBEE_ENDPOINT", DEFAULT_PROXY_ENDPOINT),
        default_timeout_ms=max(
            1,
            _get_int_env("PLATFORM_SCRAPE_TIMEOUT_MS", DEFAULT_TIMEOUT_MS),
        ),
        proxy_overhead_ms=max(
            0,
            _get_int_env("PLATFORM_SCRAPE_PROXY_OVERHEAD_MS", 5000),
        ),
        proxy_wait_ms=max(
            0,
            _get_int_env("PLATFORM_SCRAPE_PROXY_WAIT_MS", 3000),
        ),
        confidence_threshold=max(
            1,
            _get_int_env("PLATFORM_SCRAPE_CONFIDENCE_THRESHOLD", 10),
        ),
        max_workers=max(
            1,
            _get_int_env("PLATFORM_SCRAPE_MAX_WORKERS", 4),
        ),
        interval_minutes=max(
            1,
            _get_int_env("PLATFORM_SCRAPE_INTERVAL_MINUTES", 60),
        ),
        scheduler_enabled=_get_bool_env("PLATFORM_SCRAPE_SCHEDULER_ENABLED", True),
    )


def parse_candidate_selectors(raw: object) -> tuple[str, ...]:
    """
    Turn a stored selector field into an ordered tuple of candidates.

    Accepts either a list of selectors or the comma-joined string form. Commas
    inside brackets, parentheses or quotes do not split, so selectors such as
    ``:is(.a, .b)`` or ``[data-x="a,b"]`` survive intact. Entries are trimmed,
    empties dropped and duplicates removed while keeping first-seen order.
    """

    if isinstance(raw, str):
        pieces = _split_selector_list(raw)
    elif isinstance(raw, (list, tuple)):
        pieces = [item for item in raw if isinstance(item, str)]
    else:
        pieces = []

    ordered: list[str] = []
    seen: set[str] = set()
    for piece in pieces:
        selector = piece.strip()
        if not selector or selector in seen:
            continue
        seen.add(selector)
        ordered.append(selector)
    return tuple(ordered)


def _split_selector_list(value: str) -> list[str]:
    parts: list[str] = []
    current: list[str] = []
    closers: list[str] = []
    quote: str | None = None

    for char in value:
        if quote is not None:
            current.append(char)
            if char == quote:
                quote = None
            continue
        if char in {"'", '"'}:
            quote = char
        elif char in _OPENING:
            closers.append(_OPENING[char])
        elif closers and char == closers[-1]:
            closers.pop()
        elif char == "," and not closers:
            parts.append("".join(current))
            current = []
            continue
        current.append(char)

    parts.append("".join(current))
    return parts


def parse_platform_config(entry: dict[str, object], *, default_timeout_ms: int = DEFAULT_TIMEOUT_MS) -> PlatformConfig:
    """
    Build a ``PlatformConfig`` from the stored configuration shape.

    Understands ``{name, url, selector, expectedMin, options: {waitForSelector,
    timeout, headers}}`` as well as snake_case spellings.
    """

    options = entry.get("options")
    if not isinstance(options, dict):
        options = {}

    raw_selectors = entry.get("selector", entry.get("candidate_selectors", entry.get("selectors")))
    timeout = _optional_int(options.get("timeout", entry.get("timeout_ms")))
    expected_min = _optional_int(
        entry.get("expectedMin", entry.get("expected_min_listings", entry.get("expectedMinListings")))
    )
    headers = options.get("headers", entry.get("headers", {}))
    wait_for = options.get("waitForSelector", entry.get("wait_for_selector"))

    try:
        return PlatformConfig(
            name=str(entry.get("name", "")),
            url=str(entry.get("url", "")).strip(),
            candidate_selectors=parse_candidate_selectors(raw_selectors),
            expected_min_listings=expected_min if expected_min is not None else 0,
            timeout_ms=timeout if timeout is not None else default_timeout_ms,
            request_headers=_normalize_headers(headers),
            wait_for_selector=_optional_str(wait_for),
            enabled=_optional_bool(entry.get("enabled", entry.get("status")), True),
        )
    except PlatformConfigError:
        raise
    except (TypeError, ValueError) as exc:
        raise PlatformConfigError(f"Invalid platform config entry: {exc}") from exc


def load_platform_configs(*, config_path: str, default_timeout_ms: int = DEFAULT_TIMEOUT_MS) -> list[PlatformConfig]:
    """
    Load platform configurations from a JSON file.
    """

    path = _resolve_config_path(config_path)
    if not path.exists():
        raise FileNotFoundError(f"Platform config file not found: {path}")

    try:
        raw_data = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        raise PlatformConfigError(f"Invalid JSON in platform config {path}: {exc}") from exc
    platforms = raw_data.get("platforms", []) if isinstance(raw_data, dict) else raw_data
    if not isinstance(platforms, list):
        raise PlatformConfigError("Invalid platform config: 'platforms' must be a list.")

    parsed: list[PlatformConfig] = []
    seen: set[str] = set()
    for entry in platforms:
        if not isinstance(entry, dict):
            continue
        config = parse_platform_config(entry, default_timeout_ms=default_timeout_ms)
        key = config.name.lower()
        if key in seen:
            raise PlatformConfigError(f"Duplicate platform name '{config.name}'.")
        seen.add(key)
        parsed.append(config)

    return parsed


def _normalize_headers(headers: object) -> dict[str, str]:
    if not isinstance(headers, dict):
        return {}

    normalized: dict[str, str] = {}
    for key, value in headers.items():
        if not isinstance(key, str) or not isinstance(value, str):
            continue
        if key.strip() and value.strip():
            normalized[key.strip()] = value.strip()
    return normalized


def _optional_str(value: object) -> str | None:
    if value is None:
        return None
    if not isinstance(value, str):
        return None
    stripped = value.strip()
    return stripped or None


def _optional_int(value: object) -> int | None:
    if value is None or isinstance(value, bool):
        return None
    try:
        return int(value)
    except (TypeError, ValueError):
        return None


def _optional_bool(value: object, default: bool) -> bool:
    if value is None:
        return default
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        normalized = value.strip().lower()
        if normalized in {"1", "true", "yes", "on", "active"}:
            return True
        if normalized in {"0", "false", "no", "off", "paused", "error"}:
            return False
    return default
