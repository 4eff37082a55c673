"""
Page retrieval through the rendering proxy with a direct-request fallback.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping

import requests

from app.scraping.errors import FetchError
from app.scraping.logging_utils import log_event
from app.scraping.types import FetchAttempt, FetchPath, FetchResult

logger = logging.getLogger(__name__)

PROXY_USER_AGENT = "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36"

BROWSER_HEADERS: dict[str, str] = {
    "User-Agent": (
        "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
        "(KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36"
    ),
    "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,image/webp,*/*;q=0.8",
    "Accept-Language": "en-US,en;q=0.5",
    "Accept-Encoding": "gzip, deflate",
    "Connection": "keep-alive",
    "Upgrade-Insecure-Requests": "1",
}


class ContentFetcher:
    """
    Fetches raw HTML, preferring the JavaScript-rendering proxy when configured.

    A failed proxy call is recorded as a failed primary attempt and the direct
    request is tried next. ``FetchError`` is raised only when both paths fail.

    Every ``fetch`` opens its own session from ``session_factory`` and closes
    it before returning, so cookies and pooled connections never carry over
    between invocations or threads.
    """

    def __init__(
        self,
        *,
        session_factory: Callable[[], requests.Session] = requests.Session,
        proxy_api_key: str | None = None,
        proxy_endpoint: str = "https://app.scrapingbee.com/api/v1/",
        proxy_overhead_ms: int = 5000,
        proxy_wait_ms: int = 3000,
    ) -> None:
        self.session_factory = session_factory
        self.proxy_api_key = proxy_api_key
        self.proxy_endpoint = proxy_endpoint
        self.proxy_overhead_ms = proxy_overhead_ms
        self.proxy_wait_ms = proxy_wait_ms

    @property
    def proxy_enabled(self) -> bool:
        return bool(self.proxy_api_key)

    def fetch(
        self,
        url: str,
        *,
        timeout_ms: int,
        request_headers: Mapping[str, str] | None = None,
        wait_for_selector: str | None = None,
    ) -> FetchResult:
        with self.session_factory() as session:
            return self._fetch_with(
                session,
                url,
                timeout_ms=timeout_ms,
                request_headers=request_headers,
                wait_for_selector=wait_for_selector,
            )

    def _fetch_with(
        self,
        session: requests.Session,
        url: str,
        *,
        timeout_ms: int,
        request_headers: Mapping[str, str] | None,
        wait_for_selector: str | None,
    ) -> FetchResult:
        attempts: list[FetchAttempt] = []

        if self.proxy_enabled:
            primary = _primary_attempt(
                lambda: self._fetch_via_proxy(
                    session,
                    url,
                    timeout_ms=timeout_ms,
                    request_headers=request_headers,
                    wait_for_selector=wait_for_selector,
                ),
            )
            attempts.append(primary)
            if primary.ok:
                return FetchResult(html=primary.html or "", path=FetchPath.PRIMARY, attempts=tuple(attempts))
            log_event(
                logger,
                logging.WARNING,
                "fetch_fallback",
                url=url,
                reason=primary.error,
            )
        else:
            log_event(logger, logging.INFO, "fetch_fallback", url=url, reason="proxy_not_configured")

        fallback = _fallback_attempt(
            lambda: self._fetch_direct(session, url, timeout_ms=timeout_ms, request_headers=request_headers),
        )
        attempts.append(fallback)
        if fallback.ok:
            return FetchResult(html=fallback.html or "", path=FetchPath.FALLBACK, attempts=tuple(attempts))

        raise FetchError(fallback.error or f"Failed to fetch {url}", attempts=attempts)

    def _fetch_via_proxy(
        self,
        session: requests.Session,
        url: str,
        *,
        timeout_ms: int,
        request_headers: Mapping[str, str] | None,
        wait_for_selector: str | None,
    ) -> str:
        params: dict[str, str | int] = {
            "api_key": self.proxy_api_key or "",
            "url": url,
            "render_js": "true",
            "wait": self.proxy_wait_ms if wait_for_selector else 0,
            "timeout": timeout_ms,
        }
        if wait_for_selector:
            params["wait_for"] = wait_for_selector

        headers = dict(request_headers) if request_headers else {"User-Agent": PROXY_USER_AGENT}
        response = session.get(
            self.proxy_endpoint,
            params=params,
            headers=headers,
            timeout=(timeout_ms + self.proxy_overhead_ms) / 1000,
        )
        response.raise_for_status()
        return response.text

    def _fetch_direct(
        self,
        session: requests.Session,
        url: str,
        *,
        timeout_ms: int,
        request_headers: Mapping[str, str] | None,
    ) -> str:
        headers = {**BROWSER_HEADERS, **(request_headers or {})}
        response = session.get(
            url,
            headers=headers,
            timeout=timeout_ms / 1000,
            allow_redirects=True,
        )
        response.raise_for_status()
        return response.text


def _primary_attempt(call: Callable[[], str]) -> FetchAttempt:
    # Any proxy failure must still leave the direct request to try.
    try:
        return FetchAttempt(path=FetchPath.PRIMARY, html=call())
    except requests.RequestException as exc:
        return FetchAttempt(path=FetchPath.PRIMARY, error=_describe_error(exc))
    except Exception as exc:  # noqa: BLE001
        return FetchAttempt(path=FetchPath.PRIMARY, error=f"{exc.__class__.__name__}: {exc}")


def _fallback_attempt(call: Callable[[], str]) -> FetchAttempt:
    try:
        return FetchAttempt(path=FetchPath.FALLBACK, html=call())
    except requests.RequestException as exc:
        return FetchAttempt(path=FetchPath.FALLBACK, error=_describe_error(exc))


def _describe_error(exc: requests.RequestException) -> str:
    if isinstance(exc, requests.HTTPError) and exc.response is not None:
        return f"HTTP {exc.response.status_code} for {exc.response.url}"
    if isinstance(exc, requests.Timeout):
        return f"Request timed out: {exc}"
    return str(exc) or exc.__class__.__name__
