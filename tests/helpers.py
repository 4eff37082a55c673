"""
Test doubles for HTTP and time used across the scraping tests.
"""

from __future__ import annotations

import threading
from collections.abc import Callable
from typing import Any

import requests

Handler = Callable[[str, dict[str, Any]], "requests.Response | Exception"]


def make_response(url: str, *, status_code: int = 200, body: str = "") -> requests.Response:
    response = requests.Response()
    response.status_code = status_code
    response._content = body.encode("utf-8")
    response.encoding = "utf-8"
    response.url = url
    return response


def listing_page(**counts: int) -> str:
    """
    HTML with ``counts[name]`` ``<div class="name">`` elements per class.
    """

    items = "".join(
        f'<div class="{name}">{name} {index}</div>'
        for name, count in counts.items()
        for index in range(count)
    )
    return f"<html><body><main>{items}</main></body></html>"


class StubSession:
    """
    Minimal stand-in for ``requests.Session`` recording every ``get`` call.

    Call the instance to use it as a ``session_factory``; it counts how many
    sessions were opened and closed.
    """

    def __init__(self, handler: Handler) -> None:
        self._handler = handler
        self.calls: list[tuple[str, dict[str, Any]]] = []
        self.opened = 0
        self.closed = 0
        self._lock = threading.Lock()

    def __call__(self) -> "StubSession":
        with self._lock:
            self.opened += 1
        return self

    def __enter__(self) -> "StubSession":
        return self

    def __exit__(self, *exc_info: object) -> None:
        with self._lock:
            self.closed += 1

    def get(self, url: str, **kwargs: Any) -> requests.Response:
        self.calls.append((url, kwargs))
        result = self._handler(url, kwargs)
        if isinstance(result, Exception):
            raise result
        return result


class FakeClock:
    """
    Monotonic clock advancing by ``step`` seconds on every read.
    """

    def __init__(self, step: float = 0.05) -> None:
        self._now = 100.0
        self._step = step

    def __call__(self) -> float:
        current = self._now
        self._now += self._step
        return current
