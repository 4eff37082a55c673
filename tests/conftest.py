"""
Shared fixtures for platform scraping tests.

HTTP is never touched: fetchers receive a ``StubSession`` (see
``tests/helpers.py``) whose ``get`` is answered by a per-test handler.
"""

from __future__ import annotations

import pytest

from app.scraping.config.models import PlatformConfig


@pytest.fixture()
def platform_config() -> PlatformConfig:
    return PlatformConfig(
        name="ListA",
        url="https://example.test/listA",
        candidate_selectors=(".foo", ".bar"),
        expected_min_listings=5,
        timeout_ms=2000,
    )
