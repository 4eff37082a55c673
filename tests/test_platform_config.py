"""
tests/test_platform_config.py

Platform configuration model invariants and the JSON / comma-joined
selector parsing adapter.
"""

from __future__ import annotations

import json
import unittest
from pathlib import Path

import pytest

from app.scraping.config import (
    PlatformConfig,
    load_platform_configs,
    parse_candidate_selectors,
    parse_platform_config,
)
from app.scraping.errors import PlatformConfigError


class TestParseCandidateSelectors(unittest.TestCase):
    def test_splits_trims_and_drops_empties(self) -> None:
        self.assertEqual(
            parse_candidate_selectors(" .a , ,.b,  .c "),
            (".a", ".b", ".c"),
        )

    def test_keeps_commas_inside_brackets_and_quotes(self) -> None:
        raw = '[data-x="a,b"], :is(.one, .two), .three'
        self.assertEqual(
            parse_candidate_selectors(raw),
            ('[data-x="a,b"]', ":is(.one, .two)", ".three"),
        )

    def test_list_input_keeps_order_and_dedupes(self) -> None:
        self.assertEqual(
            parse_candidate_selectors([".b", " .a", ".b", "", 3]),
            (".b", ".a"),
        )

    def test_unsupported_input_is_empty(self) -> None:
        self.assertEqual(parse_candidate_selectors(None), ())


class TestPlatformConfig:
    def test_requires_a_selector(self) -> None:
        with pytest.raises(PlatformConfigError):
            PlatformConfig(name="X", url="https://x.test/", candidate_selectors=("  ",))

    def test_requires_absolute_url(self) -> None:
        with pytest.raises(PlatformConfigError):
            PlatformConfig(name="X", url="/relative", candidate_selectors=(".a",))

    def test_rejects_negative_minimum_and_zero_timeout(self) -> None:
        with pytest.raises(PlatformConfigError):
            PlatformConfig(name="X", url="https://x.test/", candidate_selectors=(".a",), expected_min_listings=-1)
        with pytest.raises(PlatformConfigError):
            PlatformConfig(name="X", url="https://x.test/", candidate_selectors=(".a",), timeout_ms=0)

    def test_defaults(self) -> None:
        config = PlatformConfig(name=" X ", url="https://x.test/", candidate_selectors=(".a", ".b"))
        assert config.name == "X"
        assert config.timeout_ms == 30000
        assert config.request_headers == {}
        assert config.wait_hint == ".a"


class TestParsePlatformConfig:
    def test_stored_shape(self) -> None:
        config = parse_platform_config(
            {
                "name": "Funda",
                "url": "https://www.funda.nl/huur/amsterdam/",
                "selector": '[data-test-id="search-result-item"], .search-result',
                "expectedMin": 10,
                "options": {
                    "waitForSelector": '[data-test-id="search-result-item"]',
                    "timeout": 20000,
                    "headers": {"User-Agent": "ua"},
                },
            }
        )

        assert config.candidate_selectors == ('[data-test-id="search-result-item"]', ".search-result")
        assert config.expected_min_listings == 10
        assert config.timeout_ms == 20000
        assert config.request_headers == {"User-Agent": "ua"}
        assert config.wait_for_selector == '[data-test-id="search-result-item"]'

    def test_snake_case_and_defaults(self) -> None:
        config = parse_platform_config(
            {"name": "Kamernet", "url": "https://kamernet.nl/", "candidate_selectors": [".room-card"], "status": "paused"},
            default_timeout_ms=12000,
        )

        assert config.timeout_ms == 12000
        assert config.enabled is False

    def test_missing_selector_raises(self) -> None:
        with pytest.raises(PlatformConfigError):
            parse_platform_config({"name": "X", "url": "https://x.test/"})


class TestLoadPlatformConfigs:
    def test_loads_shipped_file(self) -> None:
        path = Path(__file__).resolve().parents[1] / "app" / "scraping" / "config" / "platforms.json"

        configs = load_platform_configs(config_path=str(path))

        assert [config.name for config in configs] == ["Funda", "Pararius", "Kamernet"]
        assert all(config.candidate_selectors for config in configs)

    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(FileNotFoundError):
            load_platform_configs(config_path=str(tmp_path / "nope.json"))

    def test_duplicate_names_rejected(self, tmp_path: Path) -> None:
        entry = {"name": "A", "url": "https://a.test/", "selector": ".a"}
        path = tmp_path / "platforms.json"
        path.write_text(json.dumps({"platforms": [entry, {**entry, "name": "a"}]}), encoding="utf-8")

        with pytest.raises(PlatformConfigError):
            load_platform_configs(config_path=str(path))

    def test_malformed_json_is_a_config_error(self, tmp_path: Path) -> None:
        path = tmp_path / "platforms.json"
        path.write_text('{"platforms": [', encoding="utf-8")

        with pytest.raises(PlatformConfigError, match="Invalid JSON"):
            load_platform_configs(config_path=str(path))
