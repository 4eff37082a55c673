"""
tests/test_selector_probe.py
"""

from __future__ import annotations

from app.scraping.diagnostics import ALTERNATIVE_SELECTORS, SelectorProbe
from app.scraping.fetcher import ContentFetcher
from tests.helpers import StubSession, listing_page, make_response


def _probe(html: str, **kwargs) -> SelectorProbe:
    session = StubSession(lambda url, _: make_response(url, body=html))
    return SelectorProbe(fetcher=ContentFetcher(session_factory=session), **kwargs)


def test_no_alternative_matches_means_no_best_selector() -> None:
    report = _probe(listing_page(unrelated=3)).probe(url="https://p.test/", selector=".unrelated")

    assert report.count == 3
    assert report.best_selector is None
    assert len(report.alternatives) == len(ALTERNATIVE_SELECTORS)
    assert report.html_length == len(listing_page(unrelated=3))


def test_ties_keep_declared_order() -> None:
    probe = _probe(listing_page(a=2, b=2, c=5), alternatives=(".a", ".b", ".c", ".a"))

    report = probe.probe(url="https://p.test/", selector=".missing")

    assert [match.selector for match in report.alternatives] == [".c", ".a", ".b"]
    assert report.best_selector is not None and report.best_selector.selector == ".c"
    assert report.count == 0
    assert report.sample_html is None


def test_sample_is_truncated() -> None:
    html = f'<div class="big">{"x" * 500}</div>'

    report = _probe(html).probe(url="https://p.test/", selector=".big")

    assert report.sample_html == "x" * 200
