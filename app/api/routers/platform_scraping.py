"""
app/api/routers/platform_scraping.py

Rental platform scraping and selector diagnostics endpoints.
"""

from __future__ import annotations

from dataclasses import asdict

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from app.domain.platform_scraping import PlatformScrapeSummary
from app.schemas.platform_scraping import (
    PlatformConfigResponse,
    PlatformScrapeSummaryResponse,
    ScrapeBatchResponse,
    SelectorCountResponse,
    SelectorTestRequest,
    SelectorTestResponse,
)
from app.scraping.errors import FetchError, PlatformConfigError, PlatformNotFoundError
from app.services.platform_scraping_service import (
    PlatformScrapingService,
    get_platform_scraping_service,
)
from db.session import get_db

router = APIRouter(tags=["platform-scraping"])


@router.get("/platforms", response_model=list[PlatformConfigResponse])
def list_platforms(
    scraping_service: PlatformScrapingService = Depends(get_platform_scraping_service),
) -> list[PlatformConfigResponse]:
    try:
        configs = scraping_service.list_platforms()
    except (PlatformConfigError, FileNotFoundError) as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc

    return [
        PlatformConfigResponse(
            name=config.name,
            url=config.url,
            candidate_selectors=list(config.candidate_selectors),
            expected_min_listings=config.expected_min_listings,
            timeout_ms=config.timeout_ms,
            wait_for_selector=config.wait_for_selector,
            enabled=config.enabled,
        )
        for config in configs
    ]


@router.post("/scrape/all", response_model=ScrapeBatchResponse)
def scrape_all_platforms(
    db: Session = Depends(get_db),
    scraping_service: PlatformScrapingService = Depends(get_platform_scraping_service),
) -> ScrapeBatchResponse:
    """
    Scrape every enabled platform and persist the outcomes.
    """

    summaries = _run_scrape(scraping_service, db=db, platform=None)
    results = [_to_response(summary) for summary in summaries]
    return ScrapeBatchResponse(
        total=len(results),
        successful=sum(1 for result in results if result.success),
        results=results,
    )


@router.post("/scrape/{platform}", response_model=PlatformScrapeSummaryResponse)
def scrape_platform(
    platform: str,
    db: Session = Depends(get_db),
    scraping_service: PlatformScrapingService = Depends(get_platform_scraping_service),
) -> PlatformScrapeSummaryResponse:
    summaries = _run_scrape(scraping_service, db=db, platform=platform)
    return _to_response(summaries[0])


@router.post("/test-selector", response_model=SelectorTestResponse)
def run_selector_test(
    payload: SelectorTestRequest,
    scraping_service: PlatformScrapingService = Depends(get_platform_scraping_service),
) -> SelectorTestResponse:
    """
    Count a selector on a live page and suggest better-matching alternatives.
    """

    try:
        report = scraping_service.probe_selector(url=payload.url, selector=payload.selector)
    except FetchError as exc:
        raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=str(exc)) from exc

    return SelectorTestResponse(
        tested=report.tested,
        count=report.count,
        alternatives=[
            SelectorCountResponse(selector=match.selector, count=match.count)
            for match in report.alternatives
        ],
        best_selector=(
            SelectorCountResponse(selector=report.best_selector.selector, count=report.best_selector.count)
            if report.best_selector
            else None
        ),
        html_length=report.html_length,
        sample_html=report.sample_html,
        fetch_path=report.fetch_path.value,
    )


def _run_scrape(
    scraping_service: PlatformScrapingService,
    *,
    db: Session,
    platform: str | None,
) -> list[PlatformScrapeSummary]:
    try:
        return scraping_service.scrape(db=db, platform=platform)
    except PlatformNotFoundError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc
    except (PlatformConfigError, FileNotFoundError, ValueError) as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc


def _to_response(summary: PlatformScrapeSummary) -> PlatformScrapeSummaryResponse:
    return PlatformScrapeSummaryResponse(**asdict(summary))
