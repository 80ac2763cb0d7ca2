"""
Scrape endpoints.

POST /scrape scrapes one website and returns its jobs in the response body.
POST /bulk-scrape scrapes several websites one after another.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from pydantic import BaseModel, ConfigDict, Field

from backend.app.core.config import Settings, get_settings
from jobsweep.errors import ScrapeError
from jobsweep.models import MODE_EXTRACT_ALL, MODE_JOBS, ScrapeOptions, now_utc_iso
from jobsweep.orchestrator import bulk_scrape, scrape_website

logger = logging.getLogger(__name__)

router = APIRouter(tags=["scrape"])


class WebsiteRequest(BaseModel):
    """One website to scrape. Omitted fields fall back to the server defaults."""

    model_config = ConfigDict(populate_by_name=True)

    url: Optional[str] = None
    keywords: List[str] = Field(default_factory=list)
    selectors: Dict[str, Optional[str]] = Field(default_factory=dict)
    limit: Optional[int] = Field(default=None, ge=0)
    wait_time: Optional[int] = Field(default=None, alias="waitTime", ge=0)
    scroll_pages: Optional[int] = Field(default=None, alias="scrollPages", ge=1)
    use_browser: bool = Field(default=True, alias="useBrowser")
    mode: str = Field(default=MODE_JOBS, pattern=f"^({MODE_JOBS}|{MODE_EXTRACT_ALL})$")

    def to_options(self, settings: Settings) -> ScrapeOptions:
        limit = self.limit if self.limit is not None else settings.default_limit
        scroll_pages = self.scroll_pages or settings.default_scroll_pages
        return ScrapeOptions(
            url=self.url or "",
            keywords=[kw for kw in self.keywords if kw and kw.strip()],
            selectors=self.selectors,
            limit=min(limit, settings.max_limit),
            wait_time_ms=self.wait_time if self.wait_time is not None else settings.default_wait_time_ms,
            scroll_pages=min(scroll_pages, settings.max_scroll_pages),
            use_browser=self.use_browser,
            mode=self.mode,
        )


class BulkScrapeRequest(BaseModel):
    websites: List[WebsiteRequest] = Field(default_factory=list)


def get_renderer() -> Any:
    """
    Renderer used by the endpoints.

    None lets the orchestrator open and close a browser per website.
    """
    return None


def _error(status_code: int, **content: Any) -> JSONResponse:
    return JSONResponse(status_code=status_code, content=content)


@router.post("/scrape")
async def scrape(
    body: WebsiteRequest,
    settings: Settings = Depends(get_settings),
    renderer: Any = Depends(get_renderer),
):
    """Scrape one website for job listings."""
    if not body.url:
        return _error(400, error="URL is required")

    options = body.to_options(settings)
    try:
        result = await scrape_website(options, renderer, settings.render_config())
    except ScrapeError as e:
        logger.warning("Scraping error for %s: %s", options.url, e)
        return _error(500, error="Scraping failed", message=str(e), url=options.url)
    except Exception as e:
        logger.exception("Unexpected scraping error for %s", options.url)
        return _error(500, error="Scraping failed", message=str(e), url=options.url)

    payload: Dict[str, Any] = {
        "success": True,
        "url": options.url,
        "keywords": options.keywords,
        "totalJobs": len(result.jobs),
        "scrapedAt": now_utc_iso(),
        "jobs": [job.to_dict() for job in result.jobs],
    }
    if result.samples is not None:
        payload["samples"] = result.samples
    return payload


@router.post("/bulk-scrape")
async def bulk(
    body: BulkScrapeRequest,
    settings: Settings = Depends(get_settings),
    renderer: Any = Depends(get_renderer),
):
    """Scrape several websites sequentially with a randomized pause between them."""
    if not body.websites:
        return _error(400, error="Websites array is required")
    if len(body.websites) > settings.bulk_max_websites:
        return _error(400, error=f"At most {settings.bulk_max_websites} websites per request")
    if any(not w.url for w in body.websites):
        return _error(400, error="Every website needs a URL")

    websites = [w.to_options(settings) for w in body.websites]
    results = await bulk_scrape(
        websites,
        renderer=renderer,
        render_config=settings.render_config(),
        delay_ms=settings.bulk_delay_ms,
    )

    return {
        "success": True,
        "totalWebsites": len(websites),
        "successfulScrapes": sum(1 for r in results if r.success),
        "results": [r.to_dict() for r in results],
    }
