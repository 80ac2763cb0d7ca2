"""
Main orchestrator for JobSweep scraping runs.

Ties together rendering, the blocked-page check and the extraction engine:
scrape_website() handles one site, bulk_scrape() runs several one after the
other with a randomized pause in between.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, List, Optional, Sequence, Tuple

from jobsweep.document import SoupDocument
from jobsweep.engine import check_not_blocked, extract_jobs
from jobsweep.errors import RenderError, ScrapeError
from jobsweep.extract.discovery import sample_elements
from jobsweep.fetchers.browser import BrowserRenderer, RenderConfig, random_delay
from jobsweep.fetchers.http import FetchResult, StaticRenderer
from jobsweep.models import MODE_EXTRACT_ALL, ScrapeOptions, SiteResult

logger = logging.getLogger(__name__)

DEFAULT_BULK_DELAY_MS = (2000, 5000)


def _default_renderer(options: ScrapeOptions, render_config: Optional[RenderConfig]):
    if options.use_browser:
        return BrowserRenderer(render_config)
    return StaticRenderer()


async def _render(options: ScrapeOptions, renderer, render_config: Optional[RenderConfig]) -> FetchResult:
    if renderer is not None:
        return await renderer.render(options.url, options.wait_time_ms, options.scroll_pages)
    # One browser per site, closed before returning
    async with _default_renderer(options, render_config) as own:
        return await own.render(options.url, options.wait_time_ms, options.scroll_pages)


async def scrape_website(
    options: ScrapeOptions,
    renderer: Any = None,
    render_config: Optional[RenderConfig] = None,
) -> SiteResult:
    """
    Render one website and extract its job listings.

    `renderer` is anything with an async render(url, wait_time_ms, scroll_pages)
    returning a FetchResult; when omitted a browser (or a plain HTTP fetcher when
    options.use_browser is False) is created and closed for this call.

    Raises:
        RenderError: the page could not be loaded
        BlockedPageError: the page title looks like a block/CAPTCHA page
    """
    logger.info(
        "Starting scrape for: %s with keywords: %s",
        options.url, ", ".join(options.keywords),
    )

    result = await _render(options, renderer, render_config)
    if result.error:
        raise RenderError(result.error)

    document = SoupDocument(result.text)
    check_not_blocked(result.title or document.title)

    if options.mode == MODE_EXTRACT_ALL:
        samples = sample_elements(document)
        logger.info("Sampled %d selectors from %s", len(samples), options.url)
        return SiteResult(url=options.url, success=True, keywords=options.keywords, samples=samples)

    jobs = extract_jobs(
        document,
        config=options.selectors,
        keywords=options.keywords,
        limit=options.limit,
        base_url=options.url,
    )
    logger.info("Successfully scraped %d jobs from %s", len(jobs), options.url)
    return SiteResult(url=options.url, success=True, keywords=options.keywords, jobs=jobs)


async def bulk_scrape(
    websites: Sequence[ScrapeOptions],
    renderer: Any = None,
    render_config: Optional[RenderConfig] = None,
    delay_ms: Tuple[int, int] = DEFAULT_BULK_DELAY_MS,
    log_fn: Optional[Callable[[str], None]] = None,
) -> List[SiteResult]:
    """
    Scrape websites strictly one at a time.

    A failing site is recorded as an unsuccessful SiteResult and the run
    continues with the next one.
    """
    log = log_fn or (lambda x: None)
    logger.info("Starting bulk scrape for %d websites", len(websites))

    results: List[SiteResult] = []
    for i, options in enumerate(websites):
        if i > 0:
            await random_delay(*delay_ms)

        log(f"Scraping: {options.url}")
        try:
            results.append(await scrape_website(options, renderer, render_config))
        except ScrapeError as e:
            logger.warning("Error scraping %s: %s", options.url, e)
            results.append(SiteResult(url=options.url, success=False, error=str(e)))
        except Exception as e:
            logger.exception("Unexpected error scraping %s", options.url)
            results.append(SiteResult(url=options.url, success=False, error=str(e) or type(e).__name__))

    ok = sum(1 for r in results if r.success)
    log(f"Bulk scrape finished: {ok}/{len(results)} websites succeeded")
    return results
