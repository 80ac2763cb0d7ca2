"""
Plain HTTP rendering for career pages that serve their listings in the initial HTML.

StaticRenderer has the same render() signature as BrowserRenderer, so the
orchestrator can use either one.
"""

from __future__ import annotations

import asyncio
import logging
import time
from dataclasses import dataclass
from typing import Dict, Optional, Tuple, Union

import aiohttp

logger = logging.getLogger(__name__)

# Statuses worth another attempt; anything else >= 400 fails immediately
RETRY_STATUSES = frozenset({429, 500, 502, 503, 504})


@dataclass
class FetchResult:
    """Rendered page handed to the extraction engine. `error` is set when loading failed."""
    url: str
    status: int = 0
    text: str = ""
    title: str = ""
    content_type: str = ""
    error: str = ""
    elapsed_ms: float = 0

    @property
    def is_html(self) -> bool:
        ct = self.content_type.lower()
        return not ct or "html" in ct


class HttpFetcher:
    """
    aiohttp GET with up to `max_retries` attempts.

    Timeouts, connection errors, 429 and 5xx are retried with exponential
    backoff (429 honours a numeric Retry-After). Other 4xx are final.
    """

    USER_AGENT = (
        "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
        "(KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36"
    )

    def __init__(self, timeout_s: int = 30, max_retries: int = 3, base_delay_ms: int = 1000):
        self.timeout_s = timeout_s
        self.max_retries = max(1, max_retries)
        self.base_delay_ms = base_delay_ms
        self._session: Optional[aiohttp.ClientSession] = None

    async def __aenter__(self) -> "HttpFetcher":
        await self.start()
        return self

    async def __aexit__(self, *args) -> None:
        await self.close()

    async def start(self) -> None:
        if self._session is not None and not self._session.closed:
            return
        self._session = aiohttp.ClientSession(
            headers={
                "User-Agent": self.USER_AGENT,
                "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8",
                "Accept-Language": "en-US,en;q=0.9",
            },
            timeout=aiohttp.ClientTimeout(total=self.timeout_s),
        )

    async def close(self) -> None:
        if self._session is not None and not self._session.closed:
            await self._session.close()
        self._session = None

    def backoff_ms(self, attempt: int) -> int:
        return self.base_delay_ms * (2 ** attempt)

    def retry_after_ms(self, header: str, attempt: int) -> int:
        if header and header.strip().isdigit():
            return int(header.strip()) * 1000
        return self.backoff_ms(attempt)

    async def _attempt(self, url: str, attempt: int, headers: Optional[Dict[str, str]]) -> Union[FetchResult, Tuple[int, str, int]]:
        """One GET. Returns a final FetchResult, or (status, reason, delay_ms) to retry."""
        try:
            async with self._session.get(url, headers=headers, allow_redirects=True) as resp:
                if resp.status in RETRY_STATUSES:
                    delay = (
                        self.retry_after_ms(resp.headers.get("Retry-After", ""), attempt)
                        if resp.status == 429 else self.backoff_ms(attempt)
                    )
                    return resp.status, f"HTTP {resp.status}", delay
                if resp.status >= 400:
                    return FetchResult(url=url, status=resp.status, error=f"HTTP {resp.status}")
                return FetchResult(
                    url=str(resp.url),
                    status=resp.status,
                    text=await resp.text(errors="replace"),
                    content_type=resp.headers.get("Content-Type", ""),
                )
        except asyncio.TimeoutError:
            return 0, "Timeout", self.backoff_ms(attempt)
        except aiohttp.ClientError as e:
            return 0, str(e) or type(e).__name__, self.backoff_ms(attempt)

    async def fetch(self, url: str, headers: Optional[Dict[str, str]] = None) -> FetchResult:
        await self.start()
        started = time.monotonic()
        status, reason = 0, ""

        for attempt in range(self.max_retries):
            outcome = await self._attempt(url, attempt, headers)
            if isinstance(outcome, FetchResult):
                outcome.elapsed_ms = (time.monotonic() - started) * 1000
                return outcome
            status, reason, delay = outcome
            if attempt + 1 < self.max_retries:
                logger.warning("%s: %s, retrying in %dms", url, reason, delay)
                await asyncio.sleep(delay / 1000)

        return FetchResult(
            url=url,
            status=status,
            error=f"{reason or 'Request failed'} after {self.max_retries} attempts",
            elapsed_ms=(time.monotonic() - started) * 1000,
        )


class StaticRenderer:
    """
    Renderer for pages that need no JavaScript.

    Wait time and scrolling have no meaning without a browser and are ignored.
    """

    def __init__(self, fetcher: Optional[HttpFetcher] = None):
        self.fetcher = fetcher or HttpFetcher()

    async def __aenter__(self) -> "StaticRenderer":
        await self.fetcher.start()
        return self

    async def __aexit__(self, *args) -> None:
        await self.fetcher.close()

    async def render(self, url: str, wait_time_ms: int = 0, scroll_pages: int = 1) -> FetchResult:
        logger.info("Fetching: %s", url)
        result = await self.fetcher.fetch(url)
        if not result.error and not result.is_html:
            result.error = f"Unsupported content type: {result.content_type}"
        return result
