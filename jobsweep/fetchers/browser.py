"""
Playwright-based renderer for JS-rendered job pages.

Loads the page in headless Chromium with a desktop fingerprint, waits for the
content to settle, optionally scrolls to trigger lazy loading, and hands back
the rendered HTML together with the page title.
"""

from __future__ import annotations

import asyncio
import logging
import os
import random
import time
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple

from jobsweep.fetchers.http import FetchResult

logger = logging.getLogger(__name__)


DEFAULT_USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36"
)

DEFAULT_LAUNCH_ARGS = [
    "--no-sandbox",
    "--disable-setuid-sandbox",
    "--disable-dev-shm-usage",
    "--disable-gpu",
    "--disable-software-rasterizer",
    "--disable-dev-tools",
    "--no-first-run",
    "--no-default-browser-check",
    "--no-pings",
    "--single-process",
]

DEFAULT_HEADERS = {
    "Accept-Language": "en-US,en;q=0.9",
    "Accept-Encoding": "gzip, deflate, br",
    "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,image/webp,*/*;q=0.8",
    "Connection": "keep-alive",
    "Upgrade-Insecure-Requests": "1",
    "Sec-Fetch-Dest": "document",
    "Sec-Fetch-Mode": "navigate",
    "Sec-Fetch-Site": "none",
    "Sec-Fetch-User": "?1",
}

SCROLL_SCRIPT = "window.scrollTo(0, document.body.scrollHeight)"


def default_executable_path() -> Optional[str]:
    """Chromium binary from the environment, or None for Playwright's bundled one."""
    return os.environ.get("JOBSWEEP_CHROMIUM_PATH") or os.environ.get("PUPPETEER_EXECUTABLE_PATH") or None


async def random_delay(min_ms: int, max_ms: int) -> None:
    """Sleep for a random duration between min_ms and max_ms."""
    await asyncio.sleep(random.randint(min_ms, max(min_ms, max_ms)) / 1000)


@dataclass
class RenderConfig:
    """Browser configuration."""
    headless: bool = True
    executable_path: Optional[str] = field(default_factory=default_executable_path)
    launch_timeout_ms: int = 60000
    navigation_timeout_ms: int = 45000
    viewport: Tuple[int, int] = (1366, 768)
    user_agent: str = DEFAULT_USER_AGENT
    extra_headers: Dict[str, str] = field(default_factory=lambda: dict(DEFAULT_HEADERS))
    launch_args: List[str] = field(default_factory=lambda: list(DEFAULT_LAUNCH_ARGS))
    settle_jitter_ms: int = 2000  # added on top of the caller's wait time
    scroll_delay_ms: Tuple[int, int] = (2000, 4000)


class BrowserRenderer:
    """
    Renders pages in headless Chromium.

    One instance owns one browser; use it as an async context manager so the
    browser is always closed.
    """

    def __init__(self, config: Optional[RenderConfig] = None):
        self.config = config or RenderConfig()
        self._playwright = None
        self._browser = None
        self._context = None
        self._available: Optional[bool] = None

    async def __aenter__(self) -> "BrowserRenderer":
        await self.start()
        return self

    async def __aexit__(self, *args) -> None:
        await self.close()

    @property
    def is_available(self) -> bool:
        """Check if Playwright is available."""
        if self._available is None:
            try:
                from playwright.async_api import async_playwright  # noqa
                self._available = True
            except ImportError:
                self._available = False
        return self._available

    async def start(self) -> bool:
        """
        Launch the browser.
        Returns True if successful, False if Playwright is missing or the launch failed.
        """
        if not self.is_available:
            return False

        if self._browser is not None:
            return True

        try:
            from playwright.async_api import async_playwright
            from playwright_stealth import Stealth

            logger.info("Launching browser...")
            self._playwright = await async_playwright().start()
            self._browser = await self._playwright.chromium.launch(
                headless=self.config.headless,
                executable_path=self.config.executable_path,
                args=self.config.launch_args,
                timeout=self.config.launch_timeout_ms,
            )
            width, height = self.config.viewport
            self._context = await self._browser.new_context(
                user_agent=self.config.user_agent,
                viewport={"width": width, "height": height},
                extra_http_headers=self.config.extra_headers,
                java_script_enabled=True,
            )
            # Patches navigator, plugins, permissions and WebGL before any page script runs
            await Stealth().apply_stealth_async(self._context)
            logger.info("Browser launched successfully")
            return True

        except Exception as e:
            logger.warning("Failed to start browser: %s", e)
            await self.close()
            return False

    async def close(self) -> None:
        """Close the browser."""
        if self._browser is not None:
            logger.info("Closing browser...")
        try:
            if self._context:
                await self._context.close()
            if self._browser:
                await self._browser.close()
            if self._playwright:
                await self._playwright.stop()
        except Exception as e:
            logger.debug("Error while closing browser: %s", e)
        finally:
            self._context = None
            self._browser = None
            self._playwright = None

    async def render(
        self,
        url: str,
        wait_time_ms: int = 3000,
        scroll_pages: int = 1,
    ) -> FetchResult:
        """
        Load url, wait for content, scroll scroll_pages - 1 times, return the rendered HTML.
        """
        if not self.is_available:
            return FetchResult(
                url=url,
                error="Playwright not installed. Install with: pip install playwright && playwright install chromium",
            )

        if self._browser is None:
            started = await self.start()
            if not started:
                return FetchResult(url=url, error="Failed to start browser")

        start_time = time.time()
        page = None

        try:
            page = await self._context.new_page()

            logger.info("Navigating to: %s", url)
            response = await page.goto(
                url,
                timeout=self.config.navigation_timeout_ms,
                wait_until="domcontentloaded",
            )
            status = response.status if response else 0

            logger.info("Page loaded, waiting for content...")
            await random_delay(wait_time_ms, wait_time_ms + self.config.settle_jitter_ms)

            title = await page.title()
            logger.info("Page title: %s", title)

            # The first page is already on screen
            for i in range(1, scroll_pages):
                logger.info("Scrolling page %d...", i + 1)
                await page.evaluate(SCROLL_SCRIPT)
                await random_delay(*self.config.scroll_delay_ms)

            content = await page.content()

            return FetchResult(
                url=url,
                status=status,
                text=content,
                title=title,
                content_type="text/html",
                elapsed_ms=(time.time() - start_time) * 1000,
            )

        except Exception as e:
            return FetchResult(
                url=url,
                error=f"Browser render failed: {str(e)}",
                elapsed_ms=(time.time() - start_time) * 1000,
            )

        finally:
            if page:
                try:
                    await page.close()
                except Exception as e:
                    logger.debug("Error while closing page: %s", e)
