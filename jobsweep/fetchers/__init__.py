"""
Fetcher layer for JobSweep.

Provides:
- BrowserRenderer: headless Chromium via Playwright, with a desktop fingerprint,
  settle wait and scrolling
- HttpFetcher: plain aiohttp GET with retries and exponential backoff for
  server-rendered pages
"""

from jobsweep.fetchers.http import HttpFetcher, FetchResult, StaticRenderer
from jobsweep.fetchers.browser import BrowserRenderer, RenderConfig, random_delay

__all__ = ["HttpFetcher", "FetchResult", "StaticRenderer", "BrowserRenderer", "RenderConfig", "random_delay"]
