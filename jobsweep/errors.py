"""
Exception types raised by JobSweep.
"""

from __future__ import annotations


class ScrapeError(Exception):
    """Base class for errors that abort a scrape of one website."""


class BlockedPageError(ScrapeError):
    """The rendered page looks like a block, CAPTCHA or forbidden page."""

    def __init__(self, title: str):
        self.title = title
        super().__init__(f"Blocked by website - Page title: {title}")


class RenderError(ScrapeError):
    """The page could not be loaded or rendered."""


class SelectorError(ValueError):
    """A selector string is malformed or not supported by the document backend."""

    def __init__(self, selector: str, reason: str = ""):
        self.selector = selector
        msg = f"Invalid selector: {selector!r}"
        if reason:
            msg = f"{msg} ({reason})"
        super().__init__(msg)
