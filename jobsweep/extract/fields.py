"""
Per-record field extraction and link resolution.
"""

from __future__ import annotations

import logging
import re
import urllib.parse
from typing import Iterable, Optional

from jobsweep.document import Element
from jobsweep.errors import SelectorError
from jobsweep.extract.selectors import HREF_SELECTOR, LINK_SELECTOR, VALUE_ATTRIBUTES

logger = logging.getLogger(__name__)

_SCHEME_RE = re.compile(r"^[a-zA-Z][a-zA-Z0-9+.\-]*:")


def element_value(el: Element) -> str:
    """title attribute, else aria-label, else trimmed text."""
    for attr in VALUE_ATTRIBUTES:
        value = el.get_attribute(attr)
        if value:
            return value
    return el.text_content.strip()


def extract_field(element: Element, selectors: Iterable[Optional[str]]) -> Optional[str]:
    """
    Try selectors in order inside element; the first non-empty value wins.

    Returns None when no selector produces anything.
    """
    for selector in selectors:
        if not selector:
            continue
        try:
            el = element.select_one(selector)
        except SelectorError as e:
            logger.debug("Field selector skipped: %s", e)
            continue
        if el is None:
            continue
        value = element_value(el)
        if value:
            return value
    return None


def find_link(element: Element) -> Optional[Element]:
    """Anchor inside the record, else an enclosing anchor, else any element with an href."""
    return (
        element.select_one(LINK_SELECTOR)
        or element.closest(LINK_SELECTOR)
        or element.select_one(HREF_SELECTOR)
    )


def absolutize(href: str, base_url: str) -> str:
    """
    Resolve href against base_url.

    Rooted paths keep only the base scheme and host, hrefs with their own
    scheme pass through, and anything else is appended to base_url.
    """
    if href.startswith("/"):
        base = urllib.parse.urlsplit(base_url)
        return f"{base.scheme}://{base.netloc}{href}"
    if _SCHEME_RE.match(href):
        return href
    return f"{base_url.rstrip('/')}/{href}"


def resolve_url(element: Element, base_url: str) -> str:
    link = find_link(element)
    if link is None:
        return ""
    href = link.get_attribute("href")
    if not href:
        return ""
    return absolutize(href, base_url)
