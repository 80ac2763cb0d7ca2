"""
Candidate discovery: find the repeating elements that hold one job each.

Selectors are tried from most to least specific. The first selector whose
matches survive the content filter provides the whole candidate set.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Iterable, List, Optional

from jobsweep.document import Document, Element
from jobsweep.errors import SelectorError
from jobsweep.extract.selectors import (
    MIN_CONTENT_LENGTH,
    RELEVANCE_PATTERN,
    SAMPLE_MAX_MATCHES,
    SAMPLE_MAX_PER_SELECTOR,
    SAMPLE_SELECTORS,
    SAMPLE_TEXT_LEN,
    container_selectors,
)
from jobsweep.models import SelectorConfig, normalize_text

logger = logging.getLogger(__name__)


def looks_like_job(element: Element) -> bool:
    """Content filter: enough text, and at least one job-related word in it."""
    text = element.text_content
    return len(text) >= MIN_CONTENT_LENGTH and RELEVANCE_PATTERN.search(text) is not None


def discover(
    document: Document,
    config: Optional[SelectorConfig] = None,
    limit: Optional[int] = None,
) -> List[Element]:
    """
    Return the candidate record elements of a document, in document order.

    An invalid selector only skips that step of the cascade. If nothing
    survives the filter the result is empty.
    """
    config = config or SelectorConfig()
    candidates: List[Element] = []

    for selector in container_selectors(config.container):
        try:
            found = document.select(selector)
        except SelectorError as e:
            logger.warning("Selector failed: %s (%s)", selector, e)
            continue

        if not found:
            continue
        logger.debug("Found %d elements with selector: %s", len(found), selector)

        filtered = [el for el in found if looks_like_job(el)]
        if filtered:
            logger.info("Using selector %s: %d candidate elements", selector, len(filtered))
            candidates = filtered
            break

    if limit is not None:
        candidates = candidates[:max(0, limit)]
    return candidates


def _describe(element: Element) -> Dict[str, Any]:
    text = normalize_text(element.text_content)
    return {
        "tag": element.tag_name,
        "id": element.get_attribute("id") or "",
        "classes": (element.get_attribute("class") or "").split(),
        "text": text[:SAMPLE_TEXT_LEN],
        "href": element.get_attribute("href") or "",
    }


def sample_elements(
    document: Document,
    selectors: Optional[Iterable[str]] = None,
    max_matches: int = SAMPLE_MAX_MATCHES,
    max_samples: int = SAMPLE_MAX_PER_SELECTOR,
) -> List[Dict[str, Any]]:
    """
    Diagnostic mode: report what each generic selector matches on the page.

    Selectors with more than max_matches hits are skipped as noise, and at most
    max_samples elements are described per selector. No content filter is applied.
    """
    report: List[Dict[str, Any]] = []
    for selector in selectors or SAMPLE_SELECTORS:
        try:
            found = document.select(selector)
        except SelectorError as e:
            logger.warning("Selector failed: %s (%s)", selector, e)
            continue

        if not found:
            continue
        if len(found) > max_matches:
            logger.debug("Skipping %s: %d matches", selector, len(found))
            continue

        report.append({
            "selector": selector,
            "count": len(found),
            "samples": [_describe(el) for el in found[:max_samples]],
        })
    return report
