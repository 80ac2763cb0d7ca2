"""
Selector and keyword tables used by discovery and field extraction.

Order matters everywhere in this module: lists are tried front to back and
the first usable result wins.
"""

from __future__ import annotations

import re
from typing import Dict, List, Optional, Tuple


# Record containers, most specific first. Broad block elements come last so a
# page with a real job list never falls through to every <li> on the page.
CONTAINER_SELECTORS: Tuple[str, ...] = (
    "[data-jk]",             # Indeed
    ".job_seen_beacon",      # Indeed alternative
    ".job-card",
    ".job-item",
    ".job-listing",
    ".vacancy",
    ".position",
    ".career-item",          # Career pages
    ".job-result",           # Job boards
    ".opening",              # Company pages
    '[class*="job"]',
    '[class*="position"]',
    '[class*="vacancy"]',
    '[class*="career"]',
    "article",
    ".card",
    ".list-item",
    ".row",                  # Bootstrap rows
    "tr",
    "li",
)

# Content filter applied to every container match
MIN_CONTENT_LENGTH = 50
RELEVANCE_PATTERN = re.compile(
    r"job|position|vacancy|career|hiring|employment|work|role|opportunity",
    re.IGNORECASE,
)

# Per-field fallbacks. Keys are the JobRecord attribute names; the matching
# SelectorConfig override key is in FIELD_OVERRIDE_KEYS.
FIELD_SELECTORS: Dict[str, Tuple[str, ...]] = {
    "title": (
        "h1", "h2", "h3", "h4",
        '[data-testid*="title"]',
        '[class*="title"]',
        '[class*="job-title"]',
        '[class*="position"]',
        'a[href*="job"]',
        ".job-link",
        "strong",
        ".name",
    ),
    "company": (
        '[data-testid*="company"]',
        '[class*="company"]',
        '[class*="employer"]',
        '[class*="organization"]',
        ".company-name",
        ".employer",
        ".org",
    ),
    "location": (
        '[data-testid*="location"]',
        '[class*="location"]',
        '[class*="city"]',
        '[class*="address"]',
        ".location",
        ".city",
        ".address",
    ),
    "salary": (
        '[data-testid*="salary"]',
        '[class*="salary"]',
        '[class*="pay"]',
        '[class*="wage"]',
        '[class*="compensation"]',
        ".salary",
        ".pay",
        ".wage",
    ),
    "description": (
        '[data-testid*="description"]',
        '[data-testid*="snippet"]',
        '[class*="description"]',
        '[class*="summary"]',
        '[class*="snippet"]',
        ".description",
        ".summary",
        ".snippet",
        "p",
    ),
    "date_posted": (
        '[data-testid*="date"]',
        '[class*="date"]',
        '[class*="time"]',
        '[class*="posted"]',
        ".date",
        ".time",
        ".posted",
        "time",
    ),
}

FIELD_OVERRIDE_KEYS: Dict[str, str] = {
    "title": "title",
    "company": "company",
    "location": "location",
    "salary": "salary",
    "description": "description",
    "date_posted": "date",
}

# Attributes read off a matched field element before falling back to its text
VALUE_ATTRIBUTES: Tuple[str, ...] = ("title", "aria-label")

# Link lookup: inside the record, then an enclosing anchor, then anything with an href
LINK_SELECTOR = "a[href]"
HREF_SELECTOR = "[href]"

# Record identifiers, in priority order
ID_ATTRIBUTES: Tuple[str, ...] = ("data-jk", "id", "data-id")
GENERATED_ID_PREFIX = "job_"
GENERATED_ID_LENGTH = 9

# Page titles that mean we got a block page instead of content
BLOCKED_TITLE_MARKERS: Tuple[str, ...] = (
    "blocked",
    "captcha",
    "access denied",
    "403",
    "forbidden",
)

# Diagnostic sampling ("extract everything") mode
SAMPLE_SELECTORS: Tuple[str, ...] = CONTAINER_SELECTORS + (
    "section",
    "div[class]",
    "ul > li",
    "table tr",
    "a[href]",
    "h1", "h2", "h3",
)
SAMPLE_MAX_MATCHES = 500
SAMPLE_MAX_PER_SELECTOR = 20
SAMPLE_TEXT_LEN = 200


def field_selectors(name: str, override: Optional[str] = None) -> List[str]:
    """Fallback chain for one field: the caller's override first, then the table."""
    chain = [override] if override else []
    chain.extend(FIELD_SELECTORS[name])
    return chain


def container_selectors(override: Optional[str] = None) -> List[str]:
    """Discovery cascade: the caller's container selector first, then the table."""
    chain = [override] if override else []
    chain.extend(CONTAINER_SELECTORS)
    return chain
