"""
Job extraction engine.

Turns one rendered document into an ordered list of JobRecords:
discovery -> per-candidate field extraction -> normalization -> keyword filter.
The engine never touches the network and never mutates the document.
"""

from __future__ import annotations

import logging
import random
import string
from typing import Iterable, List, Optional, Sequence, Set

from jobsweep.document import Document, Element
from jobsweep.errors import BlockedPageError
from jobsweep.extract.discovery import discover
from jobsweep.extract.fields import extract_field, resolve_url
from jobsweep.extract.selectors import (
    BLOCKED_TITLE_MARKERS,
    FIELD_OVERRIDE_KEYS,
    GENERATED_ID_LENGTH,
    GENERATED_ID_PREFIX,
    ID_ATTRIBUTES,
    field_selectors,
)
from jobsweep.models import JobRecord, SelectorConfig, normalize_text, now_utc

logger = logging.getLogger(__name__)

_ID_ALPHABET = string.ascii_lowercase + string.digits


def is_blocked_title(title: str) -> bool:
    t = (title or "").lower()
    return any(marker in t for marker in BLOCKED_TITLE_MARKERS)


def check_not_blocked(title: str) -> None:
    """Raise BlockedPageError if the page title looks like a block or CAPTCHA page."""
    if is_blocked_title(title):
        raise BlockedPageError(title)


def matches_keywords(record: JobRecord, keywords: Sequence[str]) -> bool:
    """True if any keyword occurs in title, description or company (case-insensitive)."""
    if not keywords:
        return True
    blob = record.search_blob()
    return any(kw.lower() in blob for kw in keywords)


class RecordBuilder:
    """
    Builds JobRecords for one extraction call.

    Holds the ids handed out so far so that every record of the call gets a
    distinct jobId.
    """

    def __init__(self, base_url: str, config: Optional[SelectorConfig] = None, rng: Optional[random.Random] = None):
        self.base_url = base_url
        self.config = config or SelectorConfig()
        self._rng = rng or random.Random()
        self._used_ids: Set[str] = set()

    def _token(self) -> str:
        while True:
            suffix = "".join(self._rng.choice(_ID_ALPHABET) for _ in range(GENERATED_ID_LENGTH))
            token = GENERATED_ID_PREFIX + suffix
            if token not in self._used_ids:
                return token

    def assign_id(self, element: Element) -> str:
        job_id = ""
        for attr in ID_ATTRIBUTES:
            value = normalize_text(element.get_attribute(attr) or "")
            if value:
                job_id = value
                break
        if not job_id or job_id in self._used_ids:
            job_id = self._token()
        self._used_ids.add(job_id)
        return job_id

    def field(self, element: Element, name: str) -> str:
        override = self.config.get(FIELD_OVERRIDE_KEYS[name])
        return extract_field(element, field_selectors(name, override)) or ""

    def build(self, element: Element) -> JobRecord:
        """Extract and normalize one record. The title may come back empty."""
        record = JobRecord(
            job_id=self.assign_id(element),
            source=self.base_url,
            title=self.field(element, "title"),
            company=self.field(element, "company"),
            location=self.field(element, "location"),
            salary=self.field(element, "salary"),
            description=self.field(element, "description"),
            date_posted=self.field(element, "date_posted"),
            url=resolve_url(element, self.base_url),
            scraped_at=now_utc(),
        )
        return record.normalized()


def extract_jobs(
    document: Document,
    config: Optional[SelectorConfig] = None,
    keywords: Optional[Iterable[str]] = None,
    limit: int = 20,
    base_url: str = "",
    rng: Optional[random.Random] = None,
) -> List[JobRecord]:
    """
    Extract up to `limit` job records from a rendered document.

    Candidates beyond the limit are never extracted. A failure while building
    one record skips that record only.
    """
    config = config or SelectorConfig()
    keywords = [kw for kw in (keywords or []) if kw]

    candidates = discover(document, config, limit=limit)
    logger.info("Found %d potential job elements", len(candidates))

    builder = RecordBuilder(base_url, config, rng=rng)
    jobs: List[JobRecord] = []

    for element in candidates:
        try:
            job = builder.build(element)
        except Exception as e:
            logger.debug("Error extracting job from %r: %s", element, e)
            continue

        if not matches_keywords(job, keywords):
            continue
        if not job.title:
            continue
        jobs.append(job)

    return jobs
