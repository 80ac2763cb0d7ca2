"""
Core data models for JobSweep.

Provides:
- SelectorConfig: optional per-field selector overrides supplied by the caller
- JobRecord: one extracted job posting, serialized with camelCase keys
- ScrapeOptions / SiteResult: per-website request and outcome used by the orchestrator
- Text helpers shared by the extraction engine
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field, fields, replace
from datetime import datetime, timezone
from typing import Any, Dict, List, Mapping, Optional


DESCRIPTION_MAX_LEN = 500
ELLIPSIS = "..."

MODE_JOBS = "jobs"
MODE_EXTRACT_ALL = "extract_all"


# ----------------------------- Utilities -----------------------------

def normalize_text(s: str) -> str:
    """Collapse whitespace and strip."""
    return re.sub(r"\s+", " ", (s or "")).strip()


def truncate_text(s: str, max_len: int = DESCRIPTION_MAX_LEN) -> str:
    """Cut text longer than max_len and mark the cut with an ellipsis."""
    if len(s) > max_len:
        return s[:max_len] + ELLIPSIS
    return s


def now_utc() -> datetime:
    """Current UTC datetime."""
    return datetime.now(timezone.utc)


def format_utc(dt: datetime) -> str:
    """ISO-8601 string with millisecond precision and a Z suffix."""
    dt = dt.astimezone(timezone.utc)
    return dt.strftime("%Y-%m-%dT%H:%M:%S.") + f"{dt.microsecond // 1000:03d}Z"


def now_utc_iso() -> str:
    """Current UTC time as ISO string."""
    return format_utc(now_utc())


def split_keywords(s: str) -> List[str]:
    """Split a comma/newline/semicolon-separated keyword string."""
    parts = re.split(r"[,\n;]+", s or "")
    cleaned = []
    for p in parts:
        p = normalize_text(p).strip("\"'")
        p = normalize_text(p)
        if not p:
            continue
        cleaned.append(p)
    return cleaned


# ----------------------------- SelectorConfig -----------------------------

@dataclass(frozen=True)
class SelectorConfig:
    """
    Caller-supplied selector overrides.

    Every field is optional. `container` picks the record elements, the others
    are tried first when the matching field is extracted from a record.
    """

    container: Optional[str] = None
    title: Optional[str] = None
    company: Optional[str] = None
    location: Optional[str] = None
    salary: Optional[str] = None
    description: Optional[str] = None
    date: Optional[str] = None

    # Wire names accepted in addition to the field names
    ALIASES = {"jobContainer": "container", "datePosted": "date"}

    @classmethod
    def from_mapping(cls, data: Optional[Mapping[str, Any]]) -> "SelectorConfig":
        """Build from a request mapping, ignoring unknown keys and blank values."""
        if not data:
            return cls()
        names = {f.name for f in fields(cls)}
        values: Dict[str, str] = {}
        for key, value in data.items():
            name = cls.ALIASES.get(key, key)
            if name not in names or not isinstance(value, str) or not value.strip():
                continue
            values[name] = value.strip()
        return cls(**values)

    def get(self, name: str) -> Optional[str]:
        return getattr(self, self.ALIASES.get(name, name), None)


# ----------------------------- JobRecord -----------------------------

@dataclass(frozen=True)
class JobRecord:
    """
    One job posting extracted from a rendered page.
    """

    job_id: str
    source: str
    title: str = ""
    company: str = ""
    location: str = ""
    salary: str = ""
    description: str = ""
    url: str = ""
    date_posted: str = ""
    scraped_at: datetime = field(default_factory=now_utc)

    def normalized(self) -> "JobRecord":
        """
        Return a copy with every string field whitespace-normalized and the
        description bounded to DESCRIPTION_MAX_LEN characters plus an ellipsis.
        """
        updates: Dict[str, str] = {}
        for f in fields(self):
            value = getattr(self, f.name)
            if isinstance(value, str):
                updates[f.name] = normalize_text(value)
        updates["description"] = truncate_text(updates["description"])
        return replace(self, **updates)

    def search_blob(self) -> str:
        """Lower-cased text that keyword filters are matched against."""
        return f"{self.title} {self.description} {self.company}".lower()

    def to_dict(self) -> Dict[str, Any]:
        """Convert to the camelCase wire format."""
        return {
            "title": self.title,
            "company": self.company,
            "location": self.location,
            "salary": self.salary,
            "description": self.description,
            "url": self.url,
            "datePosted": self.date_posted,
            "jobId": self.job_id,
            "scrapedAt": format_utc(self.scraped_at),
            "source": self.source,
        }


def normalize_record(record: JobRecord) -> JobRecord:
    """Whitespace-normalize and bound a record. Idempotent."""
    return record.normalized()


# ----------------------------- Orchestration -----------------------------

@dataclass
class ScrapeOptions:
    """Everything needed to scrape one website."""

    url: str
    keywords: List[str] = field(default_factory=list)
    selectors: SelectorConfig = field(default_factory=SelectorConfig)
    limit: int = 20
    wait_time_ms: int = 3000
    scroll_pages: int = 1
    use_browser: bool = True
    mode: str = MODE_JOBS

    def __post_init__(self):
        if isinstance(self.selectors, Mapping):
            self.selectors = SelectorConfig.from_mapping(self.selectors)
        self.limit = max(0, int(self.limit))
        self.scroll_pages = max(1, int(self.scroll_pages))
        self.wait_time_ms = max(0, int(self.wait_time_ms))
        if self.mode not in (MODE_JOBS, MODE_EXTRACT_ALL):
            raise ValueError(f"Unknown scrape mode: {self.mode}")


@dataclass
class SiteResult:
    """Outcome of one website in a bulk run."""

    url: str
    success: bool
    keywords: List[str] = field(default_factory=list)
    jobs: List[JobRecord] = field(default_factory=list)
    samples: Optional[List[Dict[str, Any]]] = None
    error: str = ""
    scraped_at: datetime = field(default_factory=now_utc)

    def to_dict(self) -> Dict[str, Any]:
        if not self.success:
            return {
                "success": False,
                "url": self.url,
                "error": self.error,
                "scrapedAt": format_utc(self.scraped_at),
            }
        d: Dict[str, Any] = {
            "success": True,
            "url": self.url,
            "keywords": list(self.keywords),
            "totalJobs": len(self.jobs),
            "jobs": [job.to_dict() for job in self.jobs],
            "scrapedAt": format_utc(self.scraped_at),
        }
        if self.samples is not None:
            d["samples"] = self.samples
        return d
