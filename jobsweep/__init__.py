"""
JobSweep: universal job-listing scraper.

Renders any careers page or job board in a headless browser, finds the
repeating elements that hold individual postings without a site-specific
schema, and extracts title, company, location, salary, description, date
and link from each.
"""

__version__ = "1.0.0"

from jobsweep.models import JobRecord, ScrapeOptions, SelectorConfig, SiteResult
from jobsweep.document import SoupDocument
from jobsweep.engine import extract_jobs
from jobsweep.orchestrator import bulk_scrape, scrape_website

__all__ = [
    "JobRecord",
    "ScrapeOptions",
    "SelectorConfig",
    "SiteResult",
    "SoupDocument",
    "extract_jobs",
    "bulk_scrape",
    "scrape_website",
]
