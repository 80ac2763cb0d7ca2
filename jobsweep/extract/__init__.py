"""
Extraction utilities for JobSweep.

Provides:
- Candidate discovery (selector cascade + content filter) and diagnostic sampling
- Per-field selector fallback extraction
- Link resolution against the page URL
- The selector/keyword tables both of them run on
"""

from jobsweep.extract.discovery import discover, looks_like_job, sample_elements
from jobsweep.extract.fields import absolutize, extract_field, resolve_url

__all__ = [
    "discover",
    "looks_like_job",
    "sample_elements",
    "absolutize",
    "extract_field",
    "resolve_url",
]
