"""
Shared fixtures: a synthetic in-memory document tree and a stub renderer.
"""

from typing import Dict, Iterable, List, Optional

import pytest

from jobsweep.document import Document, Element
from jobsweep.errors import SelectorError
from jobsweep.fetchers.http import FetchResult


class FakeElement(Element):
    """
    Minimal element: selectors are bare tag names, anything else matches nothing.
    Selectors containing "!" are treated as invalid.
    """

    def __init__(self, tag: str, text: str = "", attrs: Optional[Dict[str, str]] = None,
                 children: Iterable["FakeElement"] = (), explode: bool = False):
        self.tag = tag
        self.text = text
        self.attrs = attrs or {}
        self.children = list(children)
        self.explode = explode

    def _descendants(self) -> List["FakeElement"]:
        out = []
        for child in self.children:
            out.append(child)
            out.extend(child._descendants())
        return out

    def select(self, selector: str) -> List[Element]:
        if "!" in selector:
            raise SelectorError(selector, "fake")
        return [el for el in self._descendants() if el.tag == selector]

    def select_one(self, selector: str) -> Optional[Element]:
        found = self.select(selector)
        return found[0] if found else None

    def closest(self, selector: str) -> Optional[Element]:
        return None

    def get_attribute(self, name: str) -> Optional[str]:
        if self.explode:
            raise RuntimeError("detached node")
        return self.attrs.get(name)

    @property
    def tag_name(self) -> str:
        return self.tag

    @property
    def text_content(self) -> str:
        return self.text + "".join(child.text_content for child in self.children)


class FakeDocument(Document):
    def __init__(self, matches: Dict[str, List[FakeElement]], broken: Iterable[str] = (), title: str = ""):
        self.matches = matches
        self.broken = set(broken)
        self._title = title
        self.queries: List[str] = []

    def select(self, selector: str) -> List[Element]:
        self.queries.append(selector)
        if selector in self.broken:
            raise SelectorError(selector, "fake")
        return list(self.matches.get(selector, []))

    @property
    def title(self) -> str:
        return self._title


class StubRenderer:
    """Serves canned pages by URL instead of launching a browser."""

    def __init__(self, pages: Dict[str, FetchResult]):
        self.pages = pages
        self.calls: List[tuple] = []

    async def render(self, url: str, wait_time_ms: int = 0, scroll_pages: int = 1) -> FetchResult:
        self.calls.append((url, wait_time_ms, scroll_pages))
        return self.pages.get(url) or FetchResult(url=url, error="Browser render failed: net::ERR_NAME_NOT_RESOLVED")


def page(url: str, body: str, title: str = "Careers") -> FetchResult:
    html = f"<html><head><title>{title}</title></head><body>{body}</body></html>"
    return FetchResult(url=url, status=200, text=html, title=title, content_type="text/html")


JOB_LIST_HTML = """
<ul class="results">
  <li id="job-1">
    <h3>Backend Engineer</h3>
    <span class="company">Acme Corp</span>
    <span class="location">Berlin, Germany</span>
    <span class="salary">EUR 70,000 - 85,000</span>
    <p>Join our platform team and work on distributed systems.</p>
    <time>2 days ago</time>
    <a href="/jobs/1">View job</a>
  </li>
  <li id="job-2">
    <h3>Data Analyst</h3>
    <span class="company">Globex</span>
    <p>An open position in our analytics group, reporting to the CFO.</p>
    <a href="https://globex.example/careers/2">Apply</a>
  </li>
</ul>
"""


@pytest.fixture
def job_list_html() -> str:
    return f"<html><head><title>Jobs</title></head><body>{JOB_LIST_HTML}</body></html>"
