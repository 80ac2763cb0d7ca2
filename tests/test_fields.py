"""
Unit tests for field fallback extraction and link resolution.
"""
import pytest

from jobsweep.document import SoupDocument
from jobsweep.extract.fields import absolutize, element_value, extract_field, resolve_url
from jobsweep.extract.selectors import FIELD_SELECTORS, field_selectors

from conftest import FakeElement


def element(html: str, selector: str = "li", parser: str = "lxml"):
    document = SoupDocument(f"<html><body>{html}</body></html>", parser=parser)
    return document.select(selector)[0]


def test_custom_field_selector_wins_over_generic():
    el = element('<ul><li><h2>Generic Heading</h2><span class="real">Custom Title</span></li></ul>')
    assert extract_field(el, field_selectors("title", ".real")) == "Custom Title"
    assert extract_field(el, field_selectors("title")) == "Generic Heading"


def test_title_attribute_then_aria_label_then_text():
    el = element('<ul><li><h3 title="From title attr" aria-label="From aria">Visible</h3></li></ul>')
    assert extract_field(el, ["h3"]) == "From title attr"

    el = element('<ul><li><h3 aria-label="From aria">Visible</h3></li></ul>')
    assert extract_field(el, ["h3"]) == "From aria"

    el = element('<ul><li><h3 title="">  Visible text \n</h3></li></ul>')
    assert extract_field(el, ["h3"]) == "Visible text"


def test_empty_match_falls_through_to_next_selector():
    el = element('<ul><li><h2>   </h2><strong>Bold Title</strong></li></ul>')
    assert extract_field(el, field_selectors("title")) == "Bold Title"


def test_invalid_selector_is_skipped():
    el = element('<ul><li><span class="company">Acme</span></li></ul>')
    assert extract_field(el, ["span[[[", None, "", ".company"]) == "Acme"


def test_all_selectors_failing_returns_none():
    el = element("<ul><li>plain text only</li></ul>")
    assert extract_field(el, field_selectors("salary")) is None


def test_search_stays_inside_the_element():
    html = """
    <h1>Page heading</h1>
    <ul><li>no heading in here</li></ul>
    """
    el = element(html)
    assert extract_field(el, ["h1"]) is None


def test_each_field_has_its_own_lexicon():
    html = """
    <ul><li>
      <div data-testid="job-title">Platform Engineer</div>
      <div class="employer-name">Initech</div>
      <div class="job-city">Austin, TX</div>
      <div class="pay-range">$120k-$150k</div>
      <div class="job-snippet">Build internal tooling.</div>
      <div class="posted-on">Posted 3 days ago</div>
    </li></ul>
    """
    el = element(html)
    assert extract_field(el, field_selectors("title")) == "Platform Engineer"
    assert extract_field(el, field_selectors("company")) == "Initech"
    assert extract_field(el, field_selectors("location")) == "Austin, TX"
    assert extract_field(el, field_selectors("salary")) == "$120k-$150k"
    assert extract_field(el, field_selectors("description")) == "Build internal tooling."
    assert extract_field(el, field_selectors("date_posted")) == "Posted 3 days ago"


def test_field_tables_are_ordered_and_complete():
    assert set(FIELD_SELECTORS) == {"title", "company", "location", "salary", "description", "date_posted"}
    assert FIELD_SELECTORS["title"][:4] == ("h1", "h2", "h3", "h4")
    assert FIELD_SELECTORS["description"][-1] == "p"
    assert FIELD_SELECTORS["date_posted"][-1] == "time"


def test_element_value_on_synthetic_element():
    assert element_value(FakeElement("h3", text="  Hello  ")) == "Hello"
    assert element_value(FakeElement("h3", text="x", attrs={"aria-label": "Label"})) == "Label"


# ----------------------------- Links -----------------------------

BASE = "https://example.com/search"


@pytest.mark.parametrize("href, expected", [
    ("/jobs/123", "https://example.com/jobs/123"),
    ("https://other.com/x", "https://other.com/x"),
    ("http://other.com/x?a=%20b", "http://other.com/x?a=%20b"),
    ("jobs/123", "https://example.com/search/jobs/123"),
    ("?page=2", "https://example.com/search/?page=2"),
])
def test_absolutize(href, expected):
    assert absolutize(href, BASE) == expected


def test_absolutize_keeps_single_separator_with_trailing_slash_base():
    assert absolutize("jobs/1", "https://example.com/careers/") == "https://example.com/careers/jobs/1"


def test_absolutize_ignores_base_path_and_query_for_rooted_paths():
    assert absolutize("/apply", "https://example.com:8443/a/b?q=1") == "https://example.com:8443/apply"


def test_resolve_url_prefers_inner_anchor():
    el = element('<ul><li><span href="/span-link">x</span><a href="/jobs/7">Job</a></li></ul>')
    assert resolve_url(el, BASE) == "https://example.com/jobs/7"


def test_resolve_url_uses_enclosing_anchor():
    html = '<a href="/jobs/9"><div class="job-card">Card</div></a>'
    el = element(html, selector=".job-card", parser="html.parser")
    assert resolve_url(el, BASE) == "https://example.com/jobs/9"


def test_resolve_url_falls_back_to_any_href_attribute():
    el = element('<ul><li><span href="details/4">More</span></li></ul>')
    assert resolve_url(el, BASE) == "https://example.com/search/details/4"


def test_resolve_url_without_link_is_empty():
    assert resolve_url(element("<ul><li>No links</li></ul>"), BASE) == ""
    assert resolve_url(element('<ul><li><a href="">Empty</a></li></ul>'), BASE) == ""
