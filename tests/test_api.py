"""
HTTP layer tests using FastAPI's TestClient and a stub renderer.
"""
import pytest
from fastapi.testclient import TestClient

from backend.app.api.scrape import get_renderer
from backend.app.core.config import Settings, get_settings
from backend.app.main import app

from conftest import JOB_LIST_HTML, StubRenderer, page

URL = "https://example.com/careers"
BLOCKED = "https://blocked.example/jobs"


@pytest.fixture
def renderer():
    return StubRenderer({
        URL: page(URL, JOB_LIST_HTML),
        BLOCKED: page(BLOCKED, JOB_LIST_HTML, title="Access Denied"),
    })


@pytest.fixture
def client(renderer):
    settings = Settings(bulk_delay_min_ms=0, bulk_delay_max_ms=0, max_limit=50, bulk_max_websites=3)
    app.dependency_overrides[get_renderer] = lambda: renderer
    app.dependency_overrides[get_settings] = lambda: settings
    yield TestClient(app)
    app.dependency_overrides.clear()


def test_health(client):
    resp = client.get("/")
    assert resp.status_code == 200
    data = resp.json()
    assert data["status"].endswith("is running")
    assert "scrape" in data["endpoints"]
    assert data["capabilities"]


def test_scrape_returns_jobs(client, renderer):
    resp = client.post("/scrape", json={"url": URL, "keywords": ["engineer"], "waitTime": 0, "scrollPages": 2})
    assert resp.status_code == 200
    data = resp.json()
    assert data["success"] is True
    assert data["url"] == URL
    assert data["keywords"] == ["engineer"]
    assert data["totalJobs"] == 1
    job = data["jobs"][0]
    assert job["title"] == "Backend Engineer"
    assert job["jobId"] == "job-1"
    assert job["url"] == "https://example.com/jobs/1"
    assert job["source"] == URL
    assert renderer.calls == [(URL, 0, 2)]


def test_scrape_applies_defaults(client, renderer):
    resp = client.post("/scrape", json={"url": URL})
    assert resp.status_code == 200
    assert resp.json()["totalJobs"] == 2
    assert renderer.calls == [(URL, 3000, 1)]


def test_scrape_accepts_job_container_selector(client):
    resp = client.post("/scrape", json={"url": URL, "selectors": {"jobContainer": "li#job-2", "title": ".company"}})
    jobs = resp.json()["jobs"]
    assert [j["title"] for j in jobs] == ["Globex"]


def test_scrape_extract_all_mode(client):
    resp = client.post("/scrape", json={"url": URL, "mode": "extract_all"})
    data = resp.json()
    assert data["totalJobs"] == 0
    assert any(entry["selector"] == "li" for entry in data["samples"])


def test_scrape_requires_url(client):
    resp = client.post("/scrape", json={"keywords": ["x"]})
    assert resp.status_code == 400
    assert resp.json() == {"error": "URL is required"}


def test_scrape_blocked_page_maps_to_500(client):
    resp = client.post("/scrape", json={"url": BLOCKED})
    assert resp.status_code == 500
    data = resp.json()
    assert data["error"] == "Scraping failed"
    assert data["url"] == BLOCKED
    assert "Access Denied" in data["message"]


def test_scrape_rejects_invalid_body(client):
    resp = client.post("/scrape", json={"url": URL, "limit": -1})
    assert resp.status_code == 400
    assert resp.json()["error"] == "Invalid request"


def test_scrape_limit_zero_returns_no_jobs(client, renderer):
    resp = client.post("/scrape", json={"url": URL, "limit": 0})
    assert resp.status_code == 200
    data = resp.json()
    assert data["success"] is True
    assert data["totalJobs"] == 0
    assert data["jobs"] == []
    assert renderer.calls == [(URL, 3000, 1)]


def test_scrape_caps_limit(client):
    items = "".join(
        f"<li><h3>Role {i}</h3><p>Software engineering position number {i} in our team</p></li>"
        for i in range(60)
    )
    many = "https://many.example/jobs"
    app.dependency_overrides[get_renderer] = lambda: StubRenderer({many: page(many, f"<ul>{items}</ul>")})
    resp = client.post("/scrape", json={"url": many, "limit": 1000})
    assert resp.json()["totalJobs"] == 50


def test_bulk_scrape(client):
    resp = client.post("/bulk-scrape", json={"websites": [
        {"url": URL, "limit": 1},
        {"url": BLOCKED},
    ]})
    assert resp.status_code == 200
    data = resp.json()
    assert data["totalWebsites"] == 2
    assert data["successfulScrapes"] == 1
    ok, failed = data["results"]
    assert ok["success"] is True and ok["totalJobs"] == 1
    assert failed["success"] is False
    assert "Blocked by website" in failed["error"]
    assert "scrapedAt" in failed


def test_bulk_scrape_requires_websites(client):
    resp = client.post("/bulk-scrape", json={})
    assert resp.status_code == 400
    assert resp.json() == {"error": "Websites array is required"}


def test_bulk_scrape_limits_batch_size(client):
    resp = client.post("/bulk-scrape", json={"websites": [{"url": URL}] * 4})
    assert resp.status_code == 400


def test_bulk_scrape_requires_every_url(client):
    resp = client.post("/bulk-scrape", json={"websites": [{"url": URL}, {"keywords": ["x"]}]})
    assert resp.status_code == 400
