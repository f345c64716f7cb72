import pytest
from fastapi.testclient import TestClient

import main
from document import PageDocument

PAGE = """<html><head><title>Acme</title><meta property="og:title" content="Acme"></head>
<body><h1>Hello</h1><img src="x.png"></body></html>"""


@pytest.fixture(autouse=True)
def no_settle_delay(monkeypatch):
    monkeypatch.setenv("SEO_OVERLAY_SETTLE_DELAY", "0")


@pytest.fixture
def client():
    return TestClient(main.app)


def test_root(client):
    response = client.get("/")
    assert response.status_code == 200
    assert "/analyze" in response.json()["message"]


def test_analyze_html(client):
    response = client.post("/analyze/html", json={"html": PAGE, "url": "https://acme.test/"})
    assert response.status_code == 200
    body = response.json()
    assert body["url"] == "https://acme.test/"
    sections = {s["title"]: s for s in body["report"]["sections"]}
    assert sections["Title"]["items"][0] == {"label": "Title", "value": "Acme", "presence": "present"}
    assert sections["Twitter Cards"]["items"] == [{"label": "Twitter Cards", "value": None, "presence": "missing"}]
    assert sections["Image ALT"]["items"][2] == {"label": "Images without ALT", "value": 1, "presence": "missing"}


def test_render_returns_annotated_document(client):
    response = client.post("/render", json={"html": PAGE})
    assert response.status_code == 200
    assert response.headers["content-type"].startswith("text/html")
    assert 'id="seo-analysis-panel"' in response.text
    assert "seo-analysis-style" in response.text


def test_analyze_url_static(client, monkeypatch):
    monkeypatch.setattr(main, "fetch_document", lambda url, timeout: PageDocument.from_html(PAGE, url=url))
    response = client.post("/analyze", json={"url": "https://acme.test/"})
    assert response.status_code == 200
    assert response.json()["report"]["sections"][0]["items"][0]["value"] == "Acme"


def test_analyze_url_fetch_failure(client, monkeypatch):
    monkeypatch.setattr(main, "fetch_document", lambda url, timeout: None)
    response = client.post("/analyze", json={"url": "https://acme.test/"})
    assert response.status_code == 502


def test_analyze_url_with_browser(client, monkeypatch):
    from extractor import extract

    report = extract(PageDocument.from_html(PAGE))
    calls = []

    def fake_collect(url, settings):
        calls.append(url)
        return {"url": url, "report": report, "rendered_html": ""}

    monkeypatch.setattr(main, "collect_browser_report", fake_collect)
    response = client.post("/analyze", json={"url": "https://acme.test/", "run_playwright": True})
    assert response.status_code == 200
    assert calls == ["https://acme.test/"]
    assert response.json()["report"]["sections"][2]["items"][0]["label"] == "og:title"


def test_analyze_rejects_invalid_url(client):
    assert client.post("/analyze", json={"url": "not a url"}).status_code == 422


def test_static_endpoints_render_through_the_orchestrator(client, monkeypatch):
    from orchestrator import inspect_document

    delays = []

    async def recording_inspect(document, settle_delay):
        delays.append(settle_delay)
        return await inspect_document(document, settle_delay)

    monkeypatch.setattr(main, "inspect_document", recording_inspect)
    monkeypatch.setattr(main, "fetch_document", lambda url, timeout: PageDocument.from_html(PAGE, url=url))

    assert client.post("/analyze/html", json={"html": PAGE}).status_code == 200
    assert 'id="seo-analysis-panel"' in client.post("/render", json={"html": PAGE}).text
    assert client.post("/analyze", json={"url": "https://acme.test/"}).status_code == 200
    assert delays == [0.0, 0.0, 0.0]
