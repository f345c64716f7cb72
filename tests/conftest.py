import pytest

from document import PageDocument

FULL_PAGE = """<!DOCTYPE html>
<html>
<head>
  <meta charset="utf-8">
  <title>
    Acme Widgets  |  Home
  </title>
  <meta name="description" content="Hand-made widgets since 1999.">
  <meta name="keywords" content="widgets, acme">
  <meta name="viewport" content="width=device-width, initial-scale=1">
  <link rel="canonical" href="/home">
  <meta property="og:title" content="Acme">
  <meta property="og:type" content="website">
  <meta property="og:title" content="Acme Widgets">
  <meta name="twitter:card" content="summary">
  <meta name="twitter:site" content="@acme">
</head>
<body>
  <h1>  Welcome to Acme  </h1>
  <h2>Widgets</h2>
  <h2>Gadgets</h2>
  <img src="a.png" alt="A widget">
  <img src="b.png" alt="   ">
  <img src="c.png">
</body>
</html>
"""

BARE_PAGE = "<html><head></head><body><p>Nothing to see.</p></body></html>"


@pytest.fixture
def make_document():
    def _make(html: str, url: str | None = "https://acme.test/products/"):
        return PageDocument.from_html(html, url=url)
    return _make


@pytest.fixture
def full_html():
    return FULL_PAGE


@pytest.fixture
def full_document(make_document, full_html):
    return make_document(full_html)


@pytest.fixture
def bare_document(make_document):
    return make_document(BARE_PAGE)
