import pytest

from utils.activation import is_activated, url_matches


@pytest.mark.parametrize("url, pattern, expected", [
    ("https://acme.test/products", "*://*/*", True),
    ("http://acme.test/", "*://*/*", True),
    ("ftp://acme.test/", "*://*/*", False),
    ("http://192.168.0.1:90/admin/page", "http://192.168.0.1:90/*", True),
    ("https://192.168.0.1:90/admin/page", "http://192.168.0.1:90/*", False),
    ("http://192.168.0.1/admin", "http://192.168.0.1:90/*", False),
    ("https://shop.acme.test/cart", "https://*.acme.test/*", True),
    ("https://acme.test/cart", "https://*.acme.test/*", True),
    ("https://evil-acme.test/cart", "https://*.acme.test/*", False),
    ("https://acme.test/blog/post?id=1", "https://acme.test/blog/*", True),
    ("https://acme.test/shop", "https://acme.test/blog/*", False),
    ("https://ACME.test/", "https://acme.test/*", True),
])
def test_url_matches(url, pattern, expected):
    assert url_matches(url, pattern) is expected


def test_invalid_pattern_never_matches():
    assert url_matches("https://acme.test/", "acme.test") is False


def test_is_activated_checks_every_pattern():
    patterns = ("http://192.168.0.1:90/*", "https://192.168.0.1:90/*")
    assert is_activated("https://192.168.0.1:90/", patterns)
    assert not is_activated("https://acme.test/", patterns)
