import re
from fnmatch import fnmatchcase
from urllib.parse import urlparse


def url_matches(url: str, pattern: str) -> bool:
    """
    Userscript-style match pattern: `scheme://host/path` where `*` is a
    wildcard. A `*` scheme stands for http or https, and a host of
    `*.example.com` also covers `example.com` itself.
    """
    match = re.match(r"^(\*|[a-z][a-z0-9+.-]*)://([^/]*)(/.*)?$", pattern.strip(), re.I)
    if not match:
        return False
    scheme, host, path = match.group(1).lower(), match.group(2).lower(), match.group(3) or "/*"

    parsed = urlparse(url)
    if scheme == "*":
        if parsed.scheme not in ("http", "https"):
            return False
    elif parsed.scheme != scheme:
        return False

    netloc = parsed.netloc.lower()
    if host.startswith("*.") and netloc == host[2:]:
        pass
    elif not fnmatchcase(netloc, host):
        return False

    target = parsed.path or "/"
    if parsed.query:
        target += f"?{parsed.query}"
    return fnmatchcase(target, path)


def is_activated(url: str, patterns) -> bool:
    return any(url_matches(url, p) for p in patterns)
