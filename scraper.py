import json
import logging
import os
import random
import subprocess
import sys
from pathlib import Path
from urllib.parse import urlparse

from requests import Session, exceptions
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

from config import Settings, get_settings
from document import PageDocument
from report_model import ReportModel

#different user-agents to mimic various browers and operating systems
USER_AGENTS = [
    'Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 (KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36',
    'Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) AppleWebKit/537.36 (KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36',
    'Mozilla/5.0 (Windows NT 10.0; Win64; x64; rv:109.0) Gecko/20100101 Firefox/115.0',
    'Mozilla/5.0 (X11; Linux x86_64) AppleWebKit/537.36 (KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36',
    'Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) AppleWebKit/605.1.15 (KHTML, like Gecko) Version/17.2.1 Safari/605.1.15'
]


def is_url(target: str) -> bool:
    return urlparse(target).scheme in ("http", "https")


def build_session() -> Session:
    session = Session()
    retries = Retry(total=3, backoff_factor=1, status_forcelist=[429, 500, 502, 503, 504])
    adapter = HTTPAdapter(max_retries=retries)
    session.mount('http://', adapter)
    session.mount('https://', adapter)
    session.headers.update({
        'User-Agent': random.choice(USER_AGENTS),
        'Accept': 'text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8',
        'Accept-Language': 'en-US,en;q=0.9',
    })
    return session


def fetch_document(url: str, timeout: float) -> PageDocument | None:
    """Downloads the page's markup as served, without running any script."""
    try:
        with build_session() as session:
            response = session.get(url, timeout=timeout)
            response.raise_for_status()
            return PageDocument.from_html(response.text, url=response.url or url)
    except exceptions.RequestException as e:
        logging.exception(f"Error fetching {url}: {e}")
        return None


def read_document(path: str) -> PageDocument | None:
    file_path = Path(path)
    try:
        html = file_path.read_text(encoding="utf-8", errors="replace")
    except OSError as e:
        logging.error(f"Could not read {path}: {e}")
        return None
    return PageDocument.from_html(html, url=file_path.resolve().as_uri())


def worker_timeout(settings: Settings) -> float:
    # navigation and the load wait each get browser_timeout inside the worker
    return 2 * settings.browser_timeout + settings.settle_delay + 15


#playwright's sync api cannot run inside a running event loop (the api server),
#so the browser is driven from a separate python process
def collect_browser_report(url: str, settings: Settings | None = None) -> dict | None:
    """
    Loads `url` in headless Chromium through playwright_worker.py and returns
    {"url", "report": ReportModel, "rendered_html"} or None when the worker fails.
    """
    settings = settings or get_settings()
    worker = os.path.join(os.path.dirname(os.path.abspath(__file__)), "playwright_worker.py")
    cmd = [sys.executable, "-u", worker, url, str(settings.browser_timeout), str(settings.settle_delay)]
    try:
        proc = subprocess.run(
            cmd,
            capture_output=True,
            text=True,
            timeout=worker_timeout(settings)
        )
    except subprocess.TimeoutExpired:
        logging.error("Playwright worker timed out.")
        return None

    stdout = proc.stdout.strip()
    if not stdout:
        logging.error("Playwright worker returned empty output. Stderr: %s", proc.stderr)
        return None

    try:
        data = json.loads(stdout.splitlines()[-1])
    except ValueError as e:
        logging.exception("Failed to parse Playwright worker output: %s", e)
        return None

    if data.get("error"):
        logging.error("Playwright worker error: %s", data.get("error"))
        return None

    return {
        "url": data.get("url") or url,
        "report": ReportModel.model_validate(data["report"]),
        "rendered_html": data.get("rendered_html") or "",
    }


def load_document(target: str, settings: Settings | None = None) -> PageDocument | None:
    """A local HTML file or an http(s) address."""
    settings = settings or get_settings()
    if is_url(target):
        logging.info(f"Fetching {target}")
        return fetch_document(target, settings.request_timeout)
    return read_document(target)
