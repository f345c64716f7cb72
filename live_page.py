import logging
import random
from typing import Callable

from playwright.sync_api import Error as PlaywrightError, Page, sync_playwright

from config import Settings, get_settings
from document import PageDocument
from orchestrator import Orchestrator
from overlay import STYLESHEET, PanelHandle
from report_model import ReportModel
from scraper import USER_AGENTS

ATTACH_SCRIPT = """({html, panelId}) => {
    document.body.insertAdjacentHTML('beforeend', html);
    const panel = document.getElementById(panelId);
    if (!panel) {
        return false;
    }
    const button = panel.querySelector('.seo-close-btn');
    if (button) {
        button.removeAttribute('onclick');
        button.addEventListener('click', () => { panel.style.display = 'none'; });
    }
    return true;
}"""


class LivePage:
    """Orchestrator host backed by a Playwright page."""

    def __init__(self, page: Page, timeout: float):
        self.page = page
        self.timeout_ms = timeout * 1000

    def on_load(self, callback: Callable[[], None]) -> None:
        # "load" fires after subresources such as images, not just the markup
        self.page.wait_for_load_state("load", timeout=self.timeout_ms)
        callback()

    def call_later(self, delay: float, callback: Callable[[], None]) -> None:
        self.page.wait_for_timeout(delay * 1000)
        callback()

    def snapshot(self) -> PageDocument:
        return PageDocument.from_html(self.page.content(), url=self.page.url)

    def attach(self, handle: PanelHandle) -> None:
        try:
            self.page.add_style_tag(content=STYLESHEET)
        except PlaywrightError as e:
            # usually a Content-Security-Policy refusing inline styles
            logging.warning(f"Could not inject panel stylesheet: {e}")
        attached = self.page.evaluate(ATTACH_SCRIPT, {"html": handle.to_html(), "panelId": handle.panel_id})
        if not attached:
            logging.warning(f"Panel {handle.panel_id} was not found in the live page after insertion")


def new_page(browser) -> Page:
    context = browser.new_context(
        user_agent=random.choice(USER_AGENTS),
        viewport={'width': 1920, 'height': 1080},
        ignore_https_errors=True
    )
    return context.new_page()


def show_overlay(url: str, settings: Settings | None = None, headless: bool = False, screenshot: str | None = None) -> ReportModel | None:
    """
    Opens `url` in Chromium, overlays the SEO panel on the live page and, in a
    visible browser, blocks until the user closes the window.
    """
    settings = settings or get_settings()
    rendered: list[PanelHandle] = []
    errors: list[BaseException] = []
    with sync_playwright() as p:
        browser = p.chromium.launch(
            headless=headless,
            args=['--no-sandbox', '--disable-dev-shm-usage']
        )
        try:
            page = new_page(browser)
            page.goto(url, wait_until="commit", timeout=settings.browser_timeout * 1000)
            orchestrator = Orchestrator(LivePage(page, settings.browser_timeout), settings.settle_delay, on_rendered=rendered.append, on_error=errors.append)
            orchestrator.start()
            if errors:
                logging.error(f"Could not build the SEO panel for {url}: {errors[0]}")
                return None

            if screenshot:
                page.screenshot(path=screenshot)
                logging.info(f"Screenshot saved to {screenshot}")
            if not headless:
                logging.info("Panel shown. Close the browser window to exit.")
                page.wait_for_event("close", timeout=0)
        except PlaywrightError as e:
            logging.error(f"Browser session failed for {url}: {e}")
            return None
        finally:
            browser.close()
    return rendered[0].model if rendered else None
