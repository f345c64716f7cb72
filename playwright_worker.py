import sys
import json
import asyncio

if sys.platform == "win32":
    try:
        # Use ProactorEventLoop instead of SelectorEventLoop
        loop = asyncio.ProactorEventLoop()
        asyncio.set_event_loop(loop)
    except Exception:
        pass

try:
    from playwright.sync_api import sync_playwright
except Exception as e:
    print(json.dumps({"error": f"playwright_import_failed: {e}"}))
    sys.exit(1)

from config import BROWSER_TIMEOUT_SECONDS, SETTLE_DELAY_SECONDS
from live_page import LivePage, new_page
from orchestrator import Orchestrator


def run_worker(url: str, timeout: float = BROWSER_TIMEOUT_SECONDS, settle_delay: float = SETTLE_DELAY_SECONDS):
    out = {"error": None, "url": url}

    try:
        with sync_playwright() as p:
            browser = p.chromium.launch(
                headless=True,
                args=['--no-sandbox', '--disable-dev-shm-usage']
            )
            page = new_page(browser)

            try:
                page.goto(url, wait_until="commit", timeout=timeout * 1000)
            except Exception as e:
                browser.close()
                out["error"] = f"navigation_failed: {e}"
                print(json.dumps(out), flush=True)
                return

            rendered = []
            orchestrator = Orchestrator(LivePage(page, timeout), settle_delay, on_rendered=rendered.append)
            try:
                orchestrator.start()
            except Exception as e:
                out["error"] = f"analysis_failed: {e}"
            final_url = page.url
            browser.close()

            if rendered:
                handle = rendered[0]
                out.update({
                    "url": final_url,
                    "report": handle.model.model_dump(mode="json"),
                    "rendered_html": handle.document.to_html(),
                })
            elif not out["error"]:
                out["error"] = f"no_panel_rendered (state: {orchestrator.state.value})"
            print(json.dumps(out), flush=True)

    except Exception as e:
        import traceback
        tb_str = traceback.format_exc()
        print(json.dumps({"error": f"worker_exception: {e}\n{tb_str}"}), flush=True)


if __name__ == "__main__":
    if len(sys.argv) < 2:
        print(json.dumps({"error": "usage: playwright_worker.py <url> [timeout] [settle_delay]"}))
        sys.exit(1)
    url = sys.argv[1]
    timeout = float(sys.argv[2]) if len(sys.argv) > 2 else BROWSER_TIMEOUT_SECONDS
    settle_delay = float(sys.argv[3]) if len(sys.argv) > 3 else SETTLE_DELAY_SECONDS
    run_worker(url, timeout, settle_delay)
