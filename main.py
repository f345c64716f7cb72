import logging
from fastapi import FastAPI, HTTPException
from fastapi.concurrency import run_in_threadpool
from fastapi.responses import HTMLResponse
from pydantic import BaseModel, HttpUrl
import uvicorn

from config import configure_logging, get_settings
from document import PageDocument
from orchestrator import inspect_document
from scraper import collect_browser_report, fetch_document

configure_logging()

app = FastAPI(title="SEO Overlay API")

class URLRequest(BaseModel):
    url: HttpUrl
    run_playwright: bool = False

class HTMLRequest(BaseModel):
    html: str
    url: str | None = None


async def analyze_url(url: str, use_playwright: bool) -> dict | None:
    settings = get_settings()
    if use_playwright:
        data = await run_in_threadpool(collect_browser_report, url, settings)
        if not data:
            return None
        return {"url": data["url"], "report": data["report"]}

    document = await run_in_threadpool(fetch_document, url, settings.request_timeout)
    if document is None:
        return None
    handle = await inspect_document(document, settings.settle_delay)
    return {"url": document.url, "report": handle.model}


@app.post("/analyze")
async def analyze(req: URLRequest):
    logging.info(f"Analysis started for: {req.url}")
    try:
        result = await analyze_url(str(req.url), req.run_playwright)
    except Exception as e:
        logging.exception("An internal error occurred during analysis.")
        raise HTTPException(status_code=500, detail=f"An internal error occurred: {e}")

    if not result:
        raise HTTPException(status_code=502, detail="Could not retrieve the page.")
    logging.info(f"Analysis complete for {req.url}")
    return result


@app.post("/analyze/html")
async def analyze_html(req: HTMLRequest):
    document = PageDocument.from_html(req.html, url=req.url)
    handle = await inspect_document(document, get_settings().settle_delay)
    return {"url": req.url, "report": handle.model}


@app.post("/render", response_class=HTMLResponse)
async def render_html(req: HTMLRequest):
    document = PageDocument.from_html(req.html, url=req.url)
    handle = await inspect_document(document, get_settings().settle_delay)
    return HTMLResponse(content=handle.document.to_html())


@app.get("/")
def root():
    return {"message": "SEO Overlay API. POST /analyze with a URL, or /analyze/html and /render with raw HTML."}

#directly running the main.py file
if __name__ == "__main__":
    uvicorn.run("main:app", host="0.0.0.0", port=8000)
