#!/usr/bin/env python3
"""
Command line front end: print the SEO report of a page, write the page with
the report panel overlaid, or show the panel on the live page in a browser.
"""

import argparse
import asyncio
import dataclasses
import json
import logging
from pathlib import Path

from config import configure_logging, get_settings
from orchestrator import inspect_document
from overlay import render_text
from scraper import collect_browser_report, is_url, load_document
from utils.activation import is_activated


def analyze_target(target: str, settings, use_browser: bool = False):
    """Returns (ReportModel, annotated html) or None when no document could be obtained."""
    if use_browser:
        if not is_url(target):
            logging.error("--browser needs an http(s) URL")
            return None
        data = collect_browser_report(target, settings)
        if not data:
            return None
        return data["report"], data["rendered_html"]

    document = load_document(target, settings)
    if document is None:
        return None
    handle = asyncio.run(inspect_document(document, settings.settle_delay))
    return handle.model, handle.document.to_html()


def cmd_report(args, settings) -> int:
    result = analyze_target(args.target, settings, args.browser)
    if result is None:
        print(f"Error: could not load {args.target}")
        return 1
    model, _ = result
    if args.json:
        print(json.dumps(model.model_dump(mode="json"), indent=2, ensure_ascii=False))
    else:
        print(render_text(model))
    return 0


def cmd_render(args, settings) -> int:
    result = analyze_target(args.target, settings, args.browser)
    if result is None:
        print(f"Error: could not load {args.target}")
        return 1
    _, html = result
    out = Path(args.output)
    out.write_text(html, encoding="utf-8")
    print(f"Wrote {out}")
    return 0


def cmd_show(args, settings) -> int:
    if not is_url(args.url):
        print("Error: show needs an http(s) URL")
        return 2
    if not is_activated(args.url, settings.match_patterns):
        print(f"Error: {args.url} does not match any activation pattern ({', '.join(settings.match_patterns)})")
        return 2
    from live_page import show_overlay

    model = show_overlay(args.url, settings, headless=args.headless, screenshot=args.screenshot)
    if model is None:
        return 1
    if args.headless:
        print(render_text(model))
    return 0


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(description="Inspect a page's SEO metadata and overlay a report panel.")
    p.add_argument("--settle-delay", type=float, help="Seconds to wait after page load before reading metadata")
    sub = p.add_subparsers(dest="command", required=True)

    report = sub.add_parser("report", help="Print the SEO report of a URL or HTML file")
    report.add_argument("target")
    report.add_argument("--browser", action="store_true", help="Render the page in headless Chromium first")
    report.add_argument("--json", action="store_true", help="Print the report as JSON")
    report.set_defaults(func=cmd_report)

    render = sub.add_parser("render", help="Write the document with the report panel inserted")
    render.add_argument("target")
    render.add_argument("-o", "--output", default="seo-panel.html")
    render.add_argument("--browser", action="store_true", help="Render the page in headless Chromium first")
    render.set_defaults(func=cmd_render)

    show = sub.add_parser("show", help="Overlay the panel on the live page in Chromium")
    show.add_argument("url")
    show.add_argument("--headless", action="store_true")
    show.add_argument("--screenshot", help="Save a screenshot once the panel is shown")
    show.set_defaults(func=cmd_show)
    return p


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    settings = get_settings()
    if args.settle_delay is not None:
        if args.settle_delay < 0:
            print("Error: --settle-delay must not be negative")
            return 2
        settings = dataclasses.replace(settings, settle_delay=args.settle_delay)
    configure_logging(settings)
    return args.func(args, settings)


if __name__ == "__main__":
    raise SystemExit(main())
