# app.py (Streamlit viewer)
import asyncio
import json

import streamlit as st
import streamlit.components.v1 as components

from config import get_settings
from document import PageDocument
from orchestrator import inspect_document
from overlay import PANEL_CLASS, STYLESHEET
from report_model import Presence
from scraper import collect_browser_report, fetch_document

st.set_page_config(
    page_title="SEO Overlay",
    page_icon="🔎",
    layout="wide"
)

st.title("🔎 SEO Overlay")
st.caption("Title, meta, social and heading tags plus image ALT coverage of a single page.")

settings = get_settings()

col1, col2 = st.columns([3, 1])
with col1:
    url_to_analyze = st.text_input("Enter the URL to analyze", placeholder="https://example.com")
    uploaded = st.file_uploader("...or upload an HTML file", type=["html", "htm"])
with col2:
    st.write("Advanced options")
    run_browser = st.checkbox(
        "Render with a headless browser (Playwright)",
        value=False,
        help=f"Waits for the load event plus {settings.settle_delay}s so script-injected tags are seen."
    )

if 'report' not in st.session_state:
    st.session_state.report = None
    st.session_state.panel_html = ""


def inspect(document: PageDocument):
    handle = asyncio.run(inspect_document(document, settings.settle_delay))
    return handle.model, handle.to_html()


if st.button("Analyze", type="primary"):
    report, panel_html = None, ""
    if uploaded is not None:
        document = PageDocument.from_html(uploaded.getvalue().decode("utf-8", errors="replace"))
        report, panel_html = inspect(document)
    elif not url_to_analyze:
        st.warning("Please enter a URL or upload a file.")
    else:
        with st.spinner("Reading the page..."):
            if run_browser:
                data = collect_browser_report(url_to_analyze, settings)
                if data:
                    report = data["report"]
                    panel = PageDocument.from_html(data["rendered_html"]).soup.find(class_=PANEL_CLASS)
                    panel_html = str(panel) if panel else ""
            else:
                document = fetch_document(url_to_analyze, settings.request_timeout)
                if document:
                    report, panel_html = inspect(document)
        if report is None:
            st.error("Could not fetch the page. Please check the URL and try again.")
    st.session_state.report = report
    st.session_state.panel_html = panel_html

if st.session_state.report:
    report = st.session_state.report
    st.divider()

    flagged = [
        (section.title, item.label)
        for section in report.sections
        for item in section.items
        if item.presence == Presence.MISSING
    ]
    summary_cols = st.columns(2)
    summary_cols[0].metric(label="Sections", value=len(report.sections))
    summary_cols[1].metric(label="Flagged as missing", value=len(flagged))

    left, right = st.columns([1, 1])
    with left:
        st.subheader("Panel")
        # the panel is position: fixed in a page; here it sits in the iframe flow
        components.html(
            f"<style>{STYLESHEET} .seo-analysis-panel {{ position: static; width: auto; }}</style>{st.session_state.panel_html}",
            height=700,
            scrolling=True
        )
    with right:
        st.subheader("Flagged")
        if flagged:
            for title, label in flagged:
                st.write(f"**{title}** · {label}")
        else:
            st.success("Nothing flagged as missing.")

    st.download_button(
        "Download report JSON",
        data=json.dumps(report.model_dump(mode="json"), indent=2, ensure_ascii=False),
        file_name="seo_report.json",
        mime="application/json"
    )
