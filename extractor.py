import logging
from typing import Callable

from document import PageDocument
from report_model import ReportModel, ReportSection
from Features.TitleMetaTest import title_section, meta_tags_section
from Features.OpenGraphTest import open_graph_section
from Features.TwitterCardTest import twitter_card_section
from Features.HeadingTest import headings_section
from Features.ImageAltTest import image_alt_section

# Order here is the order of the sections in the report.
SECTION_CHECKS: list[tuple[str, Callable[[PageDocument], ReportSection]]] = [
    ("Title", title_section),
    ("Meta Tags", meta_tags_section),
    ("Open Graph", open_graph_section),
    ("Twitter Cards", twitter_card_section),
    ("Headings", headings_section),
    ("Image ALT", image_alt_section),
]


def _run_check(title: str, check: Callable[[PageDocument], ReportSection], document: PageDocument) -> ReportSection:
    try:
        return check(document)
    except Exception:
        logging.exception(f"Section check '{title}' failed, reporting it empty.")
        return ReportSection(title=title)


def extract(document: PageDocument) -> ReportModel:
    """
    Reads the SEO metadata of one document snapshot into a ReportModel.

    This never raises and never modifies the document: a field that cannot
    be found is reported as absent, and a check that breaks on malformed
    markup only empties its own section.
    """
    sections = tuple(_run_check(title, check, document) for title, check in SECTION_CHECKS)
    logging.info(f"Extracted {len(sections)} report sections for {document.url or 'inline document'}")
    return ReportModel(url=document.url, sections=sections)
