from bs4 import BeautifulSoup
from bs4.element import Tag

from report_model import ReportItem, ReportSection


def attr_text(tag, name: str) -> str | None:
    """
    Returns the whitespace-trimmed value of an attribute, or None when the
    tag or attribute is absent or empty. Multi-valued attributes are joined.
    """
    if not isinstance(tag, Tag):
        return None
    value = tag.get(name)
    if value is None:
        return None
    if isinstance(value, (list, tuple)):
        value = " ".join(str(v) for v in value)
    value = str(value).strip()
    return value or None


def element_text(tag) -> str | None:
    if not isinstance(tag, Tag):
        return None
    text = tag.get_text().strip()
    return text or None


def first_meta_content(soup: BeautifulSoup, name: str) -> str | None:
    return attr_text(soup.find("meta", attrs={"name": name}), "content")


def prefixed_meta_section(soup: BeautifulSoup, attribute: str, prefix: str, title: str) -> ReportSection:
    """
    Collects every <meta> whose `attribute` starts with `prefix` into one section.
    Repeated keys keep the position of their first occurrence and the content of
    the last one. When no tag matches, the section holds a single MISSING item.
    """
    tags = soup.find_all("meta", attrs={attribute: lambda v: isinstance(v, str) and v.startswith(prefix)})
    if not tags:
        return ReportSection(title=title, items=(ReportItem.from_value(title, None, missing_is_defect=True),))

    found = {}
    for tag in tags:
        key = tag.get(attribute)[len(prefix):]
        found[key] = attr_text(tag, "content")

    items = tuple(ReportItem.from_value(f"{prefix}{key}", content) for key, content in found.items())
    return ReportSection(title=title, items=items)


def rendered_elements(soup: BeautifulSoup, name: str) -> list:
    """
    Elements a browser's querySelectorAll would return: content of <noscript>
    (raw text when scripting is on) and <template> (a detached fragment) is skipped.
    """
    return [tag for tag in soup.find_all(name) if tag.find_parent(["noscript", "template"]) is None]
