import logging
from dataclasses import dataclass, field

from bs4 import BeautifulSoup
from bs4.element import Tag

from document import PageDocument
from report_model import Presence, ReportItem, ReportModel, ReportSection

PANEL_TITLE = "SEO Analysis"
PANEL_CLASS = "seo-analysis-panel"
PANEL_ID = "seo-analysis-panel"
STYLE_ID = "seo-analysis-style"
HIDDEN_STYLE = "display: none;"

PLACEHOLDERS = {
    Presence.MISSING: "Not Found",
    Presence.NULL: "Null",
}

STYLESHEET = """
.seo-analysis-panel {
    position: fixed;
    top: 20px;
    right: 20px;
    width: 350px;
    max-height: 80vh;
    overflow-y: auto;
    background-color: rgba(255, 255, 255, 0.9);
    border-radius: 8px;
    box-shadow: 0 0 10px rgba(0, 0, 0, 0.2);
    z-index: 9999;
    padding: 15px;
    font-family: Arial, sans-serif;
}
.seo-section {
    margin-bottom: 15px;
    padding-bottom: 10px;
    border-bottom: 1px solid #eee;
}
.seo-section:last-child {
    border-bottom: none;
}
.seo-title {
    font-weight: bold;
    margin-bottom: 5px;
    color: #0d6efd;
}
.seo-item {
    margin-bottom: 5px;
    word-break: break-word;
}
.seo-item-label {
    font-weight: bold;
    color: #6c757d;
}
.seo-missing {
    color: #dc3545;
    font-style: italic;
}
.seo-present {
    color: #198754;
}
.seo-panel-header {
    display: flex;
    justify-content: space-between;
    align-items: center;
    margin-bottom: 10px;
}
.seo-panel-title {
    font-size: 1.2rem;
    font-weight: bold;
    color: #0d6efd;
}
.seo-close-btn {
    background: none;
    border: none;
    font-size: 1.2rem;
    cursor: pointer;
    color: #6c757d;
}
"""

DISMISS_ONCLICK = f"this.closest('.{PANEL_CLASS}').style.display='none';"


def value_text(item: ReportItem) -> str:
    if item.value is None:
        return PLACEHOLDERS.get(item.presence, PLACEHOLDERS[Presence.NULL])
    return str(item.value)


def value_class(item: ReportItem) -> str:
    return "seo-present" if item.presence == Presence.PRESENT else "seo-missing"


@dataclass
class PanelHandle:
    """One rendered panel. Dismissing hides it but leaves it in the document."""
    panel_id: str
    element: Tag
    model: ReportModel
    document: PageDocument

    @property
    def visible(self) -> bool:
        return "display: none" not in (self.element.get("style") or "")

    def dismiss(self) -> bool:
        if not self.visible:
            return False
        self.element["style"] = HIDDEN_STYLE
        logging.info(f"Panel {self.panel_id} dismissed")
        return True

    def to_html(self) -> str:
        return str(self.element)


@dataclass
class OverlayRenderer:
    """
    Writes report panels into a document. Every call to `render` appends a
    new, independent panel with its own id; the handles are kept in `panels`.
    """
    document: PageDocument
    panels: list[PanelHandle] = field(default_factory=list)

    @property
    def soup(self) -> BeautifulSoup:
        return self.document.soup

    def _root(self) -> Tag:
        root = self.soup.find("html")
        if root is None:
            root = self.soup.new_tag("html")
            self.soup.append(root)
        return root

    def _head(self) -> Tag:
        head = self.soup.head
        if head is None:
            head = self.soup.new_tag("head")
            self._root().insert(0, head)
        return head

    def _body(self) -> Tag:
        body = self.soup.body
        if body is None:
            body = self.soup.new_tag("body")
            self._root().append(body)
        return body

    def inject_stylesheet(self) -> None:
        if self.soup.find("style", id=STYLE_ID):
            return
        style = self.soup.new_tag("style", id=STYLE_ID)
        style.string = STYLESHEET
        self._head().append(style)

    def _next_panel_id(self) -> str:
        if not self.panels and not self.soup.find(id=PANEL_ID):
            return PANEL_ID
        n = max(2, len(self.panels) + 1)
        while self.soup.find(id=f"{PANEL_ID}-{n}"):
            n += 1
        return f"{PANEL_ID}-{n}"

    def _header(self) -> Tag:
        header = self.soup.new_tag("div", attrs={"class": "seo-panel-header"})
        title = self.soup.new_tag("div", attrs={"class": "seo-panel-title"})
        title.string = PANEL_TITLE
        close_btn = self.soup.new_tag(
            "button",
            attrs={"class": "seo-close-btn", "type": "button", "title": "Close", "onclick": DISMISS_ONCLICK},
        )
        close_btn.string = "×"
        header.append(title)
        header.append(close_btn)
        return header

    def _item(self, item: ReportItem) -> Tag:
        row = self.soup.new_tag("div", attrs={"class": "seo-item"})
        label = self.soup.new_tag("span", attrs={"class": "seo-item-label"})
        label.string = f"{item.label}: "
        value = self.soup.new_tag("span", attrs={"class": value_class(item)})
        value.string = value_text(item)
        row.append(label)
        row.append(value)
        return row

    def _section(self, section: ReportSection) -> Tag:
        block = self.soup.new_tag("div", attrs={"class": "seo-section"})
        title = self.soup.new_tag("div", attrs={"class": "seo-title"})
        title.string = section.title
        block.append(title)
        for item in section.items:
            block.append(self._item(item))
        return block

    def render(self, model: ReportModel) -> PanelHandle:
        self.inject_stylesheet()
        panel_id = self._next_panel_id()
        panel = self.soup.new_tag("div", id=panel_id, attrs={"class": PANEL_CLASS})
        panel.append(self._header())
        for section in model.sections:
            panel.append(self._section(section))
        self._body().append(panel)

        handle = PanelHandle(panel_id=panel_id, element=panel, model=model, document=self.document)
        self.panels.append(handle)
        logging.info(f"Rendered panel {panel_id} with {len(model.sections)} sections")
        return handle


def render_text(model: ReportModel) -> str:
    lines = [PANEL_TITLE]
    if model.url:
        lines.append(model.url)
    for section in model.sections:
        lines.append("")
        lines.append(f"## {section.title}")
        for item in section.items:
            flag = "" if item.presence == Presence.PRESENT else f"  [{item.presence.value}]"
            lines.append(f"- {item.label}: {value_text(item)}{flag}")
    return "\n".join(lines)
