import logging
from dataclasses import dataclass
from typing import Optional
from urllib.parse import urljoin

from bs4 import BeautifulSoup


def soup_of(html: str) -> BeautifulSoup:
    try:
        return BeautifulSoup(html, "lxml")
    except Exception:
        logging.warning("lxml parser unavailable, falling back to html.parser")
        return BeautifulSoup(html, "html.parser")


@dataclass
class PageDocument:
    """
    Handle on one document snapshot: the parsed tree plus the address it was
    loaded from. Extraction only reads `soup`; the overlay renderer appends
    its panel and stylesheet to it.
    """
    soup: BeautifulSoup
    url: Optional[str] = None

    @classmethod
    def from_html(cls, html: str, url: Optional[str] = None) -> "PageDocument":
        return cls(soup=soup_of(html or ""), url=url)

    @property
    def base_url(self) -> Optional[str]:
        base = self.soup.find("base", href=True)
        href = (base.get("href") or "").strip() if base else ""
        if href:
            return urljoin(self.url, href) if self.url else href
        return self.url

    def resolve(self, href: str) -> str:
        base = self.base_url
        return urljoin(base, href) if base else href

    def to_html(self) -> str:
        return str(self.soup)
