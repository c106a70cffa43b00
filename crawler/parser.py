"""
HTML parsing collaborator. Wraps a BeautifulSoup tree behind a narrow,
read-only query interface so analyzers never touch the DOM API directly.
"""
from __future__ import annotations

from typing import Optional

from bs4 import BeautifulSoup, Tag


class Document:
    """
    Parsed page. Only CSS-selector queries are exposed; the tree is never
    mutated after construction, so one instance can be shared by analyzers
    running on different threads.
    """

    def __init__(self, html: str):
        self.html = html or ""
        try:
            self._soup = BeautifulSoup(self.html, "lxml")
        except Exception:
            self._soup = BeautifulSoup(self.html, "html.parser")

    # ── Queries ───────────────────────────────────────────────────────────────

    def select(self, selector: str) -> list[Tag]:
        return self._soup.select(selector)

    def select_one(self, selector: str) -> Optional[Tag]:
        return self._soup.select_one(selector)

    def count(self, selector: str) -> int:
        return len(self._soup.select(selector))

    def exists(self, selector: str) -> bool:
        return self._soup.select_one(selector) is not None

    def find(self, tag: str, **attrs: str) -> Optional[Tag]:
        """Exact attribute-equality lookup; safe for values a selector can't quote."""
        return self._soup.find(tag, attrs=attrs)

    def first_attr(self, selector: str, attr: str) -> str:
        """Attribute of the first match, or "" when the element or attribute is absent."""
        el = self.select_one(selector)
        if el is None:
            return ""
        return attr_text(el, attr)

    def text_of(self, selector: str) -> Optional[str]:
        """Untrimmed text of the first match, None if there is no match."""
        el = self.select_one(selector)
        if el is None:
            return None
        return el.get_text()


def attr_text(el: Tag, attr: str) -> str:
    """Attribute as a string; multi-valued attributes (class, rel) are space-joined."""
    value = el.get(attr)
    if value is None:
        return ""
    if isinstance(value, list):
        return " ".join(value)
    return str(value)


def parse_document(html: str) -> Document:
    return Document(html)
