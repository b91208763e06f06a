"""Read-only query surface over a parsed HTML page.

A :class:`Document` is built once per scan from the main page body and shared by
every metric. Nothing in this module mutates the underlying soup, so evaluating
the same document twice always yields the same answers.
"""
from typing import List, Optional

from bs4 import BeautifulSoup
from bs4.element import NavigableString, Tag

# Elements whose text never renders
HIDDEN_TEXT_TAGS = frozenset({"script", "style", "noscript", "template"})


def tag_attr(tag: Tag, name: str) -> str:
    """Attribute value as a string; multi-valued attributes (rel, class) are space-joined."""
    value = tag.get(name)
    if value is None:
        return ""
    if isinstance(value, list):
        return " ".join(value)
    return str(value)


class Document:
    def __init__(self, html: str):
        self._soup = BeautifulSoup(html, "html.parser")

    def select(self, selector: str) -> List[Tag]:
        return self._soup.select(selector)

    def select_one(self, selector: str) -> Optional[Tag]:
        return self._soup.select_one(selector)

    def find_all(self, name: str) -> List[Tag]:
        return self._soup.find_all(name)

    def count(self, selector: str) -> int:
        return len(self.select(selector))

    def exists(self, selector: str) -> bool:
        return self.select_one(selector) is not None

    def attr(self, selector: str, name: str) -> str:
        """Attribute of the first element matching ``selector``, or ``""``."""
        tag = self.select_one(selector)
        return tag_attr(tag, name) if tag is not None else ""

    def meta_content(self, name: Optional[str] = None, prop: Optional[str] = None) -> str:
        """``content`` of the first ``<meta name=...>`` or ``<meta property=...>`` tag."""
        if name is not None:
            return self.attr(f'meta[name="{name}"]', "content")
        if prop is not None:
            return self.attr(f'meta[property="{prop}"]', "content")
        raise ValueError("meta_content needs a name or a property")

    def text_content(self, selector: str) -> str:
        """Concatenated raw text of every element matching ``selector``."""
        return "".join(tag.get_text() for tag in self.select(selector))

    def visible_text(self) -> str:
        """Text of ``<body>`` (or the whole page when there is none), skipping non-rendered elements."""
        root = self._soup.body or self._soup
        parts: List[str] = []
        for node in root.find_all(string=True):
            if type(node) is not NavigableString:
                # Comments, doctypes, script and stylesheet strings
                continue
            if any(parent.name in HIDDEN_TEXT_TAGS for parent in node.parents):
                continue
            parts.append(str(node))
        return " ".join(parts)
