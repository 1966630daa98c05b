"""Static-parsed-tree adapter backed by BeautifulSoup."""

from __future__ import annotations

from typing import Dict, Hashable, List, Optional

from bs4 import BeautifulSoup
from bs4.element import Tag

DEFAULT_PARSER = "html.parser"


class SoupAccessor:
    """Expose a parsed BeautifulSoup tree through the document accessor protocol.

    References are object identities registered as nodes are handed out, so
    they stay valid for as long as the accessor (and therefore the tree) lives.
    """

    def __init__(self, soup: BeautifulSoup) -> None:
        self.soup = soup
        self._nodes: Dict[int, Tag] = {}

    @classmethod
    def from_html(cls, html: str, *, parser: str = DEFAULT_PARSER) -> "SoupAccessor":
        return cls(BeautifulSoup(html, parser))

    def root(self) -> Tag:
        return self.soup

    def body(self) -> Optional[Tag]:
        return self.soup.body

    def query(self, scope: Tag, selector: str) -> List[Tag]:
        return list(scope.select(selector))

    def closest(self, node: Tag, selector: str) -> Optional[Tag]:
        if node is self.soup:
            return None
        return node.css.closest(selector)

    def matches(self, node: Tag, selector: str) -> bool:
        if node is self.soup:
            return False
        return bool(node.css.match(selector))

    def parent(self, node: Tag) -> Optional[Tag]:
        parent = node.parent
        if parent is None or parent is self.soup:
            return None
        return parent

    def tag_name(self, node: Tag) -> str:
        return (node.name or "").lower()

    def text(self, node: Tag) -> str:
        return node.get_text()

    def attribute(self, node: Tag, name: str) -> Optional[str]:
        value = node.get(name)
        if value is None:
            return None
        if isinstance(value, list):
            return " ".join(value)
        return str(value)

    def ref(self, node: Tag) -> Hashable:
        key = id(node)
        self._nodes[key] = node
        return key

    def resolve(self, ref: Hashable) -> Optional[Tag]:
        return self._nodes.get(ref)  # type: ignore[arg-type]

    def contains(self, container: Tag, node: Tag) -> bool:
        if node is container:
            return True
        return any(ancestor is container for ancestor in node.parents)

    def same(self, left: Tag, right: Tag) -> bool:
        return left is right
