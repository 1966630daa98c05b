"""Live-page adapter backed by a Playwright page.

Every accessor call is a round trip into the browser, evaluated against the
rendered DOM. Nothing on the page is modified; node references are kept in a
page-scoped ``WeakMap`` so elements can be found again for highlighting.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Hashable, List, Optional

if TYPE_CHECKING:  # pragma: no cover
    from playwright.sync_api import ElementHandle, JSHandle, Page

LOGGER = logging.getLogger(__name__)

_REF_SCRIPT = """
(el) => {
  const registry = (window.__tothepointRefs ||= { byNode: new WeakMap(), byRef: new Map(), next: 0 });
  if (!registry.byNode.has(el)) {
    registry.next += 1;
    registry.byNode.set(el, registry.next);
    registry.byRef.set(registry.next, new WeakRef(el));
  }
  return registry.byNode.get(el);
}
"""

_RESOLVE_SCRIPT = """
(ref) => {
  const registry = window.__tothepointRefs;
  const weak = registry && registry.byRef.get(ref);
  return weak ? weak.deref() || null : null;
}
"""


class PlaywrightAccessor:
    """Expose a rendered Playwright page through the document accessor protocol."""

    def __init__(self, page: "Page") -> None:
        self.page = page

    @staticmethod
    def _as_element(handle: "JSHandle") -> Optional["ElementHandle"]:
        """Unwrap an element handle, releasing the page-side handle when it holds no node."""
        element = handle.as_element()
        if element is None:
            handle.dispose()
        return element

    def root(self) -> "ElementHandle":
        return self.page.query_selector(":root")

    def body(self) -> Optional["ElementHandle"]:
        return self.page.query_selector("body")

    def query(self, scope: "ElementHandle", selector: str) -> List["ElementHandle"]:
        return scope.query_selector_all(selector)

    def closest(self, node: "ElementHandle", selector: str) -> Optional["ElementHandle"]:
        return self._as_element(node.evaluate_handle("(el, sel) => el.closest(sel)", selector))

    def matches(self, node: "ElementHandle", selector: str) -> bool:
        return bool(node.evaluate("(el, sel) => el.matches(sel)", selector))

    def parent(self, node: "ElementHandle") -> Optional["ElementHandle"]:
        return self._as_element(node.evaluate_handle("(el) => el.parentElement"))

    def tag_name(self, node: "ElementHandle") -> str:
        return str(node.evaluate("(el) => el.tagName")).lower()

    def text(self, node: "ElementHandle") -> str:
        return node.text_content() or ""

    def attribute(self, node: "ElementHandle", name: str) -> Optional[str]:
        return node.get_attribute(name)

    def ref(self, node: "ElementHandle") -> Hashable:
        return int(node.evaluate(_REF_SCRIPT))

    def resolve(self, ref: Hashable) -> Optional["ElementHandle"]:
        element = self._as_element(self.page.evaluate_handle(_RESOLVE_SCRIPT, ref))
        if element is None:
            LOGGER.debug("Node reference %s is no longer attached", ref)
        return element

    def contains(self, container: "ElementHandle", node: "ElementHandle") -> bool:
        return bool(container.evaluate("(a, b) => a.contains(b)", node))

    def same(self, left: "ElementHandle", right: "ElementHandle") -> bool:
        return bool(left.evaluate("(a, b) => a === b", right))
