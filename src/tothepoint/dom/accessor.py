"""Read-only capability the extraction core uses to walk a document tree.

The core never touches a concrete parser. Any backend able to answer these
queries (a parsed static markup tree, a live rendered page) can be plugged in.
Node objects are opaque to the core; only the accessor interprets them.
"""

from __future__ import annotations

from typing import Any, Hashable, List, Optional, Protocol, runtime_checkable

Node = Any


@runtime_checkable
class DocumentAccessor(Protocol):
    def root(self) -> Node:
        """Return the document root element."""

    def body(self) -> Optional[Node]:
        """Return the body element if the document has one."""

    def query(self, scope: Node, selector: str) -> List[Node]:
        """Return descendants of ``scope`` matching ``selector`` in document order."""

    def closest(self, node: Node, selector: str) -> Optional[Node]:
        """Return the nearest inclusive ancestor of ``node`` matching ``selector``."""

    def matches(self, node: Node, selector: str) -> bool: ...

    def parent(self, node: Node) -> Optional[Node]: ...

    def tag_name(self, node: Node) -> str:
        """Return the lowercase tag name."""

    def text(self, node: Node) -> str:
        """Return the flattened text content, unnormalized."""

    def attribute(self, node: Node, name: str) -> Optional[str]: ...

    def ref(self, node: Node) -> Hashable:
        """Return a stable opaque reference usable to find the node again."""

    def resolve(self, ref: Hashable) -> Optional[Node]: ...

    def contains(self, container: Node, node: Node) -> bool:
        """Inclusive containment: a node contains itself."""

    def same(self, left: Node, right: Node) -> bool: ...
