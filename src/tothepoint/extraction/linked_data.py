"""Embedded linked-data (JSON-LD) records and article-type matching."""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Optional, Tuple

from tothepoint.dom.accessor import DocumentAccessor

LOGGER = logging.getLogger(__name__)

LINKED_DATA_SELECTOR = 'script[type*="ld+json"]'
ARTICLE_TYPE_NAMES = frozenset({"BlogPosting", "LiveBlogPosting"})

Record = Dict[str, Any]


@dataclass(frozen=True, slots=True)
class BodyValue:
    """Tagged ``articleBody`` value: plain text, a list of paragraphs, or absent."""

    text: Optional[str] = None
    paragraphs: Tuple[str, ...] = ()

    @classmethod
    def from_raw(cls, value: Any) -> "BodyValue":
        if isinstance(value, str):
            return cls(text=value)
        if isinstance(value, list):
            return cls(paragraphs=tuple(item for item in value if isinstance(item, str)))
        return cls()

    @property
    def is_absent(self) -> bool:
        return self.text is None and not self.paragraphs

    def as_text(self) -> Optional[str]:
        if self.text is not None:
            return self.text
        if self.paragraphs:
            return "\n\n".join(self.paragraphs)
        return None


def load_linked_data(accessor: DocumentAccessor) -> List[Any]:
    """Decode every linked-data script in the document, skipping malformed ones."""
    records: List[Any] = []
    for script in accessor.query(accessor.root(), LINKED_DATA_SELECTOR):
        payload = accessor.text(script).strip()
        if not payload:
            continue
        try:
            records.append(json.loads(payload))
        except json.JSONDecodeError as exc:
            LOGGER.debug("Skipping malformed linked-data block: %s", exc)
    return records


def iter_nodes(value: Any) -> Iterable[Record]:
    """Flatten arrays and ``@graph`` members into individual records."""
    if not value:
        return
    if isinstance(value, list):
        for item in value:
            yield from iter_nodes(item)
        return
    if not isinstance(value, dict):
        return
    yield value
    graph = value.get("@graph")
    if isinstance(graph, list):
        yield from iter_nodes(graph)


def normalize_schema_type(raw_type: str) -> str:
    """Reduce ``https://schema.org/NewsArticle`` or ``schema:NewsArticle`` to ``NewsArticle``."""
    trimmed = raw_type.strip()
    if not trimmed:
        return ""
    for separator in ("/", "#", ":"):
        trimmed = trimmed.split(separator)[-1]
    return trimmed.strip()


def normalized_types(node: Record) -> List[str]:
    raw_type = node.get("@type")
    if isinstance(raw_type, str):
        candidates = [raw_type]
    elif isinstance(raw_type, list):
        candidates = [item for item in raw_type if isinstance(item, str)]
    else:
        return []
    return [name for name in map(normalize_schema_type, candidates) if name]


def is_article_type(type_name: str) -> bool:
    if not type_name:
        return False
    return type_name.endswith("Article") or type_name in ARTICLE_TYPE_NAMES


def iter_article_nodes(records: Iterable[Any]) -> Iterable[Tuple[Record, str]]:
    """Yield each article-typed record with the first article type it declares."""
    for record in records:
        for node in iter_nodes(record):
            article_type = next((name for name in normalized_types(node) if is_article_type(name)), None)
            if article_type is not None:
                yield node, article_type


def article_body(node: Record) -> BodyValue:
    return BodyValue.from_raw(node.get("articleBody"))
