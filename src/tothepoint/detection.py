"""Decide whether a document is an article and resolve its title from metadata."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Any, List, Optional, Sequence, Tuple

from tothepoint.dom.accessor import DocumentAccessor
from tothepoint.extraction.linked_data import (
    is_article_type,
    iter_article_nodes,
    load_linked_data,
    normalize_schema_type,
)
from tothepoint.models import ArticleDetection, TitleSource
from tothepoint.utils.text import normalize_inline_text

GENERIC_TITLES = frozenset(
    {"home", "homepage", "index", "welcome", "untitled", "new tab", "page not found", "404", "not found"}
)
TITLE_MIN_LENGTH = 12
TITLE_MAX_LENGTH = 220
SITE_SUFFIX_MAX_LENGTH = 40
SITE_SEPARATORS = (" | ", " - ")

_WHITESPACE_RE = re.compile(r"\s+")


@dataclass(frozen=True, slots=True)
class MetaEntry:
    key: str
    content: str


def is_valid_title(title: Optional[str]) -> bool:
    if not title:
        return False
    normalized = title.strip()
    if not TITLE_MIN_LENGTH <= len(normalized) <= TITLE_MAX_LENGTH:
        return False
    lower = normalized.lower()
    if lower in GENERIC_TITLES:
        return False
    return not lower.startswith(("http://", "https://"))


def strip_site_suffix(title: str) -> str:
    """Drop a trailing ``| Site Name`` or ``- Site Name`` when the rest stands alone."""
    for separator in SITE_SEPARATORS:
        position = title.rfind(separator)
        if position <= 0:
            continue
        left = title[:position].strip()
        right = title[position + len(separator) :].strip()
        if len(left) >= TITLE_MIN_LENGTH and 0 < len(right) <= SITE_SUFFIX_MAX_LENGTH:
            return left
    return title


def normalize_title(raw_title: Any) -> Optional[str]:
    if not isinstance(raw_title, str):
        return None
    collapsed = normalize_inline_text(raw_title)
    if not collapsed:
        return None
    return strip_site_suffix(collapsed)


def collect_meta_entries(accessor: DocumentAccessor) -> List[MetaEntry]:
    entries = []
    for tag in accessor.query(accessor.root(), "meta"):
        raw_key = accessor.attribute(tag, "property")
        if raw_key is None:
            raw_key = accessor.attribute(tag, "name") or ""
        key = raw_key.strip().lower()
        if key:
            entries.append(MetaEntry(key=key, content=(accessor.attribute(tag, "content") or "").strip()))
    return entries


def find_meta_content(entries: Sequence[MetaEntry], key: str) -> Optional[str]:
    return next((entry.content for entry in entries if entry.key == key and entry.content), None)


def has_article_microdata(accessor: DocumentAccessor) -> bool:
    for node in accessor.query(accessor.root(), "[itemtype]"):
        itemtype = accessor.attribute(node, "itemtype") or ""
        if any(is_article_type(normalize_schema_type(raw)) for raw in _WHITESPACE_RE.split(itemtype)):
            return True
    return False


def inspect_linked_data(records: Sequence[Any]) -> Tuple[List[str], Optional[str]]:
    reasons: List[str] = []
    headline: Optional[str] = None
    for node, article_type in iter_article_nodes(records):
        reasons.append(f"jsonld:@type={article_type}")
        if headline is None:
            candidate = normalize_title(node.get("headline"))
            if is_valid_title(candidate):
                headline = candidate
    return reasons, headline


def resolve_title(
    entries: Sequence[MetaEntry], headline: Optional[str]
) -> Tuple[Optional[str], Optional[TitleSource]]:
    if is_valid_title(headline):
        return headline, TitleSource.LINKED_DATA_HEADLINE
    for key, source in (("og:title", TitleSource.OG_TITLE), ("twitter:title", TitleSource.TWITTER_TITLE)):
        title = normalize_title(find_meta_content(entries, key))
        if is_valid_title(title):
            return title, source
    return None, None


def classify_document(
    accessor: DocumentAccessor, linked_data: Optional[Sequence[Any]] = None
) -> ArticleDetection:
    records = load_linked_data(accessor) if linked_data is None else linked_data
    reasons, headline = inspect_linked_data(records)

    entries = collect_meta_entries(accessor)
    if any(entry.key == "og:type" and entry.content.lower() == "article" for entry in entries):
        reasons.append("meta:og:type=article")
    if any(entry.key.startswith("article:") and entry.content for entry in entries):
        reasons.append("meta:article:*")
    if has_article_microdata(accessor):
        reasons.append("microdata:itemtype=*Article")

    metadata_matched = bool(reasons)
    title, title_source = resolve_title(entries, headline)
    return ArticleDetection(
        is_article=metadata_matched and title is not None,
        metadata_matched=metadata_matched,
        title=title,
        title_source=title_source,
        reasons=reasons,
    )
