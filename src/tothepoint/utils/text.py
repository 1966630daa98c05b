"""Text normalization and tokenization helpers."""

from __future__ import annotations

import re
from typing import List, Optional

_WHITESPACE_RE = re.compile(r"\s+")
_TOKEN_RE = re.compile(r"[a-z0-9]+(?:'[a-z0-9]+)?")
_NON_PHRASE_RE = re.compile(r"[^a-z0-9\s]+")
_LINE_SPLIT_RE = re.compile(r"\n+")

STOPWORDS = frozenset(
    {
        "a",
        "an",
        "and",
        "are",
        "as",
        "at",
        "be",
        "by",
        "for",
        "from",
        "has",
        "he",
        "in",
        "is",
        "it",
        "its",
        "of",
        "on",
        "or",
        "that",
        "the",
        "their",
        "to",
        "was",
        "were",
        "will",
        "with",
    }
)

BOILERPLATE_PATTERNS = tuple(
    re.compile(rf"^{phrase}\b", re.IGNORECASE)
    for phrase in (
        "read more",
        "related",
        "recommended",
        "advertisement",
        "sponsored",
        "sign up",
        "subscribe",
        "share",
        "follow us",
        "copyright",
        "all rights reserved",
    )
)


def normalize_inline_text(raw_text: Optional[str]) -> str:
    """Collapse whitespace runs to single spaces and trim."""
    if not raw_text:
        return ""
    return _WHITESPACE_RE.sub(" ", raw_text).strip()


def is_likely_boilerplate(text: str) -> bool:
    return any(pattern.search(text) for pattern in BOILERPLATE_PATTERNS)


def split_paragraphs(raw_text: str) -> List[str]:
    """Split free text on line breaks into normalized, non-boilerplate paragraphs."""
    lines = _LINE_SPLIT_RE.split(raw_text.replace("\r\n", "\n"))
    paragraphs = (normalize_inline_text(line) for line in lines)
    return [line for line in paragraphs if line and not is_likely_boilerplate(line)]


def normalize_for_phrase(text: str) -> str:
    """Lowercase and reduce to alphanumeric words separated by single spaces.

    Only used for exact-substring phrase matching, never for token scoring.
    """
    lowered = _NON_PHRASE_RE.sub(" ", text.lower())
    return _WHITESPACE_RE.sub(" ", lowered).strip()


def tokenize(text: str) -> List[str]:
    """Split text into lowercase scoring tokens.

    Tokens are alphanumeric runs with at most one internal apostrophe suffix
    (``don't``). Single characters and stop-words are dropped.
    """
    matches = _TOKEN_RE.findall(text.lower())
    return [token for token in matches if len(token) > 1 and token not in STOPWORDS]


def to_snippet(text: str, *, max_chars: int = 180) -> str:
    normalized = normalize_inline_text(text)
    if len(normalized) <= max_chars:
        return normalized
    return f"{normalized[: max_chars - 3]}..."
