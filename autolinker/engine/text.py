"""Shared text utilities for the linking engine."""

from __future__ import annotations

import re
from typing import Iterable, List

from bs4 import BeautifulSoup  # type: ignore

_SPLIT_RE = re.compile(r"\W+")
_SENTENCE_RE = re.compile(r"[.!?]+")
_MARKUP_RE = re.compile(r"<[a-zA-Z/!][^>]*>")

STOP_WORDS = frozenset(
    {
        "the", "a", "an", "and", "or", "but", "in", "on", "at", "to", "for", "of", "with", "by",
        "is", "are", "was", "were", "be", "been", "being", "have", "has", "had", "do", "does", "did",
        "will", "would", "could", "should", "may", "might", "must", "can", "this", "that", "these", "those",
    }
)


def split_words(text: str) -> List[str]:
    """Return the raw lower-cased split on non-word runs.

    Leading or trailing punctuation leaves an empty string at that end, and
    it is kept: two titles that both end in "?" share that empty token.
    """

    return _SPLIT_RE.split(text.lower())


def tokenize(text: str) -> List[str]:
    """Return lower-cased word tokens split on non-word runs."""

    return [token for token in split_words(text) if token]


def extract_keywords(text: str, limit: int = 20, min_length: int = 3) -> List[str]:
    """Return up to ``limit`` non stop-word tokens in source order."""

    keywords = [
        token
        for token in tokenize(text)
        if len(token) >= min_length and token not in STOP_WORDS
    ]
    return keywords[:limit]


def jaccard(set_a: Iterable[str], set_b: Iterable[str]) -> float:
    """Return Jaccard similarity for two iterables."""

    set_a = set(set_a)
    set_b = set(set_b)
    union = set_a | set_b
    if not union:
        return 0.0
    return len(set_a & set_b) / len(union)


def split_sentences(text: str) -> List[str]:
    """Split text on sentence punctuation, dropping blank fragments."""

    return [sentence.strip() for sentence in _SENTENCE_RE.split(text) if sentence.strip()]


def html_to_text(markup: str) -> str:
    """Return the visible text of ``markup``; plain text passes through."""

    if not markup or not _MARKUP_RE.search(markup):
        return markup

    try:
        soup = BeautifulSoup(markup, 'lxml')
    except Exception:
        soup = BeautifulSoup(markup, 'html.parser')

    for node in soup(['script', 'style']):
        node.decompose()

    text = soup.get_text(separator=' ')
    return re.sub(r"\s+", " ", text).strip()
