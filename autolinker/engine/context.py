"""Context sentence selection for candidate links."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .text import extract_keywords, jaccard, split_sentences


@dataclass(frozen=True)
class ContextMatch:
    """Sentence of the source content chosen to surround a link."""

    text: str
    index: int
    overlap: float


def find_context(
    source_content: str,
    candidate_title: str,
    min_overlap: float = 0.1,
    keyword_limit: int = 20,
    min_length: int = 3,
) -> Optional[ContextMatch]:
    """Return the first sentence with the highest keyword overlap, if any.

    A sentence qualifies only when its overlap with the title keywords is
    strictly greater than ``min_overlap``.
    """

    title_keywords = extract_keywords(candidate_title, keyword_limit, min_length)
    if not title_keywords:
        return None

    best: Optional[ContextMatch] = None
    best_overlap = 0.0
    for index, sentence in enumerate(split_sentences(source_content)):
        overlap = jaccard(extract_keywords(sentence, keyword_limit, min_length), title_keywords)
        if overlap > best_overlap and overlap > min_overlap:
            best_overlap = overlap
            best = ContextMatch(text=sentence, index=index, overlap=overlap)
    return best
