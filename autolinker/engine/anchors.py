"""Anchor text selection."""

from __future__ import annotations

from typing import List

WINDOW = 3


def candidate_phrases(title: str) -> List[str]:
    """Return the head, second and tail three-word windows of ``title``."""

    words = title.split()
    return [
        " ".join(words[:WINDOW]),
        " ".join(words[1:WINDOW + 1]),
        " ".join(words[-WINDOW:]),
    ]


def generate_anchor_text(title: str) -> str:
    """Return anchor text derived from the target title.

    Titles of three words or fewer are used whole. Longer titles yield the
    shortest of the candidate windows; the earliest window wins a tie.
    """

    if len(title.split()) <= WINDOW:
        return title

    shortest = None
    for phrase in candidate_phrases(title):
        if shortest is None or len(phrase) < len(shortest):
            shortest = phrase
    return shortest
