"""Context sentence selection tests."""

from __future__ import annotations

from autolinker.engine.context import find_context


def test_picks_sentence_with_highest_overlap():
    content = (
        "Afternoon tea at The Ritz London is famous. "
        "The Ritz London opened in 1906! Mayfair is next door."
    )

    match = find_context(content, "The Ritz London")

    assert match is not None
    assert match.text == "The Ritz London opened in 1906"
    assert match.index == 1


def test_first_sentence_wins_a_tie():
    match = find_context("Visit The Ritz London today. Book The Ritz London early.", "The Ritz London")

    assert match is not None
    assert match.index == 0
    assert match.text == "Visit The Ritz London today"


def test_overlap_must_exceed_threshold():
    at_threshold = "Mayfair alpha bravo charlie delta echo foxtrot golf hotel india."
    above_threshold = "Mayfair alpha bravo charlie delta echo foxtrot golf hotel."

    assert find_context(at_threshold, "Mayfair") is None
    assert find_context(above_threshold, "Mayfair") is not None


def test_no_shared_keywords_means_no_context():
    assert find_context("The Ritz London is iconic.", "Tower Bridge Tours") is None
    assert find_context("", "Tower Bridge") is None
    assert find_context("The Ritz London is iconic.", "The A") is None
