"""Relevance scoring tests."""

from __future__ import annotations

import pytest

from autolinker.engine.features import title_similarity
from autolinker.engine.rank import RelevanceScorer, score_reason

RITZ_SENTENCE = "The Ritz London is the most iconic luxury hotel in the city."


def test_score_combines_weighted_signals(engine_config):
    scorer = RelevanceScorer(engine_config)

    features = scorer.features(RITZ_SENTENCE, "Best Luxury Hotels in London", "The Ritz London", "luxury_hotels")
    score = scorer.score(RITZ_SENTENCE, "Best Luxury Hotels in London", "The Ritz London", "luxury_hotels")

    assert features["f_title_similarity"] == pytest.approx(1 / 7)
    assert features["f_keyword_overlap"] == pytest.approx(2 / 7)
    assert features["f_semantic_similarity"] == features["f_keyword_overlap"]
    assert features["f_category_relevance"] == pytest.approx(0.9)
    assert score == pytest.approx(0.4 / 7 + 0.3 * 2 / 7 + 0.2 * 0.9 + 0.1 * 2 / 7)


def test_full_overlap_is_clamped_to_one(engine_config):
    scorer = RelevanceScorer(engine_config)

    score = scorer.score("Luxury hotels in London.", "Luxury Hotels London", "Luxury Hotels London", "london_travel")

    assert score == pytest.approx(1.0)
    assert score <= 1.0


def test_unknown_category_uses_default_weight(engine_config):
    scorer = RelevanceScorer(engine_config)

    features = scorer.features("Anything.", "Title", "Other", "gardening")

    assert features["f_category_relevance"] == 0.5


def test_score_is_deterministic(engine_config):
    scorer = RelevanceScorer(engine_config)
    args = (RITZ_SENTENCE, "Best Luxury Hotels in London", "The Ritz London", "luxury_hotels")

    assert len({scorer.score(*args) for _ in range(5)}) == 1


def test_scorer_keeps_category_table_from_construction(engine_config):
    scorer = RelevanceScorer(engine_config)
    engine_config.raw["category_weights"]["luxury_hotels"] = 0.1

    features = scorer.features("Text.", "Title", "Other", "luxury_hotels")

    assert features["f_category_relevance"] == pytest.approx(0.9)
    with pytest.raises(TypeError):
        scorer.category_weights["luxury_hotels"] = 0.2  # type: ignore[index]


def test_weights_must_sum_to_one(engine_config):
    engine_config.raw["weights"]["f_title_similarity"] = 0.5

    with pytest.raises(ValueError):
        RelevanceScorer(engine_config)


def test_score_reason_names_strongest_signals(engine_config):
    reason = score_reason(
        {
            "f_title_similarity": 1.0,
            "f_keyword_overlap": 0.7,
            "f_category_relevance": 0.5,
            "f_semantic_similarity": 0.7,
        },
        engine_config,
    )

    assert reason == "excellent title match; strong keyword overlap"


def test_titles_ending_in_punctuation_share_the_empty_token():
    assert title_similarity("Where to Eat in London?", "Best Tea in London?") == pytest.approx(3 / 8)
    assert title_similarity("Where to Eat in London?", "Best Tea in London") == pytest.approx(2 / 8)


def test_title_punctuation_moves_the_score(engine_config):
    scorer = RelevanceScorer(engine_config)
    args = ("Tea is served daily.", "Where to Eat in London?")

    with_mark = scorer.features(*args, "Best Tea in London?", "fine_dining")
    without_mark = scorer.features(*args, "Best Tea in London", "fine_dining")

    assert with_mark["f_title_similarity"] > without_mark["f_title_similarity"]
    assert with_mark["f_keyword_overlap"] == without_mark["f_keyword_overlap"]
