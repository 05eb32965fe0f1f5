"""End-to-end tests for the synchronous scoring pipeline."""

from __future__ import annotations

import pytest

from autolinker.engine.index import find_opportunities, score_candidates
from autolinker.engine.rank import RelevanceScorer

from .conftest import make_source, make_target

RITZ = make_target("ritz", "The Ritz London", category="luxury_hotels", quality_score=85)


def test_ritz_page_scores_below_default_floor(engine_config):
    scorer = RelevanceScorer(engine_config)
    source = make_source()

    score = scorer.score(source.content, source.title, RITZ.title, RITZ.category)

    assert score == pytest.approx(0.3514, abs=1e-4)
    assert find_opportunities(source, [RITZ], scorer) == []


def test_ritz_page_with_lower_floor_is_an_authority_link(engine_config):
    engine_config.raw["min_relevance_score"] = 0.3
    scorer = RelevanceScorer(engine_config)

    [opportunity] = find_opportunities(make_source(), [RITZ], scorer)

    assert opportunity.target_page is RITZ
    assert opportunity.anchor_text == "The Ritz London"
    assert opportunity.context == "The Ritz London is the most iconic luxury hotel in the city"
    assert opportunity.context_index == 0
    assert opportunity.link_type == "authority"
    assert opportunity.position == "footer"
    assert opportunity.reason


def test_candidate_without_context_is_dropped(engine_config):
    scorer = RelevanceScorer(engine_config)
    source = make_source(title="Luxury Hotels London", content="Afternoon tea is served daily.")
    candidate = make_target("twin", "Luxury Hotels London", category="london_travel")

    assert scorer.score(source.content, source.title, candidate.title, candidate.category) >= 0.6
    assert score_candidates(source, [candidate], scorer) == []
    assert find_opportunities(source, [candidate], scorer) == []


def test_equal_scores_keep_collection_order(engine_config):
    scorer = RelevanceScorer(engine_config)
    source = make_source(title="Luxury Hotels London", content="Luxury hotels in London.")
    first = make_target("first", "Luxury Hotels London", category="london_travel")
    second = make_target("second", "Luxury Hotels London", category="london_travel")

    forward = find_opportunities(source, [first, second], scorer)
    backward = find_opportunities(source, [second, first], scorer)

    assert [item.target_page.id for item in forward] == ["first", "second"]
    assert [item.target_page.id for item in backward] == ["second", "first"]
    assert forward[0].link_type == "contextual"
    assert forward[0].position == "inline"


def test_opportunities_respect_bounds_and_order(engine_config):
    engine_config.raw["min_relevance_score"] = 0.2
    scorer = RelevanceScorer(engine_config)
    source = make_source(
        title="Luxury Hotels London",
        content=(
            "Luxury hotels in London set the standard. The Savoy Hotel London is a landmark. "
            "Claridge's Mayfair defines elegance. Fine dining at the Savoy Grill is superb. "
            "Harrods shopping is a London ritual. The West End has theatre for everyone."
        ),
    )
    candidates = [
        make_target("savoy", "Savoy Hotel London", category="luxury_hotels"),
        make_target("claridges", "Claridge's Mayfair", category="luxury_hotels"),
        make_target("grill", "Savoy Grill Fine Dining", category="fine_dining"),
        make_target("harrods", "Harrods Shopping Guide", category="shopping"),
        make_target("theatre", "West End Theatre", category="entertainment"),
        make_target("hotels", "Luxury Hotels London", category="london_travel"),
        make_target("bridge", "Tower Bridge Walks", category="london_travel"),
    ]

    opportunities = find_opportunities(source, candidates, scorer)

    assert 0 < len(opportunities) <= 5
    scores = [item.relevance_score for item in opportunities]
    assert scores == sorted(scores, reverse=True)
    assert all(0.2 <= score <= 1.0 for score in scores)
    assert opportunities[0].target_page.id == "hotels"
    assert "bridge" not in {item.target_page.id for item in opportunities}
