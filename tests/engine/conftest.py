"""Shared fixtures for engine tests."""

from __future__ import annotations

import pytest

from autolinker.engine.config import load_config
from autolinker.engine.types import ScoredCandidate, SourcePage, TargetPage


@pytest.fixture()
def engine_config():
    """Provide a mutable copy of the default engine configuration."""

    return load_config(None)


def make_source(
    title: str = "Best Luxury Hotels in London",
    content: str = "The Ritz London is the most iconic luxury hotel in the city.",
    *,
    id: str = "page-source",
    category: str = "luxury_hotels",
) -> SourcePage:
    return SourcePage(id=id, title=title, content=content, category=category)


def make_target(
    id: str,
    title: str,
    *,
    category: str = "luxury_hotels",
    quality_score: float = 50,
    url: str | None = None,
) -> TargetPage:
    return TargetPage(
        id=id,
        title=title,
        url=url or f"https://example.com/{id}",
        category=category,
        quality_score=quality_score,
    )


def make_scored(id: str, score: float, *, title: str | None = None, quality_score: float = 50) -> ScoredCandidate:
    return ScoredCandidate(
        target=make_target(id, title or f"Page {id}", quality_score=quality_score),
        score=score,
        context=f"Sentence about {id}",
        context_index=0,
    )
