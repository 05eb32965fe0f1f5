"""Coordinator for the synchronous part of a linking pass."""

from __future__ import annotations

import logging
from typing import List, Sequence

from .config import EngineConfig
from .context import find_context
from .rank import RelevanceScorer, rank_opportunities, score_reason
from .types import LinkOpportunity, ScoredCandidate, SourcePage, TargetPage

logger = logging.getLogger(__name__)


def score_candidates(
    source: SourcePage,
    candidates: Sequence[TargetPage],
    scorer: RelevanceScorer,
) -> List[ScoredCandidate]:
    """Score each candidate and attach a context sentence.

    Candidates scoring under the configured floor are skipped before the
    context search; candidates without a qualifying sentence are dropped.
    Output keeps the candidate order.
    """

    config = scorer.config
    min_score = float(config.get("min_relevance_score", 0.6))
    min_overlap = float(config.get("context_min_overlap", 0.1))
    keyword_limit = int(config.get("keyword_limit", 20))
    min_length = int(config.get("min_keyword_length", 3))

    scored: List[ScoredCandidate] = []
    for target in candidates:
        features = scorer.features(source.content, source.title, target.title, target.category)
        score = scorer.combine(features)
        if score < min_score:
            logger.debug("Skipping %s: score %.3f below %.2f", target.id, score, min_score)
            continue

        context = find_context(source.content, target.title, min_overlap, keyword_limit, min_length)
        if context is None:
            logger.debug("Skipping %s: no context sentence", target.id)
            continue

        scored.append(
            ScoredCandidate(
                target=target,
                score=score,
                context=context.text,
                context_index=context.index,
                reason=score_reason(features, config),
            )
        )
    return scored


def find_opportunities(
    source: SourcePage,
    candidates: Sequence[TargetPage],
    scorer: RelevanceScorer,
    config: EngineConfig | None = None,
) -> List[LinkOpportunity]:
    """Return ranked, capped link opportunities for ``source``."""

    engine_config = config or scorer.config
    scored = score_candidates(source, candidates, scorer)
    return rank_opportunities(source, scored, engine_config)
