"""Scoring and ranking logic for the linking engine."""

from __future__ import annotations

import math
from types import MappingProxyType
from typing import Dict, List, Sequence

from .anchors import generate_anchor_text
from .config import EngineConfig, load_config
from .features import FeatureDict, compute_features
from .placement import determine_link_position, determine_link_type
from .types import LinkOpportunity, ScoredCandidate, SourcePage

FEATURES = (
    "f_title_similarity",
    "f_keyword_overlap",
    "f_category_relevance",
    "f_semantic_similarity",
)


class RelevanceScorer:
    """Weighted combination of the relevance signals for one engine config.

    Weights and the category table are copied into read-only mappings when the
    scorer is built, so later edits to the config do not leak into scoring.
    """

    def __init__(self, config: EngineConfig | None = None) -> None:
        self.config = config or load_config(None)
        self.weights = MappingProxyType({name: float(self.config.feature_weight(name)) for name in FEATURES})
        total = sum(self.weights.values())
        if not math.isclose(total, 1.0, abs_tol=1e-9):
            raise ValueError(f"Relevance weights must sum to 1.0, got {total:.4f}")
        self.category_weights = MappingProxyType(self.config.category_weights())
        self._options = MappingProxyType(
            {
                "keyword_limit": self.config.get("keyword_limit", 20),
                "min_keyword_length": self.config.get("min_keyword_length", 3),
                "default_category_weight": self.config.get("default_category_weight", 0.5),
            }
        )

    def features(
        self,
        source_content: str,
        source_title: str,
        candidate_title: str,
        candidate_category: str,
    ) -> FeatureDict:
        return compute_features(
            source_content,
            source_title,
            candidate_title,
            candidate_category,
            self.category_weights,
            self._options,
        )

    def combine(self, features: FeatureDict) -> float:
        """Return the weighted sum of ``features`` clamped to at most 1.0."""

        total = 0.0
        for name in FEATURES:
            total += self.weights[name] * features.get(name, 0.0)
        return min(total, 1.0)

    def score(
        self,
        source_content: str,
        source_title: str,
        candidate_title: str,
        candidate_category: str,
    ) -> float:
        return self.combine(self.features(source_content, source_title, candidate_title, candidate_category))


def score_reason(features: Dict[str, float], config: EngineConfig, top_k: int = 2) -> str:
    """Return a human-friendly reason summary based on top weighted features."""

    weighted = []
    for name, value in features.items():
        weight = config.feature_weight(name)
        if weight > 0 and value > 0:
            weighted.append((weight * value, name, value))
    weighted.sort(reverse=True)

    fragments = []
    seen = set()
    for _, name, value in weighted:
        fragment = _reason_fragment(name, value)
        if not fragment or fragment in seen:
            continue
        fragments.append(fragment)
        seen.add(fragment)
        if len(fragments) >= top_k:
            break
    return "; ".join(fragments)


def _reason_fragment(name: str, value: float) -> str:
    mapping = {
        "f_title_similarity": "title match",
        "f_keyword_overlap": "keyword overlap",
        "f_semantic_similarity": "keyword overlap",
        "f_category_relevance": "category fit",
    }
    descriptor = mapping.get(name)
    if not descriptor:
        return ""
    if value >= 0.85:
        qualifier = "excellent"
    elif value >= 0.6:
        qualifier = "strong"
    else:
        qualifier = "weak"
    return f"{qualifier} {descriptor}"


def rank_opportunities(
    source: SourcePage,
    scored: Sequence[ScoredCandidate],
    config: EngineConfig,
) -> List[LinkOpportunity]:
    """Filter, order and cap scored candidates, then classify each survivor.

    Sorting is stable, so candidates with equal scores keep the order in which
    the collector returned them.
    """

    min_score = float(config.get("min_relevance_score", 0.6))
    max_links = max(int(config.get("max_links_per_page", 5)), 0)

    eligible = [item for item in scored if item.score >= min_score]
    eligible.sort(key=lambda item: item.score, reverse=True)

    opportunities: List[LinkOpportunity] = []
    for item in eligible[:max_links]:
        opportunities.append(
            LinkOpportunity(
                source_page=source,
                target_page=item.target,
                anchor_text=generate_anchor_text(item.target.title),
                context=item.context,
                relevance_score=item.score,
                link_type=determine_link_type(item.score, item.target.quality_score, config),
                position=determine_link_position(item.score, config),
                context_index=item.context_index,
                reason=item.reason,
            )
        )
    return opportunities
