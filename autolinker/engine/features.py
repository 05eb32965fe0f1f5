"""Similarity signals for (source, candidate) relevance scoring."""

from __future__ import annotations

from typing import Dict, Mapping

from .text import extract_keywords, jaccard, split_words

FeatureDict = Dict[str, float]


def title_similarity(source_title: str, candidate_title: str) -> float:
    return jaccard(split_words(source_title), split_words(candidate_title))


def keyword_overlap(
    source_content: str,
    candidate_title: str,
    limit: int = 20,
    min_length: int = 3,
) -> float:
    """Jaccard similarity between content keywords and title keywords."""

    return jaccard(
        extract_keywords(source_content, limit, min_length),
        extract_keywords(candidate_title, limit, min_length),
    )


def category_relevance(category: str, weights: Mapping[str, float], default: float = 0.5) -> float:
    """Weight of ``category``, or ``default`` when it is unknown or zero."""

    return weights.get(category) or default


def compute_features(
    source_content: str,
    source_title: str,
    candidate_title: str,
    candidate_category: str,
    category_weights: Mapping[str, float],
    config: Mapping[str, object],
) -> FeatureDict:
    """Compute the four normalized relevance signals for a pairing.

    ``f_semantic_similarity`` is computed exactly like ``f_keyword_overlap``;
    both are kept so their weights can be tuned independently.
    """

    limit = int(config.get("keyword_limit", 20))
    min_length = int(config.get("min_keyword_length", 3))
    default_weight = float(config.get("default_category_weight", 0.5))

    overlap = keyword_overlap(source_content, candidate_title, limit, min_length)

    features: FeatureDict = {}
    features["f_title_similarity"] = title_similarity(source_title, candidate_title)
    features["f_keyword_overlap"] = overlap
    features["f_category_relevance"] = category_relevance(candidate_category, category_weights, default_weight)
    features["f_semantic_similarity"] = overlap
    return features
