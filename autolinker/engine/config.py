"""Configuration helpers for the linking engine."""

from __future__ import annotations

import copy
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict

import yaml


@dataclass(frozen=True)
class EngineConfig:
    """Typed wrapper around the engine configuration dictionary."""

    raw: Dict[str, Any] = field(default_factory=dict)

    def get(self, key: str, default: Any = None) -> Any:
        return self.raw.get(key, default)

    def feature_weight(self, feature: str) -> float:
        weights = self.raw.get("weights", {})
        return weights.get(feature, 0.0)

    def category_weights(self) -> Dict[str, float]:
        return dict(self.raw.get("category_weights", {}))

    def link_type_threshold(self, name: str) -> float:
        return float(self.raw.get("link_type_thresholds", {}).get(name, 0.0))

    def position_threshold(self, name: str) -> float:
        return float(self.raw.get("position_thresholds", {}).get(name, 0.0))


DEFAULTS: Dict[str, Any] = {
    "max_links_per_page": 5,
    "min_relevance_score": 0.6,
    "max_candidates": 20,
    "programmatic_candidates": 10,
    "keyword_limit": 20,
    "min_keyword_length": 3,
    "context_min_overlap": 0.1,
    "strip_html": True,
    "weights": {
        "f_title_similarity": 0.4,
        "f_keyword_overlap": 0.3,
        "f_category_relevance": 0.2,
        "f_semantic_similarity": 0.1,
    },
    "category_weights": {
        "london_travel": 1.0,
        "luxury_hotels": 0.9,
        "fine_dining": 0.9,
        "cultural_experiences": 0.8,
        "shopping": 0.8,
        "entertainment": 0.8,
    },
    "default_category_weight": 0.5,
    # breadcrumb is only reachable when "related" exceeds min_relevance_score.
    "link_type_thresholds": {
        "contextual": 0.8,
        "authority_quality": 80,
        "related": 0.6,
    },
    # footer is only reachable when "related" exceeds min_relevance_score.
    "position_thresholds": {
        "inline": 0.8,
        "sidebar": 0.6,
        "related": 0.4,
    },
}


def load_config(path: str | Path | None = None) -> EngineConfig:
    """Load configuration from YAML, merging with defaults."""

    data: Dict[str, Any] = copy.deepcopy(DEFAULTS)

    if path is not None and Path(path).exists():
        with Path(path).open("r", encoding="utf-8") as stream:
            user = yaml.safe_load(stream) or {}
        merge_into(data, user)

    return EngineConfig(data)


def merge_into(base: Dict[str, Any], override: Dict[str, Any]) -> None:
    """Recursively merge override into base dict."""

    for key, value in override.items():
        if isinstance(value, dict) and isinstance(base.get(key), dict):
            merge_into(base[key], value)
        else:
            base[key] = value
