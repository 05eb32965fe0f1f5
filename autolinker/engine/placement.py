"""Link type and placement classification."""

from __future__ import annotations

from .config import EngineConfig
from .types import LinkPosition, LinkType


def determine_link_type(relevance_score: float, quality_score: float, config: EngineConfig) -> LinkType:
    """Classify the purpose of a link from its score and the target's quality."""

    if relevance_score >= config.link_type_threshold("contextual"):
        return "contextual"
    if quality_score >= config.link_type_threshold("authority_quality"):
        return "authority"
    if relevance_score >= config.link_type_threshold("related"):
        return "related"
    return "breadcrumb"


def determine_link_position(relevance_score: float, config: EngineConfig) -> LinkPosition:
    """Return where on the page the link should be rendered."""

    if relevance_score >= config.position_threshold("inline"):
        return "inline"
    if relevance_score >= config.position_threshold("sidebar"):
        return "sidebar"
    if relevance_score >= config.position_threshold("related"):
        return "related"
    return "footer"
