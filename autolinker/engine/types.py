"""Typed data structures used by the linking engine."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, List, Literal, Mapping

LinkType = Literal["contextual", "related", "authority", "breadcrumb"]
LinkPosition = Literal["inline", "sidebar", "footer", "related"]
LinkStatus = Literal["active", "inactive", "archived"]

_REQUIRED = object()

# Records written by earlier releases use camelCase keys.
_CAMEL_KEYS = {
    "source_id": "sourceId",
    "target_id": "targetId",
    "anchor_text": "anchorText",
    "relevance_score": "relevanceScore",
    "link_type": "linkType",
    "created_at": "createdAt",
    "updated_at": "updatedAt",
}


def record_value(data: Mapping[str, Any], key: str, default: Any = _REQUIRED) -> Any:
    """Read ``key`` from a stored link record, accepting its camelCase alias."""

    if key in data:
        return data[key]
    camel = _CAMEL_KEYS.get(key)
    if camel is not None and camel in data:
        return data[camel]
    if default is _REQUIRED:
        raise KeyError(key)
    return default


def _parse_timestamp(value: Any) -> datetime:
    text = str(value)
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    return datetime.fromisoformat(text)


@dataclass(frozen=True)
class SourcePage:
    """The page whose outbound links are being generated."""

    id: str
    title: str
    content: str
    category: str


@dataclass(frozen=True)
class TargetPage:
    """Candidate link destination as supplied by a catalog."""

    id: str
    title: str
    url: str
    category: str
    quality_score: float


@dataclass(frozen=True)
class ScoredCandidate:
    """Target page with its relevance score and chosen context sentence."""

    target: TargetPage
    score: float
    context: str
    context_index: int
    reason: str = ""


@dataclass(frozen=True)
class LinkOpportunity:
    """Candidate link that has been scored and placed but not persisted."""

    source_page: SourcePage
    target_page: TargetPage
    anchor_text: str
    context: str
    relevance_score: float
    link_type: LinkType
    position: LinkPosition
    context_index: int = 0
    reason: str = ""


@dataclass(frozen=True)
class InternalLink:
    """Committed internal link stored against its source page."""

    id: str
    source_id: str
    target_id: str
    anchor_text: str
    context: str
    relevance_score: float
    link_type: LinkType
    position: LinkPosition
    created_at: datetime
    updated_at: datetime
    status: LinkStatus = "active"

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "source_id": self.source_id,
            "target_id": self.target_id,
            "anchor_text": self.anchor_text,
            "context": self.context,
            "relevance_score": self.relevance_score,
            "link_type": self.link_type,
            "position": self.position,
            "created_at": self.created_at.isoformat(),
            "updated_at": self.updated_at.isoformat(),
            "status": self.status,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "InternalLink":
        return cls(
            id=str(data["id"]),
            source_id=str(record_value(data, "source_id")),
            target_id=str(record_value(data, "target_id")),
            anchor_text=record_value(data, "anchor_text", ""),
            context=data.get("context", ""),
            relevance_score=float(record_value(data, "relevance_score", 0.0)),
            link_type=record_value(data, "link_type", "related"),
            position=data.get("position", "related"),
            created_at=_parse_timestamp(record_value(data, "created_at")),
            updated_at=_parse_timestamp(record_value(data, "updated_at")),
            status=data.get("status", "active"),
        )


@dataclass(frozen=True)
class InternalLinkingResult:
    """Outcome of a single generate or update run for one page."""

    success: bool
    links_created: int
    links: List[InternalLink] = field(default_factory=list)
    opportunities: List[LinkOpportunity] = field(default_factory=list)
    errors: List[str] = field(default_factory=list)

    @classmethod
    def failure(cls, message: str) -> "InternalLinkingResult":
        return cls(success=False, links_created=0, errors=[message])


@dataclass(frozen=True)
class LinkStatistics:
    """Aggregate counts across every page with stored links."""

    total_links: int = 0
    links_by_type: Dict[str, int] = field(default_factory=dict)
    links_by_position: Dict[str, int] = field(default_factory=dict)
    average_relevance_score: float = 0.0
