"""Turn ranked opportunities into persisted internal links."""

from __future__ import annotations

import time
import uuid
from datetime import datetime, timezone
from typing import Callable, List, Protocol, Sequence

from .types import InternalLink, LinkOpportunity, LinkStatistics


class LinkRegistry(Protocol):
    """Storage for the link set attached to each source page."""

    async def get_links(self, page_id: str) -> List[InternalLink]:
        ...

    async def replace_links(self, page_id: str, links: Sequence[InternalLink]) -> None:
        ...

    async def clear_links(self, page_id: str) -> None:
        ...

    async def aggregate_statistics(self) -> LinkStatistics:
        ...


def new_link_id() -> str:
    """Return ``link_<epoch millis>_<12 hex chars>``."""

    return f"link_{int(time.time() * 1000)}_{uuid.uuid4().hex[:12]}"


class LinkMaterializer:
    """Create link records and write them through a registry.

    Every write stores the links committed so far in the batch plus the new
    one, so the registry never holds links from an earlier run once the first
    link of a new run has been written.
    """

    def __init__(
        self,
        registry: LinkRegistry,
        id_factory: Callable[[], str] = new_link_id,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        self.registry = registry
        self.id_factory = id_factory
        self.clock = clock or (lambda: datetime.now(timezone.utc))

    def build(
        self,
        opportunity: LinkOpportunity,
        source_page_id: str,
        taken_ids: set[str] | None = None,
    ) -> InternalLink:
        taken = taken_ids or set()
        link_id = self.id_factory()
        while link_id in taken:
            link_id = self.id_factory()

        now = self.clock()
        return InternalLink(
            id=link_id,
            source_id=source_page_id,
            target_id=opportunity.target_page.id,
            anchor_text=opportunity.anchor_text,
            context=opportunity.context,
            relevance_score=opportunity.relevance_score,
            link_type=opportunity.link_type,
            position=opportunity.position,
            created_at=now,
            updated_at=now,
            status="active",
        )

    async def materialize(
        self,
        opportunity: LinkOpportunity,
        source_page_id: str,
        committed: Sequence[InternalLink] = (),
    ) -> InternalLink:
        """Persist ``opportunity`` after the already ``committed`` links.

        Registry errors propagate to the caller.
        """

        link = self.build(opportunity, source_page_id, {item.id for item in committed})
        await self.registry.replace_links(source_page_id, [*committed, link])
        return link
