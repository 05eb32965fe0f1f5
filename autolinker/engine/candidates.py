"""Candidate collection across the configured page catalogs."""

from __future__ import annotations

import logging
from typing import List, Protocol, Sequence

from .types import TargetPage

logger = logging.getLogger(__name__)


class CandidateCatalog(Protocol):
    """Source of potential link targets."""

    async def list_candidate_pages(
        self,
        category: str,
        exclude_page_id: str,
        limit: int,
    ) -> List[TargetPage]:
        ...


def merge_candidates(batches: Sequence[Sequence[TargetPage]], exclude_page_id: str) -> List[TargetPage]:
    """Flatten catalog results, dropping the source page and repeated ids.

    The first occurrence of an id wins. The result is ordered by quality score,
    highest first, with ties left in catalog order.
    """

    seen: set[str] = set()
    merged: List[TargetPage] = []
    for batch in batches:
        for page in batch:
            if page.id == exclude_page_id or page.id in seen:
                continue
            seen.add(page.id)
            merged.append(page)

    merged.sort(key=lambda page: page.quality_score, reverse=True)
    return merged


async def collect_candidates(
    catalogs: Sequence[tuple[CandidateCatalog, int]],
    category: str,
    exclude_page_id: str,
) -> List[TargetPage]:
    """Query each ``(catalog, limit)`` pair in order and merge the results.

    A catalog that raises is logged and contributes no pages; the others are
    still used.
    """

    batches: List[List[TargetPage]] = []
    for catalog, limit in catalogs:
        try:
            batch = await catalog.list_candidate_pages(category, exclude_page_id, limit)
        except Exception:
            logger.exception(
                "Failed to collect candidate pages from %s for %s",
                type(catalog).__name__,
                exclude_page_id,
            )
            continue
        batches.append(list(batch))
    return merge_candidates(batches, exclude_page_id)
