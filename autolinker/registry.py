"""Link registries: where each page's generated link set is stored."""

from __future__ import annotations

import logging
from collections import Counter
from typing import Any, Dict, Iterable, List, Mapping, Sequence

from asgiref.sync import sync_to_async
from django.db import transaction

from .engine.materialize import LinkRegistry
from .engine.types import InternalLink, LinkStatistics, record_value
from .models import LINKS_KEY, SeoMeta

logger = logging.getLogger(__name__)

__all__ = [
    'InMemoryLinkRegistry',
    'LinkRegistry',
    'SeoMetaLinkRegistry',
    'fold_statistics',
]


def fold_statistics(records: Iterable[Mapping[str, Any]]) -> LinkStatistics:
    """Aggregate serialized link records into :class:`LinkStatistics`.

    Records without a link type or position are skipped with a warning.
    """

    total = 0
    score_sum = 0.0
    by_type: Counter[str] = Counter()
    by_position: Counter[str] = Counter()

    for record in records:
        link_type = record_value(record, 'link_type', None)
        position = record.get('position')
        try:
            score = float(record_value(record, 'relevance_score', None) or 0.0)
        except (TypeError, ValueError):
            score = None
        if not link_type or not position or score is None:
            logger.warning('Skipping malformed link record %s', record.get('id'))
            continue
        total += 1
        by_type[str(link_type)] += 1
        by_position[str(position)] += 1
        score_sum += score

    return LinkStatistics(
        total_links=total,
        links_by_type=dict(by_type),
        links_by_position=dict(by_position),
        average_relevance_score=score_sum / total if total else 0.0,
    )


class InMemoryLinkRegistry:
    """Process-local registry backed by a dict of page id to link list."""

    def __init__(self) -> None:
        self._links: Dict[str, List[InternalLink]] = {}

    async def get_links(self, page_id: str) -> List[InternalLink]:
        return list(self._links.get(page_id, []))

    async def replace_links(self, page_id: str, links: Sequence[InternalLink]) -> None:
        self._links[page_id] = list(links)

    async def clear_links(self, page_id: str) -> None:
        if page_id in self._links:
            self._links[page_id] = []

    async def aggregate_statistics(self) -> LinkStatistics:
        return fold_statistics(
            link.to_dict() for links in self._links.values() for link in links
        )


class SeoMetaLinkRegistry:
    """Registry storing links inside ``SeoMeta.structured_data``.

    Replacements lock the page row for the duration of the write and bump
    ``links_version`` so concurrent writers from other processes serialize.
    """

    async def get_links(self, page_id: str) -> List[InternalLink]:
        return await sync_to_async(self._get_links)(page_id)

    async def replace_links(self, page_id: str, links: Sequence[InternalLink]) -> None:
        await sync_to_async(self._replace_links)(page_id, list(links))

    async def clear_links(self, page_id: str) -> None:
        await sync_to_async(self._clear_links)(page_id)

    async def aggregate_statistics(self) -> LinkStatistics:
        return await sync_to_async(self._aggregate_statistics)()

    def _get_links(self, page_id: str) -> List[InternalLink]:
        meta = SeoMeta.objects.filter(page_id=page_id).first()
        if meta is None:
            return []
        links: List[InternalLink] = []
        for record in meta.internal_links:
            try:
                links.append(InternalLink.from_dict(record))
            except (KeyError, TypeError, ValueError) as exc:
                logger.warning('Skipping malformed link record on %s: %r', page_id, exc)
        return links

    @transaction.atomic
    def _replace_links(self, page_id: str, links: List[InternalLink]) -> None:
        meta, _ = SeoMeta.objects.select_for_update().get_or_create(page_id=page_id)
        self._write(meta, [link.to_dict() for link in links])

    @transaction.atomic
    def _clear_links(self, page_id: str) -> None:
        meta = SeoMeta.objects.select_for_update().filter(page_id=page_id).first()
        if meta is not None:
            self._write(meta, [])

    def _write(self, meta: SeoMeta, records: List[Dict[str, Any]]) -> None:
        data = dict(meta.structured_data) if isinstance(meta.structured_data, dict) else {}
        data[LINKS_KEY] = records
        meta.structured_data = data
        meta.links_version += 1
        meta.save(update_fields=['structured_data', 'links_version', 'updated_at'])

    def _aggregate_statistics(self) -> LinkStatistics:
        rows = SeoMeta.objects.filter(structured_data__has_key=LINKS_KEY).only('structured_data')
        return fold_statistics(
            record for meta in rows.iterator() for record in meta.internal_links
        )
