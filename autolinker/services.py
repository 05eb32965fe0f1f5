"""Service layer for generating and storing internal links.

:class:`InternalLinkingService` wires the engine to a set of candidate
catalogs and a link registry. Its public coroutines never raise for data or
storage failures: generation problems are reported through
:class:`InternalLinkingResult` and lookups fall back to empty values, so
callers publishing content only need to branch on ``success``.
"""

from __future__ import annotations

import asyncio
import logging
import weakref
from typing import List, Sequence, Tuple

from django.conf import settings

from .catalog import ProgrammaticPageCatalog, SeoMetaCatalog
from .engine.candidates import CandidateCatalog, collect_candidates
from .engine.config import EngineConfig, load_config
from .engine.index import find_opportunities
from .engine.materialize import LinkMaterializer
from .engine.rank import RelevanceScorer
from .engine.text import html_to_text
from .engine.types import (
    InternalLink,
    InternalLinkingResult,
    LinkOpportunity,
    LinkStatistics,
    SourcePage,
)
from .registry import LinkRegistry, SeoMetaLinkRegistry

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = 'https://example.com'


def _error_message(exc: BaseException) -> str:
    return str(exc) or exc.__class__.__name__


class InternalLinkingService:
    """Generate, replace and inspect the internal links of pages."""

    def __init__(
        self,
        catalogs: Sequence[Tuple[CandidateCatalog, int]],
        registry: LinkRegistry,
        config: EngineConfig | None = None,
        *,
        scorer: RelevanceScorer | None = None,
        materializer: LinkMaterializer | None = None,
    ) -> None:
        self.config = config or load_config(None)
        self.catalogs = list(catalogs)
        self.registry = registry
        self.scorer = scorer or RelevanceScorer(self.config)
        self.materializer = materializer or LinkMaterializer(registry)
        self._page_locks: weakref.WeakValueDictionary[str, asyncio.Lock] = weakref.WeakValueDictionary()

    def _lock_for(self, page_id: str) -> asyncio.Lock:
        lock = self._page_locks.get(page_id)
        if lock is None:
            lock = asyncio.Lock()
            self._page_locks[page_id] = lock
        return lock

    def _source_page(self, page_id: str, content: str, title: str, category: str) -> SourcePage:
        text = html_to_text(content) if self.config.get('strip_html', True) else content
        return SourcePage(id=page_id, title=title, content=text or '', category=category)

    async def find_link_opportunities(
        self,
        page_id: str,
        content: str,
        title: str,
        category: str,
    ) -> List[LinkOpportunity]:
        """Return the opportunities a generation run would persist, without writing."""

        try:
            source = self._source_page(page_id, content, title, category)
            candidates = await collect_candidates(self.catalogs, category, page_id)
            return find_opportunities(source, candidates, self.scorer, self.config)
        except Exception:
            logger.exception('Failed to find link opportunities for %s', page_id)
            return []

    async def generate_internal_links(
        self,
        page_id: str,
        content: str,
        title: str,
        category: str,
    ) -> InternalLinkingResult:
        """Score candidates for the page and persist the best of them.

        Each surviving opportunity is written on its own; a failed write is
        recorded in ``errors`` and the remaining opportunities still run.
        """

        async with self._lock_for(page_id):
            return await self._generate(page_id, content, title, category)

    async def update_internal_links(
        self,
        page_id: str,
        content: str,
        title: str,
        category: str,
    ) -> InternalLinkingResult:
        """Drop the page's stored links and generate a fresh set."""

        async with self._lock_for(page_id):
            try:
                await self.registry.clear_links(page_id)
            except Exception:
                logger.exception('Failed to remove internal links for %s', page_id)
            return await self._generate(page_id, content, title, category)

    async def _generate(
        self,
        page_id: str,
        content: str,
        title: str,
        category: str,
    ) -> InternalLinkingResult:
        try:
            source = self._source_page(page_id, content, title, category)
            candidates = await collect_candidates(self.catalogs, category, page_id)
            selected = find_opportunities(source, candidates, self.scorer, self.config)

            links: List[InternalLink] = []
            opportunities: List[LinkOpportunity] = []
            errors: List[str] = []
            for opportunity in selected:
                try:
                    link = await self.materializer.materialize(opportunity, page_id, links)
                except Exception as exc:
                    logger.warning(
                        'Failed to save link %s -> %s: %s',
                        page_id,
                        opportunity.target_page.id,
                        exc,
                    )
                    errors.append(f'Failed to create link: {_error_message(exc)}')
                    continue
                links.append(link)
                opportunities.append(opportunity)

            logger.info(
                'Internal linking for %s: %d candidates, %d selected, %d created, %d errors',
                page_id,
                len(candidates),
                len(selected),
                len(links),
                len(errors),
            )
            return InternalLinkingResult(
                success=not errors,
                links_created=len(links),
                links=links,
                opportunities=opportunities,
                errors=errors,
            )
        except Exception as exc:
            logger.exception('Failed to generate internal links for %s', page_id)
            return InternalLinkingResult.failure(_error_message(exc))

    async def get_internal_links(self, page_id: str) -> List[InternalLink]:
        try:
            return await self.registry.get_links(page_id)
        except Exception:
            logger.exception('Failed to get internal links for %s', page_id)
            return []

    async def get_link_statistics(self) -> LinkStatistics:
        try:
            return await self.registry.aggregate_statistics()
        except Exception:
            logger.exception('Failed to get link statistics')
            return LinkStatistics()


_default_service: InternalLinkingService | None = None


def build_linking_service() -> InternalLinkingService:
    """Build a service wired to the ``SeoMeta`` catalogs and registry."""

    config = load_config(getattr(settings, 'AUTOLINKER_CONFIG_PATH', None))
    base_url = getattr(settings, 'AUTOLINKER_BASE_URL', DEFAULT_BASE_URL)
    catalogs = [
        (SeoMetaCatalog(), int(config.get('max_candidates', 20))),
        (ProgrammaticPageCatalog(base_url), int(config.get('programmatic_candidates', 10))),
    ]
    return InternalLinkingService(catalogs, SeoMetaLinkRegistry(), config)


def get_linking_service() -> InternalLinkingService:
    """Return the process-wide service, building it on first use."""

    global _default_service
    if _default_service is None:
        _default_service = build_linking_service()
    return _default_service
