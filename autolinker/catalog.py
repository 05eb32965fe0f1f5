"""Catalogs of potential link targets backed by ``SeoMeta`` rows."""

from __future__ import annotations

from typing import List
from urllib.parse import urlparse

from asgiref.sync import sync_to_async

from .engine.types import TargetPage
from .models import PROGRAMMATIC_PREFIX, SeoMeta


def slug_from_url(url: str) -> str:
    """Return the final non-empty path segment of ``url``."""

    path = urlparse(url).path.rstrip('/')
    return path.split('/')[-1] if path else ''


class SeoMetaCatalog:
    """Highest scoring pages site-wide, best first."""

    async def list_candidate_pages(self, category: str, exclude_page_id: str, limit: int) -> List[TargetPage]:
        return await sync_to_async(self._list)(category, exclude_page_id, limit)

    def _list(self, category: str, exclude_page_id: str, limit: int) -> List[TargetPage]:
        rows = (
            SeoMeta.objects
            .exclude(page_id=exclude_page_id)
            .order_by('-seo_score', 'page_id')[:limit]
        )
        return [
            TargetPage(
                id=row.page_id,
                title=row.title,
                url=row.url,
                category=row.category or category,
                quality_score=float(row.seo_score),
            )
            for row in rows
        ]


class ProgrammaticPageCatalog:
    """Most recent programmatic landing pages, addressed under ``base_url``."""

    def __init__(self, base_url: str) -> None:
        self.base_url = base_url.rstrip('/')

    async def list_candidate_pages(self, category: str, exclude_page_id: str, limit: int) -> List[TargetPage]:
        return await sync_to_async(self._list)(category, exclude_page_id, limit)

    def _list(self, category: str, exclude_page_id: str, limit: int) -> List[TargetPage]:
        rows = (
            SeoMeta.objects
            .filter(page_id__startswith=PROGRAMMATIC_PREFIX)
            .exclude(page_id=exclude_page_id)
            .order_by('-created_at', 'page_id')[:limit]
        )
        return [
            TargetPage(
                id=row.page_id,
                title=row.title,
                url=f"{self.base_url}/{slug_from_url(row.url)}",
                category=row.category or category,
                quality_score=float(row.seo_score),
            )
            for row in rows
        ]
