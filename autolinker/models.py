"""Database models for the autolinker app.

Each published page owns one ``SeoMeta`` row holding its search metadata.
Generated internal links are kept as a JSON list inside that row's
``structured_data`` under :data:`LINKS_KEY`, next to whatever other
structured data the page carries.
"""

from __future__ import annotations

from typing import Any, Dict, List

from django.db import models

LINKS_KEY = 'internalLinks'
PROGRAMMATIC_PREFIX = 'programmatic_'


class SeoMeta(models.Model):
    """SEO metadata for a single page, keyed by the page identifier."""

    page_id = models.CharField(max_length=255, unique=True)
    title = models.CharField(max_length=300, blank=True)
    description = models.TextField(blank=True)
    url = models.URLField(max_length=500, blank=True)
    category = models.CharField(max_length=100, blank=True, db_index=True)
    seo_score = models.PositiveSmallIntegerField(default=0, db_index=True)
    structured_data = models.JSONField(default=dict, blank=True)
    links_version = models.PositiveIntegerField(default=0)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ['-seo_score', 'page_id']
        verbose_name = 'SEO metadata'
        verbose_name_plural = 'SEO metadata'

    def __str__(self) -> str:  # pragma: no cover - convenience display
        return self.page_id

    @property
    def internal_links(self) -> List[Dict[str, Any]]:
        data = self.structured_data if isinstance(self.structured_data, dict) else {}
        links = data.get(LINKS_KEY) or []
        return [link for link in links if isinstance(link, dict)]

    @property
    def is_programmatic(self) -> bool:
        return self.page_id.startswith(PROGRAMMATIC_PREFIX)
