"""Context builder -- loads content and derived lookups for a validation run."""

from __future__ import annotations

import logging

from sitelint.config import Settings
from sitelint.content.loader import load_all_content
from sitelint.content.schemas import get_available_schema_keys
from sitelint.content.urls import build_valid_url_set
from sitelint.validators.models import SitemapEntry, ValidationContext
from sitelint.validators.redirects import analyze_redirects

logger = logging.getLogger(__name__)


class ContextBuilder:
    """Assembles a fresh ValidationContext from the content directory."""

    def __init__(
        self,
        settings: Settings,
        sitemap_entries: list[SitemapEntry] | None = None,
    ) -> None:
        self._settings = settings
        self._sitemap_entries = list(sitemap_entries or [])

    @property
    def settings(self) -> Settings:
        return self._settings

    def load_sitemap_entries(self) -> list[SitemapEntry]:
        """Sitemap entries to check; empty unless supplied by the caller."""
        return list(self._sitemap_entries)

    def build(self) -> ValidationContext:
        content_dir = self._settings.content_dir
        if not content_dir.is_dir():
            logger.warning("Content directory not found: %s", content_dir)

        content_files = load_all_content(content_dir)
        valid_urls = build_valid_url_set(content_files)
        available_schemas = get_available_schema_keys(self._settings.schema_path)

        # Pre-populated so validators reading redirect_map do not depend on
        # the redirects validator having run first.
        analysis = analyze_redirects(content_files, valid_urls, content_dir)

        logger.info(
            "Context built: %d content files, %d valid URLs, %d schema keys, %d redirects",
            len(content_files),
            len(valid_urls),
            len(available_schemas),
            len(analysis.redirect_map),
        )

        return ValidationContext(
            content_files=content_files,
            valid_urls=valid_urls,
            available_schemas=available_schemas,
            content_dir=content_dir,
            redirect_map=analysis.redirect_map,
            sitemap_entries=self.load_sitemap_entries(),
        )
