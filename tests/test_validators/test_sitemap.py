"""Tests for the sitemap validator."""

from __future__ import annotations

import pytest

from sitelint.validators.models import RedirectEntry, SitemapEntry, ValidatorStatus
from sitelint.validators.sitemap import SitemapValidator


@pytest.mark.asyncio
async def test_no_entries_passes(make_file, make_context) -> None:
    result = await SitemapValidator().run(make_context([make_file()]))
    assert result.status == ValidatorStatus.passed


@pytest.mark.asyncio
async def test_content_missing_from_sitemap(make_file, make_context) -> None:
    a = make_file(slug="a")
    b = make_file(slug="b")
    context = make_context(
        [a, b],
        sitemap_entries=[SitemapEntry(loc="/en/career-programs/a", type="program")],
    )
    result = await SitemapValidator().run(context)
    assert result.status == ValidatorStatus.warning
    assert [w.code for w in result.warnings] == ["CONTENT_NOT_IN_SITEMAP"]
    assert result.warnings[0].file == b.file_path


@pytest.mark.asyncio
async def test_orphan_entry_fails(make_file, make_context) -> None:
    context = make_context(
        [make_file(slug="a")],
        sitemap_entries=[
            SitemapEntry(loc="/en/career-programs/a", type="program"),
            SitemapEntry(loc="/en/career-programs/gone", type="program"),
            SitemapEntry(loc="/dashboard"),
        ],
    )
    result = await SitemapValidator().run(context)
    assert [e.code for e in result.errors] == ["ORPHAN_SITEMAP_ENTRY"]
    assert "/en/career-programs/gone" in result.errors[0].message


@pytest.mark.asyncio
async def test_redirect_sources_are_not_orphans(make_file, make_context) -> None:
    a = make_file(slug="a")
    context = make_context(
        [a],
        sitemap_entries=[
            SitemapEntry(loc="/en/career-programs/a", type="program"),
            SitemapEntry(loc="/old-a", type="program"),
        ],
        redirect_map={"/old-a": RedirectEntry("/old-a", "/en/career-programs/a", a)},
    )
    result = await SitemapValidator().run(context)
    assert result.errors == []


@pytest.mark.asyncio
async def test_duplicate_entries_warn(make_file, make_context) -> None:
    context = make_context(
        [make_file(slug="a")],
        sitemap_entries=[
            SitemapEntry(loc="/en/career-programs/a", type="program"),
            SitemapEntry(loc="/en/career-programs/a", type="program"),
        ],
    )
    result = await SitemapValidator().run(context)
    assert [w.code for w in result.warnings] == ["DUPLICATE_SITEMAP_ENTRY"]
    assert "2 times" in result.warnings[0].message
