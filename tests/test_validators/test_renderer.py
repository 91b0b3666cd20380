"""Tests for JSON-LD rendering from schema-org.yml."""

from __future__ import annotations

from pathlib import Path

from sitelint.content.loader import load_all_content
from sitelint.schema_org.renderer import (
    SchemaOrgRenderer,
    build_faq_page,
    to_jsonld,
)
from sitelint.validators.schema_completeness import extract_jsonld_blocks


def test_to_jsonld_maps_keys_and_locales() -> None:
    definition = {
        "type": "Organization",
        "name": "Code Academy",
        "same_as": ["https://twitter.com/x"],
        "aggregate_rating": {"rating_value": 4.8, "review_count": 120},
        "locales": {"es": {"name": "Academia de Codigo"}},
    }
    assert to_jsonld(definition, "es") == {
        "@type": "Organization",
        "name": "Academia de Codigo",
        "sameAs": ["https://twitter.com/x"],
        "aggregateRating": {"@type": "AggregateRating", "ratingValue": 4.8, "reviewCount": 120},
    }


def test_build_faq_page() -> None:
    page = build_faq_page([{"question": "Why?", "answer": "Because."}])
    assert page["@type"] == "FAQPage"
    assert page["mainEntity"][0]["acceptedAnswer"]["text"] == "Because."


class TestSchemaOrgRenderer:
    def test_resolves_nested_keys_and_organization_ref(self, site_root: Path) -> None:
        renderer = SchemaOrgRenderer(site_root / "marketing-content")
        course = renderer.resolve("courses:full-stack")
        assert course["@context"] == "https://schema.org"
        assert course["@type"] == "Course"
        assert course["provider"] == {
            "@type": "EducationalOrganization",
            "name": "Code Academy",
            "url": "https://example.com",
        }

    def test_unknown_key_resolves_to_none(self, site_root: Path) -> None:
        renderer = SchemaOrgRenderer(site_root / "marketing-content")
        assert renderer.resolve("courses:missing") is None
        assert renderer.resolve("nope") is None

    def test_render_emits_one_script_per_block(self, site_root: Path) -> None:
        content_dir = site_root / "marketing-content"
        program = load_all_content(content_dir)[0]
        html = SchemaOrgRenderer(content_dir).render(program)

        blocks = extract_jsonld_blocks(html)
        assert [b["@type"] for b in blocks] == ["EducationalOrganization", "Course"]

    def test_overrides_and_faq_sections(self, write, tmp_path: Path, make_file) -> None:
        write(tmp_path / "schema-org.yml", "website:\n  type: WebSite\n  name: Site\n")
        page = make_file(
            schema={"include": ["website"], "overrides": {"website": {"name": "Custom"}}},
            data={"sections": [{"type": "faq", "items": [{"question": "Q", "answer": "A"}]}]},
        )
        blocks = SchemaOrgRenderer(tmp_path).render_blocks(page)
        assert blocks[0]["name"] == "Custom"
        assert blocks[1]["@type"] == "FAQPage"

    def test_missing_config_renders_nothing(self, tmp_path: Path, make_file) -> None:
        page = make_file(schema={"include": ["organization"]})
        assert SchemaOrgRenderer(tmp_path).render(page) == ""
