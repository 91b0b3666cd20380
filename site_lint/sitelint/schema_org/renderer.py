"""JSON-LD rendering of a page's structured data from schema-org.yml."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Protocol

from ruamel.yaml import YAMLError

from sitelint.content.loader import load_yaml_file
from sitelint.content.models import ContentFile

logger = logging.getLogger(__name__)

SCHEMA_CONTEXT = "https://schema.org"

# snake_case config keys -> JSON-LD property names
JSONLD_KEYS = {
    "type": "@type",
    "same_as": "sameAs",
    "aggregate_rating": "aggregateRating",
    "rating_value": "ratingValue",
    "review_count": "reviewCount",
    "best_rating": "bestRating",
    "worst_rating": "worstRating",
    "contact_point": "contactPoint",
    "contact_type": "contactType",
    "address_country": "addressCountry",
    "founding_date": "foundingDate",
    "educational_level": "educationalLevel",
    "time_required": "timeRequired",
    "item_list_order": "itemListOrder",
    "item_list_element": "itemListElement",
}

# Nested objects that get an implicit @type
TYPED_OBJECTS = {
    "aggregate_rating": "AggregateRating",
    "contact_point": "ContactPoint",
    "address": "PostalAddress",
}

ORGANIZATION_REF = "@organization"


class SchemaRenderer(Protocol):
    """Anything that turns a content file into structured-data HTML."""

    def render(self, file: ContentFile) -> str: ...


def to_jsonld(obj: dict[str, Any], locale: str = "en") -> dict[str, Any]:
    """Convert a schema-org.yml definition into JSON-LD properties."""
    result: dict[str, Any] = {}

    for key, value in obj.items():
        if key == "locales":
            continue
        if isinstance(value, dict):
            if key == "search_action":
                result["potentialAction"] = {
                    "@type": "SearchAction",
                    "target": value.get("target"),
                    "query-input": value.get("query_input"),
                }
            elif key in TYPED_OBJECTS:
                result[JSONLD_KEYS.get(key, key)] = {
                    "@type": TYPED_OBJECTS[key],
                    **to_jsonld(value, locale),
                }
            else:
                result[JSONLD_KEYS.get(key, key)] = to_jsonld(value, locale)
        elif isinstance(value, list) and key == "founders":
            result["founder"] = [
                {"@type": "Person", "name": f.get("name")} for f in value if isinstance(f, dict)
            ]
        elif isinstance(value, list) and key == "items":
            result["itemListElement"] = value
        else:
            result[JSONLD_KEYS.get(key, key)] = value

    locales = obj.get("locales")
    if isinstance(locales, dict) and isinstance(locales.get(locale), dict):
        for key, value in locales[locale].items():
            result[JSONLD_KEYS.get(key, key)] = value

    return result


def build_faq_page(items: list[dict[str, Any]]) -> dict[str, Any]:
    return {
        "@context": SCHEMA_CONTEXT,
        "@type": "FAQPage",
        "mainEntity": [
            {
                "@type": "Question",
                "name": item.get("question"),
                "acceptedAnswer": {"@type": "Answer", "text": item.get("answer")},
            }
            for item in items
        ],
    }


def _script(block: dict[str, Any]) -> str:
    return f'<script type="application/ld+json">{json.dumps(block, ensure_ascii=False)}</script>'


class SchemaOrgRenderer:
    """Default renderer backed by ``schema-org.yml`` under the content dir."""

    def __init__(self, content_dir: Path) -> None:
        self._content_dir = content_dir
        self._config: dict[str, Any] | None = None

    @property
    def config(self) -> dict[str, Any]:
        if self._config is None:
            self._config = self._load_config()
        return self._config

    def _load_config(self) -> dict[str, Any]:
        schema_path = self._content_dir / "schema-org.yml"
        if not schema_path.exists():
            logger.warning("schema-org.yml not found at %s", schema_path)
            return {}
        try:
            data = load_yaml_file(schema_path)
        except (YAMLError, OSError, UnicodeDecodeError) as e:
            logger.error("Error loading %s: %s", schema_path, e)
            return {}
        return data if isinstance(data, dict) else {}

    def _organization_stub(self) -> dict[str, Any] | None:
        org = self.config.get("organization")
        if not isinstance(org, dict):
            return None
        return {"@type": org.get("type"), "name": org.get("name"), "url": org.get("url")}

    def resolve(self, key: str, locale: str = "en") -> dict[str, Any] | None:
        """Resolve one schema key (``organization``, ``courses:x``, ...) to JSON-LD."""
        category, _, child = key.partition(":")
        if child:
            group = self.config.get(category)
            definition = group.get(child) if isinstance(group, dict) else None
        else:
            definition = self.config.get(key)

        if not isinstance(definition, dict):
            return None

        block = to_jsonld(definition, locale)
        for ref_key in ("provider", "parentOrganization"):
            if block.get(ref_key) == ORGANIZATION_REF:
                block[ref_key] = self._organization_stub()

        if isinstance(block.get("itemListElement"), list):
            block["itemListElement"] = [
                {
                    "@type": "ListItem",
                    "position": item.get("position"),
                    "item": self.resolve(item["ref"], locale),
                }
                if isinstance(item, dict) and item.get("ref")
                else item
                for item in block["itemListElement"]
            ]

        return {"@context": SCHEMA_CONTEXT, **block}

    def load_page_data(self, file: ContentFile) -> dict[str, Any]:
        """The file's document merged over its sibling ``_common.yml``."""
        data = dict(file.data)
        common_path = Path(file.file_path).parent / "_common.yml"
        if common_path.exists():
            try:
                common = load_yaml_file(common_path)
            except (YAMLError, OSError, UnicodeDecodeError) as e:
                logger.warning("Failed to parse %s: %s", common_path, e)
                common = None
            if isinstance(common, dict):
                data = {**common, **data}
        return data

    def render_blocks(self, file: ContentFile) -> list[dict[str, Any]]:
        data = self.load_page_data(file)
        blocks: list[dict[str, Any]] = []

        schema_ref = data.get("schema")
        if isinstance(schema_ref, dict):
            overrides = schema_ref.get("overrides") or {}
            for key in schema_ref.get("include") or []:
                block = self.resolve(str(key), file.locale)
                if block is None:
                    continue
                override = overrides.get(key) if isinstance(overrides, dict) else None
                if isinstance(override, dict):
                    block.update(to_jsonld(override, file.locale))
                blocks.append(block)

        for section in data.get("sections") or []:
            if isinstance(section, dict) and section.get("type") == "faq":
                items = [i for i in section.get("items") or [] if isinstance(i, dict)]
                if items:
                    blocks.append(build_faq_page(items))

        return blocks

    def render(self, file: ContentFile) -> str:
        return "\n".join(_script(b) for b in self.render_blocks(file))
