"""Tests for the validator registry."""

from __future__ import annotations

from sitelint.validators.models import ValidatorCategory
from sitelint.validators.registry import (
    build_validators,
    get_api_exposed,
    get_validator,
    list_validators,
)

EXPECTED_ORDER = [
    "redirects",
    "meta",
    "schema",
    "sitemap",
    "components",
    "backgrounds",
    "faqs",
    "seo-depth",
    "schema-completeness",
    "images",
    "content-quality",
]


def test_registry_order(site_settings) -> None:
    assert [v.name for v in build_validators(site_settings)] == EXPECTED_ORDER


def test_names_are_unique(site_settings) -> None:
    names = [v.name for v in build_validators(site_settings)]
    assert len(names) == len(set(names))


def test_get_validator(site_settings) -> None:
    validators = build_validators(site_settings)
    assert get_validator(validators, "faqs").name == "faqs"
    assert get_validator(validators, "nope") is None


def test_list_validators_metadata(site_settings) -> None:
    metadata = {m.name: m for m in list_validators(build_validators(site_settings))}
    assert metadata["redirects"].category == ValidatorCategory.integrity
    assert metadata["components"].category == ValidatorCategory.components
    assert metadata["seo-depth"].category == ValidatorCategory.seo
    assert all(m.description for m in metadata.values())


def test_api_exposed_defaults_to_all(site_settings) -> None:
    validators = build_validators(site_settings)
    assert get_api_exposed(validators) == validators
