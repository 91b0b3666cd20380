"""Validator registry -- the ordered list of checks a run can draw from."""

from __future__ import annotations

from datetime import date

from sitelint.config import Settings
from sitelint.schema_org.renderer import SchemaOrgRenderer, SchemaRenderer
from sitelint.validators.backgrounds import BackgroundsValidator
from sitelint.validators.base import Validator
from sitelint.validators.components import ComponentsValidator
from sitelint.validators.content_quality import ContentQualityValidator
from sitelint.validators.faqs import FaqsValidator
from sitelint.validators.images import ImagesValidator
from sitelint.validators.meta import MetaValidator
from sitelint.validators.models import ValidatorMetadata
from sitelint.validators.redirects import RedirectsValidator
from sitelint.validators.schema import SchemaValidator
from sitelint.validators.schema_completeness import SchemaCompletenessValidator
from sitelint.validators.seo_depth import SeoDepthValidator
from sitelint.validators.sitemap import SitemapValidator


def build_validators(
    settings: Settings,
    renderer: SchemaRenderer | None = None,
    today: date | None = None,
) -> list[Validator]:
    """Instantiate every validator in execution order.

    ``renderer`` and ``today`` exist so tests can pin the JSON-LD output
    and the FAQ staleness clock.
    """
    return [
        RedirectsValidator(),
        MetaValidator(),
        SchemaValidator(),
        SitemapValidator(),
        ComponentsValidator(),
        BackgroundsValidator(),
        FaqsValidator(today=today),
        SeoDepthValidator(),
        SchemaCompletenessValidator(renderer or SchemaOrgRenderer(settings.content_dir)),
        ImagesValidator(settings.project_root),
        ContentQualityValidator(),
    ]


def get_validator(validators: list[Validator], name: str) -> Validator | None:
    for validator in validators:
        if validator.name == name:
            return validator
    return None


def list_validators(validators: list[Validator]) -> list[ValidatorMetadata]:
    return [v.metadata for v in validators]


def get_api_exposed(validators: list[Validator]) -> list[Validator]:
    return [v for v in validators if v.api_exposed]
