"""Canonical URL helpers for content files."""

from __future__ import annotations

from sitelint.content.models import ContentFile, ContentType

# (english template, spanish template) per content type
_URL_TEMPLATES: dict[ContentType, tuple[str, str]] = {
    ContentType.program: ("/en/career-programs/{slug}", "/es/programas-de-carrera/{slug}"),
    ContentType.landing: ("/us/{slug}", "/es/{slug}"),
    ContentType.location: ("/en/locations/{slug}", "/es/ubicaciones/{slug}"),
    ContentType.page: ("/us/{slug}", "/es/{slug}"),
}

STATIC_ROUTES = [
    "/",
    "/us",
    "/es",
    "/en/career-programs",
    "/es/programas-de-carrera",
    "/en/locations",
    "/es/ubicaciones",
    "/dashboard",
    "/component-showcase",
]


def get_canonical_url(file: ContentFile) -> str:
    """Public URL of a content file, derived from its type, locale and slug."""
    templates = _URL_TEMPLATES.get(file.type)
    if templates is None:
        return f"/{file.slug}"
    english, spanish = templates
    template = spanish if file.locale == "es" else english
    return template.format(slug=file.slug)


def normalize_url(url: str) -> str:
    """Leading slash, lowercase, no trailing slash (except for root)."""
    normalized = url if url.startswith("/") else f"/{url}"
    normalized = normalized.lower()
    if len(normalized) > 1:
        normalized = normalized.rstrip("/") or "/"
    return normalized


def build_valid_url_set(content_files: list[ContentFile]) -> set[str]:
    """Every canonical content URL plus the static routes."""
    valid_urls = {get_canonical_url(f) for f in content_files}
    valid_urls.update(STATIC_ROUTES)
    return valid_urls
