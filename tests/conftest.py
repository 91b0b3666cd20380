"""Shared test fixtures and configuration."""

import json
import sys
from pathlib import Path
from textwrap import dedent
from typing import Any, Callable

# Add site_lint/ to Python path so `from sitelint.xxx` imports work
sys.path.insert(0, str(Path(__file__).resolve().parent.parent / "site_lint"))

import pytest

from sitelint.config import Settings
from sitelint.content.models import ContentFile, ContentMeta, ContentType, SchemaRef
from sitelint.validators.models import ValidationContext


def write_file(path: Path, text: str) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(dedent(text).lstrip("\n"), encoding="utf-8")
    return path


@pytest.fixture
def write() -> Callable[[Path, str], Path]:
    """Write dedented text to a path, creating parent directories."""
    return write_file


@pytest.fixture
def make_file(tmp_path: Path) -> Callable[..., ContentFile]:
    """Factory for in-memory ContentFile descriptors."""

    def _make(
        slug: str = "full-stack",
        type: ContentType = ContentType.program,
        locale: str = "en",
        meta: dict[str, Any] | None = None,
        schema: dict[str, Any] | None = None,
        data: dict[str, Any] | None = None,
        file_path: str | None = None,
    ) -> ContentFile:
        document = dict(data or {})
        if meta is not None:
            document.setdefault("meta", meta)
        if schema is not None:
            document.setdefault("schema", schema)
        return ContentFile(
            slug=slug,
            title=slug,
            type=type,
            locale=locale,
            file_path=file_path or str(tmp_path / f"{type.value}s" / slug / f"{locale}.yml"),
            meta=ContentMeta(**meta) if meta is not None else None,
            schema_ref=SchemaRef(**schema) if schema is not None else None,
            data=document,
        )

    return _make


@pytest.fixture
def make_context(tmp_path: Path) -> Callable[..., ValidationContext]:
    """Factory for ValidationContext over ``tmp_path`` as the content dir."""

    def _make(
        files: list[ContentFile] | None = None,
        valid_urls: set[str] | None = None,
        schemas: set[str] | None = None,
        **kwargs: Any,
    ) -> ValidationContext:
        return ValidationContext(
            content_files=files or [],
            valid_urls=valid_urls or set(),
            available_schemas=schemas or set(),
            content_dir=tmp_path,
            **kwargs,
        )

    return _make


@pytest.fixture
def site_root(tmp_path: Path) -> Path:
    """A small but complete marketing site on disk.

    Layout: ``<tmp>/site/marketing-content`` with one program in two
    locales, one location, schema-org.yml, theme.json, FAQs, a component
    registry and an image registry whose images exist on disk.
    """
    root = tmp_path / "site"
    content = root / "marketing-content"

    write_file(content / "programs" / "full-stack" / "en.yml", """
        slug: full-stack
        title: Full Stack Development
        meta:
          page_title: Full Stack Developer Bootcamp | Code Academy
          description: Become a full stack developer in 16 weeks with mentors, real projects and career support.
          og_image: /images/full-stack-og.png
          canonical_url: https://example.com/en/career-programs/full-stack
          priority: 0.8
          change_frequency: weekly
          robots: index, follow
          redirects:
            - /en/programs/full-stack
        schema:
          include:
            - organization
            - courses:full-stack
        sections:
          - type: hero
            title: Learn to code
            background: hsl(var(--background))
            image_id: hero-coding
    """)
    write_file(content / "programs" / "full-stack" / "es.yml", """
        slug: full-stack
        title: Desarrollo Full Stack
        meta:
          page_title: Bootcamp de Desarrollo Full Stack | Code Academy
          description: Conviertete en desarrollador full stack en 16 semanas con mentores y proyectos reales.
          og_image: /images/full-stack-og.png
          canonical_url: https://example.com/es/programas-de-carrera/full-stack
        schema:
          include:
            - organization
        sections:
          - type: hero
            title: Aprende a programar
            background: "#ffffff"
            image_id: hero-coding
    """)
    write_file(content / "programs" / "full-stack" / "_common.yml", """
        duration: 16 weeks
    """)
    write_file(content / "locations" / "miami" / "en.yml", """
        slug: miami
        title: Miami
        meta:
          page_title: Coding Bootcamp in Miami, Florida | Code Academy
          description: Join our Miami campus for an in-person coding bootcamp with career support and mentors.
          og_image: /images/miami-og.png
          canonical_url: https://example.com/en/locations/miami
        sections:
          - type: hero
            title: Miami campus
            description: See the /en/career-programs/full-stack program.
    """)
    write_file(content / "locations" / "miami" / "es.yml", """
        slug: miami
        title: Miami
        meta:
          page_title: Bootcamp de Programacion en Miami, Florida | Code
          description: Unete a nuestro campus de Miami para un bootcamp presencial con apoyo profesional.
          og_image: /images/miami-og.png
          canonical_url: https://example.com/es/ubicaciones/miami
        sections:
          - type: hero
            title: Campus de Miami
    """)
    write_file(content / "schema-org.yml", """
        organization:
          type: EducationalOrganization
          name: Code Academy
          url: https://example.com
          description: A coding bootcamp
        website:
          type: WebSite
          name: Code Academy
          url: https://example.com
          description: Learn to code
        courses:
          full-stack:
            type: Course
            name: Full Stack Development
            description: Learn front end and back end development
            provider: "@organization"
    """)
    write_file(content / "theme.json", json.dumps({
        "backgrounds": [
            {"id": "background", "label": "Background", "cssVar": "--background", "value": "#ffffff"},
        ],
    }))
    write_file(content / "faqs" / "en.yml", """
        faqs:
          - question: How long is the program?
            answer: Sixteen weeks.
            last_updated: 2026-09-01
    """)
    write_file(content / "faqs" / "es.yml", """
        faqs:
          - question: Cuanto dura el programa?
            answer: Dieciseis semanas.
            last_updated: "2026-08-15"
    """)
    write_file(content / "component-registry" / "hero" / "v1.0" / "schema.yml", """
        name: Hero
        variants:
          default: {}
          centered: {}
    """)
    write_file(content / "component-registry" / "hero" / "v1.0" / "examples" / "default.yml", """
        name: Default hero
        variant: default
    """)
    write_file(content / "image-registry.json", json.dumps({
        "images": {
            "hero-coding": {"src": "/images/hero-coding.jpg", "alt": "Students coding together"},
        },
    }))
    write_file(root / "images" / "hero-coding.jpg", "jpg")

    return root


@pytest.fixture
def site_settings(site_root: Path) -> Settings:
    return Settings.for_root(site_root)
