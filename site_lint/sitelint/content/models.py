"""Content descriptor models."""

from __future__ import annotations

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


class ContentType(str, Enum):
    program = "program"
    landing = "landing"
    location = "location"
    page = "page"


def _as_text(value: Any) -> str | None:
    if value is None or isinstance(value, str):
        return value
    if isinstance(value, (list, tuple)):
        return ", ".join(str(v) for v in value if v is not None)
    return str(value)


class ContentMeta(BaseModel):
    """SEO metadata block (``meta:``) of a content file.

    Authors write YAML by hand, so scalar fields accept any value and are
    turned into text; the meta validator judges what the text says.
    """

    model_config = ConfigDict(extra="allow")

    page_title: str | None = None
    description: str | None = None
    robots: str | None = None
    og_image: str | None = None
    canonical_url: str | None = None
    # Left untyped: the meta validator reports non-numeric values.
    priority: Any = None
    change_frequency: str | None = None
    redirects: list[str] = Field(default_factory=list)

    @field_validator(
        "page_title", "description", "robots", "og_image", "canonical_url",
        "change_frequency", mode="before",
    )
    @classmethod
    def _coerce_text(cls, value: Any) -> Any:
        return _as_text(value)

    @field_validator("redirects", mode="before")
    @classmethod
    def _coerce_redirects(cls, value: Any) -> Any:
        if value is None:
            return []
        if isinstance(value, (list, tuple)):
            return [str(v) for v in value if v is not None]
        return [str(value)]


class SchemaRef(BaseModel):
    """Structured-data references (``schema:``) of a content file."""

    model_config = ConfigDict(extra="allow")

    include: list[str] | None = None
    overrides: dict[str, Any] | None = None

    @field_validator("include", mode="before")
    @classmethod
    def _coerce_include(cls, value: Any) -> Any:
        if value is None:
            return None
        if isinstance(value, (list, tuple)):
            return [str(v) for v in value if v is not None]
        if isinstance(value, dict):
            return [str(k) for k in value]
        return [str(value)]

    @field_validator("overrides", mode="before")
    @classmethod
    def _coerce_overrides(cls, value: Any) -> Any:
        if not isinstance(value, dict):
            return None
        return {str(k): v for k, v in value.items()}


class ContentFile(BaseModel):
    """One parsed content unit on disk."""

    slug: str
    title: str
    type: ContentType
    locale: str = "en"
    file_path: str
    variant: str | None = None
    version: int | None = None
    meta: ContentMeta | None = None
    schema_ref: SchemaRef | None = Field(default=None, alias="schema")
    data: dict[str, Any] = Field(default_factory=dict, exclude=True, repr=False)

    model_config = ConfigDict(populate_by_name=True)
