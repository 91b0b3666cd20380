"""Content loader -- scans the marketing content tree into ContentFile descriptors."""

from __future__ import annotations

import logging
import re
from pathlib import Path
from typing import Any, Iterator

from ruamel.yaml import YAML, YAMLError

from sitelint.content.models import ContentFile, ContentType

logger = logging.getLogger(__name__)

_yaml = YAML(typ="safe", pure=True)

# Top-level directory -> content type, in scan order
CONTENT_DIRS: dict[str, ContentType] = {
    "programs": ContentType.program,
    "landings": ContentType.landing,
    "locations": ContentType.location,
    "pages": ContentType.page,
}

YAML_SUFFIXES = (".yml", ".yaml")

_LOCALE_SUFFIX_RE = re.compile(r"\.([a-z]{2})\.ya?ml$")
_LOCALE_ONLY_RE = re.compile(r"^([a-z]{2})\.ya?ml$")
_VARIANT_RE = re.compile(r"^(.+?)\.v(\d+)\.([a-z]{2})\.ya?ml$")


def load_yaml_file(file_path: Path) -> Any:
    """Parse a YAML file into plain Python types.

    Raises YAMLError / OSError; callers decide whether that is fatal.
    """
    content = file_path.read_text(encoding="utf-8")
    if not content.strip():
        return None
    return _yaml.load(content)


def extract_locale(filename: str) -> str:
    """Return the two-letter locale of a content filename, ``en`` by default."""
    match = _LOCALE_SUFFIX_RE.search(filename)
    if match:
        return match.group(1)
    match = _LOCALE_ONLY_RE.match(filename)
    if match:
        return match.group(1)
    return "en"


def extract_variant(filename: str) -> tuple[str | None, int | None]:
    """Return ``(variant, version)`` for ``variant.vN.xx.yml`` names."""
    match = _VARIANT_RE.match(filename)
    if match:
        return match.group(1), int(match.group(2))
    return None, None


def _parse_content_file(
    file_path: Path, unit_dir: Path, content_type: ContentType,
) -> ContentFile | None:
    try:
        data = load_yaml_file(file_path)
    except (YAMLError, OSError, UnicodeDecodeError) as e:
        logger.warning("Failed to parse %s: %s", file_path, e)
        return None

    if not isinstance(data, dict):
        logger.warning("Skipping %s: document is not a mapping", file_path)
        return None

    variant, version = extract_variant(file_path.name)
    meta = data.get("meta")
    schema = data.get("schema")
    if meta is not None and not isinstance(meta, dict):
        logger.warning("%s: ignoring meta block that is not a mapping", file_path)
        meta = None
    if schema is not None and not isinstance(schema, dict):
        logger.warning("%s: ignoring schema block that is not a mapping", file_path)
        schema = None

    return ContentFile(
        slug=str(data.get("slug") or unit_dir.name),
        title=str(data.get("title") or data.get("name") or unit_dir.name),
        type=content_type,
        locale=extract_locale(file_path.name),
        file_path=str(file_path.resolve()),
        variant=variant,
        version=version,
        meta=meta or None,
        schema=schema or None,
        data=data,
    )


def load_content_directory(dir_path: Path, content_type: ContentType) -> list[ContentFile]:
    """Load every content unit directly under ``dir_path``."""
    files: list[ContentFile] = []
    if not dir_path.is_dir():
        return files

    for unit_dir in sorted(dir_path.iterdir()):
        if not unit_dir.is_dir():
            continue
        for file_path in sorted(unit_dir.iterdir()):
            if not file_path.is_file() or file_path.suffix not in YAML_SUFFIXES:
                continue
            if file_path.name.startswith("_"):
                continue
            parsed = _parse_content_file(file_path, unit_dir, content_type)
            if parsed is not None:
                files.append(parsed)

    return files


def load_all_content(content_dir: Path) -> list[ContentFile]:
    """Load programs, landings, locations and pages as one flat list."""
    files: list[ContentFile] = []
    for dirname, content_type in CONTENT_DIRS.items():
        files.extend(load_content_directory(content_dir / dirname, content_type))
    logger.debug("Loaded %d content files from %s", len(files), content_dir)
    return files


def get_content_by_type(content_dir: Path, content_type: ContentType) -> list[ContentFile]:
    dirname = next(d for d, t in CONTENT_DIRS.items() if t == content_type)
    return load_content_directory(content_dir / dirname, content_type)


def iter_content_documents(content_dir: Path) -> Iterator[tuple[Path, Any]]:
    """Yield ``(path, document)`` for every YAML file below the content dirs.

    Unlike load_all_content this includes ``_common.yml`` and nested files.
    Unparseable files are skipped.
    """
    for dirname in CONTENT_DIRS:
        root = content_dir / dirname
        if not root.is_dir():
            continue
        for file_path in sorted(root.rglob("*")):
            if not file_path.is_file() or file_path.suffix not in YAML_SUFFIXES:
                continue
            try:
                yield file_path, load_yaml_file(file_path)
            except (YAMLError, OSError, UnicodeDecodeError):
                logger.debug("Skipping unparseable %s", file_path)
