"""Schema.org registry access -- flattens schema-org.yml into reference keys."""

from __future__ import annotations

import logging
from pathlib import Path

from ruamel.yaml import YAMLError

from sitelint.content.loader import load_yaml_file

logger = logging.getLogger(__name__)

# Categories whose children are addressed as "category:child"
NESTED_CATEGORIES = ("courses", "item_lists")


def get_available_schema_keys(schema_path: Path) -> set[str]:
    """Return every addressable schema key; empty set if the file is unusable."""
    keys: set[str] = set()

    if not schema_path.exists():
        logger.warning("Schema definitions not found: %s", schema_path)
        return keys

    try:
        data = load_yaml_file(schema_path)
    except (YAMLError, OSError, UnicodeDecodeError) as e:
        logger.error("Failed to parse %s: %s", schema_path, e)
        return keys

    if not isinstance(data, dict):
        return keys

    for key, value in data.items():
        if key in NESTED_CATEGORIES:
            if isinstance(value, dict):
                keys.update(f"{key}:{nested}" for nested in value)
        else:
            keys.add(str(key))

    return keys


def validate_schema_reference(ref: str, available_keys: set[str]) -> bool:
    return ref in available_keys
