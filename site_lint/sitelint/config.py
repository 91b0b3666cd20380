"""Runtime settings -- options file or environment fallback."""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path

from pydantic import BaseModel

logger = logging.getLogger(__name__)

DEFAULT_CONTENT_DIRNAME = "marketing-content"


class Settings(BaseModel):
    """Where the content lives and how chatty the logs are."""

    project_root: Path
    content_dir: Path
    dev_mode: bool = False

    @property
    def log_level(self) -> int:
        return logging.DEBUG if self.dev_mode else logging.INFO

    @property
    def schema_path(self) -> Path:
        return self.content_dir / "schema-org.yml"

    @classmethod
    def for_root(cls, project_root: Path, content_dir: Path | None = None) -> Settings:
        root = Path(project_root).resolve()
        return cls(
            project_root=root,
            content_dir=Path(content_dir).resolve() if content_dir else root / DEFAULT_CONTENT_DIRNAME,
        )


def load_settings(content_dir: str | Path | None = None) -> Settings:
    """Load settings from $SITELINT_OPTIONS_PATH or env vars.

    An explicit ``content_dir`` (e.g. from a CLI flag) wins over both.
    """
    opts_path = os.environ.get("SITELINT_OPTIONS_PATH", "")
    if opts_path and Path(opts_path).exists():
        options = json.loads(Path(opts_path).read_text(encoding="utf-8"))
    else:
        options = {
            "project_root": os.environ.get("SITELINT_PROJECT_ROOT", ""),
            "content_dir": os.environ.get("SITELINT_CONTENT_DIR", ""),
            "dev_mode": os.environ.get("SITELINT_DEV_MODE", "").lower() == "true",
        }

    project_root = Path(options.get("project_root") or os.getcwd()).resolve()
    chosen_content = content_dir or options.get("content_dir") or None

    settings = Settings.for_root(project_root, Path(chosen_content) if chosen_content else None)
    settings.dev_mode = bool(options.get("dev_mode", False))
    return settings
