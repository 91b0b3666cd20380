"""FastAPI application -- sitelint HTTP entrypoint."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI

import sitelint.deps as deps
from sitelint.api.validation import router as validation_router
from sitelint.config import load_settings
from sitelint.engine.context import ContextBuilder
from sitelint.engine.service import ValidationService
from sitelint.validators.registry import build_validators

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan: wire the validation service on startup."""
    settings = load_settings()
    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )
    logger.info(
        "sitelint starting (project root: %s, content dir: %s)",
        settings.project_root,
        settings.content_dir,
    )

    deps._validation_service = ValidationService(
        build_validators(settings), ContextBuilder(settings),
    )

    yield

    deps._validation_service = None


app = FastAPI(
    title="sitelint",
    version="0.1.0",
    lifespan=lifespan,
)

app.include_router(validation_router)
