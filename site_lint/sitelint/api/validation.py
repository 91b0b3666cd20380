"""Validation API endpoints."""

from __future__ import annotations

import logging
from typing import Any

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, ConfigDict, Field

from sitelint.deps import get_validation_service
from sitelint.engine.service import ValidationService
from sitelint.validators.models import (
    ValidationRunOptions,
    ValidatorMetadata,
)
from sitelint.validators.registry import get_api_exposed, get_validator

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/validation", tags=["validation"])


class ValidatorListResponse(BaseModel):
    validators: list[ValidatorMetadata]
    total: int


class RunRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    validators: list[str] | None = Field(
        None, description="Validator names to run; defaults to every API-exposed validator",
    )
    include_artifacts: bool = Field(
        False, alias="includeArtifacts", description="Keep validator artifacts in the result",
    )


class SingleRunRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    include_artifacts: bool = Field(False, alias="includeArtifacts")


class ClearCacheResponse(BaseModel):
    success: bool
    message: str = ""


@router.get("/validators", response_model=ValidatorListResponse)
async def list_validators(
    service: ValidationService = Depends(get_validation_service),
) -> ValidatorListResponse:
    """Return metadata for every registered validator."""
    validators = service.get_available_validators()
    return ValidatorListResponse(validators=validators, total=len(validators))


@router.post("/run")
async def run_validation(
    body: RunRequest | None = None,
    service: ValidationService = Depends(get_validation_service),
) -> dict[str, Any]:
    """Run all API-exposed validators, or an explicit subset, on fresh content."""
    body = body or RunRequest()
    names = body.validators
    if names is None:
        names = [v.name for v in get_api_exposed(service.validators)]

    try:
        service.clear_context()
        service.build_context()
        result = await service.run_validators(
            ValidationRunOptions(validators=names, include_artifacts=body.include_artifacts)
        )
    except Exception as e:
        logger.error("Validation error: %s", e, exc_info=True)
        raise HTTPException(status_code=500, detail=f"Validation failed: {e}")

    return result.model_dump(mode="json", exclude_none=True)


@router.post("/run/{name}")
async def run_single_validation(
    name: str,
    body: SingleRunRequest | None = None,
    service: ValidationService = Depends(get_validation_service),
) -> dict[str, Any]:
    """Run one validator by name on fresh content."""
    if get_validator(service.validators, name) is None:
        raise HTTPException(status_code=404, detail=f'Validator "{name}" not found')

    body = body or SingleRunRequest()
    try:
        service.clear_context()
        service.build_context()
        result = await service.run_single_validator(name, body.include_artifacts)
    except Exception as e:
        logger.error("Validation error: %s", e, exc_info=True)
        raise HTTPException(status_code=500, detail=f"Validation failed: {e}")

    return result.model_dump(mode="json", exclude_none=True)


@router.get("/context")
async def get_context_info(
    service: ValidationService = Depends(get_validation_service),
) -> dict[str, Any]:
    """Content counts for the cached context (built on first use)."""
    try:
        return service.describe_context()
    except Exception as e:
        logger.error("Context build error: %s", e, exc_info=True)
        raise HTTPException(status_code=500, detail="Failed to get context")


@router.post("/clear-cache", response_model=ClearCacheResponse)
async def clear_cache(
    service: ValidationService = Depends(get_validation_service),
) -> ClearCacheResponse:
    service.clear_context()
    return ClearCacheResponse(success=True, message="Validation cache cleared")
