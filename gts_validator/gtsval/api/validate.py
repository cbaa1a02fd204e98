"""Validation API endpoints."""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, Field

from gtsval.deps import get_validation_config
from gtsval.validator.models import (
    DiscoveryMode,
    ValidationConfig,
    ValidationItem,
    ValidationReport,
    VendorPolicy,
    VendorScope,
)
from gtsval.validator.pipeline import run

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["validate"])

MAX_ITEMS = 1000


class ValidateRequest(BaseModel):
    items: list[ValidationItem] = Field(
        default_factory=list, description="Decoded file contents with their declared format",
    )
    vendor: str | None = Field(
        None, description="Expected vendor; overrides the server default when set",
    )
    vendor_scope: VendorScope | None = None
    strict: bool | None = Field(
        None, description="Heuristic discovery in Markdown (catches malformed tokens)",
    )
    scan_keys: bool | None = None
    skip_tokens: list[str] | None = None


def _merge_config(base: ValidationConfig, request: ValidateRequest) -> ValidationConfig:
    """Apply per-request overrides on top of the server defaults."""
    policy = base.vendor_policy
    if request.vendor is not None or request.vendor_scope is not None:
        policy = VendorPolicy(
            expected=request.vendor if request.vendor is not None else policy.expected,
            scope=request.vendor_scope or policy.scope,
            tolerated_vendors=policy.tolerated_vendors,
        )

    mode = base.discovery_mode
    if request.strict is not None:
        mode = DiscoveryMode.heuristic if request.strict else DiscoveryMode.strict_spec_only

    return ValidationConfig(
        vendor_policy=policy,
        discovery_mode=mode,
        scan_keys=base.scan_keys if request.scan_keys is None else request.scan_keys,
        skip_tokens=(
            base.skip_tokens if request.skip_tokens is None else tuple(request.skip_tokens)
        ),
    )


@router.post("/validate", response_model=ValidationReport)
async def validate_items(
    request: ValidateRequest,
    default_config: ValidationConfig = Depends(get_validation_config),
) -> ValidationReport:
    """Validate identifiers in the submitted items and return the report."""
    if not request.items:
        raise HTTPException(status_code=422, detail="No items provided for validation")
    if len(request.items) > MAX_ITEMS:
        raise HTTPException(
            status_code=422, detail=f"Too many items (max {MAX_ITEMS})",
        )

    config = _merge_config(default_config, request)
    logger.info("Validating %d item(s) via API", len(request.items))
    return run(request.items, config)


@router.get("/config", response_model=ValidationConfig)
async def get_config(
    config: ValidationConfig = Depends(get_validation_config),
) -> ValidationConfig:
    """Return the server's default validation configuration."""
    return config
