"""FastAPI application -- GTS validator service entrypoint."""

from __future__ import annotations

import json
import logging
import os
from contextlib import asynccontextmanager
from pathlib import Path
from typing import Any, AsyncGenerator

from fastapi import FastAPI

import gtsval.deps as deps
from gtsval.api.validate import router as validate_router
from gtsval.validator.models import DiscoveryMode, ValidationConfig, VendorPolicy

logger = logging.getLogger(__name__)


def _env_flag(name: str) -> bool:
    return os.environ.get(name, "").lower() in ("1", "true", "yes")


def _load_options() -> dict[str, Any]:
    """Load service options from the options file or env fallback."""
    opts_path = os.environ.get("GTS_VALIDATOR_OPTIONS_PATH", "/data/options.json")
    if Path(opts_path).exists():
        return json.loads(Path(opts_path).read_text())
    skip_tokens = os.environ.get("GTS_SKIP_TOKENS", "")
    return {
        "vendor": os.environ.get("GTS_VENDOR") or None,
        "strict": _env_flag("GTS_STRICT"),
        "scan_keys": _env_flag("GTS_SCAN_KEYS"),
        "skip_tokens": [t.strip() for t in skip_tokens.split(",") if t.strip()],
    }


def config_from_options(options: dict[str, Any]) -> ValidationConfig:
    vendor = options.get("vendor")
    return ValidationConfig(
        vendor_policy=VendorPolicy.must_match(vendor) if vendor else VendorPolicy.any(),
        discovery_mode=(
            DiscoveryMode.heuristic if options.get("strict") else DiscoveryMode.strict_spec_only
        ),
        scan_keys=bool(options.get("scan_keys", False)),
        skip_tokens=tuple(options.get("skip_tokens", ())),
    )


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan: load the default config on startup."""
    log_level = logging.DEBUG if os.environ.get("GTS_VALIDATOR_DEV_MODE") else logging.INFO
    logging.basicConfig(
        level=log_level,
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )

    options = _load_options()
    deps._validation_config = config_from_options(options)
    logger.info("GTS validator starting with options: %s", options)

    yield

    deps._validation_config = None


app = FastAPI(
    title="GTS Validator",
    version="0.1.0",
    lifespan=lifespan,
)

app.include_router(validate_router)
