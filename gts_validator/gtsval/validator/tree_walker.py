"""Tree walking over decoded JSON/YAML documents."""

from __future__ import annotations

import json
import logging
import re
from typing import Any

from gtsval.validator.identifiers import WILDCARD, classify, looks_like_identifier
from gtsval.validator.models import (
    Candidate,
    DiscoveryMode,
    ErrorKind,
    MalformedIdentifier,
    ValidationConfig,
    ValidationError,
)
from gtsval.validator.vendor_policy import check_vendor

logger = logging.getLogger(__name__)

# Filter/pattern context: wildcards are legal in values under this key.
REF_KEY = "x-gts-ref"

_SIMPLE_KEY_RE = re.compile(r"^[A-Za-z0-9_$@\-]+$")


class ContentDecodeError(ValueError):
    """Raised when a file's content cannot be decoded as its declared format."""


def _child_path(json_path: str, key: Any) -> str:
    key_str = str(key)
    if _SIMPLE_KEY_RE.match(key_str):
        return f"{json_path}.{key_str}"
    return f"{json_path}[{json.dumps(key_str)}]"


def check_string(
    text: str, candidate: Candidate, config: ValidationConfig, in_ref_context: bool = False,
) -> list[ValidationError]:
    """Validate one string value (or key) as a whole."""
    if in_ref_context and WILDCARD in text:
        return []
    if not looks_like_identifier(text):
        return []

    where = "key" if candidate.is_key else "value"
    if WILDCARD in text:
        return [
            ValidationError.from_candidate(
                candidate,
                ErrorKind.wildcard_not_allowed,
                f"Wildcard (*) in {where} is only allowed in '{REF_KEY}' filter patterns",
            )
        ]

    # Whole string values claim to be identifiers, so malformed ones are always reported.
    result = classify(text, DiscoveryMode.heuristic)
    if result is None:
        return []
    if isinstance(result, MalformedIdentifier):
        return [
            ValidationError.from_candidate(
                candidate,
                ErrorKind.malformed_identifier,
                f"Invalid GTS identifier in {where}: {result.reason}",
            )
        ]

    mismatch = check_vendor(result, config.vendor_policy)
    if mismatch is not None:
        return [
            ValidationError.from_candidate(
                candidate, ErrorKind.vendor_mismatch, f"{mismatch.message} ({where})",
            )
        ]
    return []


def walk_value(
    value: Any,
    path: str,
    config: ValidationConfig,
    json_path: str = "$",
    parent_key: str | None = None,
) -> list[ValidationError]:
    """Recursively validate string values (and optionally keys) in pre-order.

    Errors carry the JSON path of the offending node (``$.a[0].$id``).
    """
    errors: list[ValidationError] = []

    if isinstance(value, dict):
        for key, child in value.items():
            child_path = _child_path(json_path, key)
            if config.scan_keys and isinstance(key, str):
                candidate = Candidate(text=key, path=path, json_path=child_path, is_key=True)
                errors.extend(check_string(key, candidate, config))
            child_key = key if isinstance(key, str) else None
            errors.extend(walk_value(child, path, config, child_path, child_key))
    elif isinstance(value, list):
        for i, item in enumerate(value):
            errors.extend(walk_value(item, path, config, f"{json_path}[{i}]", parent_key))
    elif isinstance(value, str):
        candidate = Candidate(text=value, path=path, json_path=json_path)
        errors.extend(
            check_string(value, candidate, config, in_ref_context=parent_key == REF_KEY)
        )

    return errors


def scan_json_content(
    content: str, path: str, config: ValidationConfig,
) -> list[ValidationError]:
    """Decode a JSON document and walk it from the root."""
    try:
        document = json.loads(content)
    except json.JSONDecodeError as e:
        raise ContentDecodeError(f"{path}: invalid JSON: {e}") from e
    except RecursionError as e:
        raise ContentDecodeError(f"{path}: JSON nested too deeply") from e

    try:
        return walk_value(document, path, config)
    except RecursionError as e:
        raise ContentDecodeError(f"{path}: JSON nested too deeply") from e
