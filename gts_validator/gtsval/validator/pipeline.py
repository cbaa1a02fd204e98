"""Validation pipeline -- dispatches each item to its scanner and builds the report."""

from __future__ import annotations

import logging
from typing import Callable, Iterable

from gtsval.validator.markdown import scan_markdown_content
from gtsval.validator.models import (
    ContentFormat,
    ValidationConfig,
    ValidationError,
    ValidationItem,
    ValidationReport,
)
from gtsval.validator.tree_walker import ContentDecodeError, scan_json_content
from gtsval.validator.yaml_stream import scan_yaml_content

logger = logging.getLogger(__name__)

Scanner = Callable[[str, str, ValidationConfig], list[ValidationError]]

SCANNERS: dict[ContentFormat, Scanner] = {
    ContentFormat.markdown: scan_markdown_content,
    ContentFormat.json: scan_json_content,
    ContentFormat.yaml: scan_yaml_content,
}


def scan_item(item: ValidationItem, config: ValidationConfig) -> list[ValidationError] | None:
    """Scan one item. Returns None when the item is skipped and must not be counted."""
    if item.format is None:
        logger.debug("Skipping %s: no scanner for its format", item.path)
        return None

    scanner = SCANNERS[item.format]
    try:
        return scanner(item.content, item.path, config)
    except ContentDecodeError as e:
        logger.warning("Skipping %s", e)
        return None


def run(items: Iterable[ValidationItem], config: ValidationConfig) -> ValidationReport:
    """Run the validation over every item, in order.

    Items are processed once each; errors keep per-file discovery order and
    follow the input order across files.
    """
    errors: list[ValidationError] = []
    scanned_files = 0

    for item in items:
        file_errors = scan_item(item, config)
        if file_errors is None:
            continue
        scanned_files += 1
        errors.extend(file_errors)

    logger.info("Scanned %d file(s), %d error(s)", scanned_files, len(errors))
    return ValidationReport(scanned_files=scanned_files, errors=errors)
