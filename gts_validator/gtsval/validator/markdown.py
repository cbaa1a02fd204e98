"""Markdown scanning -- line-by-line discovery of identifiers in prose."""

from __future__ import annotations

import logging

from gtsval.validator.identifiers import classify, iter_candidate_spans
from gtsval.validator.models import (
    Candidate,
    ErrorKind,
    MalformedIdentifier,
    ValidationConfig,
    ValidationError,
)
from gtsval.validator.vendor_policy import check_vendor

logger = logging.getLogger(__name__)


def _is_skipped(prefix: str, skip_tokens: list[str]) -> bool:
    """True if any skip token appears in the text preceding a candidate."""
    return any(token in prefix for token in skip_tokens)


def scan_markdown_content(
    content: str, path: str, config: ValidationConfig,
) -> list[ValidationError]:
    """Scan Markdown text for identifiers.

    Each line is scanned independently. A candidate is suppressed when one of
    the configured skip tokens (case-insensitive) occurs earlier on the same
    line, e.g. ``**given** gts.y.core.pkg.mytype.v1~`` with ``**given**``.
    """
    errors: list[ValidationError] = []
    mode = config.discovery_mode
    skip_tokens = [t.lower() for t in config.skip_tokens if t]

    for line_no, line in enumerate(content.splitlines(), start=1):
        for start, text in iter_candidate_spans(line, mode):
            if skip_tokens and _is_skipped(line[:start].lower(), skip_tokens):
                logger.debug("%s:%d: skip token suppresses %s", path, line_no, text)
                continue

            result = classify(text, mode)
            if result is None:
                continue

            candidate = Candidate(text=text, path=path, line=line_no)
            if isinstance(result, MalformedIdentifier):
                errors.append(
                    ValidationError.from_candidate(
                        candidate,
                        ErrorKind.malformed_identifier,
                        f"Invalid GTS identifier: {result.reason}",
                    )
                )
                continue

            mismatch = check_vendor(result, config.vendor_policy)
            if mismatch is not None:
                errors.append(
                    ValidationError.from_candidate(
                        candidate, ErrorKind.vendor_mismatch, mismatch.message,
                    )
                )

    return errors
