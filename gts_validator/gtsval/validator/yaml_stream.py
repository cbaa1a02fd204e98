"""YAML scanning using ruamel.yaml, with per-document failure isolation."""

from __future__ import annotations

import logging
from io import StringIO
from typing import Any

from ruamel.yaml import YAML, YAMLError

from gtsval.validator.models import ValidationConfig, ValidationError
from gtsval.validator.tree_walker import ContentDecodeError, walk_value

logger = logging.getLogger(__name__)

DOCUMENT_SEPARATOR = "---"

# ruamel raises plain ValueError for unbuildable scalars (e.g. `when: 2024-13-45`)
# and RecursionError for very deeply nested collections.
LOAD_ERRORS = (YAMLError, ValueError, RecursionError)


def _yaml() -> YAML:
    return YAML(typ="safe", pure=True)


def split_yaml_documents(content: str) -> list[str]:
    """Split a stream on ``---`` lines, dropping blank documents."""
    documents: list[str] = []
    current: list[str] = []

    for line in content.splitlines():
        if line.strip() == DOCUMENT_SEPARATOR:
            doc = "\n".join(current)
            if doc.strip():
                documents.append(doc)
            current = []
            continue
        current.append(line)

    doc = "\n".join(current)
    if doc.strip():
        documents.append(doc)

    return documents


def load_yaml_stream(content: str) -> list[Any]:
    """Parse every document of a stream, raising if any of them is broken."""
    return list(_yaml().load_all(StringIO(content)))


def _load_documents_individually(content: str, path: str) -> list[Any]:
    documents: list[Any] = []
    segments = split_yaml_documents(content)
    for index, segment in enumerate(segments, start=1):
        try:
            documents.append(_yaml().load(StringIO(segment)))
        except LOAD_ERRORS as e:
            logger.debug("%s: skipping unparseable YAML document %d: %s", path, index, e)

    if segments and not documents:
        raise ContentDecodeError(f"{path}: no YAML document could be parsed")
    return documents


def scan_yaml_content(
    content: str, path: str, config: ValidationConfig,
) -> list[ValidationError]:
    """Scan a (possibly multi-document) YAML stream.

    The whole stream is parsed first. If that fails, the text is split on
    ``---`` and each document is parsed on its own so a single malformed
    document does not hide errors in its valid siblings.
    """
    try:
        documents = load_yaml_stream(content)
    except LOAD_ERRORS as e:
        logger.warning(
            "%s: YAML stream failed to parse (%s), validating documents individually",
            path,
            getattr(e, "problem", None) or e,
        )
        documents = _load_documents_individually(content, path)

    errors: list[ValidationError] = []
    for index, document in enumerate(documents, start=1):
        try:
            errors.extend(walk_value(document, path, config))
        except RecursionError:
            logger.debug("%s: skipping YAML document %d, nested too deeply", path, index)
    return errors
