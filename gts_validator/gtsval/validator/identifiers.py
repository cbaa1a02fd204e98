"""GTS identifier grammar -- parsing, classification and free-text discovery.

An identifier is ``gts.`` followed by one or more ``~``-terminated segments,
each ``vendor.package.namespace.type.version``::

    gts.x.core.events.type.v1~
    gts.x.core.events.type.v1~x.core.audit.event.v1.2~

The fully qualified form prefixes the chain with ``gts://``.
"""

from __future__ import annotations

import re
from typing import Iterator

from gtsval.validator.models import (
    DiscoveryMode,
    MalformedIdentifier,
    ParsedIdentifier,
    Segment,
)

GTS_PREFIX = "gts."
GTS_URI_PREFIX = "gts://"
WILDCARD = "*"

SEGMENT_FIELDS = ("vendor", "package", "namespace", "type", "version")

_FIELD = r"[a-z_][a-z0-9_]*"
_VERSION = r"v\d+(?:\.\d+)?"
_SEGMENT = rf"{_FIELD}\.{_FIELD}\.{_FIELD}\.{_FIELD}\.{_VERSION}~"

FIELD_RE = re.compile(rf"^{_FIELD}$")
VERSION_RE = re.compile(rf"^{_VERSION}$")

# Complete, well-formed identifier (optionally gts:// prefixed).
WELL_FORMED_RE = re.compile(rf"^(?:gts://)?gts\.(?:{_SEGMENT})+$")

# Well-formed identifiers embedded in prose: not glued to surrounding identifier text.
_SPEC_ONLY_SCAN_RE = re.compile(
    rf"(?<![A-Za-z0-9_.\-])(?:gts://)?gts\.(?:{_SEGMENT})+(?![A-Za-z0-9_\-])"
)

# Anything that starts like an identifier, malformed or not.
_HEURISTIC_SCAN_RE = re.compile(r"(?<![A-Za-z0-9_.\-])(?:gts://)?gts\.[A-Za-z0-9_.~\-]*")


class IdentifierParseError(ValueError):
    """Raised when text does not satisfy the identifier grammar."""


def strip_uri_prefix(text: str) -> str:
    if text.startswith(GTS_URI_PREFIX):
        return text[len(GTS_URI_PREFIX):]
    return text


def looks_like_identifier(text: str) -> bool:
    """True when a whole string value claims to be an identifier."""
    return text.startswith(GTS_PREFIX) or text.startswith(GTS_URI_PREFIX)


def _split_fields(piece: str) -> list[str]:
    parts = piece.split(".")
    # A minor version (v1.2) contributes a sixth dot-separated part.
    if len(parts) == 6 and re.fullmatch(r"v\d+", parts[4]) and parts[5].isdigit():
        parts = parts[:4] + [f"{parts[4]}.{parts[5]}"]
    return parts


def _parse_segment(piece: str, index: int) -> Segment:
    label = f"segment {index + 1}"
    if not piece:
        raise IdentifierParseError(f"{label} is empty")

    fields = _split_fields(piece)
    if len(fields) != len(SEGMENT_FIELDS):
        raise IdentifierParseError(
            f"{label} '{piece}' has {len(fields)} parts, expected 5 "
            "(vendor.package.namespace.type.version)"
        )

    for name, value in zip(SEGMENT_FIELDS[:-1], fields[:-1]):
        if "-" in value:
            raise IdentifierParseError(
                f"{label} {name} '{value}' contains a hyphen; use underscores"
            )
        if not FIELD_RE.match(value):
            raise IdentifierParseError(
                f"{label} {name} '{value}' must be lowercase letters, digits or underscores"
            )

    version = fields[-1]
    if not VERSION_RE.match(version):
        raise IdentifierParseError(
            f"{label} version '{version}' must look like v<major> or v<major>.<minor>"
        )

    return Segment(**dict(zip(SEGMENT_FIELDS, fields)))


def parse_identifier(text: str) -> ParsedIdentifier:
    """Parse an identifier chain, raising IdentifierParseError on any violation."""
    body = strip_uri_prefix(text)
    if not body.startswith(GTS_PREFIX):
        raise IdentifierParseError(f"identifier must start with '{GTS_PREFIX}'")
    if WILDCARD in body:
        raise IdentifierParseError("wildcards are not part of an identifier")
    if not body.endswith("~"):
        raise IdentifierParseError("schema identifier must end with '~'")

    pieces = body[len(GTS_PREFIX):].split("~")[:-1]
    segments = tuple(_parse_segment(piece, i) for i, piece in enumerate(pieces))
    return ParsedIdentifier(segments=segments)


def classify(
    candidate: str, mode: DiscoveryMode,
) -> ParsedIdentifier | MalformedIdentifier | None:
    """Judge a candidate string.

    Returns None when the candidate is not discovered at all: the bare
    wildcard, or (in strict_spec_only mode) anything short of a well-formed
    identifier.
    """
    if candidate == WILDCARD:
        return None

    if mode == DiscoveryMode.strict_spec_only and not WELL_FORMED_RE.match(candidate):
        return None

    try:
        return parse_identifier(candidate)
    except IdentifierParseError as e:
        return MalformedIdentifier(raw=candidate, reason=str(e))


def _trim_heuristic(text: str) -> str:
    text = text.rstrip(".")
    # gts.x.core.events.type.v1~.schema.json -> file name built from an identifier
    last = text.rfind("~")
    if last != -1 and text[last + 1:].startswith("."):
        text = text[: last + 1]
    return text


def iter_candidate_spans(line: str, mode: DiscoveryMode) -> Iterator[tuple[int, str]]:
    """Yield (offset, text) for each candidate found in a line of free text."""
    if mode == DiscoveryMode.strict_spec_only:
        for m in _SPEC_ONLY_SCAN_RE.finditer(line):
            yield m.start(), m.group(0)
        return

    for m in _HEURISTIC_SCAN_RE.finditer(line):
        if line[m.end():m.end() + 1] == WILDCARD and not m.group(0).endswith("~"):
            # gts.x.core.* -- a filter pattern, not an identifier
            continue
        text = _trim_heuristic(m.group(0))
        if not strip_uri_prefix(text)[len(GTS_PREFIX):]:
            # the bare prefix mentioned in prose
            continue
        yield m.start(), text
