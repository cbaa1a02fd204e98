"""GTS identifier validation engine."""

from gtsval.validator.identifiers import IdentifierParseError, classify, parse_identifier
from gtsval.validator.models import (
    ContentFormat,
    DiscoveryMode,
    ErrorKind,
    ValidationConfig,
    ValidationError,
    ValidationItem,
    ValidationReport,
    VendorPolicy,
    VendorScope,
)
from gtsval.validator.pipeline import run
from gtsval.validator.tree_walker import ContentDecodeError

__all__ = [
    "ContentDecodeError",
    "ContentFormat",
    "DiscoveryMode",
    "ErrorKind",
    "IdentifierParseError",
    "ValidationConfig",
    "ValidationError",
    "ValidationItem",
    "ValidationReport",
    "VendorPolicy",
    "VendorScope",
    "classify",
    "parse_identifier",
    "run",
]
