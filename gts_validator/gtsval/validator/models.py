"""Validation data models."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, computed_field

# Vendors used throughout GTS documentation examples; accepted under any policy.
EXAMPLE_VENDORS = frozenset({"acme", "globex", "example"})


class DiscoveryMode(str, Enum):
    """How aggressively free text is searched for identifiers."""

    strict_spec_only = "strict_spec_only"
    heuristic = "heuristic"


class VendorScope(str, Enum):
    """Which segments of a chain the vendor policy applies to."""

    all_segments = "all_segments"
    root_only = "root_only"


class VendorPolicy(BaseModel):
    """Accept any vendor (expected=None) or require a specific one."""

    model_config = ConfigDict(frozen=True)

    expected: str | None = None
    scope: VendorScope = VendorScope.all_segments
    tolerated_vendors: frozenset[str] = EXAMPLE_VENDORS

    @classmethod
    def any(cls) -> VendorPolicy:
        return cls()

    @classmethod
    def must_match(
        cls, vendor: str, scope: VendorScope = VendorScope.all_segments,
    ) -> VendorPolicy:
        return cls(expected=vendor, scope=scope)

    @property
    def is_any(self) -> bool:
        return self.expected is None


class ValidationConfig(BaseModel):
    """Options shared by every scanner for one validation run."""

    model_config = ConfigDict(frozen=True)

    vendor_policy: VendorPolicy = Field(default_factory=VendorPolicy)
    discovery_mode: DiscoveryMode = DiscoveryMode.strict_spec_only
    scan_keys: bool = False
    skip_tokens: tuple[str, ...] = ()


class Segment(BaseModel):
    """One vendor.package.namespace.type.version unit of a chain."""

    model_config = ConfigDict(frozen=True)

    vendor: str
    package: str
    namespace: str
    type: str
    version: str

    def __str__(self) -> str:
        return f"{self.vendor}.{self.package}.{self.namespace}.{self.type}.{self.version}"


class ParsedIdentifier(BaseModel):
    """A well-formed identifier chain, root segment first."""

    model_config = ConfigDict(frozen=True)

    segments: tuple[Segment, ...] = Field(min_length=1)

    @property
    def root(self) -> Segment:
        return self.segments[0]

    @property
    def vendors(self) -> list[str]:
        return [s.vendor for s in self.segments]

    @property
    def gts_id(self) -> str:
        """Canonical text form, e.g. ``gts.x.core.events.type.v1~``."""
        return "gts." + "".join(f"{s}~" for s in self.segments)

    @property
    def uri(self) -> str:
        return f"gts://{self.gts_id}"


class MalformedIdentifier(BaseModel):
    """A discovered candidate that violates the identifier grammar."""

    model_config = ConfigDict(frozen=True)

    raw: str
    reason: str


class Candidate(BaseModel):
    """A substring proposed by a scanner, with its source location."""

    model_config = ConfigDict(frozen=True)

    text: str
    path: str
    line: int | None = None
    json_path: str | None = None
    is_key: bool = False


class ErrorKind(str, Enum):
    malformed_identifier = "malformed_identifier"
    vendor_mismatch = "vendor_mismatch"
    wildcard_not_allowed = "wildcard_not_allowed"


class ValidationError(BaseModel):
    """A single reported finding."""

    model_config = ConfigDict(frozen=True)

    path: str
    line: int | None = None
    json_path: str | None = None
    kind: ErrorKind
    message: str
    snippet: str = ""

    @computed_field  # type: ignore[prop-decorator]
    @property
    def location(self) -> str:
        if self.line is not None:
            return f"line {self.line}"
        return self.json_path or ""

    @classmethod
    def from_candidate(
        cls, candidate: Candidate, kind: ErrorKind, message: str,
    ) -> ValidationError:
        return cls(
            path=candidate.path,
            line=candidate.line,
            json_path=candidate.json_path,
            kind=kind,
            message=message,
            snippet=candidate.text,
        )

    def format_human_readable(self) -> str:
        where = self.path
        if self.line is not None:
            where = f"{where}:{self.line}"
        elif self.json_path:
            where = f"{where} ({self.json_path})"
        text = f"  {where}\n    {self.message}"
        if self.snippet:
            text += f"\n    > {self.snippet}"
        return text


class ContentFormat(str, Enum):
    markdown = "markdown"
    json = "json"
    yaml = "yaml"


class ValidationItem(BaseModel):
    """Decoded content of one discovered file."""

    path: str
    content: str
    format: ContentFormat | None = None


class ValidationReport(BaseModel):
    """Aggregated outcome of a validation run."""

    model_config = ConfigDict(frozen=True)

    scanned_files: int = 0
    errors: list[ValidationError] = Field(default_factory=list)

    @computed_field  # type: ignore[prop-decorator]
    @property
    def errors_count(self) -> int:
        return len(self.errors)

    @computed_field  # type: ignore[prop-decorator]
    @property
    def ok(self) -> bool:
        return not self.errors
