"""Vendor policy -- check that identifiers belong to the expected vendor."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict

from gtsval.validator.models import ParsedIdentifier, VendorPolicy, VendorScope


class VendorMismatch(BaseModel):
    model_config = ConfigDict(frozen=True)

    expected: str
    found: str
    segment_index: int

    @property
    def message(self) -> str:
        return (
            f"Vendor mismatch: expected '{self.expected}', found '{self.found}' "
            f"in segment {self.segment_index + 1}"
        )


def check_vendor(
    identifier: ParsedIdentifier, policy: VendorPolicy,
) -> VendorMismatch | None:
    """Return the first offending segment's mismatch, or None if the identifier conforms."""
    if policy.is_any:
        return None

    segments = identifier.segments
    if policy.scope == VendorScope.root_only:
        segments = segments[:1]

    for i, segment in enumerate(segments):
        if segment.vendor == policy.expected:
            continue
        if segment.vendor in policy.tolerated_vendors:
            continue
        return VendorMismatch(expected=policy.expected, found=segment.vendor, segment_index=i)

    return None
