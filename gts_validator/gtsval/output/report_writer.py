"""Report rendering -- JSON and human-readable output for ValidationReport."""

from __future__ import annotations

import json
from typing import TextIO

from rich.console import Console
from rich.markup import escape

from gtsval.validator.models import ErrorKind, ValidationReport

RULE_WIDTH = 80

FIX_HINTS: dict[ErrorKind, list[str]] = {
    ErrorKind.malformed_identifier: [
        "Schema IDs must end with ~ (e.g., gts.x.core.type.v1~)",
        "Each segment needs 5 parts: vendor.package.namespace.type.version",
        "No hyphens allowed, use underscores",
    ],
    ErrorKind.wildcard_not_allowed: [
        "Wildcards (*) only in filter/pattern contexts",
    ],
    ErrorKind.vendor_mismatch: [
        "Ensure all GTS IDs use the expected vendor",
    ],
}


def write_json(report: ValidationReport, stream: TextIO) -> None:
    """Write the report as pretty-printed JSON."""
    stream.write(json.dumps(report.model_dump(mode="json"), indent=2))
    stream.write("\n")


def write_human(report: ValidationReport, console: Console) -> None:
    """Write a banner, the error list and fix hints for the error kinds present."""
    rule = "=" * RULE_WIDTH
    console.print()
    console.print(rule)
    console.print("  [bold]GTS DOCUMENTATION VALIDATOR[/bold]")
    console.print(rule)
    console.print()
    console.print(f"  Files scanned: {report.scanned_files}")
    console.print(f"  Errors found:  {report.errors_count}")
    console.print()

    if report.errors:
        console.print("-" * RULE_WIDTH)
        console.print("  [bold red]VALIDATION ERRORS[/bold red]")
        console.print("-" * RULE_WIDTH)
        for error in report.errors:
            console.print(f"[red]{escape(error.format_human_readable())}[/red]")
        console.print()

    console.print(rule)
    if report.ok:
        console.print(f"[green]✓ All {report.scanned_files} files passed validation[/green]")
    else:
        console.print(f"[red]✗ {report.errors_count} invalid GTS identifiers found[/red]")
        console.print()
        console.print("  To fix:")
        kinds = {e.kind for e in report.errors}
        for kind, hints in FIX_HINTS.items():
            if kind in kinds:
                for hint in hints:
                    console.print(f"    - {escape(hint)}")
    console.print(rule)
