"""Tests for report rendering."""

from __future__ import annotations

import json
from io import StringIO

from rich.console import Console

from gtsval.output.report_writer import write_human, write_json
from gtsval.validator.models import ErrorKind, ValidationError, ValidationReport


def _console() -> tuple[Console, StringIO]:
    buf = StringIO()
    return Console(file=buf, width=200, no_color=True, highlight=False, emoji=False), buf


def _report_with(kind: ErrorKind, message: str) -> ValidationReport:
    error = ValidationError(
        path="docs/a.md", line=3, kind=kind, message=message, snippet="gts.y.core.pkg.t.v1~",
    )
    return ValidationReport(scanned_files=1, errors=[error])


class TestWriteJson:
    def test_shape(self) -> None:
        buf = StringIO()
        write_json(ValidationReport(scanned_files=1), buf)
        data = json.loads(buf.getvalue())
        assert data == {"scanned_files": 1, "errors": [], "errors_count": 0, "ok": True}
        assert '"ok": true' in buf.getvalue()


class TestWriteHuman:
    def test_success(self) -> None:
        console, buf = _console()
        write_human(ValidationReport(scanned_files=2), console)
        out = buf.getvalue()
        assert "GTS DOCUMENTATION VALIDATOR" in out
        assert "Files scanned: 2" in out
        assert "All 2 files passed validation" in out
        assert "VALIDATION ERRORS" not in out

    def test_vendor_mismatch_hints_only(self) -> None:
        console, buf = _console()
        report = _report_with(
            ErrorKind.vendor_mismatch, "Vendor mismatch: expected 'x', found 'y' in segment 1",
        )
        write_human(report, console)
        out = buf.getvalue()
        assert "VALIDATION ERRORS" in out
        assert "docs/a.md:3" in out
        assert "1 invalid GTS identifiers found" in out
        assert "Ensure all GTS IDs use the expected vendor" in out
        assert "No hyphens allowed" not in out
        assert "Wildcards (*)" not in out

    def test_parse_error_hints(self) -> None:
        console, buf = _console()
        write_human(_report_with(ErrorKind.malformed_identifier, "Invalid GTS identifier"), console)
        out = buf.getvalue()
        assert "No hyphens allowed, use underscores" in out
        assert "expected vendor" not in out

    def test_markup_in_paths_is_escaped(self) -> None:
        console, buf = _console()
        error = ValidationError(
            path="a.json",
            json_path='$["gts.y.core.pkg.t.v1~"]',
            kind=ErrorKind.vendor_mismatch,
            message="Vendor mismatch",
        )
        write_human(ValidationReport(scanned_files=1, errors=[error]), console)
        assert '$["gts.y.core.pkg.t.v1~"]' in buf.getvalue()
