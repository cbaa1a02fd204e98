"""Command line entrypoint -- validates GTS identifiers in .md/.json/.yaml/.yml files."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from rich.console import Console

from gtsval.output.report_writer import write_human, write_json
from gtsval.sources.fs import DEFAULT_MAX_FILE_SIZE, FsSourceConfig, SourceError, validate_fs
from gtsval.validator.models import DiscoveryMode, ValidationConfig, VendorPolicy, VendorScope

logger = logging.getLogger(__name__)

# Scanned when no paths are given on the command line.
DEFAULT_SCAN_DIRS = ("docs", "modules", "libs", "examples")

VENDOR_SCOPES = {"all": VendorScope.all_segments, "root": VendorScope.root_only}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="gts-validator",
        description="Validate GTS identifiers in .md/.json/.yaml/.yml files.",
    )
    parser.add_argument(
        "paths", nargs="*", type=Path, metavar="PATH",
        help="Files or directories to scan (default: docs, modules, libs, examples)",
    )
    parser.add_argument("--vendor", help="Expected vendor for all GTS IDs")
    parser.add_argument(
        "--vendor-scope", choices=sorted(VENDOR_SCOPES), default="all",
        help="Check the vendor of every chain segment or only the root segment",
    )
    parser.add_argument(
        "-e", "--exclude", action="append", default=[],
        help="Exclude glob pattern (repeatable)",
    )
    parser.add_argument("--json", action="store_true", help="Output results as JSON")
    parser.add_argument("-v", "--verbose", action="store_true", help="Verbose logging")
    parser.add_argument(
        "--max-file-size", type=int, default=DEFAULT_MAX_FILE_SIZE,
        help="Maximum file size in bytes (default: 10 MB)",
    )
    parser.add_argument(
        "--scan-keys", action="store_true",
        help="Also scan JSON/YAML object keys for GTS identifiers",
    )
    parser.add_argument(
        "--strict", action="store_true",
        help="Catch every gts.* token in Markdown, including malformed ones",
    )
    parser.add_argument(
        "--skip-token", dest="skip_tokens", action="append", default=[],
        help="Skip Markdown candidates preceded on the same line by this token (repeatable)",
    )
    parser.add_argument(
        "--no-follow-links", action="store_true",
        help="Do not descend into symlinked directories",
    )
    parser.add_argument("--no-color", action="store_true", help="Disable colored output")
    return parser


def config_from_args(args: argparse.Namespace) -> ValidationConfig:
    if args.vendor:
        policy = VendorPolicy.must_match(args.vendor, VENDOR_SCOPES[args.vendor_scope])
    else:
        policy = VendorPolicy.any()
    return ValidationConfig(
        vendor_policy=policy,
        discovery_mode=(
            DiscoveryMode.heuristic if args.strict else DiscoveryMode.strict_spec_only
        ),
        scan_keys=args.scan_keys,
        skip_tokens=tuple(args.skip_tokens),
    )


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
        stream=sys.stderr,
    )

    paths = args.paths or [Path(d) for d in DEFAULT_SCAN_DIRS if Path(d).exists()]
    if not paths:
        print("No existing paths to scan. Provide paths explicitly.", file=sys.stderr)
        return 1

    config = config_from_args(args)
    fs_config = FsSourceConfig(
        paths=paths,
        exclude=args.exclude,
        max_file_size=args.max_file_size,
        follow_links=not args.no_follow_links,
    )
    logger.info("Scanning paths: %s", ", ".join(str(p) for p in paths))
    if config.vendor_policy.expected:
        logger.info("Expected vendor: %s", config.vendor_policy.expected)

    try:
        report = validate_fs(fs_config, config)
    except SourceError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    if args.json:
        write_json(report, sys.stdout)
    else:
        console = Console(no_color=args.no_color, highlight=False, emoji=False, soft_wrap=True)
        write_human(report, console)

    return 0 if report.ok else 1


if __name__ == "__main__":
    sys.exit(main())
