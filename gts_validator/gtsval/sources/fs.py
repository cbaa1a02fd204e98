"""Filesystem source -- discovers files on disk and feeds them to the pipeline."""

from __future__ import annotations

import fnmatch
import logging
import os
from pathlib import Path

from pydantic import BaseModel, Field

from gtsval.validator.models import (
    ContentFormat,
    ValidationConfig,
    ValidationItem,
    ValidationReport,
)
from gtsval.validator.pipeline import run

logger = logging.getLogger(__name__)

DEFAULT_MAX_FILE_SIZE = 10_485_760

SKIP_DIRS = {"target", "node_modules", ".git", "vendor", ".gts-spec"}

FORMAT_BY_SUFFIX = {
    ".md": ContentFormat.markdown,
    ".json": ContentFormat.json,
    ".yaml": ContentFormat.yaml,
    ".yml": ContentFormat.yaml,
}


class SourceError(RuntimeError):
    """Raised when the requested sources cannot be validated at all."""


class FsSourceConfig(BaseModel):
    """Where to look for files and which ones to leave out."""

    paths: list[Path] = Field(default_factory=list)
    exclude: list[str] = Field(default_factory=list)
    max_file_size: int = DEFAULT_MAX_FILE_SIZE
    follow_links: bool = True


def content_format_for(path: Path) -> ContentFormat | None:
    return FORMAT_BY_SUFFIX.get(path.suffix)


def _is_excluded(path: Path, patterns: list[str]) -> bool:
    path_str = str(path)
    return any(
        fnmatch.fnmatch(path_str, p) or fnmatch.fnmatch(path.name, p) for p in patterns
    )


def _walk_dir(root: Path, follow_links: bool) -> list[Path]:
    found: list[Path] = []
    # (st_dev, st_ino) of every directory walked; a symlink back to one is a loop
    seen: set[tuple[int, int]] = set()
    for dirpath, dirnames, filenames in os.walk(root, followlinks=follow_links):
        try:
            st = os.stat(dirpath)
        except OSError as e:
            logger.debug("Skipping unreadable directory %s: %s", dirpath, e)
            dirnames[:] = []
            continue
        if (st.st_dev, st.st_ino) in seen:
            logger.debug("Skipping already visited directory %s", dirpath)
            dirnames[:] = []
            continue
        seen.add((st.st_dev, st.st_ino))
        dirnames[:] = [d for d in dirnames if d not in SKIP_DIRS]
        found.extend(Path(dirpath) / name for name in filenames)
    return found


def find_files(config: FsSourceConfig) -> list[Path]:
    """Return the sorted, deduplicated list of supported files under the configured paths."""
    files: set[Path] = set()

    for path in config.paths:
        if path.is_file():
            candidates = [path]
        elif path.is_dir():
            candidates = _walk_dir(path, config.follow_links)
        else:
            continue

        for file_path in candidates:
            if content_format_for(file_path) is None:
                continue
            if _is_excluded(file_path, config.exclude):
                continue
            if not file_path.is_file():
                continue
            files.add(file_path)

    return sorted(files)


def read_validation_item(path: Path, max_file_size: int) -> ValidationItem | None:
    """Read a file, or return None if it is too large, unreadable or not UTF-8."""
    fmt = content_format_for(path)
    if fmt is None:
        return None

    try:
        if path.stat().st_size > max_file_size:
            logger.debug("Skipping %s: larger than %d bytes", path, max_file_size)
            return None
        content = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        logger.debug("Skipping %s: %s", path, e)
        return None

    return ValidationItem(path=str(path), content=content, format=fmt)


def validate_fs(fs_config: FsSourceConfig, config: ValidationConfig) -> ValidationReport:
    """Validate identifiers in files on disk.

    Raises SourceError if no paths are given or any given path does not exist.
    """
    if not fs_config.paths:
        raise SourceError("No paths provided for validation")
    for path in fs_config.paths:
        if not path.exists():
            raise SourceError(f"Path does not exist: {path}")

    files = find_files(fs_config)
    logger.debug("Discovered %d candidate file(s)", len(files))

    items = (
        item
        for item in (read_validation_item(f, fs_config.max_file_size) for f in files)
        if item is not None
    )
    return run(items, config)
