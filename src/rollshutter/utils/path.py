"""
Path and file system utilities for rollshutter.

This module handles all path-related functionality including:
- File mask parsing (``foo%03d.png`` -> prefix, placeholder, suffix)
- Candidate file name generation for a parsed mask
- Frame sequence resolution by probing the file system
"""

from __future__ import annotations

import re
from collections.abc import Iterator
from pathlib import Path

from ..config import FolderSelector, MaskSelector
from ..core.errors import (
    CouldNotParseFilemask,
    InvalidPlaceholder,
    MultipleFileMasks,
    NoFileMaskFound,
    NoFilesFound,
    RollingShutterError,
    Unimplemented,
)
from ..core.types import ParsedMask, PlaceholderSpec

FILEMASK_RE = re.compile(r"%(0)?(\d+)d")


def parse_filemask(mask: str) -> ParsedMask:
    """Split a file mask around its single ``%Nd`` / ``%0Nd`` placeholder.

    Examples:
        "foo%03d.png" -> ("foo", %03d, ".png")
        "f%5d.jpg"    -> ("f", %5d, ".jpg")

    Args:
        mask (str): File mask to parse.

    Returns:
        ParsedMask: Prefix, placeholder spec and suffix.

    Raises:
        NoFileMaskFound: The mask contains no placeholder.
        MultipleFileMasks: The mask contains more than one placeholder.
        InvalidPlaceholder: The placeholder has a digit count of zero.
    """
    matches = list(FILEMASK_RE.finditer(mask))
    if not matches:
        raise NoFileMaskFound()
    if len(matches) > 1:
        raise MultipleFileMasks()

    match = matches[0]
    try:
        spec = PlaceholderSpec(zero_padded=match.group(1) is not None, digits=int(match.group(2)))
    except ValueError as e:
        raise InvalidPlaceholder(match.group(0)) from e

    return ParsedMask(prefix=mask[: match.start()], placeholder=spec, suffix=mask[match.end() :])


def iter_candidates(parsed: ParsedMask) -> Iterator[Path]:
    """Yield every candidate path of a parsed mask in increasing index order."""
    for i in range(parsed.candidate_count):
        yield Path(parsed.format(i))


def _exists(path: Path) -> bool:
    """Like Path.exists, but an OS error while probing counts as missing."""
    try:
        return path.exists()
    except OSError:
        return False


def find_sequence(parsed: ParsedMask) -> list[Path]:
    """Return the first contiguous run of existing files for a parsed mask.

    Missing indices before the first hit are skipped; the first missing index
    after a hit ends the sequence.
    """
    paths: list[Path] = []
    for candidate in iter_candidates(parsed):
        if _exists(candidate):
            paths.append(candidate)
        elif paths:
            break
    return paths


def get_paths(selector: MaskSelector | FolderSelector) -> list[Path]:
    """Resolve a selector into the ordered, non-empty list of frame paths.

    Args:
        selector: Mask or folder selector.

    Returns:
        list[Path]: Existing frame files, first frame first.

    Raises:
        CouldNotParseFilemask: The mask could not be parsed (cause attached).
        NoFilesFound: No candidate file exists.
        Unimplemented: A folder selector was given.
    """
    if isinstance(selector, FolderSelector):
        raise Unimplemented("folder-based frame selection")

    try:
        parsed = parse_filemask(selector.pattern)
    except RollingShutterError as e:
        raise CouldNotParseFilemask(selector.pattern) from e

    paths = find_sequence(parsed)
    if not paths:
        raise NoFilesFound()
    return paths
