"""
Core data types for rollshutter.

This module contains the small immutable value types shared by the mask
parser, the band geometry and the compositor.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import NamedTuple


class Bounds(NamedTuple):
    """Integer rectangle describing an image extent."""

    x: int
    y: int
    width: int
    height: int


class Band(NamedTuple):
    """1-pixel-thick rectangle copied at one scan step."""

    x: int
    y: int
    width: int
    height: int

    def slices(self) -> tuple[slice, slice]:
        """Row and column slices selecting this band from an (H, W, C) array."""
        return slice(self.y, self.y + self.height), slice(self.x, self.x + self.width)


@dataclass(frozen=True)
class PlaceholderSpec:
    """A sequence-number placeholder such as ``%3d`` or ``%03d``."""

    zero_padded: bool
    digits: int

    def __post_init__(self) -> None:
        if self.digits < 1:
            raise ValueError(f"Placeholder digit count must be at least 1, got {self.digits}")

    @property
    def width(self) -> int:
        """Formatting width: the digit count when zero-padded, else natural width (0)."""
        return self.digits if self.zero_padded else 0

    def format(self, index: int) -> str:
        """Render ``index`` the way the placeholder would."""
        if self.width:
            return f"{index:0{self.width}d}"
        return str(index)

    def __str__(self) -> str:
        return f"%{'0' if self.zero_padded else ''}{self.digits}d"


@dataclass(frozen=True)
class ParsedMask:
    """A file mask split around its single placeholder."""

    prefix: str
    placeholder: PlaceholderSpec
    suffix: str

    @property
    def candidate_count(self) -> int:
        """Number of indices the placeholder can express (0 .. 10**digits - 1)."""
        return 10 ** self.placeholder.digits

    def format(self, index: int) -> str:
        """Build the candidate file name for ``index``."""
        return f"{self.prefix}{self.placeholder.format(index)}{self.suffix}"


@dataclass
class CompositeResult:
    """Outcome of a finished compositing run."""

    output: Path
    width: int
    height: int
    frames_composited: int
    frames_available: int

    @property
    def exhausted(self) -> bool:
        """True when the scan ran out of bands before the frames ran out."""
        return self.frames_composited < self.frames_available
