"""
Band geometry for the rolling shutter sweep.

Band ``i`` of a sweep is the i-th row (N/S) or column (E/W) counted from the
starting edge. Once ``i`` reaches the swept dimension the scan is exhausted.
"""

from __future__ import annotations

from ..config import Direction
from ..core.types import Band, Bounds


def scan_limit(bounds: Bounds, direction: Direction) -> int:
    """Number of bands a sweep over ``bounds`` in ``direction`` can produce."""
    _, _, width, height = bounds
    return height if direction.is_vertical else width


def band(bounds: Bounds, index: int, direction: Direction) -> Band | None:
    """Return the band to copy at scan step ``index``, or None once exhausted.

    Args:
        bounds (Bounds): (x, y, width, height) of the image being swept.
        index (int): Zero-based scan step.
        direction (Direction): Edge the sweep starts from.

    Returns:
        Band | None: The 1-pixel-thick rectangle for this step, or None.
    """
    if index < 0:
        raise ValueError(f"Scan index must be non-negative, got {index}")

    bx, by, bw, bh = bounds
    if direction is Direction.N:
        # N -> S
        if index >= bh:
            return None
        return Band(bx, by + index, bw, 1)
    if direction is Direction.S:
        # S -> N
        if index >= bh:
            return None
        return Band(bx, by + bh - index - 1, bw, 1)
    if direction is Direction.W:
        # W -> E
        if index >= bw:
            return None
        return Band(bx + index, by, 1, bh)
    if direction is Direction.E:
        # E -> W
        if index >= bw:
            return None
        return Band(bx + bw - index - 1, by, 1, bh)
    raise ValueError(f"Unsupported Direction: {direction}")
