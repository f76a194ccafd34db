"""
Rolling shutter compositing for rollshutter.

This module drives the main loop: each frame in the sequence contributes a
single band, copied at identical coordinates into an output buffer sized
from the first frame. The sweep stops when the frames or the bands run out,
whichever comes first.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from pathlib import Path
from typing import Optional

import numpy as np

from ..config import Direction, ProgressSettings
from ..core.errors import CouldNotOpenImage, CouldNotProcessImage, CouldNotSaveOutput
from ..core.types import Band, CompositeResult
from ..output.logger import SimpleLogger
from ..output.progress import ProgressReporter
from .geometry import band, scan_limit
from .image import RGBA_CHANNELS, buffer_bounds, read_rgba, write_rgba

Decoder = Callable[[Path], np.ndarray]
Encoder = Callable[[np.ndarray, Path], None]


def open_frame(path: Path, decode: Decoder = read_rgba) -> np.ndarray:
    """Decode one frame, wrapping any codec failure as CouldNotOpenImage."""
    try:
        return decode(path)
    except (OSError, ValueError) as e:
        raise CouldNotOpenImage(path) from e


def copy_band(buffer: np.ndarray, frame: np.ndarray, coords: Band) -> None:
    """Copy the ``coords`` region of ``frame`` into the same region of ``buffer``.

    No blending or resampling; source and destination regions are the same size.

    Raises:
        ValueError: The frame does not cover the band region.
    """
    rows, cols = coords.slices()
    fh, fw = frame.shape[:2]
    if rows.stop > fh or cols.stop > fw:
        raise ValueError(
            f"Frame of {fw}x{fh} does not cover band at x={coords.x}, y={coords.y}, "
            f"{coords.width}x{coords.height}"
        )
    buffer[rows, cols] = frame[rows, cols]


def process_image(buffer: np.ndarray, frame: np.ndarray, index: int, direction: Direction) -> bool:
    """Copy scan step ``index``'s band from ``frame`` into ``buffer``.

    Args:
        buffer (np.ndarray): (H, W, 4) output buffer, modified in place.
        frame (np.ndarray): Decoded RGBA frame for this step.
        index (int): Scan step.
        direction (Direction): Edge the sweep starts from.

    Returns:
        bool: True when a band was copied, False when the scan is exhausted.
    """
    coords = band(buffer_bounds(buffer), index, direction)
    if coords is None:
        return False
    copy_band(buffer, frame, coords)
    return True


def process_images(
    paths: Sequence[Path],
    output: Path,
    direction: Direction = Direction.N,
    quiet: bool = False,
    logger: Optional[SimpleLogger] = None,
    progress_settings: Optional[ProgressSettings] = None,
    decode: Decoder = read_rgba,
    encode: Encoder = write_rgba,
) -> CompositeResult:
    """Build the rolling shutter image for a frame sequence and write it.

    Args:
        paths: Ordered, non-empty frame paths (guaranteed by the resolver).
        output: Destination image; the format follows its extension.
        direction: Edge the sweep starts from.
        quiet: Suppress progress reporting.
        logger: Logger for progress and status lines.
        progress_settings: Overrides the configured progress settings.
        decode: Frame decoder, ``read_rgba`` by default.
        encode: Buffer encoder, ``write_rgba`` by default.

    Returns:
        CompositeResult: Output path, dimensions and how many frames were used.

    Raises:
        CouldNotOpenImage: A frame could not be decoded.
        CouldNotProcessImage: A band could not be copied from a frame.
        CouldNotSaveOutput: The output could not be written.
    """
    output = Path(output)
    first_path = Path(paths[0])
    frame = open_frame(first_path, decode)
    height, width = frame.shape[:2]
    buffer = np.zeros((height, width, RGBA_CHANNELS), dtype=np.uint8)

    bounds = buffer_bounds(buffer)
    limit = scan_limit(bounds, direction)
    usable = min(len(paths), limit)
    if logger and len(paths) > limit:
        logger.warning(f"Only the first {limit} of {len(paths)} frames fit a {width}x{height} sweep from {direction.value}")

    composited = 0
    with ProgressReporter(usable, quiet=quiet, logger=logger, settings=progress_settings) as progress:
        for i, path in enumerate(paths):
            path = Path(path)
            coords = band(bounds, i, direction)
            if coords is None:
                # Ran out of bands; the remaining frames are never decoded.
                break
            if i > 0:
                frame = open_frame(path, decode)
            try:
                copy_band(buffer, frame, coords)
            except (ValueError, IndexError) as e:
                raise CouldNotProcessImage(path) from e
            composited += 1
            progress.increment()

        frame = None
        if logger:
            logger.info("Saving image...")
        try:
            encode(buffer, output)
        except (OSError, ValueError) as e:
            raise CouldNotSaveOutput(output) from e
        progress.finish()

    if logger:
        logger.success(f"Wrote {output} ({width}x{height}) from {composited} frames")

    return CompositeResult(
        output=output,
        width=width,
        height=height,
        frames_composited=composited,
        frames_available=len(paths),
    )
