"""
Image codec for rollshutter.

This module handles all pixel I/O:
- Decoding any OpenCV-readable file into an RGBA uint8 array
- Encoding an RGBA array to the format implied by the file extension
- Image dimension retrieval
"""

from __future__ import annotations

from pathlib import Path

import cv2
import numpy as np

from ..config import app_config
from ..core.errors import ImageDecodeError, ImageEncodeError
from ..core.types import Bounds

RGBA_CHANNELS = 4


def to_uint8(img: np.ndarray) -> np.ndarray:
    """Scale 16-bit and floating point images down to 8 bits per channel."""
    if img.dtype == np.uint8:
        return img
    if img.dtype == np.uint16:
        return (img >> 8).astype(np.uint8)
    if np.issubdtype(img.dtype, np.floating):
        return (np.clip(img, 0.0, 1.0) * 255.0 + 0.5).astype(np.uint8)
    raise ValueError(f"Unsupported pixel depth: {img.dtype}")


def to_rgba(img: np.ndarray) -> np.ndarray:
    """Convert an OpenCV-ordered gray/gray+alpha/BGR/BGRA array to RGBA.

    Args:
        img (np.ndarray): Array as returned by ``cv2.imread(..., IMREAD_UNCHANGED)``.

    Returns:
        np.ndarray: (H, W, 4) uint8 RGBA array.
    """
    img = to_uint8(img)
    if img.ndim == 2:
        return cv2.cvtColor(img, cv2.COLOR_GRAY2RGBA)

    channels = img.shape[2]
    if channels == 1:
        return cv2.cvtColor(np.ascontiguousarray(img[:, :, 0]), cv2.COLOR_GRAY2RGBA)
    if channels == 2:
        # grayscale + alpha
        rgba = cv2.cvtColor(np.ascontiguousarray(img[:, :, 0]), cv2.COLOR_GRAY2RGBA)
        rgba[:, :, 3] = img[:, :, 1]
        return rgba
    if channels == 3:
        return cv2.cvtColor(img, cv2.COLOR_BGR2RGBA)
    if channels >= RGBA_CHANNELS:
        return cv2.cvtColor(np.ascontiguousarray(img[:, :, :RGBA_CHANNELS]), cv2.COLOR_BGRA2RGBA)
    raise ValueError(f"Unsupported channel count: {channels}")


def read_rgba(path: Path) -> np.ndarray:
    """Load an image file as an (H, W, 4) uint8 RGBA array.

    Raises:
        ImageDecodeError: OpenCV could not read the file or its pixel layout.
    """
    img = cv2.imread(str(path), cv2.IMREAD_UNCHANGED)
    if img is None:
        raise ImageDecodeError(f"OpenCV could not read {path}")
    try:
        return to_rgba(img)
    except (ValueError, cv2.error) as e:
        raise ImageDecodeError(f"Unsupported pixel layout in {path}: {e}") from e


def write_rgba(buffer: np.ndarray, path: Path, keep_alpha: bool | None = None) -> None:
    """Write an RGBA array to ``path``, format chosen by the extension.

    Args:
        buffer (np.ndarray): (H, W, 4) uint8 RGBA array.
        path (Path): Destination file.
        keep_alpha (bool | None): Write the alpha channel. Defaults to False for
            the configured alpha-less formats (JPEG, BMP) and True otherwise.

    Raises:
        ImageEncodeError: OpenCV has no writer for the format or the write failed.
    """
    if keep_alpha is None:
        keep_alpha = app_config.keeps_alpha(path)
    code = cv2.COLOR_RGBA2BGRA if keep_alpha else cv2.COLOR_RGBA2BGR
    try:
        ok = cv2.imwrite(str(path), cv2.cvtColor(buffer, code))
    except cv2.error as e:
        raise ImageEncodeError(f"OpenCV could not encode {path}: {e}") from e
    if not ok:
        raise ImageEncodeError(f"OpenCV failed to write {path}")


def buffer_bounds(buffer: np.ndarray) -> Bounds:
    """Bounds of an (H, W, C) pixel array anchored at the origin."""
    h, w = buffer.shape[:2]
    return Bounds(0, 0, w, h)

