from pathlib import Path

import cv2
import numpy as np
import pytest

from rollshutter.core.errors import ImageDecodeError, ImageEncodeError
from rollshutter.processing.image import read_rgba, to_rgba, write_rgba


def write_image(path: Path, array: np.ndarray) -> None:
    ok = cv2.imwrite(str(path), array)
    assert ok, f"failed to write {path}"


def test_bgr_png_becomes_opaque_rgba(tmp_path: Path):
    bgr = np.zeros((3, 5, 3), dtype=np.uint8)
    bgr[:, :, 0] = 200  # blue
    p = tmp_path / "bgr.png"
    write_image(p, bgr)

    img = read_rgba(p)

    assert img.shape == (3, 5, 4)
    assert img.dtype == np.uint8
    assert np.all(img[:, :, 2] == 200)
    assert np.all(img[:, :, 0] == 0)
    assert np.all(img[:, :, 3] == 255)


def test_bgra_png_keeps_alpha(tmp_path: Path):
    bgra = np.zeros((4, 4, 4), dtype=np.uint8)
    bgra[:, :, 2] = 120  # red
    bgra[:, :, 3] = 64
    p = tmp_path / "bgra.png"
    write_image(p, bgra)

    img = read_rgba(p)

    assert np.all(img[:, :, 0] == 120)
    assert np.all(img[:, :, 3] == 64)


def test_grayscale_and_16_bit(tmp_path: Path):
    gray16 = np.full((2, 3), 0x8000, dtype=np.uint16)
    p = tmp_path / "gray16.png"
    write_image(p, gray16)

    img = read_rgba(p)

    assert img.shape == (2, 3, 4)
    assert np.all(img[:, :, :3] == 0x80)
    assert np.all(img[:, :, 3] == 255)


def test_gray_alpha_layout():
    gray_alpha = np.zeros((2, 2, 2), dtype=np.uint8)
    gray_alpha[:, :, 0] = 33
    gray_alpha[:, :, 1] = 99

    img = to_rgba(gray_alpha)

    assert np.all(img[:, :, :3] == 33)
    assert np.all(img[:, :, 3] == 99)


def test_float_images_are_clipped():
    img = to_rgba(np.array([[[-1.0, 0.5, 2.0]]], dtype=np.float32))
    assert img[0, 0].tolist() == [255, 128, 0, 255]


def test_unreadable_file_raises(tmp_path: Path):
    p = tmp_path / "broken.png"
    p.write_bytes(b"\x89PNG not really")
    with pytest.raises(ImageDecodeError):
        read_rgba(p)


def test_write_round_trip_preserves_rgba(tmp_path: Path):
    rgba = np.zeros((2, 3, 4), dtype=np.uint8)
    rgba[0, 0] = [1, 2, 3, 4]
    rgba[1, 2] = [250, 251, 252, 253]
    p = tmp_path / "out.png"

    write_rgba(rgba, p)

    assert np.array_equal(read_rgba(p), rgba)


def test_jpeg_output_drops_alpha(tmp_path: Path):
    rgba = np.full((8, 8, 4), 128, dtype=np.uint8)
    p = tmp_path / "out.jpg"

    write_rgba(rgba, p)

    raw = cv2.imread(str(p), cv2.IMREAD_UNCHANGED)
    assert raw.shape == (8, 8, 3)


def test_unknown_extension_raises(tmp_path: Path):
    with pytest.raises(ImageEncodeError):
        write_rgba(np.zeros((2, 2, 4), dtype=np.uint8), tmp_path / "out.unknownformat")
