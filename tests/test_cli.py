from pathlib import Path

import cv2
import numpy as np
import pytest

from rollshutter.cli.main import EXIT_FAILURE, EXIT_OK, build_config, main, parse_args
from rollshutter.config import Direction, FolderSelector, MaskSelector
from rollshutter.processing.image import read_rgba


@pytest.fixture(autouse=True)
def _plain_console(monkeypatch):
    # Keep rich on the line-based progress path regardless of the CI environment
    monkeypatch.delenv("FORCE_COLOR", raising=False)
    monkeypatch.delenv("TTY_COMPATIBLE", raising=False)
    monkeypatch.setenv("ROLLSHUTTER_LOGGING__TIMESTAMPS", "false")


def write_frames(directory: Path, count: int, size: int = 6) -> None:
    for i in range(count):
        frame = np.full((size, size, 3), 20 * (i + 1), dtype=np.uint8)
        assert cv2.imwrite(str(directory / f"frame_{i + 1:02d}.png"), frame)


def test_parse_args_positional_mask():
    args = parse_args(["f%03d.png", "-o", "out.png", "-d", "E", "-q"])
    cfg = build_config(args)

    assert cfg.selector == MaskSelector(pattern="f%03d.png")
    assert cfg.output == Path("out.png")
    assert cfg.direction is Direction.E
    assert cfg.quiet is True


def test_parse_args_folder():
    cfg = build_config(parse_args(["-f", "frames", "-o", "out.png"]))
    assert cfg.selector == FolderSelector(path="frames")
    assert cfg.direction is Direction.N


@pytest.mark.parametrize(
    "argv",
    [
        ["-o", "out.png"],
        ["f%03d.png"],
        ["f%03d.png", "-f", "frames", "-o", "out.png"],
        ["-i", "f%03d.png", "-f", "frames", "-o", "out.png"],
        ["f%03d.png", "-o", "out.png", "-d", "X"],
    ],
)
def test_usage_errors_exit_2(argv):
    with pytest.raises(SystemExit) as info:
        parse_args(argv)
    assert info.value.code == 2


def test_unsupported_output_extension_is_usage_error(tmp_path: Path, capsys):
    with pytest.raises(SystemExit) as info:
        main([str(tmp_path / "f%02d.png"), "-o", str(tmp_path / "out.gif")])

    assert info.value.code == 2
    assert "Unsupported output format" in capsys.readouterr().err


def test_end_to_end_success(tmp_path: Path, capsys):
    write_frames(tmp_path, 3)
    out = tmp_path / "shutter.png"

    code = main(["-i", str(tmp_path / "frame_%02d.png"), "-o", str(out), "-d", "S"])

    assert code == EXIT_OK
    img = read_rgba(out)
    assert img.shape == (6, 6, 4)
    assert [int(img[row, 0, 0]) for row in (5, 4, 3)] == [20, 40, 60]
    assert not img[:3].any()
    output = capsys.readouterr().out
    assert "[INFO] Found 3 frames" in output
    assert "[INFO] Saving image..." in output
    assert "[SUCCESS] Wrote" in output


def test_quiet_run_is_silent(tmp_path: Path, capsys):
    write_frames(tmp_path, 2)
    out = tmp_path / "shutter.png"

    code = main([str(tmp_path / "frame_%02d.png"), "-o", str(out), "-q"])

    assert code == EXIT_OK
    assert out.exists()
    captured = capsys.readouterr()
    assert captured.out == ""
    assert captured.err == ""


def test_folder_reports_unimplemented(tmp_path: Path, capsys):
    write_frames(tmp_path, 2)
    out = tmp_path / "shutter.png"

    code = main(["-f", str(tmp_path), "-o", str(out)])

    assert code == EXIT_FAILURE
    assert not out.exists()
    err = capsys.readouterr().err
    assert "[ERROR] Error: Could not get file paths to process." in err
    assert "[ERROR] Caused by: The desired operation (folder-based frame selection) is unimplemented." in err


def test_missing_frames_reports_chain(tmp_path: Path, capsys):
    out = tmp_path / "shutter.png"

    code = main([str(tmp_path / "nothing_%03d.png"), "-o", str(out), "-q"])

    assert code == EXIT_FAILURE
    err = capsys.readouterr().err
    assert "Could not get file paths to process." in err
    assert "Could not find any files with the provided file mask or folder." in err


def test_bad_mask_reports_parse_failure(tmp_path: Path, capsys):
    code = main([str(tmp_path / "a%02d_%02d.png"), "-o", str(tmp_path / "out.png")])

    assert code == EXIT_FAILURE
    err = capsys.readouterr().err
    assert "Could not parse file mask" in err
    assert "Only one sequential file mask variable is allowed." in err


def test_log_file_option(tmp_path: Path):
    write_frames(tmp_path, 2)
    log_file = tmp_path / "run.log"

    code = main([str(tmp_path / "frame_%02d.png"), "-o", str(tmp_path / "o.png"), "-q", "--log-file", str(log_file)])

    assert code == EXIT_OK
    assert "Found 2 frames" in log_file.read_text(encoding="utf-8")


def test_overlong_mask_reports_missing_frames(tmp_path: Path, capsys):
    mask = str(tmp_path / ("a" * 300 + "%1d.png"))

    code = main([mask, "-o", str(tmp_path / "out.png"), "-q"])

    assert code == EXIT_FAILURE
    assert "Could not find any files with the provided file mask or folder." in capsys.readouterr().err
