#!/usr/bin/env python3
"""
rollshutter: Create a rolling shutter simulation from a sequence of frames.

Each frame contributes one row (or column) to the output image, sweeping from
the chosen cardinal edge to the opposite one, the way a phone's rolling
shutter exposes a moving scene.
"""

from __future__ import annotations

import argparse
import sys
from collections.abc import Sequence
from pathlib import Path

from pydantic import ValidationError

from .. import __version__
from ..config import (
    SUPPORTED_OUTPUT_EXTS,
    AppConfig,
    Direction,
    FolderSelector,
    MaskSelector,
    RunConfig,
    create_config_from_env,
)
from ..core.errors import CouldNotGetPaths, RollingShutterError, format_error_chain
from ..core.types import CompositeResult
from ..output.logger import SimpleLogger
from ..processing.compositor import process_images
from ..utils.path import get_paths

EXIT_OK = 0
EXIT_FAILURE = 1
EXIT_INTERRUPTED = 130


def build_parser() -> argparse.ArgumentParser:
    """Create the argument parser."""
    p = argparse.ArgumentParser(
        prog="rollshutter",
        description="Creates a rolling shutter simulation of a set of frames.",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )
    p.add_argument(
        "mask",
        nargs="?",
        help="File mask for input, same as --input.",
    )
    source = p.add_mutually_exclusive_group()
    source.add_argument(
        "-i",
        "--input",
        dest="input",
        help=(
            "File mask for input. Supported syntax is only for sequential inputs of the "
            "form %%3d or %%03d. Examples: f%%3d.png, foo%%03d.jpg"
        ),
    )
    source.add_argument(
        "-f",
        "--folder",
        help="A folder to use for frames. Frames will be taken in platform-sorted order.",
    )
    p.add_argument(
        "-d",
        "--direction",
        choices=[d.value for d in Direction],
        default=Direction.N.value,
        help="Cardinal direction the shutter *starts* from before moving to the other side",
    )
    p.add_argument(
        "-o",
        "--output",
        type=Path,
        required=True,
        help=f"Output filename ({', '.join(sorted(SUPPORTED_OUTPUT_EXTS))})",
    )
    p.add_argument("-q", "--quiet", action="store_true", help="Suppress output")
    p.add_argument("-v", "--verbose", action="store_true", help="Show debug messages")
    p.add_argument("--log-file", type=Path, help="Append all log lines to this file")
    p.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return p


def parse_args(argv: Sequence[str] | None = None, parser: argparse.ArgumentParser | None = None) -> argparse.Namespace:
    """Parse CLI arguments and check the input selection."""
    parser = parser or build_parser()
    args = parser.parse_args(argv)

    if args.mask and (args.input or args.folder):
        parser.error("give the file mask either positionally or with -i/--input, and not together with -f/--folder")
    if args.mask:
        args.input = args.mask
    if not args.input and not args.folder:
        parser.error("one of the arguments MASK, -i/--input or -f/--folder is required")
    return args


def build_config(args: argparse.Namespace) -> RunConfig:
    """Create a RunConfig object from parsed args."""
    selector = FolderSelector(path=args.folder) if args.folder else MaskSelector(pattern=args.input)
    return RunConfig(
        selector=selector,
        output=args.output,
        direction=Direction(args.direction),
        quiet=args.quiet,
    )


def run(config: RunConfig, logger: SimpleLogger, settings: AppConfig | None = None) -> CompositeResult:
    """Resolve the frame sequence and composite it into the output image.

    Raises:
        CouldNotGetPaths: The frame sequence could not be resolved (cause attached).
        CouldNotOpenImage, CouldNotProcessImage, CouldNotSaveOutput: Compositing failed.
    """
    settings = settings or AppConfig()
    try:
        paths = get_paths(config.selector)
    except RollingShutterError as e:
        raise CouldNotGetPaths() from e

    logger.info(f"Found {len(paths)} frames: {paths[0]} .. {paths[-1]}")
    logger.debug(f"Sweeping from {config.direction.value} into {config.output}")

    return process_images(
        paths,
        config.output,
        config.direction,
        quiet=config.quiet,
        logger=logger,
        progress_settings=settings.progress,
    )


def main(argv: Sequence[str] | None = None) -> int:
    """CLI entry point; returns the process exit code."""
    parser = build_parser()
    args = parse_args(argv, parser)
    settings = create_config_from_env()

    try:
        config = build_config(args)
    except ValidationError as e:
        messages = "; ".join(err["msg"].removeprefix("Value error, ") for err in e.errors())
        parser.error(messages)

    logger = SimpleLogger(
        log_file=args.log_file or settings.logging.log_file,
        quiet=config.quiet,
        verbose=args.verbose,
        timestamps=settings.logging.timestamps,
    )

    try:
        run(config, logger, settings)
    except RollingShutterError as e:
        for line in format_error_chain(e):
            logger.error(line)
        return EXIT_FAILURE
    except KeyboardInterrupt:
        logger.error("Interrupted.")
        return EXIT_INTERRUPTED

    logger.success(f"Done in {logger.elapsed():.1f}s")
    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
