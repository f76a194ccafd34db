"""
Error taxonomy for rollshutter.

Every failure aborts the whole run. Lower-level failures are wrapped with
``raise ... from exc`` so the CLI can print the full chain of causes.
"""

from __future__ import annotations

from pathlib import Path


class RollingShutterError(Exception):
    """Base class for all user-reportable rollshutter failures."""

    message = "Rolling shutter failure."

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message or self.message)


class NoFileMaskFound(RollingShutterError):
    """Could not find file mask."""

    message = "Could not find file mask."


class MultipleFileMasks(RollingShutterError):
    """Too many file masks."""

    message = "Only one sequential file mask variable is allowed."


class InvalidPlaceholder(RollingShutterError):
    """Invalid file mask placeholder."""

    def __init__(self, placeholder: str) -> None:
        self.placeholder = placeholder
        super().__init__(f"File mask placeholder '{placeholder}' must have at least one digit.")


class CouldNotParseFilemask(RollingShutterError):
    """Could not parse file mask."""

    def __init__(self, mask: str) -> None:
        self.mask = mask
        super().__init__(f"Could not parse file mask '{mask}'.")


class NoFilesFound(RollingShutterError):
    """Could not find any files."""

    message = "Could not find any files with the provided file mask or folder."


class Unimplemented(RollingShutterError):
    """Unimplemented."""

    def __init__(self, operation: str) -> None:
        self.operation = operation
        super().__init__(f"The desired operation ({operation}) is unimplemented.")


class CouldNotGetPaths(RollingShutterError):
    """Could not get file paths."""

    message = "Could not get file paths to process."


class _PathError(RollingShutterError):
    template = "{path}"

    def __init__(self, path: Path | str) -> None:
        self.path = Path(path)
        super().__init__(self.template.format(path=self.path))


class CouldNotOpenImage(_PathError):
    """Could not open image."""

    template = "Could not open image {path}."


class CouldNotProcessImage(_PathError):
    """Could not process image."""

    template = "Could not process image {path}."


class CouldNotSaveOutput(_PathError):
    """Could not save image."""

    template = "Could not save image {path}."


class ImageDecodeError(OSError):
    """Raised by the codec when a file cannot be decoded into pixels."""


class ImageEncodeError(OSError):
    """Raised by the codec when pixels cannot be written to a file."""


def error_chain(exc: BaseException) -> list[BaseException]:
    """Return ``exc`` followed by each exception in its ``__cause__`` chain."""
    chain: list[BaseException] = []
    current: BaseException | None = exc
    while current is not None and current not in chain:
        chain.append(current)
        current = current.__cause__
    return chain


def format_error_chain(exc: BaseException) -> list[str]:
    """Render an exception and its causes as ``Error:`` / ``Caused by:`` lines.

    Example:
        >>> try:
        ...     raise CouldNotGetPaths() from NoFilesFound()
        ... except CouldNotGetPaths as e:
        ...     format_error_chain(e)
        ['Error: Could not get file paths to process.', 'Caused by: Could not find any files with the provided file mask or folder.']
    """
    lines = []
    for i, err in enumerate(error_chain(exc)):
        text = str(err) or type(err).__name__
        if not isinstance(err, RollingShutterError):
            text = f"{type(err).__name__}: {text}"
        lines.append(f"{'Error' if i == 0 else 'Caused by'}: {text}")
    return lines
