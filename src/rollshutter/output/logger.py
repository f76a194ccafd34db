"""
Simple logging system for rollshutter.
"""

from __future__ import annotations

import sys
import time
from datetime import datetime
from pathlib import Path
from typing import Optional


class SimpleLogger:
    """Simple logger that writes to console and file.

    Args:
        log_file: Optional file every line is appended to, quiet or not
        quiet: Mute info/success/warning lines on the console (errors still show)
        verbose: Show debug lines on the console
        timestamps: Prefix console lines with the wall-clock time
    """

    def __init__(
        self,
        log_file: Optional[Path] = None,
        quiet: bool = False,
        verbose: bool = False,
        timestamps: bool = True,
    ):
        self.log_file = log_file
        self.quiet = quiet
        self.verbose = verbose
        self.timestamps = timestamps
        self.start_time = time.time()

        if self.log_file:
            self.log_file.parent.mkdir(parents=True, exist_ok=True)
            with open(self.log_file, 'a', encoding='utf-8') as f:
                f.write(f"\n{'='*60}\n")
                f.write(f"Session started: {datetime.now().isoformat()}\n")
                f.write(f"{'='*60}\n")

    def log(self, message: str, prefix: str = "", error: bool = False, console: bool = True) -> None:
        """Log a message to console and file.

        Args:
            message: The message to log
            prefix: Optional prefix like [INFO], [ERROR], etc.
            error: Whether to write to stderr instead of stdout
            console: Whether to echo the line on the console at all
        """
        timestamp = datetime.now().strftime("%H:%M:%S")
        body = f"{prefix} {message}" if prefix else message

        if console:
            formatted = f"[{timestamp}] {body}" if self.timestamps else body
            output = sys.stderr if error else sys.stdout
            print(formatted, file=output, flush=True)

        if self.log_file:
            try:
                with open(self.log_file, 'a', encoding='utf-8') as f:
                    f.write(f"[{timestamp}] {body}\n")
            except OSError:
                pass  # Don't fail on logging errors

    def elapsed(self) -> float:
        """Seconds since the logger was created."""
        return time.time() - self.start_time

    def success(self, message: str) -> None:
        """Log a success message."""
        self.log(message, prefix="[SUCCESS]", console=not self.quiet)

    def error(self, message: str) -> None:
        """Log an error message."""
        self.log(message, prefix="[ERROR]", error=True)

    def warning(self, message: str) -> None:
        """Log a warning message."""
        self.log(message, prefix="[WARNING]", console=not self.quiet)

    def info(self, message: str) -> None:
        """Log an info message."""
        self.log(message, prefix="[INFO]", console=not self.quiet)

    def debug(self, message: str) -> None:
        """Log a debug message."""
        self.log(message, prefix="[DEBUG]", console=self.verbose and not self.quiet)
