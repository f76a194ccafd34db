"""
Progress reporting for the compositing loop.

On an interactive terminal a rich progress bar is rendered. When output is
redirected (logs, CI) a plain ``Processed N frames...`` line is logged every
``report_every`` frames instead, so redraws never pile up in the log.
"""

from __future__ import annotations

from typing import Optional

from rich.console import Console
from rich.progress import BarColumn, MofNCompleteColumn, Progress, TextColumn, TimeElapsedColumn

from ..config import ProgressSettings, app_config
from .logger import SimpleLogger


class ProgressReporter:
    """Counts composited frames; every method is a no-op when ``quiet``.

    Args:
        total: Number of frames expected to be composited
        quiet: Suppress all progress output
        logger: Logger used for line-based progress when not on a terminal
        settings: Progress settings (defaults to the application config)
        console: Rich console to render on (defaults to stdout)
    """

    def __init__(
        self,
        total: int,
        quiet: bool = False,
        logger: Optional[SimpleLogger] = None,
        settings: Optional[ProgressSettings] = None,
        console: Optional[Console] = None,
    ) -> None:
        self.total = total
        self.quiet = quiet
        self.logger = logger
        self.settings = settings or app_config.progress
        self.completed = 0
        self._progress: Optional[Progress] = None
        self._task = None

        if self.quiet:
            return

        console = console or Console()
        if console.is_terminal:
            self._progress = Progress(
                TextColumn("[cyan]Compositing[/]"),
                BarColumn(),
                MofNCompleteColumn(),
                TimeElapsedColumn(),
                console=console,
                refresh_per_second=self.settings.refresh_per_second,
                transient=False,
            )
            self._task = self._progress.add_task("frames", total=total)
            self._progress.start()

    def __enter__(self) -> "ProgressReporter":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def increment(self) -> None:
        """Record one composited frame."""
        if self.quiet:
            return
        self.completed += 1
        if self._progress is not None:
            self._progress.advance(self._task)
        elif self.logger is not None and self.completed % self.settings.report_every == 0:
            self.logger.info(f"Processed {self.completed} frames...")

    def finish(self) -> None:
        """Complete the bar and stop rendering."""
        if self.quiet:
            return
        if self._progress is not None:
            self._progress.update(self._task, completed=self.completed)
        self.close()

    def close(self) -> None:
        """Stop the live display without marking anything complete."""
        if self._progress is not None:
            self._progress.stop()
            self._progress = None
