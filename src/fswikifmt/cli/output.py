"""Utility functions for cli output."""

#  Copyright (c) 2025 Tom Villani, Ph.D.

# src/fswikifmt/cli/output.py
from __future__ import annotations

import argparse
import difflib
import sys
from dataclasses import dataclass
from typing import Any, Optional, TextIO


@dataclass
class FileResult:
    """Outcome of formatting one document.

    Parameters
    ----------
    path : str
        Display name of the document (``<stdin>`` for standard input)
    original : str
        Document text as read
    output : str
        Text to print: the formatted document, or the event dump
    changed : bool
        Whether formatting changed the document
    written : bool
        Whether the file was rewritten in place
    error : str or None
        Error message when the document could not be processed

    """

    path: str
    original: str = ""
    output: str = ""
    changed: bool = False
    written: bool = False
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None


def check_rich_available() -> bool:
    """Check if Rich library is available.

    Returns
    -------
    bool
        True if Rich is available, False otherwise

    """
    try:
        import rich  # noqa: F401

        return True
    except ImportError:
        return False


def should_use_rich_output(args: argparse.Namespace, stream: TextIO | None = None) -> bool:
    """Determine if Rich output should be used based on TTY and args.

    Notes
    -----
    Rich output is used when:
    - The --rich flag is set
    - AND the Rich library is available
    - AND stderr (where progress is drawn) is a TTY, unless --force-rich is set

    """
    if not getattr(args, "rich", False):
        return False
    if not check_rich_available():
        return False
    if getattr(args, "force_rich", False):
        return True

    target = stream or sys.stderr
    isatty = getattr(target, "isatty", None)
    return bool(callable(isatty) and isatty())


def format_unified_diff(original: str, formatted: str, path: str, context_lines: int = 3) -> str:
    """Build a unified diff between a document and its formatted text.

    Parameters
    ----------
    original : str
        Document as read
    formatted : str
        Canonical text
    path : str
        File name used in the ``---``/``+++`` headers
    context_lines : int, default 3
        Unchanged lines shown around each change

    Returns
    -------
    str
        Unified diff, empty when the texts are equal

    """
    diff = difflib.unified_diff(
        original.splitlines(keepends=True),
        formatted.splitlines(keepends=True),
        fromfile=f"{path} (original)",
        tofile=f"{path} (formatted)",
        n=context_lines,
    )
    lines = []
    for line in diff:
        lines.append(line if line.endswith("\n") else line + "\n\\ No newline at end of file\n")
    return "".join(lines)


class PlainReporter:
    """Report per-file progress as plain lines on stderr."""

    def __init__(self, total: int, stream: TextIO | None = None):
        self.total = total
        self.stream = stream or sys.stderr
        self.succeeded = 0
        self.failed = 0
        self.changed = 0

    def __enter__(self) -> PlainReporter:
        return self

    def __exit__(self, *exc_info: Any) -> None:
        return None

    def file_done(self, result: FileResult, message: Optional[str] = None) -> None:
        if result.ok:
            self.succeeded += 1
            self.changed += int(result.changed)
        else:
            self.failed += 1
            print(f"Error: {result.path}: {result.error}", file=self.stream)
            return
        if message:
            print(message, file=self.stream)

    def summary(self) -> None:
        if self.total > 1:
            print(
                f"{self.succeeded}/{self.total} files processed, {self.changed} changed, {self.failed} failed",
                file=self.stream,
            )


class RichReporter(PlainReporter):
    """Report progress with a rich progress bar and a summary table."""

    def __init__(self, total: int, stream: TextIO | None = None):
        super().__init__(total, stream)
        from rich.console import Console
        from rich.progress import BarColumn, Progress, SpinnerColumn, TaskProgressColumn, TextColumn

        self.console = Console(file=self.stream)
        self.progress = Progress(
            SpinnerColumn(),
            TextColumn("[progress.description]{task.description}"),
            BarColumn(),
            TaskProgressColumn(),
            console=self.console,
        )
        self.task_id = self.progress.add_task("[cyan]Formatting files...", total=total)

    def __enter__(self) -> RichReporter:
        self.progress.start()
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.progress.stop()

    def file_done(self, result: FileResult, message: Optional[str] = None) -> None:
        if result.ok:
            self.succeeded += 1
            self.changed += int(result.changed)
            if message:
                marker = "[yellow]~[/yellow]" if result.changed else "[green]✓[/green]"
                self.console.print(f"{marker} {message}")
        else:
            self.failed += 1
            self.console.print(f"[red]✗[/red] {result.path}: {result.error}")
        self.progress.update(self.task_id, advance=1)

    def summary(self) -> None:
        from rich.table import Table

        table = Table(title="Formatting Summary")
        table.add_column("Status", style="cyan", no_wrap=True)
        table.add_column("Count", style="magenta")

        table.add_row("✓ Successful", str(self.succeeded))
        table.add_row("~ Changed", str(self.changed))
        table.add_row("✗ Failed", str(self.failed))
        table.add_row("Total", str(self.total))

        self.console.print()
        self.console.print(table)
