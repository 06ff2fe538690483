"""Rich console output for non-interactive CLI use."""

from __future__ import annotations

import logging
from pathlib import Path

from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table


def log_level(verbose: int, quiet: bool) -> int:
    """Map verbosity flags to a logging level."""
    if quiet:
        return logging.ERROR
    if verbose >= 2:
        return logging.DEBUG
    if verbose == 1:
        return logging.INFO
    return logging.WARNING


def configure_logging(level: int) -> None:
    """Route all log records through a Rich handler on stderr."""
    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )


class Reporter:
    """Prints user-facing status lines.

    Successes go to stdout; errors go to stderr.
    """

    def __init__(self, console: Console | None = None, error_console: Console | None = None) -> None:
        self.console = console or Console()
        self.error_console = error_console or Console(stderr=True)

    def show_success(self, message: str) -> None:
        """Show success message.

        Args:
            message: Success message.
        """
        self.console.print(f"[green]✓[/green] {message}")

    def show_error(self, message: str) -> None:
        """Show error message.

        Args:
            message: Error message.
        """
        self.error_console.print(f"[red]✗[/red] {message}")

    def show_info(self, message: str) -> None:
        """Show info message.

        Args:
            message: Info message.
        """
        self.console.print(f"[blue]i[/blue] {message}")

    def show_bundle(self, archive_path: Path, version: str, framework_repo: str) -> None:
        """Summarize a finished bundle."""
        table = Table(title="Bundle", show_header=False)
        table.add_column("Key", style="bold")
        table.add_column("Value")
        table.add_row("Version", version)
        table.add_row("Framework", framework_repo)
        table.add_row("Archive", str(archive_path))
        if archive_path.exists():
            table.add_row("Size", f"{archive_path.stat().st_size:,} bytes")
        self.console.print(table)
