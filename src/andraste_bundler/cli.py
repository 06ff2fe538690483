"""CLI commands using Typer."""

from __future__ import annotations

import asyncio
from pathlib import Path
from typing import TYPE_CHECKING, Annotated

if TYPE_CHECKING:
    from andraste_bundler.context import AppContext

import typer
from rich.console import Console
from rich.progress import Progress, SpinnerColumn, TextColumn

from andraste_bundler import __version__
from andraste_bundler.console import Reporter, configure_logging, log_level
from andraste_bundler.context import create_context
from andraste_bundler.errors import BundleError
from andraste_bundler.types import BundleSettings, RepoSpec

app = typer.Typer(
    name="andraste-bundler",
    help="Assemble Andraste release bundles from GitHub releases",
    no_args_is_help=True,
)

console = Console()
reporter = Reporter(console=console)


def version_callback(value: bool) -> None:
    """Show version and exit."""
    if value:
        console.print(f"andraste-bundler v{__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: Annotated[
        bool,
        typer.Option(
            "--version",
            callback=version_callback,
            is_eager=True,
            help="Show version and exit",
        ),
    ] = False,
    verbose: Annotated[
        int,
        typer.Option("--verbose", "-v", count=True, help="Increase log output (-vv for debug)"),
    ] = 0,
    quiet: Annotated[bool, typer.Option("--quiet", "-q", help="Only log errors")] = False,
) -> None:
    """Assemble Andraste release bundles from GitHub releases."""
    configure_logging(log_level(verbose, quiet))


def _parse_settings(
    version: str, framework_repo: str | None, readme_template: Path | None
) -> BundleSettings:
    """Build bundle settings from raw CLI input.

    Raises:
        ValueError: If the framework repository or version is malformed.
    """
    return BundleSettings(
        version=version,
        framework_repo=RepoSpec.parse(framework_repo) if framework_repo else None,
        readme_template_path=readme_template,
    )


async def _run_create_bundle(ctx: AppContext, settings: BundleSettings) -> Path:
    """Run the orchestrator and always release the HTTP client."""
    try:
        return await ctx.orchestrator.create_bundle(settings)
    finally:
        await ctx.github.aclose()


@app.command("create-bundle")
def create_bundle(
    version: Annotated[
        str,
        typer.Option("--version", help="The version (i.e. tag/release) to use when fetching content"),
    ],
    framework_repo: Annotated[
        str | None,
        typer.Option(
            "--framework-repo",
            help="Repository to use for the framework (defaults to AndrasteFramework/Payload.Generic)",
        ),
    ] = None,
    readme_template: Annotated[
        Path | None,
        typer.Option("--readme-template", help="Path to a README.txt template file"),
    ] = None,
    _context=None,
) -> None:
    """Fetch all release assets and package them into a bundle."""
    try:
        settings = _parse_settings(version, framework_repo, readme_template)
    except ValueError as e:
        reporter.show_error(str(e))
        raise typer.Exit(1) from e

    ctx = _context or create_context()

    try:
        with Progress(
            SpinnerColumn(),
            TextColumn("[progress.description]{task.description}"),
            console=console,
            transient=True,
        ) as progress:
            progress.add_task(f"Building bundle {settings.version}...", total=None)
            archive_path = asyncio.run(_run_create_bundle(ctx, settings))
    except BundleError as e:
        reporter.show_error(str(e))
        raise typer.Exit(1) from e
    except OSError as e:
        reporter.show_error(f"Filesystem error: {e}")
        raise typer.Exit(1) from e

    reporter.show_bundle(archive_path, settings.version, str(settings.effective_framework_repo))
    reporter.show_success(f"Created {archive_path}")


@app.command("clear")
def clear(
    _context=None,
) -> None:
    """Remove the output directory."""
    ctx = _context or create_context()
    try:
        ctx.orchestrator.clear()
    except OSError as e:
        reporter.show_error(f"Failed to clear output directory: {e}")
        raise typer.Exit(1) from e
    finally:
        asyncio.run(ctx.github.aclose())
    reporter.show_success(f"Cleared '{ctx.config.output_dir}'")


if __name__ == "__main__":
    app()
