from __future__ import annotations

import asyncio
import logging
import os
from typing import Annotated

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape

from versync import __version__
from versync.core.runner import Runner, RunnerOptions
from versync.errors import VersyncError

console = Console()
err_console = Console(stderr=True)


def _configure_logging(verbose: bool) -> None:
    level = "DEBUG" if verbose else os.getenv("VERSYNC_LOG_LEVEL", "WARNING").upper()
    logging.basicConfig(
        level=level,
        format="%(message)s",
        handlers=[RichHandler(console=err_console, show_time=False, show_path=False)],
        force=True,
    )
    logging.captureWarnings(True)


def _print_version(value: bool) -> None:
    if value:
        console.print(f"versync {__version__}")
        raise typer.Exit()


def sync(
    bump: Annotated[
        str | None,
        typer.Option(
            "--bump",
            "-b",
            help="Bump the version: major, minor, patch, sync, or an explicit semver higher than the current one.",
        ),
    ] = None,
    sources: Annotated[
        list[str] | None,
        typer.Option("--source", "-s", help="Additional file to keep in sync. May be repeated."),
    ] = None,
    add: Annotated[bool, typer.Option("--add", "-a", help="Run git add on the modified files.")] = False,
    tag: Annotated[
        bool, typer.Option("--tag", "-t", help="Commit the modified files and create a v<version> tag.")
    ] = False,
    verbose: Annotated[bool, typer.Option("--verbose", help="Enable debug logging.")] = False,
    version: Annotated[
        bool,
        typer.Option("--version", "-V", callback=_print_version, is_eager=True, help="Show the versync version."),
    ] = False,
) -> None:
    """Verify that version numbers agree across package.json and other sources, and optionally bump them."""
    _configure_logging(verbose)

    if tag and not bump:
        err_console.print("[red]--tag requires --bump.[/red]")
        raise typer.Exit(1)

    options = RunnerOptions(
        sources=sources or [],
        bump=bump,
        add=add,
        tag=tag,
        on_message=[console.print],
    )
    try:
        asyncio.run(Runner(options).run())
    except (VersyncError, ValueError, OSError) as exc:
        err_console.print(f"[red]Error:[/red] {escape(str(exc))}")
        raise typer.Exit(1) from None
