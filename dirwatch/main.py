"""
dirwatch - recursive directory registration

Main entry point and CLI interface.
"""

import logging
import sys
import time
from pathlib import Path

import click
from dotenv import load_dotenv
from rich.console import Console
from rich.logging import RichHandler
from rich.panel import Panel
from rich.table import Table

from dirwatch import __version__
from dirwatch.config import Settings
from dirwatch.watcher import (
    DirWatchError,
    ObserverWatchService,
    RegistrationPolicy,
    RegistrationSummary,
    register_recursive,
)
from dirwatch.watcher.service import BACKENDS

# Load environment variables
load_dotenv()

console = Console(force_terminal=True)


def setup_logging(level: str | int):
    """Route library logging through rich on the CLI console."""
    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=console, show_path=False)],
        force=True,
    )


def render_summary(summary: RegistrationSummary) -> Table:
    """Build the summary table printed after a registration pass."""
    table = Table(title="Registration summary", show_header=True)
    table.add_column("Result")
    table.add_column("Count", justify="right")

    table.add_row("[green]registered[/green]", str(summary.registered_count))
    table.add_row("[yellow]skipped[/yellow]", str(summary.skipped_count))
    table.add_row("[cyan]updated[/cyan]", str(len(summary.updated)))
    table.add_row("[dim]tracked handles[/dim]", str(len(summary.table)))
    return table


@click.group()
@click.version_option(version=__version__)
def cli():
    """dirwatch - register directory trees for change notifications."""
    pass


@cli.command("register")
@click.argument("paths", nargs=-1, required=True, type=click.Path())
@click.option(
    "--ignore-vanished/--strict",
    default=None,
    help="Skip directories that disappear mid-registration, or fail on them",
)
@click.option(
    "--table/--no-table",
    "track_table",
    default=None,
    help="Track watch handle -> path pairs",
)
@click.option(
    "--backend",
    type=click.Choice(BACKENDS),
    default=None,
    help="Notification backend (default: native)",
)
@click.option(
    "--hold",
    is_flag=True,
    help="Keep the registrations live until Ctrl-C",
)
@click.option("--verbose", "-v", is_flag=True, help="Show debug output")
def register_command(
    paths: tuple[str, ...],
    ignore_vanished: bool | None,
    track_table: bool | None,
    backend: str | None,
    hold: bool,
    verbose: bool,
):
    """Register PATHS and all their subdirectories."""
    try:
        settings = Settings.from_env()
    except ValueError as e:
        console.print(f"[red]ERROR: {e}[/red]")
        sys.exit(1)

    setup_logging(logging.DEBUG if verbose else settings.log_level)

    policy = RegistrationPolicy(
        ignore_vanished=settings.ignore_vanished if ignore_vanished is None else ignore_vanished,
        track_table=settings.track_table if track_table is None else track_table,
    )
    backend = backend or settings.backend

    console.print(
        Panel.fit(
            "[bold cyan]dirwatch[/bold cyan]\n\n"
            + "".join(f"[>] Root: [green]{Path(p).absolute()}[/green]\n" for p in paths)
            + f"[>] Backend: [yellow]{backend}[/yellow]\n"
            f"[>] Vanished paths: {'[green]IGNORE[/green]' if policy.ignore_vanished else '[red]FAIL[/red]'}"
            f" | Table: {'[green]ON[/green]' if policy.track_table else '[dim]OFF[/dim]'}",
            border_style="cyan",
        )
    )

    service = ObserverWatchService(backend=backend)
    service.start()
    try:
        try:
            summary = register_recursive(service, paths, policy=policy)
        except DirWatchError as e:
            console.print(f"[red]ERROR: {e}[/red]")
            if e.summary is not None:
                console.print("[dim]Registered before the failure:[/dim]")
                console.print(render_summary(e.summary))
            sys.exit(1)

        console.print(render_summary(summary))
        if summary.is_complete:
            console.print("[green]OK[/green] All directories registered")
        else:
            console.print(
                f"[yellow]WARN: {summary.skipped_count} path(s) vanished during registration[/yellow]"
            )
            for path in summary.skipped:
                console.print(f"[dim]  - {path}[/dim]")

        if hold:
            console.print("[dim]Holding registrations, press Ctrl-C to stop[/dim]")
            try:
                while True:
                    time.sleep(1)
            except KeyboardInterrupt:
                pass
    finally:
        service.close()
        console.print("[dim]Watch service closed[/dim]")


if __name__ == "__main__":
    cli()
