"""
DirMirror CLI Main Entry Point.

Provides the command-line interface for mirroring a directory, once or on
a fixed interval.
"""

from __future__ import annotations

import json
import sys
import time
from pathlib import Path

import click
from rich.console import Console
from rich.table import Table

from dirmirror import __version__
from dirmirror.core.config import DEFAULT_HOME, DirMirrorConfig, load_config
from dirmirror.core.logging import setup_logging
from dirmirror.core.models import LogEntry
from dirmirror.sync.manager import MirrorManager

console = Console()


class RunRecorder:
    """Echoes log entries to the console and counts them for a single run."""

    def __init__(self, quiet: bool = False) -> None:
        self.quiet = quiet
        self.entries = 0
        self.errors = 0

    def reset(self) -> None:
        self.entries = 0
        self.errors = 0

    def __call__(self, entry: LogEntry) -> None:
        self.entries += 1
        if entry.is_error:
            self.errors += 1
            console.print(entry.printable, style="red", markup=False, highlight=False)
        elif not self.quiet:
            console.print(entry.printable, style="green", markup=False, highlight=False)


def get_config(ctx: click.Context) -> DirMirrorConfig:
    """Get configuration from context."""
    return ctx.obj["config"]


def print_summary(recorder: RunRecorder, log_file: Path, run: int) -> None:
    table = Table(title=f"Mirror run {run}")
    table.add_column("Entries", style="cyan")
    table.add_column("Errors", style="red")
    table.add_column("Log file", style="white")
    table.add_row(str(recorder.entries), str(recorder.errors), str(log_file))
    console.print(table)


@click.group()
@click.version_option(version=__version__, prog_name="DirMirror")
@click.option(
    "--config",
    "-c",
    type=click.Path(exists=True, path_type=Path),
    help="Path to configuration file",
)
@click.option("--quiet", "-q", is_flag=True, help="Only print errors and the summary")
@click.pass_context
def cli(ctx: click.Context, config: Path | None, quiet: bool) -> None:
    """
    DirMirror - One-way directory mirroring.

    Copies every file and directory of a source into a destination and
    removes whatever the source does not have.
    """
    ctx.ensure_object(dict)

    if config:
        ctx.obj["config"] = DirMirrorConfig.load(config)
    else:
        ctx.obj["config"] = load_config()

    ctx.obj["quiet"] = quiet
    setup_logging(ctx.obj["config"].logging)


@cli.command("sync")
@click.argument("source", type=click.Path(exists=True, file_okay=False, path_type=Path))
@click.argument("destination", type=click.Path(path_type=Path))
@click.option(
    "--log-file",
    "-l",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Where to write the run log (defaults to the configured log file)",
)
@click.option(
    "--interval",
    "-i",
    type=click.FloatRange(min=0),
    default=0,
    show_default=True,
    help="Seconds between runs; 0 runs once",
)
@click.option(
    "--runs",
    "-n",
    type=click.IntRange(min=0),
    default=0,
    show_default=True,
    help="Stop after this many runs when an interval is set; 0 means no limit",
)
@click.option(
    "--recursive-file-prune",
    is_flag=True,
    help="Also delete stale files inside subdirectories",
)
@click.option("--no-sort", is_flag=True, help="Process entries in filesystem order")
@click.pass_context
def sync_command(
    ctx: click.Context,
    source: Path,
    destination: Path,
    log_file: Path | None,
    interval: float,
    runs: int,
    recursive_file_prune: bool,
    no_sort: bool,
) -> None:
    """Mirror SOURCE into DESTINATION."""
    config = get_config(ctx)
    mirror_config = config.mirror.model_copy()
    if recursive_file_prune:
        mirror_config.recursive_file_prune = True
    if no_sort:
        mirror_config.sort_entries = False

    log_path = log_file or mirror_config.default_log_file
    recorder = RunRecorder(quiet=ctx.obj.get("quiet", False))
    manager = MirrorManager(mirror_config, listener=recorder)

    run = 0
    while True:
        run += 1
        recorder.reset()
        try:
            manager.synchronize(source, destination, log_path)
        except OSError as e:
            console.print(f"[red]Mirror aborted: {e}[/red]")
            recorder.errors += 1

        print_summary(recorder, log_path, run)

        if interval <= 0 or (runs and run >= runs):
            break
        time.sleep(interval)

    if recorder.errors:
        sys.exit(1)


@cli.group("config")
def config_group() -> None:
    """Inspect or create the configuration file."""


@config_group.command("show")
@click.pass_context
def config_show(ctx: click.Context) -> None:
    """Print the effective configuration as JSON."""
    config = get_config(ctx)
    click.echo(json.dumps(config.model_dump(mode="json"), indent=2, default=str))


@config_group.command("init")
@click.argument("path", type=click.Path(dir_okay=False, path_type=Path), required=False)
@click.option("--force", is_flag=True, help="Overwrite an existing file")
def config_init(path: Path | None, force: bool) -> None:
    """Write the default configuration to PATH."""
    path = path or DEFAULT_HOME / "config.json"
    if path.exists() and not force:
        console.print(f"[red]Configuration already exists: {path}[/red]")
        sys.exit(1)

    DirMirrorConfig().save(path)
    console.print(f"[green]Configuration written to {path}[/green]")


def main() -> None:
    """Main entry point."""
    try:
        cli(obj={})
    except KeyboardInterrupt:
        console.print("\n[yellow]Operation cancelled[/yellow]")
        sys.exit(130)
    except Exception as e:
        console.print(f"[red]Error: {e}[/red]")
        sys.exit(1)


if __name__ == "__main__":
    main()
