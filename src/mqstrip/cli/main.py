"""mqstrip CLI entry point."""

from __future__ import annotations

import logging
import sys

import click

from mqstrip import __version__
from mqstrip.config import load_config_file, merge_options
from mqstrip.engine import Stripper
from mqstrip.errors import ConfigError, PhaseError
from mqstrip.events import types as events
from mqstrip.events.bus import EventBus


def _split(values: tuple[str, ...]) -> str | None:
    """Join repeated comma-list options into one comma list."""
    return ",".join(values) if values else None


def _configure_logging(verbose: int) -> None:
    if not verbose:
        return
    level = logging.INFO if verbose == 1 else logging.DEBUG
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")


def _build_event_bus() -> EventBus:
    """Event bus that renders run progress on the console."""
    bus = EventBus()

    def on_classified(event: events.FileClassified) -> None:
        click.echo(f"{event.rule_count} rule(s) found in {event.path} for the {event.phase} pass")

    def on_written(event: events.FileWritten) -> None:
        click.secho(f"=== Wrote {event.path} ===", fg="blue")

    def on_failed(event: events.FileFailed) -> None:
        click.secho(f"Failed: {event.path}: {event.error}", fg="red", err=True)

    bus.subscribe(events.FileClassified, on_classified)
    bus.subscribe(events.FileWritten, on_written)
    bus.subscribe(events.FileFailed, on_failed)
    return bus


@click.command()
@click.version_option(version=__version__, prog_name="mqstrip")
@click.argument("files", nargs=-1, type=click.Path(dir_okay=False))
@click.option("--src", multiple=True, help="Glob pattern selecting source CSS files.")
@click.option("--dest", help="Output path for the combined media-query file.")
@click.option("--ignore", multiple=True, help="Glob pattern or path to exclude.")
@click.option(
    "--widths",
    "--width",
    "widths",
    multiple=True,
    help="Breakpoint widths to strip, e.g. 400,1200.",
)
@click.option(
    "--extract",
    multiple=True,
    help="Widths whose media blocks are unwrapped into the stripped files.",
)
@click.option(
    "--override-original/--no-override-original",
    "--overrideOriginal",
    "override_original",
    default=None,
    help="Overwrite source files instead of writing suffixed copies.",
)
@click.option(
    "--stripped-suffix",
    "--strippedSuffix",
    "stripped_suffix",
    help="Suffix for stripped files (default: stripped).",
)
@click.option("--encoding", help="Encoding of source and output files (default: utf-8).")
@click.option(
    "--config",
    "config_file",
    type=click.Path(exists=True, dir_okay=False),
    help="JSON file with options; command-line flags take precedence.",
)
@click.option("-v", "--verbose", count=True, help="Log progress (-vv for debug output).")
def cli(
    files: tuple[str, ...],
    src: tuple[str, ...],
    dest: str | None,
    ignore: tuple[str, ...],
    widths: tuple[str, ...],
    extract: tuple[str, ...],
    override_original: bool | None,
    stripped_suffix: str | None,
    encoding: str | None,
    config_file: str | None,
    verbose: int,
) -> None:
    """Split breakpoint media queries out of CSS files.

    Media blocks matching --widths are collected from every source file into
    --dest; each source is then written again without them.
    """
    _configure_logging(verbose)

    cli_options = {
        "files": list(files) or None,
        "src": list(src) or None,
        "dest": dest,
        "ignore": list(ignore) or None,
        "widths": _split(widths),
        "extract": _split(extract),
        "override_original": override_original,
        "stripped_suffix": stripped_suffix,
        "encoding": encoding,
    }

    try:
        file_options = load_config_file(config_file) if config_file else None
        options = merge_options(file_options, cli_options)
        stripper = Stripper.from_options(options, event_bus=_build_event_bus())
    except ConfigError as exc:
        click.secho(f"Error: {exc}", fg="red", err=True)
        sys.exit(2)

    try:
        stripper.run()
    except PhaseError as exc:
        click.secho(
            f"\n{exc.phase} phase failed for {len(exc.failures)} file(s)",
            fg="red",
            err=True,
        )
        sys.exit(1)

    click.secho("\nAll done!", fg="green")
