#!/usr/bin/env python3
"""
HQ Time Logger CLI

Logs work time in HelloHQ. Without a subcommand a single entry is resolved from
the given start, end, duration and pause (falling back to configured defaults),
confirmed and logged. The `csv` subcommand logs every row of a CSV file in one
session.
"""

import logging
from datetime import datetime
from typing import Optional

import click
from dotenv import load_dotenv
from rich.console import Console
from rich.logging import RichHandler

from approval import confirm_entry, display_entries_preview
from batch import run_batch
from config import Config, discover_config, load_config
from errors import BatchError, ConfigError, WorktimeError
from format_spec import DEFAULT_TIME_FORMAT
from hq_client import HQClient, WorktimeSink
from resolver import first_present, parse_time_value, resolve_single_entry

load_dotenv()

console = Console()
logger = logging.getLogger(__name__)

LOG_LEVELS = {
    "error": logging.ERROR,
    "warn": logging.WARNING,
    "warning": logging.WARNING,
    "info": logging.INFO,
    "debug": logging.DEBUG,
    "trace": logging.DEBUG,
}


def setup_logging(level: str) -> None:
    logging.basicConfig(
        level=LOG_LEVELS[level.lower()],
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )


def create_sink(config: Config) -> WorktimeSink:
    return HQClient(config.endpoint, (config.session.key, config.session.value))


def _load_config(ctx: click.Context) -> Config:
    config_path: Optional[str] = ctx.obj.get("config_path")
    return load_config(config_path) if config_path else discover_config()


@click.group(invoke_without_command=True)
@click.option(
    "-c",
    "--config",
    "config_path",
    envvar="HQCLI_CONFIG",
    type=click.Path(dir_okay=False),
    help="Pass a configuration file (.toml, .yaml/.yml or .json) from a given path.",
)
@click.option(
    "-s",
    "--start",
    help="The start date and/or time as 'dd.mm.yyyy HH:MM' or 'HH:MM'. "
    "Without a date the current date is assumed.",
)
@click.option(
    "-e",
    "--end",
    help="The end date and/or time as 'dd.mm.yyyy HH:MM' or 'HH:MM'. "
    "If neither this nor --time is passed, the current date and time is used.",
)
@click.option(
    "-t",
    "--time",
    "time_worked",
    help="The duration worked, added to the start time. Overrides --end and the "
    "pause is not subtracted. Human readable, e.g. '8h30m' or '9 hours 15 minutes'.",
)
@click.option(
    "-p",
    "--pause",
    help="The duration of your pauses this day, subtracted from the end time. "
    "Has no effect together with --time.",
)
@click.option("-y", "--yes", is_flag=True, help="Skip all confirmation prompts.")
@click.option(
    "-l",
    "--log-level",
    envvar="HQCLI_LOG_LEVEL",
    default="info",
    show_default=True,
    type=click.Choice(list(LOG_LEVELS), case_sensitive=False),
    help="The log level.",
)
@click.pass_context
def main(
    ctx: click.Context,
    config_path: Optional[str],
    start: Optional[str],
    end: Optional[str],
    time_worked: Optional[str],
    pause: Optional[str],
    yes: bool,
    log_level: str,
) -> None:
    """A CLI tool to log work time in HelloHQ."""
    setup_logging(log_level)

    ctx.ensure_object(dict)
    ctx.obj["config_path"] = config_path
    ctx.obj.setdefault("clock", datetime.now)
    ctx.obj.setdefault("sink_factory", create_sink)

    if ctx.invoked_subcommand is not None:
        ignored = [
            flag
            for flag, value in (
                ("--start", start),
                ("--end", end),
                ("--time", time_worked),
                ("--pause", pause),
                ("--yes", yes or None),
            )
            if value is not None
        ]
        if ignored:
            raise click.UsageError(
                f"{', '.join(ignored)} only apply to a single entry, not to '{ctx.invoked_subcommand}'."
            )
        return

    try:
        config = _load_config(ctx)
        entry = resolve_single_entry(
            start=start,
            end=end,
            time_worked=time_worked,
            pause=pause,
            default_start=config.default_start_time,
            default_pause=config.default_pause,
            clock=ctx.obj["clock"],
        )

        if not yes and not confirm_entry(entry):
            raise click.ClickException("Abort.")

        sink = ctx.obj["sink_factory"](config)
        sink.log_worktime(entry.start, entry.end)
    except WorktimeError as e:
        raise click.ClickException(str(e)) from e


@main.command("csv")
@click.option(
    "-f",
    "--format",
    "format_spec",
    help="The layout of the data columns and the format of dates and times, "
    "e.g. 'date:%d.%m.%Y,start_time:%H:%M,end_time:%H:%M,pause'. Possible fields "
    "are 'date', 'start_time', 'end_time', 'pause', 'duration' and '' for an "
    "ignored column. Can also be set in the config as `defaults.csv.format`.",
)
@click.option(
    "-s",
    "--skip-lines",
    default=0,
    show_default=True,
    type=click.IntRange(min=0),
    help="Skip the first lines in the CSV file.",
)
@click.option(
    "--start-time",
    help="Start time (HH:MM) for rows without one. Overrides `defaults.startTime`.",
)
@click.argument("file", type=click.File("r", encoding="utf-8"))
@click.pass_context
def csv_command(
    ctx: click.Context,
    format_spec: Optional[str],
    skip_lines: int,
    start_time: Optional[str],
    file,
) -> None:
    """Take a CSV of time entries and log them all in one session."""
    try:
        config = _load_config(ctx)

        spec = first_present(format_spec, config.default_csv_format)
        if spec is None:
            raise ConfigError("No format has been specified!")

        start_text = first_present(start_time, config.default_start_time)
        default_start = (
            parse_time_value(start_text, DEFAULT_TIME_FORMAT, "default start time")
            if start_text is not None
            else None
        )

        logger.info("Opening CSV file ...")
        entries = run_batch(
            spec,
            file,
            skip_lines,
            default_start,
            ctx.obj["sink_factory"](config),
            clock=ctx.obj["clock"],
            preview=display_entries_preview,
        )
    except BatchError as e:
        console.print(f"[yellow]{e.submitted} entries were already logged before the failure.[/yellow]")
        raise click.ClickException(str(e)) from e
    except WorktimeError as e:
        raise click.ClickException(str(e)) from e

    console.print(f"[green]✓ Logged {len(entries)} entries[/green]")


if __name__ == "__main__":
    main()
