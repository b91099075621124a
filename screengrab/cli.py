# screengrab/cli.py
from __future__ import annotations

"""Command-line interface
------------------------
`screengrab` with no arguments captures every display into ./img/.
`displays` and `config` are read-only helpers for checking what a run
would do.
"""

import json
import sys
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional

import click

from screengrab import __version__
from screengrab.capture.backend import MssBackend
from screengrab.capture.orchestrator import Orchestrator
from screengrab.errors import ScreengrabError
from screengrab.utils.config import Settings, ShortDisplayPolicy, get_settings
from screengrab.utils.logger import get_logger, bind, unbind, set_log_level


# -------- helpers --------


def _echo_json(obj) -> None:
    click.echo(json.dumps(obj, indent=2, ensure_ascii=False))


def _settings(ctx: click.Context) -> Settings:
    return ctx.find_root().obj


# -------- CLI root --------


@click.group(invoke_without_command=True, context_settings=dict(help_option_names=["-h", "--help"]))
@click.option(
    "--log-level",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"], case_sensitive=False),
    default=None,
    help="Override LOG_LEVEL from settings",
)
@click.option("--output-dir", type=click.Path(file_okay=False, path_type=Path), default=None,
              help="Override OUTPUT_DIR (default: img)")
@click.option("--margin", type=click.IntRange(min=0), default=None,
              help="Override TRIM_MARGIN, pixels cut from the bottom of each capture")
@click.option("--full/--trimmed", "timestamp_mode", default=None,
              help="Capture whole displays (keep the clock strip) or trim the bottom margin")
@click.option("--short-policy", type=click.Choice([p.value for p in ShortDisplayPolicy]), default=None,
              help="Override SHORT_DISPLAY_POLICY for displays not taller than the margin")
@click.version_option(__version__, prog_name="screengrab")
@click.pass_context
def cli(
    ctx: click.Context,
    log_level: Optional[str],
    output_dir: Optional[Path],
    margin: Optional[int],
    timestamp_mode: Optional[bool],
    short_policy: Optional[str],
):
    """Save a timestamped PNG of every active display."""
    overrides = {}
    if output_dir is not None:
        overrides["OUTPUT_DIR"] = output_dir
    if margin is not None:
        overrides["TRIM_MARGIN"] = margin
    if timestamp_mode is not None:
        overrides["TIMESTAMP_MODE"] = timestamp_mode
    if short_policy is not None:
        overrides["SHORT_DISPLAY_POLICY"] = ShortDisplayPolicy(short_policy)
    ctx.obj = get_settings().model_copy(update=overrides)

    if log_level:
        set_log_level(log_level.upper())

    if ctx.invoked_subcommand is None:
        ctx.invoke(cmd_capture)


# -------- commands --------


@cli.command("capture")
@click.pass_context
def cmd_capture(ctx: click.Context):
    """Capture every active display (default command)."""
    settings = _settings(ctx)
    log = get_logger(__name__)

    bind(run_id=datetime.now(timezone.utc).strftime("%Y%m%dT%H%M%SZ"))
    try:
        with MssBackend() as backend:
            report = Orchestrator(backend, settings).run()
    except ScreengrabError as e:
        log.error(str(e))
        sys.exit(1)
    finally:
        unbind("run_id")

    for cap in report.captures:
        click.echo(f"OK  display {cap.index} -> {cap.path}")
    for idx in report.skipped:
        click.echo(f"SKIP display {idx}")
    click.echo(f"Done. saved={len(report.captures)} skipped={len(report.skipped)} displays={report.displays}")


@cli.command("displays")
def cmd_displays():
    """List active displays and their bounds."""
    try:
        with MssBackend() as backend:
            displays = [backend.display(i) for i in range(backend.display_count())]
    except ScreengrabError as e:
        get_logger(__name__).error(str(e))
        sys.exit(1)

    if not displays:
        click.echo("No active displays.")
        return
    for d in displays:
        b = d.bounds
        click.echo(f" - display {d.index}: {b.width}x{b.height} at ({b.left}, {b.top})")


@cli.command("config")
@click.pass_context
def cmd_config(ctx: click.Context):
    """Print effective configuration (after .env, env vars and flags)."""
    s = _settings(ctx)
    _echo_json(s.model_dump(mode="json"))


def main() -> None:
    cli(prog_name="screengrab")


if __name__ == "__main__":
    main()
