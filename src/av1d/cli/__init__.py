"""CLI for av1d."""

from __future__ import annotations

import logging
from pathlib import Path

import click

from av1d import __version__
from av1d.cli.exit_codes import ExitCode
from av1d.config import load_config
from av1d.core.errors import ConfigError
from av1d.logging import configure_logging

logger = logging.getLogger(__name__)


@click.group()
@click.version_option(__version__, package_name="av1d")
@click.option(
    "--config",
    "config_path",
    type=click.Path(path_type=Path, dir_okay=False),
    default=None,
    help="Config file (default: ~/.config/av1d/config.toml or $AV1D_CONFIG_PATH).",
)
@click.option(
    "--log-level",
    type=click.Choice(["debug", "info", "warning", "error"], case_sensitive=False),
    default=None,
    help="Override log level (default: info).",
)
@click.option(
    "--log-file",
    type=click.Path(path_type=Path),
    default=None,
    help="Override log file path.",
)
@click.option(
    "--log-json",
    is_flag=True,
    default=False,
    help="Use JSON log format.",
)
@click.pass_context
def main(
    ctx: click.Context,
    config_path: Path | None,
    log_level: str | None,
    log_file: Path | None,
    log_json: bool,
) -> None:
    """av1d - transcode a video library to AV1, safely and unattended."""
    ctx.ensure_object(dict)

    # Tests may inject a ready-made config
    if "config" not in ctx.obj:
        try:
            ctx.obj["config"] = load_config(
                config_path,
                logging_overrides={
                    "level": log_level,
                    "file": log_file,
                    "format": "json" if log_json else None,
                },
            )
        except ConfigError as e:
            click.echo(f"Error: {e}", err=True)
            ctx.exit(ExitCode.CONFIG_ERROR)

    configure_logging(ctx.obj["config"].logging)
    logger.debug("av1d %s starting", __version__)


# Subcommand modules import from this package
def _register_commands() -> None:
    from av1d.cli.encoders import encoders_command
    from av1d.cli.plan import plan_command
    from av1d.cli.run import run_command
    from av1d.cli.scan import scan_command
    from av1d.cli.skip import skip_command

    main.add_command(encoders_command)
    main.add_command(plan_command)
    main.add_command(run_command)
    main.add_command(scan_command)
    main.add_command(skip_command)


_register_commands()
