"""Run command: start the transcode daemon."""

from __future__ import annotations

import asyncio
import logging

import click

from av1d.cli.exit_codes import ExitCode
from av1d.config.models import Av1dConfig
from av1d.core.errors import NoEncoderAvailableError, ToolNotFoundError
from av1d.executor.encode.selection import select_encoder
from av1d.tools.detection import require_ffmpeg
from av1d.workflow.daemon import run_daemon

logger = logging.getLogger(__name__)


@click.command("run")
@click.option("--once", is_flag=True, help="Run a single scan cycle and exit.")
@click.pass_context
def run_command(ctx: click.Context, once: bool) -> None:
    """Scan the library roots and transcode eligible files.

    Requires ffmpeg 8.0 or newer built with at least one of libsvtav1,
    libaom-av1 or librav1e.
    """
    config: Av1dConfig = ctx.obj["config"]
    daemon_config = config.daemon

    try:
        ffmpeg = require_ffmpeg(daemon_config.ffmpeg_path)
        encoder = select_encoder(ffmpeg.av1_encoders, daemon_config.prefer_encoder)
    except (ToolNotFoundError, NoEncoderAvailableError) as e:
        click.echo(f"Error: {e}", err=True)
        ctx.exit(ExitCode.TOOL_NOT_AVAILABLE)

    logger.info("Using ffmpeg %s with encoder %s", ffmpeg.version, encoder.codec_name)

    try:
        asyncio.run(run_daemon(daemon_config, encoder, once=once))
    except KeyboardInterrupt:
        logger.info("Interrupted, shutting down")
        ctx.exit(ExitCode.INTERRUPTED)
