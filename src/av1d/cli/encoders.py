"""Encoders command: report ffmpeg and AV1 encoder availability."""

from __future__ import annotations

import json

import click

from av1d.cli.exit_codes import ExitCode
from av1d.config.models import Av1dConfig
from av1d.core.errors import NoEncoderAvailableError
from av1d.executor.encode.selection import ENCODER_HIERARCHY, select_encoder
from av1d.tools.detection import detect_ffmpeg


@click.command("encoders")
@click.option("--json", "json_output", is_flag=True, help="Output results as JSON.")
@click.pass_context
def encoders_command(ctx: click.Context, json_output: bool) -> None:
    """Show the ffmpeg version, available AV1 encoders and the one av1d would use."""
    config: Av1dConfig = ctx.obj["config"]
    info = detect_ffmpeg(config.daemon.ffmpeg_path)

    selected = None
    if info.is_available():
        try:
            selected = select_encoder(info.av1_encoders, config.daemon.prefer_encoder)
        except NoEncoderAvailableError:
            selected = None

    if json_output:
        click.echo(
            json.dumps(
                {
                    "ffmpeg_path": str(info.path) if info.path else None,
                    "ffmpeg_version": info.version,
                    "status": info.status.value,
                    "message": info.status_message,
                    "available": [
                        kind.codec_name
                        for kind in ENCODER_HIERARCHY
                        if kind in info.av1_encoders
                    ],
                    "selected": selected.codec_name if selected else None,
                },
                indent=2,
            )
        )
    else:
        click.echo(f"ffmpeg: {info.path or 'not found'} ({info.version or 'unknown'})")
        if info.status_message:
            click.echo(f"  {info.status_message}")
        for kind in ENCODER_HIERARCHY:
            mark = "✓" if kind in info.av1_encoders else "✗"
            click.echo(f"  {mark} {kind.codec_name}")
        click.echo(f"Selected: {selected.codec_name if selected else 'none'}")

    if selected is None:
        ctx.exit(ExitCode.TOOL_NOT_AVAILABLE)
