"""Plan command: show what the daemon would do with one file."""

from __future__ import annotations

import shlex
from datetime import datetime, timezone
from pathlib import Path

import click

from av1d.cli.exit_codes import ExitCode
from av1d.config.models import Av1dConfig
from av1d.core.errors import MediaIntrospectionError
from av1d.domain.enums import EncoderPreference
from av1d.domain.models import CandidateFile, EncoderChoice, create_job
from av1d.executor.encode.command import build_command
from av1d.introspector.ffprobe import FFprobeIntrospector
from av1d.workflow.classify import classify_source
from av1d.workflow.gates import GateSkip, evaluate_gates


@click.command("plan")
@click.argument("path", type=click.Path(path_type=Path, dir_okay=False, exists=True))
@click.option(
    "--encoder",
    type=click.Choice([p.value for p in EncoderPreference]),
    default=None,
    help="Encoder to plan for (default: configured preference).",
)
@click.pass_context
def plan_command(ctx: click.Context, path: Path, encoder: str | None) -> None:
    """Probe PATH, run the gates, and print the ffmpeg command without encoding.

    The encoder is taken as given; run 'av1d encoders' to see which ones
    the installed ffmpeg actually provides.
    """
    config: Av1dConfig = ctx.obj["config"]
    daemon = config.daemon

    stat = path.stat()
    candidate = CandidateFile(
        path=path,
        size_bytes=stat.st_size,
        modified_at=datetime.fromtimestamp(stat.st_mtime, tz=timezone.utc),
    )

    prober = FFprobeIntrospector(daemon.ffprobe_path or "ffprobe")
    try:
        probe = prober.probe_sync(path)
    except MediaIntrospectionError as e:
        click.echo(f"Error: {e}", err=True)
        ctx.exit(ExitCode.FFPROBE_FAILED)

    classification = classify_source(path, probe)
    click.echo(
        f"Source: {classification.source_type.value} "
        f"(web={classification.web_score}, disc={classification.disc_score})"
    )
    for reason in classification.reasons:
        click.echo(f"  - {reason}")

    gate = evaluate_gates(candidate, probe, daemon)
    if isinstance(gate, GateSkip):
        click.echo(f"Skip: {gate.reason.description}")
        return

    preference = EncoderPreference(encoder) if encoder else daemon.prefer_encoder
    job = create_job(candidate, probe, classification.source_type)
    command = build_command(
        job,
        EncoderChoice(preference.to_kind()),
        daemon.quality_tier,
        daemon.temp_output_dir / f"{job.id}.mkv",
    )
    click.echo("Command:")
    click.echo(f"  {shlex.join(command)}")
