"""Skip command: manually exclude a file from transcoding."""

from __future__ import annotations

from pathlib import Path

import click

from av1d.cli.exit_codes import ExitCode
from av1d.sidecars import create_skip_marker, write_why_file


@click.command("skip")
@click.argument("path", type=click.Path(path_type=Path, dir_okay=False))
@click.option("--reason", default=None, help="Explanation written to the why-file.")
@click.pass_context
def skip_command(ctx: click.Context, path: Path, reason: str | None) -> None:
    """Create the skip marker for PATH so the daemon never touches it."""
    if not path.is_file():
        click.echo(f"Error: {path} is not a file", err=True)
        ctx.exit(ExitCode.TARGET_NOT_FOUND)

    try:
        marker = create_skip_marker(path)
        if reason:
            write_why_file(path, reason)
    except OSError as e:
        click.echo(f"Error: cannot write sidecar for {path}: {e}", err=True)
        ctx.exit(ExitCode.OPERATION_FAILED)

    click.echo(f"Created {marker}")
