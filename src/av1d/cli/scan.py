"""Scan command: list transcode candidates without processing them."""

from __future__ import annotations

import json

import click

from av1d.config.models import Av1dConfig
from av1d.scanner.orchestrator import scan_libraries


def _format_size(size_bytes: int) -> str:
    size = float(size_bytes)
    for unit in ("B", "KiB", "MiB", "GiB"):
        if size < 1024:
            return f"{size:.1f} {unit}"
        size /= 1024
    return f"{size:.1f} TiB"


@click.command("scan")
@click.option("--json", "json_output", is_flag=True, help="Output results as JSON.")
@click.pass_context
def scan_command(ctx: click.Context, json_output: bool) -> None:
    """List video files in the library roots that have no skip marker."""
    config: Av1dConfig = ctx.obj["config"]
    candidates = scan_libraries(config.daemon.library_roots)

    if json_output:
        click.echo(
            json.dumps(
                [
                    {
                        "path": str(c.path),
                        "size_bytes": c.size_bytes,
                        "modified_at": c.modified_at.isoformat(),
                    }
                    for c in candidates
                ],
                indent=2,
            )
        )
        return

    for candidate in candidates:
        click.echo(f"{_format_size(candidate.size_bytes):>12}  {candidate.path}")
    click.echo(f"\n{len(candidates)} candidate(s)")
