"""The long-running scan/transcode loop."""

from __future__ import annotations

import asyncio
import logging
from collections import Counter

from av1d.config.models import DaemonConfig
from av1d.domain.enums import PipelineStatus
from av1d.domain.models import EncoderChoice
from av1d.introspector.ffprobe import FFprobeIntrospector
from av1d.introspector.interface import Prober
from av1d.scanner.orchestrator import scan_libraries
from av1d.workflow.pipeline import PipelineOutcome, TranscodePipeline

logger = logging.getLogger(__name__)


async def run_cycle(
    config: DaemonConfig, pipeline: TranscodePipeline
) -> Counter[PipelineStatus]:
    """Scan once and run every candidate through the pipeline.

    All candidates are processed concurrently; the pipeline itself limits
    how many encodes run at a time. An unexpected error in one file is
    logged and does not affect the others.

    Returns:
        Number of files per outcome status.
    """
    candidates = await asyncio.to_thread(scan_libraries, config.library_roots)
    logger.info("Scan found %d candidate file(s)", len(candidates))

    results = await asyncio.gather(
        *(pipeline.process(candidate) for candidate in candidates),
        return_exceptions=True,
    )

    counts: Counter[PipelineStatus] = Counter()
    for candidate, result in zip(candidates, results):
        if isinstance(result, PipelineOutcome):
            counts[result.status] += 1
            continue
        if isinstance(result, asyncio.CancelledError):
            raise result
        counts[PipelineStatus.FAILED] += 1
        logger.error(
            "Unexpected error processing %s",
            candidate.path,
            exc_info=result,
        )

    logger.info(
        "Cycle complete: %s",
        ", ".join(f"{status.value}={counts[status]}" for status in PipelineStatus),
    )
    return counts


async def run_daemon(
    config: DaemonConfig,
    encoder: EncoderChoice,
    prober: Prober | None = None,
    *,
    once: bool = False,
    pipeline: TranscodePipeline | None = None,
) -> None:
    """Scan and transcode until cancelled.

    Args:
        config: Daemon configuration.
        encoder: Encoder selected at startup.
        prober: Probe implementation; defaults to ffprobe.
        once: Run a single cycle and return.
        pipeline: Pre-built pipeline, mainly for tests.
    """
    config.temp_output_dir.mkdir(parents=True, exist_ok=True)
    if pipeline is None:
        if prober is None:
            prober = FFprobeIntrospector(config.ffprobe_path or "ffprobe")
        pipeline = TranscodePipeline(config, encoder, prober)

    logger.info(
        "Daemon started: encoder=%s, roots=%s, interval=%ds, max_jobs=%d",
        encoder.codec_name,
        ", ".join(str(root) for root in config.library_roots),
        config.scan_interval_secs,
        config.max_concurrent_jobs,
    )

    while True:
        await run_cycle(config, pipeline)
        if once:
            return
        logger.debug("Sleeping %d seconds until next scan", config.scan_interval_secs)
        await asyncio.sleep(config.scan_interval_secs)
