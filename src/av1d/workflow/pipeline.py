"""Per-file transcode pipeline.

One call to TranscodePipeline.process takes a scanned file through every
stage: stability, probe, classification, gates, encode, validation, size
gate and replacement. Each stage can end the run with an outcome; only a
file that passes validation and the size gate is ever replaced.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from pathlib import Path

from av1d.config.models import DaemonConfig
from av1d.core.errors import (
    EncodeError,
    MediaIntrospectionError,
    ReplaceError,
    StabilityCheckError,
)
from av1d.domain.enums import PipelineStatus
from av1d.domain.models import (
    CandidateFile,
    EncoderChoice,
    Job,
    ProbeResult,
    create_job,
)
from av1d.executor.encode.command import build_command
from av1d.executor.encode.runner import run_encode
from av1d.executor.replace import atomic_replace
from av1d.introspector.interface import Prober
from av1d.logging.context import file_context, set_job_id
from av1d.scanner.stability import check_stability
from av1d.sidecars import create_skip_marker, has_skip_marker, write_why_file
from av1d.workflow.classify import classify_source
from av1d.workflow.gates import GateSkip, evaluate_gates
from av1d.workflow.size_gate import SizeGateFail, check_size_gate
from av1d.workflow.validate import Invalid, validate_output

logger = logging.getLogger(__name__)

EncodeRunner = Callable[[list[str], Job], Awaitable[object]]
Replacer = Callable[[Path, Path, bool], None]


@dataclass(frozen=True)
class PipelineOutcome:
    """How one file's run ended."""

    path: Path
    status: PipelineStatus
    reason: str | None = None
    job: Job | None = None


class TranscodePipeline:
    """Run files through the transcode stages.

    The encoder runner and the replace function are injected so the
    decision logic can be exercised without ffmpeg or real media files.
    Encodes are limited by ``encode_slots``; everything before the encode
    (stability waits, probing) runs without limit.
    """

    def __init__(
        self,
        config: DaemonConfig,
        encoder: EncoderChoice,
        prober: Prober,
        encode_runner: EncodeRunner | None = None,
        replacer: Replacer = atomic_replace,
        encode_slots: asyncio.Semaphore | None = None,
    ) -> None:
        self.config = config
        self.encoder = encoder
        self.prober = prober
        self._encode_runner = encode_runner or self._run_ffmpeg
        self._replacer = replacer
        self._encode_slots = encode_slots or asyncio.Semaphore(
            config.max_concurrent_jobs
        )

    async def _run_ffmpeg(self, command: list[str], job: Job) -> object:
        return await run_encode(
            command,
            ffmpeg_path=self.config.ffmpeg_path,
            duration=job.original_duration,
        )

    def output_path_for(self, job: Job) -> Path:
        return self.config.temp_output_dir / f"{job.id}.mkv"

    async def process(self, candidate: CandidateFile) -> PipelineOutcome:
        """Run one file through the pipeline.

        Returns:
            The outcome; policy decisions and per-file failures never raise.
        """
        with file_context(candidate.path):
            return await self._process(candidate)

    async def _process(self, candidate: CandidateFile) -> PipelineOutcome:
        path = candidate.path

        if has_skip_marker(path):
            logger.debug("Skip marker present")
            return PipelineOutcome(path, PipelineStatus.SKIPPED, "has skip marker")

        try:
            stable = await check_stability(candidate, self.config.stability_seconds)
        except StabilityCheckError as e:
            logger.warning("%s", e)
            return PipelineOutcome(path, PipelineStatus.FAILED, str(e))
        if not stable:
            return PipelineOutcome(
                path, PipelineStatus.UNSTABLE, "file is still being written"
            )

        try:
            probe = await self.prober.probe(path)
        except MediaIntrospectionError as e:
            logger.warning("Probe failed: %s", e)
            reason = f"Probe failed: {e}"
            self._mark_skipped(path, reason)
            return PipelineOutcome(path, PipelineStatus.SKIPPED, reason)

        classification = classify_source(path, probe)

        gate = evaluate_gates(candidate, probe, self.config)
        if isinstance(gate, GateSkip):
            reason = gate.reason.description
            logger.info("Skipping: %s", reason)
            self._mark_skipped(path, reason)
            return PipelineOutcome(path, PipelineStatus.SKIPPED, reason)

        job = create_job(candidate, probe, classification.source_type)
        set_job_id(job.id)
        logger.info(
            "Created job %s (%dx%d, %s, source %s)",
            job.id,
            job.width,
            job.height,
            job.video_codec,
            classification.source_type.value,
        )

        output_path = self.output_path_for(job)
        job.output_path = output_path
        try:
            return await self._encode_and_replace(candidate, probe, job, output_path)
        except asyncio.CancelledError:
            logger.info("Cancelled, removing partial output %s", output_path)
            _remove_output(output_path)
            raise

    async def _encode_and_replace(
        self,
        candidate: CandidateFile,
        probe: ProbeResult,
        job: Job,
        output_path: Path,
    ) -> PipelineOutcome:
        path = candidate.path
        command = build_command(
            job, self.encoder, self.config.quality_tier, output_path
        )

        async with self._encode_slots:
            output_path.parent.mkdir(parents=True, exist_ok=True)
            try:
                await self._encode_runner(command, job)
            except EncodeError as e:
                logger.error("Encoding failed: %s", e)
                _remove_output(output_path)
                return PipelineOutcome(
                    path, PipelineStatus.FAILED, f"Encoding failed: {e}", job
                )

        validation = await validate_output(output_path, probe, self.prober)
        if isinstance(validation, Invalid):
            _remove_output(output_path)
            return PipelineOutcome(
                path,
                PipelineStatus.FAILED,
                f"Validation failed: {validation.error}",
                job,
            )

        try:
            job.new_bytes = output_path.stat().st_size
        except OSError as e:
            logger.error("Cannot read output size: %s", e)
            _remove_output(output_path)
            return PipelineOutcome(
                path, PipelineStatus.FAILED, f"Cannot read output size: {e}", job
            )

        size_result = check_size_gate(
            candidate.size_bytes, job.new_bytes, self.config.max_size_ratio
        )
        if isinstance(size_result, SizeGateFail):
            reason = size_result.describe(candidate.size_bytes)
            logger.warning("Size gate failed: %s", reason)
            _remove_output(output_path)
            self._mark_skipped(path, reason)
            return PipelineOutcome(path, PipelineStatus.SKIPPED, reason, job)

        logger.info(
            "Size gate passed: saved %d bytes (%.1f%% of original)",
            size_result.savings_bytes,
            size_result.compression_ratio * 100,
        )

        try:
            await asyncio.to_thread(
                self._replacer, path, output_path, self.config.keep_original
            )
        except ReplaceError as e:
            logger.error(
                "Replacement failed, output kept at %s for inspection: %s",
                output_path,
                e,
            )
            return PipelineOutcome(
                path, PipelineStatus.FAILED, f"Replacement failed: {e}", job
            )

        logger.info("Job %s complete", job.id)
        return PipelineOutcome(path, PipelineStatus.REPLACED, None, job)

    def _mark_skipped(self, path: Path, reason: str) -> None:
        """Write the skip marker and, if enabled, the why-file."""
        try:
            create_skip_marker(path)
            if self.config.write_why_sidecars:
                write_why_file(path, reason)
        except OSError as e:
            logger.error("Failed to write sidecar for %s: %s", path, e)


def _remove_output(output_path: Path) -> None:
    try:
        output_path.unlink(missing_ok=True)
    except OSError as e:
        logger.warning("Failed to remove output %s: %s", output_path, e)
