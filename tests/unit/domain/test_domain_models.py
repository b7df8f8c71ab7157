"""Tests for domain models and enums."""

from pathlib import Path

import pytest
from factories import make_candidate, make_probe, make_video_stream

from av1d.domain.enums import EncoderKind, EncoderPreference, SkipReason, SourceType
from av1d.domain.models import (
    EncoderChoice,
    FormatInfo,
    Job,
    ProbeResult,
    create_job,
    is_hdr_pix_fmt,
)


class TestEnums:
    """Tests for enum helpers."""

    def test_skip_reason_descriptions(self):
        """Every skip reason has a description."""
        for reason in SkipReason:
            assert reason.description

    def test_already_av1_description(self):
        """The AV1 skip text mentions AV1."""
        assert SkipReason.ALREADY_AV1.description == "Video is already AV1"

    @pytest.mark.parametrize(
        ("preference", "kind"),
        [
            (EncoderPreference.SVT, EncoderKind.SVT_AV1),
            (EncoderPreference.AOM, EncoderKind.LIBAOM_AV1),
            (EncoderPreference.RAV1E, EncoderKind.LIBRAV1E),
        ],
    )
    def test_preference_to_kind(self, preference, kind):
        """Operator names map to ffmpeg encoders."""
        assert preference.to_kind() is kind

    def test_encoder_choice_codec_name(self):
        """EncoderChoice exposes the ffmpeg codec name."""
        assert EncoderChoice(EncoderKind.LIBAOM_AV1).codec_name == "libaom-av1"


class TestProbeResult:
    """Tests for ProbeResult helpers."""

    def test_main_stream_prefers_default(self):
        """The default-disposition stream is the main one."""
        probe = make_probe(
            video=[
                make_video_stream("mjpeg", index=0),
                make_video_stream("hevc", index=1, is_default=True),
            ]
        )

        assert probe.main_video_stream().codec_name == "hevc"

    def test_main_stream_falls_back_to_first(self):
        """Without a default flag the first stream is used."""
        probe = make_probe(video=[make_video_stream("h264"), make_video_stream("av1")])

        assert probe.main_video_stream().codec_name == "h264"

    def test_no_video(self):
        """No video streams means no main stream."""
        probe = ProbeResult(format=FormatInfo(duration=None, size=0))

        assert probe.main_video_stream() is None


class TestJob:
    """Tests for Job."""

    def test_dimension_defaults(self):
        """Unknown dimensions resolve to 1920x1080."""
        job = Job(source_path=Path("/m/a.mkv"))

        assert (job.width, job.height) == (1920, 1080)

    def test_unique_ids(self):
        """Each job gets its own id."""
        assert Job(Path("a")).id != Job(Path("a")).id

    @pytest.mark.parametrize(
        ("pix_fmt", "expected"),
        [("yuv420p10le", True), ("p010le", True), ("yuv420p", False), (None, None)],
    )
    def test_is_hdr_pix_fmt(self, pix_fmt, expected):
        """10/12-bit pixel formats count as HDR."""
        assert is_hdr_pix_fmt(pix_fmt) is expected


class TestCreateJob:
    """Tests for create_job."""

    def test_copies_source_metadata(self):
        """Size, duration and main stream details are copied."""
        candidate = make_candidate(Path("/m/Movie.WEB-DL.mkv"), size_bytes=123)
        probe = make_probe(
            video=[
                make_video_stream(
                    "hevc",
                    width=3840,
                    height=2160,
                    bitrate=8_000_000,
                    pix_fmt="yuv420p10le",
                    frame_rate="24/1",
                )
            ],
            duration=5400.0,
        )

        job = create_job(candidate, probe, SourceType.WEB_LIKE)

        assert job.source_path == candidate.path
        assert job.original_bytes == 123
        assert job.original_duration == 5400.0
        assert job.video_codec == "hevc"
        assert (job.width, job.height) == (3840, 2160)
        assert job.is_hdr is True
        assert job.is_web_like is True
        assert job.encoder_used is None

    def test_disc_source_not_web_like(self):
        """Only WEB_LIKE sets is_web_like."""
        job = create_job(
            make_candidate(Path("/m/a.mkv")), make_probe(), SourceType.DISC_LIKE
        )

        assert job.is_web_like is False
