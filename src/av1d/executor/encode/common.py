"""ffmpeg argument groups shared by every AV1 encoder."""

from __future__ import annotations

from av1d.domain.models import Job

FFMPEG_BASE_ARGS = ("ffmpeg", "-hide_banner", "-y")

# Regenerate and zero-base timestamps; web rips often start at odd offsets
WEBSAFE_INPUT_FLAGS = (
    "-fflags",
    "+genpts",
    "-copyts",
    "-start_at_zero",
    "-vsync",
    "0",
    "-avoid_negative_ts",
    "make_zero",
)

# Keep everything except cover art and Russian audio/subtitle tracks
STREAM_MAPPING_FLAGS = (
    "-map",
    "0",
    "-map",
    "-0:v:m:attached_pic",
    "-map",
    "-0:a:m:language:ru",
    "-map",
    "-0:a:m:language:rus",
    "-map",
    "-0:s:m:language:ru",
    "-map",
    "-0:s:m:language:rus",
    "-map_chapters",
    "0",
    "-map_metadata",
    "0",
)

PAD_FILTER = "pad=ceil(iw/2)*2:ceil(ih/2)*2,setsar=1"

OUTPUT_FLAGS = (
    "-c:a",
    "copy",
    "-c:s",
    "copy",
    "-max_muxing_queue_size",
    "2048",
)


def needs_padding(width: int, height: int, is_web_like: bool) -> bool:
    """AV1 encoders need even dimensions; web rips are always padded."""
    return is_web_like or width % 2 != 0 or height % 2 != 0


def input_args(job: Job) -> list[str]:
    """Arguments up to and including the input file and stream mapping."""
    args = list(FFMPEG_BASE_ARGS)
    if job.is_web_like:
        args.extend(WEBSAFE_INPUT_FLAGS)
    args.extend(["-i", str(job.source_path)])
    args.extend(STREAM_MAPPING_FLAGS)
    if needs_padding(job.width, job.height, job.is_web_like):
        args.extend(["-vf", PAD_FILTER])
    return args


def output_args(output_path: str) -> list[str]:
    return [*OUTPUT_FLAGS, output_path]
