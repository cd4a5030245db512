"""ffmpeg execution — command construction and the blocking render call.

Both modes encode libx264/yuv420p at a fixed output frame rate. The
synced mode adds AAC narration and -shortest so the output stops at the
shorter of the merged video and audio tracks.

A render is one blocking subprocess call: no retries, no timeout. A
non-zero exit raises RenderFailed with ffmpeg's stderr attached. Temp
files created to drive ffmpeg are always removed; a failed removal is
logged as CleanupWarning and never replaces the render's own outcome.
"""

import logging
import shlex
import subprocess
import uuid
from pathlib import Path

from .errors import RenderFailed, TempArtifactWriteFailed
from .filtergraph import FilterGraph, build_concat_list
from .models import Scene

logger = logging.getLogger(__name__)

VIDEO_CODEC = "libx264"
AUDIO_CODEC = "aac"
PIXEL_FORMAT = "yuv420p"


# ── Command construction ──────────────────────────────────────────


def build_synced_command(
    ffmpeg_bin: str,
    scenes: list[Scene] | tuple[Scene, ...],
    graph: FilterGraph,
    output_path: str | Path,
    fps: int = 30,
) -> list[str]:
    """ffmpeg argv for the duration-synced graph.

    Inputs are added in graph order: image 2i, narration 2i+1.
    """
    if graph.input_count != 2 * len(scenes):
        raise ValueError(
            f"Graph expects {graph.input_count} inputs, got {len(scenes)} scenes"
        )
    inputs = []
    for scene in scenes:
        inputs.extend(["-i", str(scene.image_path), "-i", str(scene.audio_path)])

    return [
        ffmpeg_bin, "-y", "-hide_banner",
        *inputs,
        "-filter_complex", graph.render(),
        "-map", f"[{graph.video_out}]",
        "-map", f"[{graph.audio_out}]",
        "-c:v", VIDEO_CODEC,
        "-pix_fmt", PIXEL_FORMAT,
        "-c:a", AUDIO_CODEC,
        "-r", str(fps),
        "-shortest",
        str(output_path),
    ]


def build_concat_command(
    ffmpeg_bin: str,
    list_path: str | Path,
    output_path: str | Path,
    fps: int = 30,
) -> list[str]:
    """ffmpeg argv for the concat-demuxer slideshow."""
    return [
        ffmpeg_bin, "-y", "-hide_banner",
        "-f", "concat", "-safe", "0",
        "-i", str(list_path),
        "-pix_fmt", PIXEL_FORMAT,
        "-c:v", VIDEO_CODEC,
        "-r", str(fps),
        str(output_path),
    ]


# ── Execution ─────────────────────────────────────────────────────


def run_ffmpeg(cmd: list[str]) -> None:
    """Run ffmpeg to completion.

    Raises:
        RenderFailed: ffmpeg could not be started or exited non-zero.
    """
    logger.info("Spawned ffmpeg with command: %s", shlex.join(cmd))
    try:
        result = subprocess.run(cmd, capture_output=True, text=True)
    except OSError as exc:
        logger.error("Could not start ffmpeg: %s", exc)
        raise RenderFailed(str(exc)) from exc

    if result.returncode != 0:
        diagnostics = result.stderr or ""
        logger.error("ffmpeg exited with code %d: %s", result.returncode, diagnostics.strip())
        raise RenderFailed(diagnostics, result.returncode)
    logger.info("ffmpeg finished: %s", cmd[-1])


def _remove_temp_file(path: Path) -> None:
    try:
        path.unlink(missing_ok=True)
    except OSError as exc:
        logger.warning("CleanupWarning: could not delete temp file %s: %s", path, exc)


def render_slideshow(
    ffmpeg_bin: str,
    scenes: list[Scene],
    output_path: str | Path,
    frame_rate: float = 1.0,
    fps: int = 30,
    work_dir: str | Path | None = None,
) -> Path:
    """Render images back to back, 1/frame_rate seconds each.

    The concat list is written next to the output (or into work_dir)
    under a uuid-based name so concurrent jobs never share it.

    Raises:
        TempArtifactWriteFailed: the list file could not be written;
            ffmpeg is not started.
        RenderFailed: ffmpeg failed.
    """
    output_path = Path(output_path)
    work_dir = Path(work_dir) if work_dir is not None else output_path.parent
    list_path = work_dir / f"{uuid.uuid4().hex}_ffmpeg_list.txt"
    content = build_concat_list([s.image_path for s in scenes], frame_rate)

    try:
        try:
            list_path.write_text(content)
        except OSError as exc:
            raise TempArtifactWriteFailed(
                f"Failed to write ffmpeg list file: {exc}"
            ) from exc
        run_ffmpeg(build_concat_command(ffmpeg_bin, list_path, output_path, fps))
    finally:
        _remove_temp_file(list_path)

    logger.info("Video compiled successfully: %s", output_path)
    return output_path
