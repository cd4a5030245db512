"""Duration probing for narration clips.

Reads the first stream's reported duration with ffprobe. imageio-ffmpeg
does not bundle ffprobe, so when the binary is not installed the
duration comes from moviepy's ffmpeg-based info parser instead.

Any probe failure degrades to DEFAULT_DURATION with a ProbeDegraded
warning: one unreadable clip should not abort the whole job.
"""

import json
import logging
import math
import subprocess
from concurrent.futures import ThreadPoolExecutor, as_completed
from pathlib import Path

from moviepy.video.io.ffmpeg_reader import ffmpeg_parse_infos

from .models import Scene

logger = logging.getLogger(__name__)

DEFAULT_DURATION = 1.0


class _ProbeError(Exception):
    pass


def _probe_with_ffprobe(path: Path, ffprobe_bin: str) -> float:
    result = subprocess.run(
        [ffprobe_bin, "-v", "error", "-show_entries", "stream=duration",
         "-of", "json", str(path)],
        capture_output=True, text=True, check=True,
    )
    streams = json.loads(result.stdout).get("streams") or []
    if not streams or "duration" not in streams[0]:
        raise _ProbeError("no duration reported for first stream")
    return float(streams[0]["duration"])


def _probe_with_moviepy(path: Path) -> float:
    infos = ffmpeg_parse_infos(str(path))
    duration = infos.get("duration")
    if duration is None:
        raise _ProbeError("no duration in ffmpeg info")
    return float(duration)


def probe_duration(path: str | Path, ffprobe_bin: str = "ffprobe") -> float:
    """Return the playback duration of an audio file in seconds.

    Never raises for probe problems: falls back to DEFAULT_DURATION.
    """
    path = Path(path)
    try:
        try:
            duration = _probe_with_ffprobe(path, ffprobe_bin)
        except FileNotFoundError:
            duration = _probe_with_moviepy(path)
    except (
        OSError,
        subprocess.CalledProcessError,
        json.JSONDecodeError,
        _ProbeError,
        TypeError,
        ValueError,
    ) as exc:
        logger.warning(
            "ProbeDegraded: could not read duration of %s (%s); using %.1fs",
            path, exc, DEFAULT_DURATION,
        )
        return DEFAULT_DURATION

    if not math.isfinite(duration) or duration <= 0:
        logger.warning(
            "ProbeDegraded: %s reported duration %r; using %.1fs",
            path, duration, DEFAULT_DURATION,
        )
        return DEFAULT_DURATION
    return duration


def probe_scenes(
    scenes: list[Scene],
    ffprobe_bin: str = "ffprobe",
    workers: int = 8,
) -> list[Scene]:
    """Probe every scene's audio concurrently and attach the durations.

    Each task returns its duration keyed by scene index, so results are
    matched back by identity, not completion order. Waits for every probe
    before returning scenes in their original order.
    """
    for scene in scenes:
        if scene.audio_path is None:
            raise ValueError(f"Scene {scene.index} has no audio to probe")
    if not scenes:
        return []

    durations: dict[int, float] = {}
    with ThreadPoolExecutor(max_workers=min(workers, len(scenes))) as pool:
        futures = {
            pool.submit(probe_duration, scene.audio_path, ffprobe_bin): scene.index
            for scene in scenes
        }
        for future in as_completed(futures):
            durations[futures[future]] = future.result()

    probed = [scene.with_duration(durations[scene.index]) for scene in scenes]
    for scene in probed:
        logger.info(
            "Scene %d: %.3fs  %s", scene.index, scene.audio_duration, scene.audio_path.name,
        )
    return probed
