"""Job manifest loader — describe a compile job in YAML.

Job manifest schema (synced mode, the default):
  video:
    fps: 30                 # output frame rate
    transition: 0.5         # crossfade duration in seconds
    name: my-story          # optional output base name
  paths:
    images: "/data/outputs"
    audio: "/data/outputs/audio"
    output: "/data/outputs/videos"
  scenes:
    - image: "scene-1.png"
      audio: "scene-1.mp3"

Slideshow mode:
  mode: slideshow
  video:
    fps: 30
    frame_rate: 1           # images per second
  paths: {images: ..., output: ...}
  scenes:
    - image: "a.png"

Scene entries may use ${name} references into paths. Scene file names
are resolved relative to paths.images / paths.audio by the validator.
"""

from pathlib import Path

import yaml

from .common import resolve_path_vars


VALID_MODES = {"synced", "slideshow"}


def _positive_number(value, field: str, allow_zero: bool = False) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValueError(f"Job manifest: {field} must be a number, got {value!r}")
    if value < 0 or (value == 0 and not allow_zero):
        bound = ">= 0" if allow_zero else "> 0"
        raise ValueError(f"Job manifest: {field} must be {bound}, got {value!r}")
    return value


def load_job_manifest(manifest_path: str | Path) -> dict:
    """Load, validate, and normalize a job manifest.

    Processing pipeline:
      1. Parse YAML.
      2. Validate mode and video settings, applying defaults.
      3. Resolve ${path} variables in scene entries.
      4. Validate per-scene fields for the mode.

    Returns:
        Normalized config dict: mode, video, paths, scenes.

    Raises:
        ValueError: Missing/invalid fields.
    """
    with open(manifest_path) as f:
        raw = yaml.safe_load(f) or {}

    if not isinstance(raw, dict):
        raise ValueError("Job manifest: top level must be a mapping")

    mode = raw.get("mode", "synced")
    if mode not in VALID_MODES:
        raise ValueError(
            f"Job manifest: invalid mode '{mode}'. Valid: {sorted(VALID_MODES)}"
        )

    video = dict(raw.get("video") or {})
    video["fps"] = int(_positive_number(video.get("fps", 30), "video.fps"))
    if mode == "synced":
        video["transition"] = float(
            _positive_number(video.get("transition", 0.5), "video.transition", allow_zero=True)
        )
    else:
        video["frame_rate"] = float(
            _positive_number(video.get("frame_rate", 1), "video.frame_rate")
        )
    name = video.get("name")
    if name is not None and (not isinstance(name, str) or not name.strip()):
        raise ValueError("Job manifest: video.name must be a non-empty string")

    paths = {k: str(v) for k, v in (raw.get("paths") or {}).items()}

    scenes = []
    for i, scene in enumerate(raw.get("scenes") or []):
        if not isinstance(scene, dict):
            raise ValueError(f"Scene {i}: must be a mapping with 'image'")
        if "image" not in scene:
            raise ValueError(f"Scene {i}: missing required field 'image'")
        entry = {"image": resolve_path_vars(str(scene["image"]), paths)}
        if mode == "synced":
            if "audio" not in scene:
                raise ValueError(f"Scene {i}: missing required field 'audio'")
            entry["audio"] = resolve_path_vars(str(scene["audio"]), paths)
        scenes.append(entry)

    return {"mode": mode, "video": video, "paths": paths, "scenes": scenes}


def scene_pairs(config: dict) -> list[tuple[str, str]]:
    """(image, audio) pairs from a loaded synced manifest, in order."""
    return [(s["image"], s["audio"]) for s in config["scenes"]]
