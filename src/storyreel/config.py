"""Engine configuration.

Directories and tool locations are passed to the engine explicitly so
several engines (or tests) can work against isolated roots. from_env()
builds the same structure from STORYREEL_* environment variables.
"""

import os
from dataclasses import dataclass, field
from pathlib import Path

import imageio_ffmpeg

from .errors import CompositorError


DEFAULT_RESOLUTION = (1920, 1080)


def _default_ffmpeg() -> str:
    return imageio_ffmpeg.get_ffmpeg_exe()


@dataclass
class EngineConfig:
    image_dir: Path
    audio_dir: Path
    output_dir: Path
    ffmpeg_bin: str = field(default_factory=_default_ffmpeg)
    ffprobe_bin: str = "ffprobe"
    resolution: tuple[int, int] = DEFAULT_RESOLUTION
    probe_workers: int = 8
    strict_transitions: bool = False

    def __post_init__(self):
        self.image_dir = Path(self.image_dir)
        self.audio_dir = Path(self.audio_dir)
        self.output_dir = Path(self.output_dir)
        w, h = self.resolution
        # libx264 with yuv420p needs even dimensions.
        if w <= 0 or h <= 0 or w % 2 or h % 2:
            raise ValueError(f"resolution must be positive and even, got {w}x{h}")
        if self.probe_workers < 1:
            raise ValueError(f"probe_workers must be >= 1, got {self.probe_workers}")

    @classmethod
    def from_env(cls) -> "EngineConfig":
        root = Path(os.getenv("STORYREEL_ROOT", "outputs"))
        kwargs = {}
        if os.getenv("STORYREEL_FFMPEG"):
            kwargs["ffmpeg_bin"] = os.environ["STORYREEL_FFMPEG"]
        return cls(
            image_dir=Path(os.getenv("STORYREEL_IMAGE_DIR", root)),
            audio_dir=Path(os.getenv("STORYREEL_AUDIO_DIR", root / "audio")),
            output_dir=Path(os.getenv("STORYREEL_OUTPUT_DIR", root / "videos")),
            ffprobe_bin=os.getenv("STORYREEL_FFPROBE", "ffprobe"),
            resolution=(
                int(os.getenv("STORYREEL_WIDTH", str(DEFAULT_RESOLUTION[0]))),
                int(os.getenv("STORYREEL_HEIGHT", str(DEFAULT_RESOLUTION[1]))),
            ),
            probe_workers=int(os.getenv("STORYREEL_PROBE_WORKERS", "8")),
            **kwargs,
        )

    def ensure_output_dir(self) -> Path:
        """Create the output directory if missing and return it."""
        try:
            self.output_dir.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise CompositorError(
                f"Failed to create video output directory: {self.output_dir}"
            ) from exc
        return self.output_dir
