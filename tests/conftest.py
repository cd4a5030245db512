"""Shared test fixtures for storyreel tests."""

import subprocess

import numpy as np
import pytest
import imageio_ffmpeg
from PIL import Image

from storyreel.config import EngineConfig

_FFMPEG = imageio_ffmpeg.get_ffmpeg_exe()


def write_image(path, color=(200, 60, 60), size=(320, 240)):
    """Write a solid-color PNG."""
    frame = np.full((size[1], size[0], 3), color, dtype=np.uint8)
    Image.fromarray(frame).save(path)
    return path


@pytest.fixture
def dirs(tmp_path):
    """Isolated image/audio/output roots, like outputs/, outputs/audio, outputs/videos."""
    image_dir = tmp_path / "outputs"
    audio_dir = image_dir / "audio"
    output_dir = image_dir / "videos"
    audio_dir.mkdir(parents=True)
    return image_dir, audio_dir, output_dir


@pytest.fixture
def config(dirs):
    image_dir, audio_dir, output_dir = dirs
    return EngineConfig(
        image_dir=image_dir,
        audio_dir=audio_dir,
        output_dir=output_dir,
        ffmpeg_bin=_FFMPEG,
        resolution=(320, 240),
        probe_workers=4,
    )


@pytest.fixture
def scene_files(dirs):
    """Three scenes worth of placeholder artifacts (existence is all validation checks)."""
    image_dir, audio_dir, _ = dirs
    pairs = []
    for i in range(1, 4):
        write_image(image_dir / f"scene-{i}.png")
        (audio_dir / f"scene-{i}.mp3").write_bytes(b"ID3")
        pairs.append((f"scene-{i}.png", f"scene-{i}.mp3"))
    return pairs


def write_tone(path, duration=2.0, sample_rate=44100, frequency=440):
    """Write a sine tone WAV of the given length and sample rate."""
    subprocess.run(
        [
            _FFMPEG, "-y",
            "-f", "lavfi",
            "-i", f"sine=frequency={frequency}:sample_rate={sample_rate}:duration={duration}",
            "-c:a", "pcm_s16le",
            str(path),
        ],
        check=True,
        capture_output=True,
    )
    return path


@pytest.fixture
def tone_wav(tmp_path):
    """A real 2-second sine tone, for probing through ffmpeg."""
    return write_tone(tmp_path / "tone.wav")


@pytest.fixture
def make_tone():
    return write_tone


@pytest.fixture
def make_image():
    return write_image
