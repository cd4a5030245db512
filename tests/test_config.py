"""Tests for engine configuration."""

from pathlib import Path

import pytest

from storyreel.config import EngineConfig
from storyreel.errors import CompositorError


class TestEngineConfig:
    def test_coerces_paths(self, tmp_path):
        config = EngineConfig(
            image_dir=str(tmp_path), audio_dir=str(tmp_path), output_dir=str(tmp_path / "v"),
            ffmpeg_bin="ffmpeg",
        )
        assert isinstance(config.output_dir, Path)

    def test_defaults_to_bundled_ffmpeg(self, tmp_path):
        config = EngineConfig(image_dir=tmp_path, audio_dir=tmp_path, output_dir=tmp_path)
        assert config.ffmpeg_bin
        assert config.ffprobe_bin == "ffprobe"
        assert config.resolution == (1920, 1080)

    def test_odd_resolution_rejected(self, tmp_path):
        with pytest.raises(ValueError, match="even"):
            EngineConfig(tmp_path, tmp_path, tmp_path, ffmpeg_bin="ffmpeg", resolution=(641, 480))

    def test_zero_workers_rejected(self, tmp_path):
        with pytest.raises(ValueError, match="probe_workers"):
            EngineConfig(tmp_path, tmp_path, tmp_path, ffmpeg_bin="ffmpeg", probe_workers=0)

    def test_ensure_output_dir_creates_parents(self, tmp_path):
        out = tmp_path / "a" / "b" / "videos"
        config = EngineConfig(tmp_path, tmp_path, out, ffmpeg_bin="ffmpeg")
        assert config.ensure_output_dir() == out
        assert out.is_dir()

    def test_ensure_output_dir_failure(self, tmp_path):
        blocker = tmp_path / "file"
        blocker.write_text("x")
        config = EngineConfig(tmp_path, tmp_path, blocker / "videos", ffmpeg_bin="ffmpeg")
        with pytest.raises(CompositorError, match="Failed to create"):
            config.ensure_output_dir()


class TestFromEnv:
    def test_original_layout_by_default(self, monkeypatch):
        for var in ("STORYREEL_ROOT", "STORYREEL_IMAGE_DIR", "STORYREEL_AUDIO_DIR",
                    "STORYREEL_OUTPUT_DIR", "STORYREEL_FFMPEG"):
            monkeypatch.delenv(var, raising=False)
        config = EngineConfig.from_env()
        assert config.image_dir == Path("outputs")
        assert config.audio_dir == Path("outputs/audio")
        assert config.output_dir == Path("outputs/videos")

    def test_overrides(self, monkeypatch, tmp_path):
        monkeypatch.setenv("STORYREEL_IMAGE_DIR", str(tmp_path / "img"))
        monkeypatch.setenv("STORYREEL_AUDIO_DIR", str(tmp_path / "aud"))
        monkeypatch.setenv("STORYREEL_OUTPUT_DIR", str(tmp_path / "vid"))
        monkeypatch.setenv("STORYREEL_FFMPEG", "/opt/ffmpeg")
        monkeypatch.setenv("STORYREEL_FFPROBE", "/opt/ffprobe")
        monkeypatch.setenv("STORYREEL_WIDTH", "1280")
        monkeypatch.setenv("STORYREEL_HEIGHT", "720")
        monkeypatch.setenv("STORYREEL_PROBE_WORKERS", "2")
        config = EngineConfig.from_env()
        assert config.image_dir == tmp_path / "img"
        assert config.ffmpeg_bin == "/opt/ffmpeg"
        assert config.ffprobe_bin == "/opt/ffprobe"
        assert config.resolution == (1280, 720)
        assert config.probe_workers == 2
