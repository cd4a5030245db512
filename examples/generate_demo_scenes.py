#!/usr/bin/env python3
"""Generate demo scenes (stills + narration stand-ins) and a job manifest.

Creates 4 scenes in examples/demo-scenes/: a labelled solid-color PNG
and a sine tone whose length stands in for the narration. Tone lengths
differ so the duration sync and crossfade offsets are easy to see.

Usage:
    python examples/generate_demo_scenes.py
    # Then render:
    storyreel compile --manifest examples/demo-scenes/job.yaml
"""

import subprocess
from pathlib import Path

import imageio_ffmpeg
import yaml
from PIL import Image, ImageDraw, ImageFont

OUTPUT_DIR = Path(__file__).resolve().parent / "demo-scenes"
SIZE = (640, 360)

# Distinct colors and narration lengths (seconds) per scene.
SCENES = [
    ("scene-01", (180, 60, 60),  2.0),  # red
    ("scene-02", (60, 60, 180),  3.0),  # blue
    ("scene-03", (60, 160, 60),  1.5),  # green
    ("scene-04", (200, 130, 40), 2.5),  # orange
]


def _make_still(label: str, color: tuple[int, int, int]) -> Image.Image:
    """Solid color still with the scene label centered in white."""
    img = Image.new("RGB", SIZE, color)
    draw = ImageDraw.Draw(img)
    try:
        font = ImageFont.truetype(
            "/usr/share/fonts/truetype/dejavu/DejaVuSans-Bold.ttf", 48
        )
    except OSError:
        font = ImageFont.load_default()
    bbox = draw.textbbox((0, 0), label, font=font)
    tw, th = bbox[2] - bbox[0], bbox[3] - bbox[1]
    draw.text(
        ((SIZE[0] - tw) / 2, (SIZE[1] - th) / 2),
        label,
        fill=(255, 255, 255),
        font=font,
    )
    return img


def _make_tone(out: Path, duration: float, frequency: int) -> None:
    subprocess.run(
        [
            imageio_ffmpeg.get_ffmpeg_exe(), "-y",
            "-f", "lavfi", "-i", f"sine=frequency={frequency}:duration={duration}",
            "-c:a", "libmp3lame", "-b:a", "64k",
            str(out),
        ],
        check=True,
        capture_output=True,
    )


def main():
    audio_dir = OUTPUT_DIR / "audio"
    audio_dir.mkdir(parents=True, exist_ok=True)

    for i, (name, color, duration) in enumerate(SCENES):
        still = OUTPUT_DIR / f"{name}.png"
        tone = audio_dir / f"{name}.mp3"
        if still.exists() and tone.exists():
            print(f"  skip {name} (exists)")
            continue
        _make_still(name, color).save(still)
        _make_tone(tone, duration, frequency=330 + 110 * i)
        print(f"  wrote {name} ({duration}s)")

    manifest = {
        "video": {"fps": 30, "transition": 0.5, "name": "demo-story"},
        "paths": {
            "images": str(OUTPUT_DIR),
            "audio": str(audio_dir),
            "output": str(OUTPUT_DIR / "videos"),
        },
        "scenes": [{"image": f"{n}.png", "audio": f"{n}.mp3"} for n, _, _ in SCENES],
    }
    with open(OUTPUT_DIR / "job.yaml", "w") as f:
        yaml.safe_dump(manifest, f, sort_keys=False)

    print(f"\nDone. {len(SCENES)} scenes and job.yaml in {OUTPUT_DIR}")


if __name__ == "__main__":
    main()
