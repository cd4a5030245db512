"""CLI for the slideshow mode — images only, fixed time each.

Usage:
    storyreel slideshow a.png b.png c.png --image-dir outputs --output-dir videos
    storyreel slideshow a.png b.png --frame-rate 0.5 --name intro
"""

import argparse
import dataclasses
import sys
from pathlib import Path

from .compile_cli import configure_logging
from .compositor import SceneCompositor
from .config import EngineConfig
from .errors import CompositorError
from .models import SlideshowOptions


def main(args=None):
    parser = argparse.ArgumentParser(
        description="Sequence still images into a video, 1/frame-rate seconds each.",
    )
    parser.add_argument(
        "images", nargs="+",
        help="Image filenames, relative to --image-dir",
    )
    parser.add_argument(
        "--image-dir", default=None,
        help="Directory holding the images (default: $STORYREEL_IMAGE_DIR or outputs)",
    )
    parser.add_argument(
        "--output-dir", default=None,
        help="Directory for the video (default: $STORYREEL_OUTPUT_DIR or outputs/videos)",
    )
    parser.add_argument(
        "--frame-rate", type=float, default=1.0,
        help="Images per second (default: 1)",
    )
    parser.add_argument(
        "--fps", type=int, default=30,
        help="Output video frame rate (default: 30)",
    )
    parser.add_argument(
        "--name", default=None,
        help="Output base name without extension (default: random)",
    )
    parser.add_argument("-v", "--verbose", action="store_true")
    parsed = parser.parse_args(args)

    if parsed.frame_rate <= 0:
        parser.error("--frame-rate must be > 0")

    configure_logging(parsed.verbose)

    print(f"Sequencing {len(parsed.images)} images at {parsed.frame_rate:g}/s")
    try:
        config = EngineConfig.from_env()
        overrides = {}
        if parsed.image_dir:
            overrides["image_dir"] = Path(parsed.image_dir)
        if parsed.output_dir:
            overrides["output_dir"] = Path(parsed.output_dir)
        config = dataclasses.replace(config, **overrides)
        result = SceneCompositor(config).compile_slideshow(
            parsed.images,
            SlideshowOptions(
                frame_rate=parsed.frame_rate,
                output_frame_rate=parsed.fps,
                output_name=parsed.name,
            ),
        )
    except (CompositorError, ValueError, OSError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        sys.exit(1)
    print(f"Done: {result.output_path}")


if __name__ == "__main__":
    main()
