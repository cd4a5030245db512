"""CLI for duration probing.

Usage:
    storyreel probe narration-1.mp3 narration-2.mp3
"""

import argparse
import os

from .compile_cli import configure_logging
from .probe import probe_duration


def main(args=None):
    parser = argparse.ArgumentParser(
        description="Print the probed duration of each audio file.",
    )
    parser.add_argument("files", nargs="+", help="Audio files to probe")
    parser.add_argument(
        "--ffprobe", default=os.getenv("STORYREEL_FFPROBE", "ffprobe"),
        help="ffprobe binary (default: $STORYREEL_FFPROBE or ffprobe)",
    )
    parsed = parser.parse_args(args)

    configure_logging()

    total = 0.0
    for path in parsed.files:
        duration = probe_duration(path, parsed.ffprobe)
        total += duration
        print(f"  {duration:8.3f}s  {path}")
    print(f"Total: {total:.3f}s")


if __name__ == "__main__":
    main()
