"""Subcommand dispatcher for storyreel.

    compile    Render a job manifest. Each still is held for the length of
               its narration, scenes are crossfaded, narration is
               concatenated underneath. --dry-run prints the timeline,
               filter graph and ffmpeg command without rendering.
    slideshow  Sequence images for a fixed time each (1/--frame-rate s),
               no audio, via ffmpeg's concat demuxer.
    probe      Print the duration each narration clip would be held for.

Usage:
    storyreel compile   --manifest job.yaml [--dry-run] [--strict]
    storyreel slideshow a.png b.png --image-dir outputs --output-dir videos
    storyreel probe     narration-1.mp3 narration-2.mp3

Directories default to STORYREEL_IMAGE_DIR / STORYREEL_AUDIO_DIR /
STORYREEL_OUTPUT_DIR (outputs, outputs/audio, outputs/videos).
"""

import argparse
import importlib
import sys

from . import __version__


# Subcommand name -> (module holding its main(), one-line help).
COMMANDS = {
    "compile": (
        ".compile_cli",
        "Narration-synced video with crossfades, from a YAML job manifest",
    ),
    "slideshow": (
        ".slideshow_cli",
        "Images shown for a fixed time each, no audio",
    ),
    "probe": (
        ".probe_cli",
        "Print probed narration durations (1.0s where probing fails)",
    ),
}


def main(args=None):
    parser = argparse.ArgumentParser(
        prog="storyreel",
        description=(
            "Compose narrated still-image scenes into one video. "
            "Run 'storyreel <command> --help' for a command's options."
        ),
    )
    parser.add_argument(
        "--version", action="version", version=f"storyreel {__version__}",
    )
    subparsers = parser.add_subparsers(dest="command", metavar="command")
    for name, (_, help_text) in COMMANDS.items():
        subparsers.add_parser(name, help=help_text, add_help=False)

    # Only the command name is parsed here; its module parses the rest.
    parsed, remaining = parser.parse_known_args(args)

    if parsed.command is None:
        parser.print_help()
        sys.exit(1)

    module_name, _ = COMMANDS[parsed.command]
    module = importlib.import_module(module_name, package=__package__)
    module.main(remaining)


if __name__ == "__main__":
    main()
