"""CLI for the duration-synced compile.

Reads a YAML job manifest (see job_manifest.py), validates and probes
every scene, then renders one video with crossfades between scenes and
the narration concatenated underneath.

Usage:
    storyreel compile --manifest job.yaml
    storyreel compile --manifest job.yaml --output-dir /tmp/videos
    storyreel compile --manifest job.yaml --dry-run   # print graph only
"""

import argparse
import dataclasses
import logging
import shlex
import sys
from pathlib import Path

from .compositor import SceneCompositor
from .config import EngineConfig
from .errors import CompositorError
from .job_manifest import load_job_manifest, scene_pairs
from .models import CompileOptions, SlideshowOptions


def configure_logging(verbose: bool = False) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def config_for(paths: dict, output_dir: str | None = None) -> EngineConfig:
    """Environment defaults, overridden by manifest paths and CLI flags."""
    config = EngineConfig.from_env()
    overrides = {}
    if "images" in paths:
        overrides["image_dir"] = Path(paths["images"])
    if "audio" in paths:
        overrides["audio_dir"] = Path(paths["audio"])
    if "output" in paths:
        overrides["output_dir"] = Path(paths["output"])
    if output_dir:
        overrides["output_dir"] = Path(output_dir)
    return dataclasses.replace(config, **overrides)


def _print_plan(plan) -> None:
    timeline = plan.timeline
    print(f"Scenes: {len(timeline.scenes)}")
    for scene, offset in zip(timeline.scenes, timeline.offsets):
        print(
            f"  [{scene.index}] {offset:7.3f}s  +{scene.audio_duration:.3f}s  "
            f"{scene.image_path.name} / {scene.audio_path.name}"
        )
    for xf in timeline.crossfades:
        print(f"  xfade {xf.position}: [{xf.left}][{xf.right}] offset={xf.offset:.3f}s")
    print(f"Expected duration: ~{timeline.nominal_duration:.1f}s")
    print("\nFilter graph:")
    for node in plan.graph.nodes:
        print(f"  {node.render()}")
    print(f"\nCommand:\n  {shlex.join(plan.command)}")


def main(args=None):
    parser = argparse.ArgumentParser(
        description="Compile narrated scenes into one duration-synced video.",
    )
    parser.add_argument(
        "--manifest", required=True,
        help="Path to YAML job manifest",
    )
    parser.add_argument(
        "--output-dir", default=None,
        help="Override the manifest's output directory",
    )
    parser.add_argument(
        "--dry-run", action="store_true",
        help="Validate, probe and print the filter graph without rendering",
    )
    parser.add_argument(
        "--strict", action="store_true",
        help="Fail on crossfades with negative offsets instead of passing them through",
    )
    parser.add_argument("-v", "--verbose", action="store_true")
    parsed = parser.parse_args(args)

    configure_logging(parsed.verbose)

    try:
        manifest = load_job_manifest(parsed.manifest)
        config = config_for(manifest["paths"], parsed.output_dir)
        if parsed.strict:
            config = dataclasses.replace(config, strict_transitions=True)
        compositor = SceneCompositor(config)
        video = manifest["video"]

        if manifest["mode"] == "slideshow":
            if parsed.dry_run:
                parser.error("--dry-run is only supported for synced manifests")
            result = compositor.compile_slideshow(
                [s["image"] for s in manifest["scenes"]],
                SlideshowOptions(
                    frame_rate=video["frame_rate"],
                    output_frame_rate=video["fps"],
                    output_name=video.get("name"),
                ),
            )
            print(f"\nDone: {result.output_path}")
            return

        options = CompileOptions(
            transition_duration=video["transition"],
            output_frame_rate=video["fps"],
            output_name=video.get("name"),
        )
        pairs = scene_pairs(manifest)
        if parsed.dry_run:
            _print_plan(compositor.plan(pairs, options))
            return

        print(f"Compiling {len(pairs)} scenes...")
        result = compositor.compile(pairs, options)
    except (CompositorError, ValueError, OSError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        sys.exit(1)

    print(f"\nDone: {result.output_path}")


if __name__ == "__main__":
    main()
