"""Compositing engine — validate, probe, plan, render.

    SceneCompositor(config).compile(pairs)            # synced, crossfaded
    SceneCompositor(config).compile_slideshow(names)  # fixed time per image

Each call is one job: it owns its scenes, timeline and temp files and
returns a RenderResult or raises one CompositorError subclass. Probing
is the only parallel step; everything else runs in the calling thread.
"""

import logging
import uuid
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, Sequence

from .common import output_filename
from .config import EngineConfig
from .filtergraph import FilterGraph, compile_synced_graph
from .models import CompileOptions, Job, RenderResult, SlideshowOptions
from .probe import probe_scenes
from .renderer import build_synced_command, render_slideshow, run_ffmpeg
from .timeline import Timeline, build_timeline
from .validator import validate_images, validate_scenes

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Plan:
    """Everything needed to render a synced job, short of running ffmpeg."""
    job: Job
    timeline: Timeline
    graph: FilterGraph
    output_path: Path
    command: list[str]


class SceneCompositor:
    def __init__(self, config: EngineConfig):
        self.config = config

    def _output_path(self, name: str | None) -> tuple[Path, str]:
        filename = output_filename(name, uuid.uuid4().hex)
        return self.config.output_dir / filename, filename

    def plan(
        self,
        pairs: Sequence[tuple[str, str]],
        options: CompileOptions | None = None,
    ) -> Plan:
        """Validate and probe scenes, then build timeline, graph and command."""
        options = options or CompileOptions()
        config = self.config

        scenes = validate_scenes(pairs, config.image_dir, config.audio_dir)
        logger.info("Validated %d of %d scene(s)", len(scenes), len(pairs))
        scenes = probe_scenes(scenes, config.ffprobe_bin, config.probe_workers)

        output_path, filename = self._output_path(options.output_name)
        job = Job(
            scenes=scenes,
            output_name=filename,
            transition_duration=options.transition_duration,
            output_frame_rate=options.output_frame_rate,
        )
        timeline = build_timeline(
            job.scenes,
            transition=job.transition_duration,
            fps=job.output_frame_rate,
            strict=config.strict_transitions,
        )
        graph = compile_synced_graph(timeline, config.resolution)
        command = build_synced_command(
            config.ffmpeg_bin, timeline.scenes, graph, output_path, job.output_frame_rate,
        )
        return Plan(
            job=job,
            timeline=timeline,
            graph=graph,
            output_path=output_path,
            command=command,
        )

    def compile(
        self,
        pairs: Sequence[tuple[str, str]],
        options: CompileOptions | None = None,
    ) -> RenderResult:
        """Render a duration-synced, crossfaded video from (image, audio) pairs."""
        plan = self.plan(pairs, options)
        self.config.ensure_output_dir()
        logger.info(
            "Rendering %d scene(s), ~%.1fs, to %s",
            len(plan.job.scenes), plan.timeline.nominal_duration, plan.output_path,
        )
        run_ffmpeg(plan.command)
        logger.info("Video compiled successfully: %s", plan.output_path)
        return RenderResult(output_path=plan.output_path, output_filename=plan.job.output_name)

    def compile_slideshow(
        self,
        image_names: Iterable[str],
        options: SlideshowOptions | None = None,
    ) -> RenderResult:
        """Render images back to back, each shown for 1/frame_rate seconds."""
        options = options or SlideshowOptions()
        if options.frame_rate <= 0:
            raise ValueError(f"frame_rate must be > 0, got {options.frame_rate!r}")

        scenes = validate_images(image_names, self.config.image_dir)
        output_dir = self.config.ensure_output_dir()
        output_path, filename = self._output_path(options.output_name)
        logger.info("Rendering slideshow of %d image(s) to %s", len(scenes), output_path)
        render_slideshow(
            self.config.ffmpeg_bin,
            scenes,
            output_path,
            frame_rate=options.frame_rate,
            fps=options.output_frame_rate,
            work_dir=output_dir,
        )
        return RenderResult(output_path=output_path, output_filename=filename)
