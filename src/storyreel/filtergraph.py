"""Filter graph compiler — timeline in, ffmpeg filter_complex out.

Input layout for the synced mode is two inputs per scene: the still at
index 2i and its narration at 2i+1. Per scene the graph produces:

  img_i  scale (aspect kept) + pad to the output frame, yuv420p
  v_i    the still looped, trimmed to the scene's narration length,
         then resampled to the output fps (xfade needs a constant rate
         and setpts drops it)
  a_i    the narration re-timestamped from zero

then the xfade chain over v_0..v_{n-1} and one concat node joining
a_0..a_{n-1} into outa. Nodes are emitted producers-first; validate()
enforces that no node reads a tag before it is defined.

The slideshow mode needs no graph: build_concat_list() writes the
concat demuxer list instead.
"""

import re
from dataclasses import dataclass
from pathlib import Path

from .models import FilterNode
from .timeline import Timeline

AUDIO_OUT = "outa"

# Raw demuxer streams ("0:v", "3:a") are defined by the inputs, not by nodes.
_INPUT_STREAM = re.compile(r"^\d+:[va]$")


def _fmt(seconds: float) -> str:
    return f"{seconds:.3f}"


@dataclass(frozen=True)
class FilterGraph:
    nodes: tuple[FilterNode, ...]
    video_out: str
    audio_out: str | None
    input_count: int

    def render(self) -> str:
        return ";".join(node.render() for node in self.nodes)

    def tags(self) -> list[str]:
        return [node.output for node in self.nodes]

    def validate(self) -> None:
        """Check tag uniqueness and producer-before-consumer order.

        Raises:
            ValueError: duplicate output tag, or a node consumes a tag
                that no earlier node produced.
        """
        defined = set()
        for position, node in enumerate(self.nodes):
            for tag in node.inputs:
                if _INPUT_STREAM.match(tag):
                    if int(tag.split(":")[0]) >= self.input_count:
                        raise ValueError(
                            f"Node {position} ({node.tag}) reads input {tag} "
                            f"but only {self.input_count} inputs exist"
                        )
                    continue
                if tag not in defined:
                    raise ValueError(
                        f"Node {position} ({node.tag}) consumes '{tag}' "
                        f"before it is produced"
                    )
            if node.output in defined:
                raise ValueError(f"Duplicate filter tag: '{node.output}'")
            defined.add(node.output)

        for final in (self.video_out, self.audio_out):
            if final is not None and final not in defined:
                raise ValueError(f"Final tag '{final}' is never produced")


def _scene_video_nodes(
    i: int, duration: float, fps: int, resolution: tuple[int, int],
) -> list[FilterNode]:
    w, h = resolution
    image_tag = Timeline.image_tag(i)
    video_tag = Timeline.video_tag(i)
    return [
        FilterNode(
            tag=image_tag,
            expression=(
                f"scale={w}:{h}:force_original_aspect_ratio=decrease,"
                f"pad={w}:{h}:(ow-iw)/2:(oh-ih)/2,setsar=1,format=yuv420p"
            ),
            inputs=(f"{2 * i}:v",),
            output=image_tag,
        ),
        FilterNode(
            tag=video_tag,
            expression=(
                f"loop=loop=-1:size=1:start=0,"
                f"trim=duration={_fmt(duration)},setpts=PTS-STARTPTS,fps={fps}"
            ),
            inputs=(image_tag,),
            output=video_tag,
        ),
    ]


def _scene_audio_node(i: int) -> FilterNode:
    audio_tag = Timeline.audio_tag(i)
    return FilterNode(
        tag=audio_tag,
        expression="asetpts=PTS-STARTPTS",
        inputs=(f"{2 * i + 1}:a",),
        output=audio_tag,
    )


def compile_synced_graph(
    timeline: Timeline,
    resolution: tuple[int, int] = (1920, 1080),
) -> FilterGraph:
    """Compile the duration-synced graph for a timeline.

    Pure function of its inputs: the same timeline always yields the
    same graph.
    """
    n = len(timeline.scenes)
    nodes: list[FilterNode] = []

    for i, scene in enumerate(timeline.scenes):
        nodes.extend(_scene_video_nodes(i, scene.audio_duration, timeline.fps, resolution))
        nodes.append(_scene_audio_node(i))

    for xf in timeline.crossfades:
        nodes.append(FilterNode(
            tag=xf.output,
            expression=(
                f"xfade=transition=fade:duration={_fmt(xf.duration)}"
                f":offset={_fmt(xf.offset)}"
            ),
            inputs=(xf.left, xf.right),
            output=xf.output,
        ))

    nodes.append(FilterNode(
        tag=AUDIO_OUT,
        expression=f"concat=n={n}:v=0:a=1",
        inputs=tuple(Timeline.audio_tag(i) for i in range(n)),
        output=AUDIO_OUT,
    ))

    graph = FilterGraph(
        nodes=tuple(nodes),
        video_out=timeline.final_video_tag,
        audio_out=AUDIO_OUT,
        input_count=2 * n,
    )
    graph.validate()
    return graph


# ── Concat demuxer list (slideshow mode) ──────────────────────────


def _quote_concat_path(path: str | Path) -> str:
    # ffmpeg concat syntax: close the quote, escaped quote, reopen.
    return "'" + str(path).replace("'", "'\\''") + "'"


def build_concat_list(image_paths: list[str | Path], frame_rate: float) -> str:
    """Build a concat demuxer list showing each image for 1/frame_rate s."""
    if frame_rate <= 0:
        raise ValueError(f"frame_rate must be > 0, got {frame_rate!r}")
    duration = 1 / frame_rate
    lines = []
    for path in image_paths:
        lines.append(f"file {_quote_concat_path(path)}")
        lines.append(f"duration {duration:g}")
    return "\n".join(lines) + "\n"
