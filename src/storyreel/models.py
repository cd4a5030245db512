"""Data model shared by the compositing stages."""

import dataclasses
from dataclasses import dataclass, field
from pathlib import Path


@dataclass(frozen=True)
class Scene:
    """One still image plus its narration.

    index is the 1-based position among surviving scenes; source_index is
    the 1-based position in the caller's original list (dropped scenes
    leave gaps there). audio_path is None in slideshow mode.
    """
    index: int
    source_index: int
    image_path: Path
    audio_path: Path | None = None
    audio_duration: float = 0.0

    def with_duration(self, seconds: float) -> "Scene":
        return dataclasses.replace(self, audio_duration=seconds)


@dataclass
class CompileOptions:
    transition_duration: float = 0.5
    output_frame_rate: int = 30
    output_name: str | None = None


@dataclass
class SlideshowOptions:
    frame_rate: float = 1.0  # images per second
    output_frame_rate: int = 30
    output_name: str | None = None


@dataclass
class Job:
    scenes: list[Scene]
    output_name: str
    transition_duration: float = 0.5
    output_frame_rate: int = 30


@dataclass(frozen=True)
class FilterNode:
    """A single filter_complex chain: [inputs...]expression[output]."""
    tag: str
    expression: str
    inputs: tuple[str, ...] = field(default_factory=tuple)
    output: str = ""

    def render(self) -> str:
        ins = "".join(f"[{t}]" for t in self.inputs)
        return f"{ins}{self.expression}[{self.output}]"


@dataclass(frozen=True)
class RenderResult:
    output_path: Path
    output_filename: str
