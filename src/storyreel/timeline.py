"""Timeline builder — scene offsets and the crossfade plan.

Each scene is held for exactly its narration length. Scenes are joined
pairwise with xfade:

    v_0 ─┐
         ├─ x_1 ─┐
    v_1 ─┘       ├─ x_2 ─ ...
    v_2 ─────────┘

Crossfade i (1-based) starts at offset d(i-1) - t, where d(i-1) is the
duration of the scene immediately before it and t the transition
length. The offset is taken from that one scene, not from the running
length of the chain so far (see DESIGN.md, "crossfade offset rule").

A negative offset (narration shorter than the transition) is logged and
handed to ffmpeg unchanged; with strict=True it raises instead.
"""

import logging
from dataclasses import dataclass

from .errors import InvalidTransitionWindow, NoScenesProvided
from .models import Scene

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Crossfade:
    position: int
    left: str
    right: str
    output: str
    offset: float
    duration: float


@dataclass(frozen=True)
class Timeline:
    scenes: tuple[Scene, ...]
    transition: float
    fps: int
    offsets: tuple[float, ...]
    crossfades: tuple[Crossfade, ...]

    @staticmethod
    def image_tag(i: int) -> str:
        return f"img_{i}"

    @staticmethod
    def video_tag(i: int) -> str:
        return f"v_{i}"

    @staticmethod
    def audio_tag(i: int) -> str:
        return f"a_{i}"

    @property
    def durations(self) -> tuple[float, ...]:
        return tuple(s.audio_duration for s in self.scenes)

    @property
    def total_duration(self) -> float:
        """Length of the back-to-back narration track."""
        return self.offsets[-1] + self.scenes[-1].audio_duration

    @property
    def nominal_duration(self) -> float:
        """Video length once every crossfade overlap is taken out."""
        return sum(self.durations) - (len(self.scenes) - 1) * self.transition

    @property
    def final_video_tag(self) -> str:
        if self.crossfades:
            return self.crossfades[-1].output
        return self.video_tag(0)


def _cumulative_offsets(durations: list[float]) -> tuple[float, ...]:
    offsets = [0.0]
    for d in durations[:-1]:
        offsets.append(offsets[-1] + d)
    return tuple(offsets)


def build_timeline(
    scenes: list[Scene],
    transition: float = 0.5,
    fps: int = 30,
    strict: bool = False,
) -> Timeline:
    """Compute scene offsets and the crossfade chain for probed scenes.

    Args:
        scenes: Validated scenes with audio_duration filled in, in order.
        transition: Crossfade length in seconds.
        fps: Output frame rate.
        strict: Raise InvalidTransitionWindow on negative offsets instead
            of passing them through.

    Raises:
        NoScenesProvided: scenes is empty.
        ValueError: transition < 0 or fps <= 0.
    """
    if not scenes:
        raise NoScenesProvided()
    if transition < 0:
        raise ValueError(f"transition must be >= 0, got {transition!r}")
    if fps <= 0:
        raise ValueError(f"fps must be > 0, got {fps!r}")

    durations = [s.audio_duration for s in scenes]

    crossfades = []
    previous = Timeline.video_tag(0)
    for i in range(1, len(scenes)):
        offset = durations[i - 1] - transition
        if offset < 0:
            if strict:
                raise InvalidTransitionWindow(i, offset)
            logger.warning(
                "InvalidTransitionWindow: crossfade %d offset %.3fs is negative "
                "(scene %d lasts %.3fs, transition %.3fs); passing through",
                i, offset, scenes[i - 1].index, durations[i - 1], transition,
            )
        output = f"x_{i}"
        crossfades.append(Crossfade(
            position=i,
            left=previous,
            right=Timeline.video_tag(i),
            output=output,
            offset=offset,
            duration=transition,
        ))
        previous = output

    return Timeline(
        scenes=tuple(scenes),
        transition=transition,
        fps=fps,
        offsets=_cumulative_offsets(durations),
        crossfades=tuple(crossfades),
    )
