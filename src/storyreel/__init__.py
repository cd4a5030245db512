"""storyreel — scene-based video compositing.

Turn per-scene still images and their narration clips into one video:
each still is held for as long as its narration plays, scenes are
joined with crossfades, and the narration is concatenated underneath.
A simpler slideshow mode sequences images for a fixed time each.
"""

__version__ = "0.1.0"

from .compositor import SceneCompositor
from .config import EngineConfig
from .errors import (
    CompositorError,
    InvalidTransitionWindow,
    NoScenesProvided,
    NoValidScenes,
    RenderFailed,
    TempArtifactWriteFailed,
)
from .models import CompileOptions, RenderResult, Scene, SlideshowOptions

__all__ = [
    "CompileOptions",
    "CompositorError",
    "EngineConfig",
    "InvalidTransitionWindow",
    "NoScenesProvided",
    "NoValidScenes",
    "RenderFailed",
    "RenderResult",
    "Scene",
    "SceneCompositor",
    "SlideshowOptions",
    "TempArtifactWriteFailed",
]
