"""Scene validation — resolve per-scene artifacts, drop what's missing.

A scene is valid iff every artifact it names resolves to an existing
file in its base directory. Invalid scenes are dropped with a warning
that references the caller's original (1-based) index; survivors keep
their relative order and are renumbered 1..k. A missing file is a
deterministic condition for one job, so there are no retries.
"""

import logging
from pathlib import Path
from typing import Iterable, Sequence

from .common import resolve_artifact
from .errors import NoScenesProvided, NoValidScenes
from .models import Scene

logger = logging.getLogger(__name__)


def validate_scenes(
    pairs: Sequence[tuple[str, str]],
    image_dir: str | Path,
    audio_dir: str | Path,
) -> list[Scene]:
    """Resolve (image, audio) filename pairs into validated scenes.

    Raises:
        NoScenesProvided: pairs is empty.
        NoValidScenes: no pair has both artifacts present.
    """
    if not pairs:
        raise NoScenesProvided()

    scenes = []
    for source_index, (image_name, audio_name) in enumerate(pairs, start=1):
        image_path = resolve_artifact(image_dir, image_name)
        audio_path = resolve_artifact(audio_dir, audio_name)

        missing = []
        if image_path is None:
            missing.append(f"image '{image_name}'")
        if audio_path is None:
            missing.append(f"audio '{audio_name}'")
        if missing:
            logger.warning(
                "Skipping scene %d: missing %s", source_index, " and ".join(missing),
            )
            continue

        scenes.append(Scene(
            index=len(scenes) + 1,
            source_index=source_index,
            image_path=image_path,
            audio_path=audio_path,
        ))

    if not scenes:
        raise NoValidScenes(
            f"None of the {len(pairs)} scene(s) had both image and audio present."
        )
    return scenes


def validate_images(names: Iterable[str], image_dir: str | Path) -> list[Scene]:
    """Slideshow variant: image-only scenes."""
    names = list(names)
    if not names:
        raise NoScenesProvided("No image filenames provided for video compilation.")

    scenes = []
    for source_index, name in enumerate(names, start=1):
        image_path = resolve_artifact(image_dir, name)
        if image_path is None:
            logger.warning("Skipping non-existent image %d: %s", source_index, name)
            continue
        scenes.append(Scene(
            index=len(scenes) + 1,
            source_index=source_index,
            image_path=image_path,
        ))

    if not scenes:
        raise NoValidScenes("None of the provided image files were found.")
    return scenes
