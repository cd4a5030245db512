"""storyreel.common — shared path utilities.

Contains: ${var} substitution for manifests and artifact resolution
against the image/audio base directories.
"""

import re
from pathlib import Path


# ── Path utilities ─────────────────────────────────────────────────

def resolve_path_vars(text: str, paths: dict[str, str]) -> str:
    """Replace ${name} variables in a string using the paths dict."""
    def _replace(match):
        key = match.group(1)
        if key not in paths:
            raise ValueError(f"Unknown path variable: ${{{key}}}")
        return str(paths[key])
    return re.sub(r"\$\{(\w+)\}", _replace, text)


def resolve_artifact(base_dir: str | Path, name: str | Path | None) -> Path | None:
    """Resolve a filename to a readable file inside base_dir.

    Returns the absolute path, or None when the name is empty, escapes
    base_dir, or does not point at an existing regular file. This is an
    existence check only; the content is not inspected.
    """
    if not name:
        return None
    base = Path(base_dir).resolve()
    candidate = (base / name).resolve()
    if candidate != base and base not in candidate.parents:
        return None
    if not candidate.is_file():
        return None
    return candidate


# ── Output naming ──────────────────────────────────────────────────

def output_filename(name: str | None, unique: str, suffix: str = ".mp4") -> str:
    """Caller-supplied base name plus suffix, or the unique fallback."""
    return f"{name}{suffix}" if name else f"{unique}{suffix}"
