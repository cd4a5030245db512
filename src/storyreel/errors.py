"""Engine failures.

Every fatal condition derives from CompositorError so callers can catch
one type. Non-fatal conditions (a degraded probe, a temp file that would
not delete) are log records prefixed with ProbeDegraded / CleanupWarning,
not exceptions.
"""


class CompositorError(Exception):
    pass


class NoScenesProvided(CompositorError):
    def __init__(self, message: str = "No scenes provided for video compilation."):
        super().__init__(message)


class NoValidScenes(CompositorError):
    def __init__(self, message: str = "None of the provided scenes could be resolved."):
        super().__init__(message)


class InvalidTransitionWindow(CompositorError):
    """A crossfade would start before its input stream does (offset < 0)."""

    def __init__(self, position: int, offset: float):
        self.position = position
        self.offset = offset
        super().__init__(
            f"Crossfade {position} has negative offset {offset:.3f}s "
            f"(scene audio shorter than the transition)"
        )


class TempArtifactWriteFailed(CompositorError):
    pass


class RenderFailed(CompositorError):
    """ffmpeg exited unsuccessfully. `diagnostics` is its stderr, verbatim."""

    def __init__(self, diagnostics: str, returncode: int | None = None):
        self.diagnostics = diagnostics
        self.returncode = returncode
        super().__init__(f"ffmpeg failed: {diagnostics}")
