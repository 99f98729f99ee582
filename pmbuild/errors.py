"""Fatal error types for the build pipeline.

Every error carries a human readable message and an optional list of
remediation hints. They are caught once, in ``main()``, which reports them and
turns them into a nonzero exit code.
"""


class BuildError(Exception):
    """Base error for any condition that aborts the build."""

    def __init__(self, message, hints=()):
        super().__init__(message)
        self.hints = tuple(hints)


class UsageError(BuildError):
    """An unrecognized command line token."""


class UnsupportedPlatformError(BuildError):
    """The host platform is neither Linux nor macOS and no web target was requested."""

    def __init__(self, host, hints=()):
        super().__init__(f"Unsupported platform: {host}", hints)
        self.host = host


class MissingDependencyError(BuildError):
    """A required tool or library could not be found, or is too old."""

    def __init__(self, message, missing=(), hints=()):
        super().__init__(message, hints)
        self.missing = tuple(missing)


class StepFailedError(BuildError):
    """An external step (fonts, configure, build) exited nonzero or could not start."""

    def __init__(self, step, returncode=None, reason="", hints=()):
        if returncode is not None:
            message = f"{step} failed (exit code {returncode})"
        else:
            message = f"{step} failed: {reason}"
        super().__init__(message, hints)
        self.step = step
        self.returncode = returncode
