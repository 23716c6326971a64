"""capdiff exception hierarchy.

All public exceptions inherit from CapDiffError, giving the CLI a single
base class to catch when it wants to report any capdiff-specific failure
without swallowing unrelated errors.
"""

from __future__ import annotations

from collections.abc import Sequence


class CapDiffError(Exception):
    """Base exception for all capdiff errors."""


class CommandError(CapDiffError):
    """Raised when an external command fails to start or exits non-zero.

    Attributes:
        command: The program that was run (``git``, ``go``, ``capslock``).
        args: The arguments passed to it.
        returncode: The exit status, or None if the program never started.
        stderr: A trailing excerpt of the program's standard error, if it
            was captured.
    """

    def __init__(
        self,
        command: str,
        args: Sequence[str],
        returncode: int | None,
        stderr: str = "",
        reason: str | None = None,
    ) -> None:
        self.command = command
        self.args_ = tuple(args)
        self.returncode = returncode
        self.stderr = stderr
        if reason is None:
            reason = f"exit status {returncode}"
        message = f"running {command!r} with args {list(self.args_)!r}: {reason}"
        if stderr:
            message = f"{message}\n{stderr}"
        super().__init__(message)


class ToolTimeoutError(CapDiffError):
    """Raised when an external command runs longer than its timeout."""

    def __init__(self, command: str, args: Sequence[str], timeout: float) -> None:
        self.command = command
        self.args_ = tuple(args)
        self.timeout = timeout
        super().__init__(
            f"running {command!r} with args {list(self.args_)!r}: "
            f"timed out after {timeout:g}s"
        )


class AcquisitionError(CapDiffError):
    """Raised when a snapshot workspace cannot be prepared.

    Covers temporary directory creation, git introspection, cloning,
    resetting, and directory navigation. ``step`` names the failing step
    and ``cause`` holds the underlying exception.
    """

    def __init__(self, step: str, cause: BaseException) -> None:
        self.step = step
        self.cause = cause
        super().__init__(f"{step}: {cause}")


class RestoreError(AcquisitionError):
    """Raised when the original working directory cannot be restored."""

    def __init__(self, cause: BaseException) -> None:
        super().__init__("returning to working directory", cause)


class AnalysisError(CapDiffError):
    """Raised when the capability analyzer fails or its output is malformed.

    ``returncode`` is set when the analyzer process itself exited non-zero.
    ``stderr`` holds the tail of what it wrote to standard error, if that
    was captured, and is appended to the message.
    """

    def __init__(
        self, message: str, returncode: int | None = None, stderr: str = ""
    ) -> None:
        self.returncode = returncode
        self.stderr = stderr
        if stderr:
            message = f"{message}\n{stderr}"
        super().__init__(message)


class ComparisonExitError(AnalysisError):
    """Raised when the analyzer's own comparison mode exits non-zero.

    A non-zero status may only mean that differences were found, so callers
    propagate ``returncode`` verbatim instead of treating it as a failure.
    ``output`` holds the report the analyzer printed before exiting.
    """

    def __init__(
        self, message: str, returncode: int, output: str = "", stderr: str = ""
    ) -> None:
        super().__init__(message, returncode, stderr)
        self.output = output
