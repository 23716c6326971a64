"""Subprocess execution for git, go, and the capability analyzer.

Every external command goes through ``CommandRunner``. The working
directory is always passed explicitly, so an acquisition never relies on
(or changes) the process-wide current directory. An optional timeout bounds
each call. When it expires the child is killed and ``ToolTimeoutError`` is
raised.

Standard output is always captured. Standard error is inherited in verbose
mode. Otherwise it is captured, and its tail is attached to the error (or,
with ``check=False``, to the result) when the command fails.
"""

from __future__ import annotations

import logging
import subprocess
from collections.abc import Sequence
from dataclasses import dataclass
from pathlib import Path
from typing import Protocol

from capdiff.exceptions import CommandError, ToolTimeoutError

logger = logging.getLogger(__name__)

# Lines of captured stderr kept in a CommandError message.
STDERR_TAIL_LINES = 20


@dataclass(frozen=True)
class CommandResult:
    """Outcome of one finished command.

    ``stderr`` is the tail of the captured standard error. It is empty in
    verbose mode, where the child writes to the terminal directly.
    """

    args: tuple[str, ...]
    returncode: int
    stdout: str
    stderr: str = ""


class Runner(Protocol):
    """Anything that can run a command in a given directory."""

    def __call__(
        self, args: Sequence[str], *, cwd: Path, check: bool = True
    ) -> CommandResult: ...


def _tail(text: str, lines: int = STDERR_TAIL_LINES) -> str:
    kept = text.strip().splitlines()[-lines:]
    return "\n".join(kept)


class CommandRunner:
    """Run commands with ``subprocess.run``.

    Args:
        timeout: Seconds to wait for each command. None waits forever.
        verbose: Pass the child's stderr through instead of capturing it.
    """

    def __init__(self, timeout: float | None = None, verbose: bool = False) -> None:
        self.timeout = timeout
        self.verbose = verbose

    def __call__(
        self, args: Sequence[str], *, cwd: Path, check: bool = True
    ) -> CommandResult:
        """Run ``args`` in ``cwd`` and return its captured output.

        Args:
            args: Program followed by its arguments.
            cwd: Directory the command runs in.
            check: Raise ``CommandError`` on a non-zero exit status.

        Raises:
            CommandError: If the program cannot be started, or it exits
                non-zero and ``check`` is set.
            ToolTimeoutError: If the timeout expires.
        """
        argv = [str(a) for a in args]
        command, rest = argv[0], argv[1:]
        logger.debug("running %r with args %r in %s", command, rest, cwd)
        try:
            proc = subprocess.run(
                argv,
                cwd=str(cwd),
                stdout=subprocess.PIPE,
                stderr=None if self.verbose else subprocess.PIPE,
                timeout=self.timeout,
                check=False,
            )
        except subprocess.TimeoutExpired as exc:
            raise ToolTimeoutError(command, rest, exc.timeout) from exc
        except OSError as exc:
            raise CommandError(command, rest, None, reason=str(exc)) from exc

        stdout = (proc.stdout or b"").decode("utf-8", errors="replace")
        stderr = _tail((proc.stderr or b"").decode("utf-8", errors="replace"))
        if check and proc.returncode != 0:
            raise CommandError(command, rest, proc.returncode, stderr=stderr)
        return CommandResult(tuple(argv), proc.returncode, stdout, stderr)
