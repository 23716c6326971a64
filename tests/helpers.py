"""Test doubles shared across capdiff test modules."""

from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path
from typing import Any

from capdiff.core.runner import CommandResult
from capdiff.exceptions import CommandError


class FakeRunner:
    """Scripted stand-in for ``CommandRunner``.

    ``responses`` maps an argv prefix to either ``(returncode, stdout)``
    or ``(returncode, stdout, stderr)``, an exception to raise, or a
    callable returning one of those tuples from ``(argv, cwd)``. The first
    matching prefix wins. Unmatched commands succeed with empty output.
    """

    def __init__(self, responses: dict[tuple[str, ...], Any] | None = None) -> None:
        self.responses = dict(responses or {})
        self.calls: list[tuple[tuple[str, ...], Path]] = []

    def __call__(
        self, args: Sequence[str], *, cwd: Path, check: bool = True
    ) -> CommandResult:
        argv = tuple(str(a) for a in args)
        self.calls.append((argv, Path(cwd)))
        response: Any = (0, "")
        for prefix, candidate in self.responses.items():
            if argv[: len(prefix)] == prefix:
                response = candidate
                break
        if isinstance(response, BaseException):
            raise response
        if callable(response):
            response = response(argv, Path(cwd))
        returncode, stdout, *rest = response
        stderr = rest[0] if rest else ""
        if check and returncode != 0:
            raise CommandError(argv[0], argv[1:], returncode, stderr=stderr)
        return CommandResult(argv, returncode, stdout, stderr)

    @property
    def commands(self) -> list[tuple[str, ...]]:
        return [argv for argv, _ in self.calls]

    def cwd_of(self, *prefix: str) -> Path:
        """Return the working directory of the first call matching ``prefix``."""
        for argv, cwd in self.calls:
            if argv[: len(prefix)] == prefix:
                return cwd
        raise AssertionError(f"no call matching {prefix!r}")

