"""Runtime settings shared by the acquirer, analyzer wrapper, and CLI.

Settings come from two places: command-line options and a small set of
environment variables. Explicit values always win over the environment.

Environment Variables:
    CAPSLOCKTOOLSTMPDIR -- base directory for temporary workspaces. Empty
        or unset means the platform default temporary directory.
    CAPDIFF_ANALYZER -- the analyzer command line, split with shell rules
        (default: ``capslock``).
"""

from __future__ import annotations

import os
import shlex
from collections.abc import Mapping
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Any

TMPDIR_ENV = "CAPSLOCKTOOLSTMPDIR"
ANALYZER_ENV = "CAPDIFF_ANALYZER"
DEFAULT_ANALYZER: tuple[str, ...] = ("capslock",)


def parse_capabilities(value: str | None) -> tuple[str, ...]:
    """Split a comma-separated capability filter, dropping blank items."""
    if not value:
        return ()
    return tuple(item.strip() for item in value.split(",") if item.strip())


def parse_analyzer(value: str | None) -> tuple[str, ...]:
    """Split an analyzer command line, falling back to ``capslock``."""
    if not value or not value.strip():
        return DEFAULT_ANALYZER
    return tuple(shlex.split(value))


@dataclass(frozen=True)
class Settings:
    """Immutable configuration for one comparison run.

    Attributes:
        analyzer: argv prefix used to invoke the capability analyzer.
        granularity: Forwarded verbatim as ``-granularity=``; empty omits it.
        capabilities: Capability filter forwarded as ``-capabilities=``.
        timeout: Per-subprocess timeout in seconds. None waits forever.
        keep_workspace: Leave temporary workspaces on disk after use.
        verbose: Pass subprocess stderr through and log analyzer output.
        tmp_base: Parent directory for workspaces. None uses the system
            default.
    """

    analyzer: tuple[str, ...] = DEFAULT_ANALYZER
    granularity: str = ""
    capabilities: tuple[str, ...] = field(default_factory=tuple)
    timeout: float | None = None
    keep_workspace: bool = False
    verbose: bool = False
    tmp_base: Path | None = None

    @classmethod
    def from_env(
        cls,
        environ: Mapping[str, str] | None = None,
        **overrides: Any,
    ) -> Settings:
        """Build settings from the environment, then apply overrides.

        Overrides whose value is None are ignored so that unset CLI options
        do not mask environment values.
        """
        env = os.environ if environ is None else environ
        tmp = env.get(TMPDIR_ENV, "")
        settings = cls(
            analyzer=parse_analyzer(env.get(ANALYZER_ENV)),
            tmp_base=Path(tmp) if tmp else None,
        )
        given = {k: v for k, v in overrides.items() if v is not None}
        return replace(settings, **given)
