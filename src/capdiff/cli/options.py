"""Options, logging setup, and exit codes shared by the capdiff commands."""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Any

import click

from capdiff.config import Settings, parse_analyzer, parse_capabilities

EXIT_SAME = 0
EXIT_DIFFERENT = 1
EXIT_ERROR = 2

_COMMON_OPTIONS = [
    click.option("-v", "--verbose", is_flag=True, help="Enable verbose logging."),
    click.option(
        "--granularity",
        default="",
        help="Granularity passed through to the analyzer for comparisons.",
    ),
    click.option(
        "--capabilities",
        default="",
        help="Comma-separated list of capabilities to pass to the analyzer.",
    ),
    click.option(
        "--timeout",
        type=click.FloatRange(min=0, min_open=True),
        default=None,
        help="Seconds to allow each external command (default: no limit).",
    ),
    click.option(
        "--keep-workspace",
        is_flag=True,
        help="Leave temporary workspaces on disk for inspection.",
    ),
    click.option(
        "--analyzer",
        default=None,
        metavar="COMMAND",
        help="Analyzer command line (default: $CAPDIFF_ANALYZER or capslock).",
    ),
    click.option(
        "--format", "output_format",
        type=click.Choice(["text", "json"]),
        default="text",
        help="Output format (default: text).",
    ),
    click.option(
        "--summary",
        is_flag=True,
        help="Print a per-capability table of changes to stderr.",
    ),
]


def common_options(func: Callable[..., Any]) -> Callable[..., Any]:
    """Attach the shared options to a command."""
    for option in reversed(_COMMON_OPTIONS):
        func = option(func)
    return func


def configure_logging(verbose: bool) -> None:
    level = logging.DEBUG if verbose else logging.WARNING
    logging.basicConfig(level=level, format="%(levelname)s: %(message)s")
    logging.getLogger("capdiff").setLevel(level)


def build_settings(
    *,
    verbose: bool,
    granularity: str,
    capabilities: str,
    timeout: float | None,
    keep_workspace: bool,
    analyzer: str | None,
) -> Settings:
    """Combine command-line options with the environment."""
    return Settings.from_env(
        verbose=verbose,
        granularity=granularity,
        capabilities=parse_capabilities(capabilities),
        timeout=timeout,
        keep_workspace=keep_workspace,
        analyzer=parse_analyzer(analyzer) if analyzer else None,
    )
