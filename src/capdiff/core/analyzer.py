"""Wrapper around the external capslock analyzer.

Two modes are used:

- ``-output=json`` emits a ``CapabilityInfoList`` that is parsed into a
  ``CapabilitySnapshot`` (or saved verbatim to a file for later comparison).
- ``-output=compare FILE`` makes the analyzer diff the current workspace
  against a previously saved JSON file and print its own report. Its exit
  status is authoritative, so a non-zero status becomes a
  ``ComparisonExitError`` carrying the report text and the
  analyzer's standard error.
"""

from __future__ import annotations

import logging
from pathlib import Path

from capdiff.config import Settings
from capdiff.core.runner import CommandResult, Runner
from capdiff.core.snapshot import CapabilitySnapshot, parse_snapshot
from capdiff.exceptions import AnalysisError, CommandError, ComparisonExitError

logger = logging.getLogger(__name__)

# Length of analyzer output echoed to the debug log.
_LOG_PREVIEW = 100


def _preview(text: str) -> str:
    if len(text) > _LOG_PREVIEW + 3:
        return text[:_LOG_PREVIEW] + "..."
    return text


class Analyzer:
    """Build and run analyzer command lines for a package selector."""

    def __init__(self, settings: Settings, runner: Runner) -> None:
        self.settings = settings
        self.runner = runner

    def arguments(self, selector: str, output: str) -> list[str]:
        """Return the full argv for ``selector`` in the given output mode."""
        args = [*self.settings.analyzer, f"-packages={selector}", f"-output={output}"]
        if self.settings.granularity:
            args.append(f"-granularity={self.settings.granularity}")
        if self.settings.capabilities:
            args.append(f"-capabilities={','.join(self.settings.capabilities)}")
        return args

    def _run(self, args: list[str], cwd: Path) -> CommandResult:
        try:
            return self.runner(args, cwd=cwd, check=False)
        except CommandError as exc:
            raise AnalysisError(str(exc)) from exc

    def run_json(self, selector: str, cwd: Path) -> str:
        """Run the analyzer in JSON mode and return its raw output.

        Raises:
            AnalysisError: If the analyzer cannot start or exits non-zero.
        """
        args = self.arguments(selector, "json")
        result = self._run(args, cwd)
        if result.returncode != 0:
            raise AnalysisError(
                f"running {args[0]!r} with args {args[1:]!r}: "
                f"exit status {result.returncode}",
                returncode=result.returncode,
                stderr=result.stderr,
            )
        logger.debug("capslock returned %r", _preview(result.stdout))
        return result.stdout

    def snapshot(self, selector: str, cwd: Path) -> CapabilitySnapshot:
        """Analyze ``selector`` in ``cwd`` and parse the result."""
        snap = parse_snapshot(self.run_json(selector, cwd))
        logger.debug("parsed capability list with %d entries", len(snap))
        return snap

    def write_capabilities_file(self, selector: str, cwd: Path, filename: str) -> Path:
        """Save the analyzer's JSON output to ``cwd / filename``.

        Returns:
            Absolute path of the written file.
        """
        output = self.run_json(selector, cwd)
        path = (cwd / filename).resolve()
        try:
            path.write_text(output, encoding="utf-8")
        except OSError as exc:
            raise AnalysisError(
                f"creating temporary file for writing capabilities: {exc}"
            ) from exc
        logger.debug("wrote capabilities to %s", path)
        return path

    def compare(self, selector: str, cwd: Path, baseline_file: Path) -> str:
        """Run the analyzer's comparison mode against ``baseline_file``.

        Returns:
            The analyzer's report when it exits zero.

        Raises:
            ComparisonExitError: If the analyzer exits non-zero.
        """
        args = [*self.arguments(selector, "compare"), str(baseline_file)]
        result = self._run(args, cwd)
        if result.returncode != 0:
            raise ComparisonExitError(
                f"running {args[0]!r} with args {args[1:]!r}: "
                f"exit status {result.returncode}",
                returncode=result.returncode,
                output=result.stdout,
                stderr=result.stderr,
            )
        return result.stdout
