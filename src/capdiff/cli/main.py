"""capdiff CLI: report capability changes between two versions of Go code.

Entry point for the ``capdiff`` command-line tool. Both commands are also
installed as standalone scripts.

Commands:
    git      -- Compare two git revisions (``capslock-git-diff``).
    compare  -- Compare two published package versions (``capslock-compare``).

Usage::

    capdiff git main mybranch ./...
    capdiff git main .
    capdiff compare some.package/name/... v1.1 v1.2
"""

from __future__ import annotations

import click

from capdiff import __version__
from capdiff.cli.compare import compare_command
from capdiff.cli.git_diff import git_diff_command


@click.group()
@click.version_option(version=__version__)
def cli() -> None:
    """capdiff: Report capabilities gained or lost between versions.

    Runs the capslock analyzer on two versions of the same code and shows
    which packages gained (>) or lost (<) a capability, with the call path
    that justifies it.
    """


cli.add_command(git_diff_command)
cli.add_command(compare_command)
