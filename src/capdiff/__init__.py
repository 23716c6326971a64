"""capdiff: Report capabilities gained or lost between two versions of Go code."""

from __future__ import annotations

__version__ = "0.1.0"
__license__ = "MIT"
