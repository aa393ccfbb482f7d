"""CLI package for FungiLens command orchestration.

This package contains the modular CLI components for the search, extract and
fields commands.
"""

from __future__ import annotations

__all__ = ["CommandRunner", "main"]

from FungiLens.cli.runner import CommandRunner
from FungiLens.cli.ui import cli


def main() -> None:
    """Run FungiLens CLI.

    Entry point referenced by console script in pyproject.toml.
    """
    cli()
