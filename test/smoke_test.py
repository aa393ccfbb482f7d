"""Smoke test for FungiLens CLI.

Run:
  python test/smoke_test.py

Runs a search over the bundled sample documents with the default config and
checks that the ranked output names at least one document.
"""

from __future__ import annotations

import os
import sys
from pathlib import Path

from click.testing import CliRunner


REPO_ROOT = Path(__file__).resolve().parents[1]
SRC_DIR = REPO_ROOT / "src"
sys.path.insert(0, str(SRC_DIR))


def main() -> int:
    from FungiLens.cli import cli

    # Default config paths are relative to the repository root.
    os.chdir(REPO_ROOT)
    runner = CliRunner()
    result = runner.invoke(cli, ["search", "oyster"], catch_exceptions=False)

    output = result.output
    assert result.exit_code == 0, output
    assert "Oyster Mushroom" in output, output
    assert "1 of 3 visible" in output, output
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
