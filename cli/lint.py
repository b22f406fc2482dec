"""Code quality commands."""

import subprocess
import sys

_PATHS = ["app/", "cli/", "scripts/", "tests/"]


def _ruff(*args: str) -> int:
    return subprocess.run([sys.executable, "-m", "ruff", *args, *_PATHS], check=False).returncode


def main() -> None:
    """Run ruff linter."""
    sys.exit(_ruff("check"))


def format_code() -> None:
    """Run ruff formatter."""
    sys.exit(_ruff("format"))
