"""
Database setup commands.

Usage:
    db-init         # Create tables
    db-init-seed    # Create tables and insert sample companies
"""

from __future__ import annotations

import subprocess
import sys
from pathlib import Path

_SETUP_DB_SCRIPT = Path(__file__).parent.parent / "scripts" / "setup_database.py"


def _run_db_script(*extra_args: str) -> int:
    cmd = [sys.executable, str(_SETUP_DB_SCRIPT), *extra_args]
    return subprocess.run(cmd, check=False).returncode


def db_init() -> None:
    """Create the companies and jobs tables."""
    sys.exit(_run_db_script())


def db_init_seed() -> None:
    """Create tables and seed sample companies."""
    sys.exit(_run_db_script("--seed"))
