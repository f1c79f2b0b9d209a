"""Import-order checks for the application modules."""

import os
import subprocess
import sys
from pathlib import Path

import pytest

PROJECT_ROOT = Path(__file__).resolve().parents[1]


@pytest.mark.parametrize(
    "module",
    [
        "booksphere.main",
        "booksphere.core",
        "booksphere.infrastructure.identity.dependencies",
        "booksphere.infrastructure.realtime.router",
        "booksphere.infrastructure.sync.routers.sync",
        "booksphere.infrastructure.mood.routers.presets",
    ],
)
def test_module_imports_in_fresh_interpreter(module: str) -> None:
    """Each entry module must import on its own, whatever was loaded before."""
    env = {**os.environ, "DATABASE_URL": "sqlite://", "ENVIRONMENT": "test"}
    result = subprocess.run(  # noqa: S603
        [sys.executable, "-c", f"import {module}"],
        capture_output=True,
        text=True,
        env=env,
        cwd=PROJECT_ROOT,
        check=False,
    )
    assert result.returncode == 0, result.stderr
