"""
Global test configuration and environment isolation.
"""

from collections.abc import Callable, Iterator
from contextlib import contextmanager
import os
from pathlib import Path
from unittest.mock import patch

import pytest


# --- Environment Isolation (Autouse) ---
@pytest.fixture(autouse=True)
def isolate_tinyenv_env(request, monkeypatch):
    """Ensure a clean TINYENV_* environment for each test.

    Escape hatch: @pytest.mark.allow_env_pollution keeps the current env.
    """
    if request.node.get_closest_marker("allow_env_pollution"):
        return

    for key in list(os.environ.keys()):
        if key.startswith("TINYENV_"):
            monkeypatch.delenv(key, raising=False)


@pytest.fixture
def clean_env():
    """Apply an environment containing only the given variables.

    Usage:
        with clean_env({"PORT": "8080"}):
            ...
    """

    @contextmanager
    def _apply(extra: dict[str, str] | None = None) -> Iterator[None]:
        with patch.dict(os.environ, extra or {}, clear=True):
            yield

    return _apply


@pytest.fixture
def write_env_file(tmp_path) -> Callable[[str], Path]:
    """Write a .env file into a temp directory and return its path."""

    def _write(content: str, name: str = ".env") -> Path:
        path = tmp_path / name
        path.write_text(content, encoding="utf-8")
        return path

    return _write


# --- Test Environment Markers ---
def pytest_configure(config):
    """Configure custom markers for test organization."""
    markers = [
        "unit: Fast, isolated unit tests",
        "contract: Behavioral contracts of the public API",
        "allow_env_pollution: Keep TINYENV_* variables from the outer environment",
    ]
    for marker in markers:
        config.addinivalue_line("markers", marker)
