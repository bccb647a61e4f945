"""Pytest configuration for test isolation.

Settings and the OpenAI client read ``FINEASE_*`` and ``OPENAI_API_KEY`` from
the process environment (and the CLI additionally loads a local ``.env``).
A developer shell with real values exported would otherwise leak model names
or credentials into tests, so every test starts from a clean slate and runs
from its own temporary working directory.
"""

from __future__ import annotations

import os
import sys
from pathlib import Path

import pytest

# Make sure the workspace `packages/` dir is on sys.path so `finease` is importable
_ROOT = Path(__file__).resolve().parents[1]
_PKG_DIR = _ROOT / "packages"
sys.path[:0] = [p for p in [str(_PKG_DIR), str(_ROOT)] if p not in sys.path]


@pytest.fixture(autouse=True)
def _isolate_env(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Drop FinEase/OpenAI env vars and chdir away from any project ``.env``."""

    for name in list(os.environ):
        if name.startswith("FINEASE_") or name == "OPENAI_API_KEY":
            monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)
