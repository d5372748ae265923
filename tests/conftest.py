from __future__ import annotations

"""
Global Pytest Configuration and Fixtures.

1. Puts the 'src' directory on sys.path so 'mkmk' imports without installation.
2. Provides a compact build configuration and a helper to lay out source trees.
"""

import os
import sys
from pathlib import Path
from typing import Callable, Dict

import pytest

# -----------------------------------------------------------------------------
# Path Configuration
# -----------------------------------------------------------------------------
_SRC_PATH = os.path.abspath(os.path.join(os.path.dirname(__file__), "..", "src"))
if _SRC_PATH not in sys.path:
    sys.path.insert(0, _SRC_PATH)

from mkmk.domain.config import BuildConfig  # noqa: E402


# -----------------------------------------------------------------------------
# Shared Fixtures
# -----------------------------------------------------------------------------
@pytest.fixture
def plain_config() -> BuildConfig:
    """
    Return a configuration with short, readable prefixes.

    Rules render as 'obj/a.o: src/a.cpp ...' which keeps expected text small.
    """
    return BuildConfig(
        preamble="# generated",
        source_prefix="src/",
        object_prefix="obj/",
        compile_command="CC",
        link_command="LD",
    )


@pytest.fixture
def make_project(tmp_path: Path) -> Callable[[Dict[str, str]], Path]:
    """
    Return a factory writing {relative name: content} into a fresh directory.

    Returns:
        Callable: factory returning the project root.
    """
    root = tmp_path / "project"
    root.mkdir()

    def _make(files: Dict[str, str]) -> Path:
        for name, content in files.items():
            path = root / name
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(content, encoding="utf-8")
        return root

    return _make
