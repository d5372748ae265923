from __future__ import annotations

"""
End-to-End (E2E) CLI Tests.

Invokes the entry point script in a subprocess and validates exit codes,
stream contents and that a failing run produces no makefile text.
"""

import os
import subprocess
import sys
from pathlib import Path
from typing import List

import pytest

PROJECT_ROOT = Path(__file__).resolve().parent.parent.parent
SRC_DIR = PROJECT_ROOT / "src"
ENTRY_POINT = SRC_DIR / "mkmk" / "main.py"


def run_cli(args: List[str], cwd: Path) -> subprocess.CompletedProcess[str]:
    """
    Execute the CLI in a separate process with 'src' on PYTHONPATH.

    Args:
        args: Command line arguments (excluding interpreter and script path).
        cwd: Working directory for the subprocess.

    Returns:
        subprocess.CompletedProcess: returncode, stdout and stderr.
    """
    env = os.environ.copy()
    env["PYTHONPATH"] = str(SRC_DIR) + os.pathsep + env.get("PYTHONPATH", "")
    env.pop("MKMK_CONFIG", None)

    return subprocess.run(
        [sys.executable, str(ENTRY_POINT)] + args,
        cwd=cwd,
        env=env,
        capture_output=True,
        text=True,
        encoding="utf-8",
    )


@pytest.fixture
def sample_project(tmp_path: Path) -> Path:
    """
    Create a small project.

    Structure:
    /input
      app/main.cpp   (entry point, includes lib/util.hpp)
      lib/util.cpp
      lib/util.hpp
    """
    root = tmp_path / "input"
    (root / "app").mkdir(parents=True)
    (root / "lib").mkdir()
    (root / "app" / "main.cpp").write_text(
        '#include "lib/util.hpp"\n\nint main()\n{\n    return twice(2);\n}\n', encoding="utf-8"
    )
    (root / "lib" / "util.cpp").write_text('#include "lib/util.hpp"\n', encoding="utf-8")
    (root / "lib" / "util.hpp").write_text("int twice(int);\n", encoding="utf-8")
    return root


def test_e2e_generates_makefile(sample_project: Path) -> None:
    result = run_cli(["./app/main.cpp", "./lib/util.cpp"], cwd=sample_project)

    assert result.returncode == 0, result.stderr
    assert ".PHONY: all" in result.stdout
    assert "$(OBJDIR)/app/main: \\\n    $(OBJDIR)/app/main.o \\\n    $(OBJDIR)/lib/util.o\n" in result.stdout
    assert "$(OBJDIR)/lib:\n\t$(MKDIR) $@\n" in result.stdout


def test_e2e_cycle_exit_code(tmp_path: Path) -> None:
    (tmp_path / "a.hpp").write_text('#include "b.hpp"\n', encoding="utf-8")
    (tmp_path / "b.hpp").write_text('#include "a.hpp"\n', encoding="utf-8")

    result = run_cli(["a.hpp"], cwd=tmp_path)

    assert result.returncode == 2
    assert result.stdout == ""
    assert "cyclic include in a.hpp" in result.stderr
    assert "included by b.hpp" in result.stderr


def test_e2e_missing_file_exit_code(tmp_path: Path) -> None:
    result = run_cli(["nowhere.cpp"], cwd=tmp_path)

    assert result.returncode == 2
    assert "cannot read file: nowhere.cpp" in result.stderr


def test_e2e_verbose_reports_progress(sample_project: Path) -> None:
    result = run_cli(["-v", "app/main.cpp"], cwd=sample_project)

    assert result.returncode == 0
    assert "Scanned 2 sources" in result.stderr
