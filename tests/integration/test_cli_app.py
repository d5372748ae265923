from __future__ import annotations

"""
Integration tests for the CLI Application Controller.

Calls the controller in-process and checks streams, exit codes and file
side effects.
"""

import json
from pathlib import Path
from typing import Callable, Dict
from unittest.mock import patch

import pytest

from mkmk.domain.config import CONFIG_ENV_VAR
from mkmk.domain.errors import InternalError
from mkmk.interface.cli.app import EXIT_INTERNAL_ERROR, EXIT_OK, EXIT_USER_ERROR, main

MakeProject = Callable[[Dict[str, str]], Path]


@pytest.fixture(autouse=True)
def isolated_cwd(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep stray mkmk.json files and MKMK_CONFIG out of the tests."""
    monkeypatch.delenv(CONFIG_ENV_VAR, raising=False)
    monkeypatch.chdir(tmp_path)


def test_makefile_goes_to_stdout(make_project: MakeProject, capsys: pytest.CaptureFixture[str]) -> None:
    root = make_project({"main.cpp": "int main()\n"})

    code = main(["-C", str(root), "--object-prefix", "obj/", "main.cpp"])

    out, err = capsys.readouterr()
    assert code == EXIT_OK
    assert "\nobj/main: \\\n    obj/main.o\n" in out
    assert err == ""


def test_output_file_is_written(make_project: MakeProject, tmp_path: Path) -> None:
    root = make_project({"a.cpp": ""})
    target = tmp_path / "build" / "Makefile"

    code = main(["-C", str(root), "-o", str(target), "a.cpp"])

    assert code == EXIT_OK
    assert "$(OBJDIR)/a.o:" in target.read_text(encoding="utf-8")


def test_cycle_is_a_user_error_and_writes_nothing(
        make_project: MakeProject, tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    root = make_project({"a.hpp": '#include "b.hpp"\n', "b.hpp": '#include "a.hpp"\n'})
    target = tmp_path / "Makefile"

    code = main(["-C", str(root), "-o", str(target), "a.hpp"])

    out, err = capsys.readouterr()
    assert code == EXIT_USER_ERROR
    assert out == ""
    assert err.startswith("Error: cyclic include in a.hpp")
    assert not target.exists()


def test_missing_root_is_a_user_error(make_project: MakeProject, capsys: pytest.CaptureFixture[str]) -> None:
    root = make_project({})

    code = main(["-C", str(root), "absent.cpp"])

    _, err = capsys.readouterr()
    assert code == EXIT_USER_ERROR
    assert "cannot read file: absent.cpp" in err


def test_unrecognized_root_is_a_user_error(capsys: pytest.CaptureFixture[str]) -> None:
    code = main(["README.md"])

    _, err = capsys.readouterr()
    assert code == EXIT_USER_ERROR
    assert "unrecognized source type: README.md" in err


def test_bad_configuration_is_a_user_error(capsys: pytest.CaptureFixture[str]) -> None:
    code = main(["--corpus-ext", "", "a.cpp"])

    _, err = capsys.readouterr()
    assert code == EXIT_USER_ERROR
    assert "corpus_ext" in err


def test_internal_error_has_its_own_status(capsys: pytest.CaptureFixture[str]) -> None:
    with patch("mkmk.interface.cli.app.generate_makefile", side_effect=InternalError("boom")):
        code = main(["a.cpp"])

    _, err = capsys.readouterr()
    assert code == EXIT_INTERNAL_ERROR
    assert "Internal Error: boom" in err


def test_dump_config_reflects_file_and_flags(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    (tmp_path / "mkmk.json").write_text(json.dumps({"corpus_ext": ".c", "header_ext": ".h"}), encoding="utf-8")

    code = main(["--dump-config", "--object-ext", ".obj"])

    out, _ = capsys.readouterr()
    dumped = json.loads(out)
    assert code == EXIT_OK
    assert dumped["corpus_ext"] == ".c"
    assert dumped["header_ext"] == ".h"
    assert dumped["object_ext"] == ".obj"


def test_use_defaults_ignores_config_file(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    (tmp_path / "mkmk.json").write_text(json.dumps({"corpus_ext": ".c"}), encoding="utf-8")

    main(["--dump-config", "--use-defaults"])

    assert json.loads(capsys.readouterr().out)["corpus_ext"] == ".cpp"


def test_save_config_writes_effective_values(tmp_path: Path) -> None:
    target = tmp_path / "saved.json"

    code = main(["--save-config", str(target), "--linked-ext", ".exe"])

    assert code == EXIT_OK
    assert json.loads(target.read_text(encoding="utf-8"))["linked_ext"] == ".exe"


def test_configured_extensions_drive_reading(make_project: MakeProject, capsys: pytest.CaptureFixture[str]) -> None:
    root = make_project({"prog.c": '#include "lib.h"\nint main(void)\n', "lib.h": ""})

    code = main(["-C", str(root), "--corpus-ext", ".c", "--header-ext", ".h", "--source-prefix", "", "prog.c"])

    out, _ = capsys.readouterr()
    assert code == EXIT_OK
    assert "    prog.c \\\n    lib.h  \\\n" in out


def test_undecodable_config_file_is_a_user_error(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    (tmp_path / "mkmk.json").write_bytes(b'{"preamble": "\xff\xfe"}')

    code = main(["--dump-config"])

    out, err = capsys.readouterr()
    assert code == EXIT_USER_ERROR
    assert out == ""
    assert err.startswith("Error: invalid configuration")
