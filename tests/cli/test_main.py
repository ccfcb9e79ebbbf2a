# Copyright 2026 Scenelib Contributors
# SPDX-License-Identifier: Apache-2.0

"""Tests for the scenelib CLI entry point."""

import sys
from pathlib import Path

import pytest

from scenelib.cli.main import main

# ###############
# Helpers
# ###############

_FIXTURE_SOURCE = """\
from dataclasses import dataclass
from enum import Enum


class Color(Enum):
    RED = 1
    GREEN = 2


@dataclass(frozen=True)
class Inner:
    x: int


@dataclass(frozen=True)
class Outer:
    inner: Inner
    color: Color = Color.GREEN


@dataclass(frozen=True)
class Broken:
    mapping: dict


SAMPLES = [Outer(Inner(2)), Outer(Inner(1), Color.RED)]
SINGLE = Inner(7)
NOT_AN_ANNOTATION = 42
"""


def _fixture_module(tmp_path: Path, monkeypatch: pytest.MonkeyPatch, name: str) -> str:
    """Write an importable module of native annotation types and return its name."""
    (tmp_path / f"{name}.py").write_text(_FIXTURE_SOURCE, encoding="utf-8")
    monkeypatch.syspath_prepend(str(tmp_path))
    return name


def _run(monkeypatch: pytest.MonkeyPatch, *argv: str) -> int:
    """Run the CLI with *argv* and return its exit code."""
    monkeypatch.setattr(sys, "argv", ["scenelib", *argv])
    with pytest.raises(SystemExit) as exc_info:
        main()
    return exc_info.value.code


# ###############
# Public Interface
# ###############


def test_main_no_args_prints_help_and_exits(monkeypatch: pytest.MonkeyPatch) -> None:
    """main() with no subcommand prints help and exits with code 0."""
    assert _run(monkeypatch) == 0


# -------- init tests --------


def test_init_writes_default_options(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """init writes .scenelib.yaml with the default options."""
    assert _run(monkeypatch, "init", str(tmp_path)) == 0
    content = (tmp_path / ".scenelib.yaml").read_text(encoding="utf-8")
    assert "infer-nullability: true" in content
    assert "output-directory: annotations" in content


def test_init_fails_if_options_exist(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """init refuses to overwrite an existing options file."""
    (tmp_path / ".scenelib.yaml").write_text("infer-nullability: false\n", encoding="utf-8")
    assert _run(monkeypatch, "init", str(tmp_path)) == 1
    assert (tmp_path / ".scenelib.yaml").read_text(encoding="utf-8") == "infer-nullability: false\n"


def test_init_fails_if_directory_does_not_exist(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """init exits with error code 1 when the target directory does not exist."""
    assert _run(monkeypatch, "init", str(tmp_path / "missing")) == 1


# -------- options tests --------


def test_options_without_file_uses_defaults(
    tmp_path: Path,
    monkeypatch: pytest.MonkeyPatch,
    capsys: pytest.CaptureFixture[str],
) -> None:
    """options falls back to the defaults when there is no options file."""
    assert _run(monkeypatch, "options", str(tmp_path)) == 0
    out = capsys.readouterr().out
    assert "using defaults" in out
    assert "Annotation kinds: nullability, kotlin-signatures" in out
    assert str(tmp_path.resolve() / "annotations") in out


def test_options_reads_file(
    tmp_path: Path,
    monkeypatch: pytest.MonkeyPatch,
    capsys: pytest.CaptureFixture[str],
) -> None:
    """options reports what the options file selects."""
    (tmp_path / ".scenelib.yaml").write_text("infer-nullability: false\noutput-directory: out\n", encoding="utf-8")
    assert _run(monkeypatch, "options", str(tmp_path)) == 0
    out = capsys.readouterr().out
    assert "Annotation kinds: kotlin-signatures" in out
    assert str(tmp_path.resolve() / "out") in out


def test_options_reports_invalid_file(
    tmp_path: Path,
    monkeypatch: pytest.MonkeyPatch,
    capsys: pytest.CaptureFixture[str],
) -> None:
    """options exits with code 1 when the options file is invalid."""
    (tmp_path / ".scenelib.yaml").write_text(
        "infer-nullability: false\ninfer-kotlin-signatures: false\n", encoding="utf-8"
    )
    assert _run(monkeypatch, "options", str(tmp_path)) == 1
    assert "Error" in capsys.readouterr().err


# -------- describe tests --------


def test_describe_prints_definition(
    tmp_path: Path,
    monkeypatch: pytest.MonkeyPatch,
    capsys: pytest.CaptureFixture[str],
) -> None:
    """describe prints the definition of a native annotation type."""
    module = _fixture_module(tmp_path, monkeypatch, "cli_fixture_describe")
    assert _run(monkeypatch, "describe", f"{module}:Outer") == 0
    assert capsys.readouterr().out.splitlines() == [
        f"@{module}.Outer",
        f"  inner: annotation-field {module}.Inner",
        f"  color: enum {module}.Color = GREEN",
    ]


def test_describe_reports_unsupported_type(
    tmp_path: Path,
    monkeypatch: pytest.MonkeyPatch,
    capsys: pytest.CaptureFixture[str],
) -> None:
    """describe exits with code 1 for types outside the canonical algebra."""
    module = _fixture_module(tmp_path, monkeypatch, "cli_fixture_broken")
    assert _run(monkeypatch, "describe", f"{module}:Broken") == 1
    assert "Unsupported type" in capsys.readouterr().err


def test_describe_reports_bad_target(monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]) -> None:
    """describe exits with code 1 when the target is not MODULE:NAME."""
    assert _run(monkeypatch, "describe", "no_colon_here") == 1
    assert "expected MODULE:NAME" in capsys.readouterr().err


# -------- render tests --------


def test_render_prints_sorted_annotations(
    tmp_path: Path,
    monkeypatch: pytest.MonkeyPatch,
    capsys: pytest.CaptureFixture[str],
) -> None:
    """render ingests every instance and prints the renderings in sorted order."""
    module = _fixture_module(tmp_path, monkeypatch, "cli_fixture_render")
    assert _run(monkeypatch, "render", f"{module}:SAMPLES", f"{module}:SINGLE") == 0
    assert capsys.readouterr().out.splitlines() == [
        f"@{module}.Inner(x=7)",
        f"@{module}.Outer(inner=@{module}.Inner(x=1), color=RED)",
        f"@{module}.Outer(inner=@{module}.Inner(x=2), color=GREEN)",
    ]


def test_render_reports_non_annotation(
    tmp_path: Path,
    monkeypatch: pytest.MonkeyPatch,
    capsys: pytest.CaptureFixture[str],
) -> None:
    """render exits with code 1 when a target is not a native annotation."""
    module = _fixture_module(tmp_path, monkeypatch, "cli_fixture_plain")
    assert _run(monkeypatch, "render", f"{module}:NOT_AN_ANNOTATION") == 1
    assert "not an annotation type" in capsys.readouterr().err


def test_render_reports_missing_module(monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]) -> None:
    """render exits with code 1 when the module cannot be imported."""
    assert _run(monkeypatch, "-v", "render", "scenelib_no_such_module:THING") == 1
    assert "cannot resolve" in capsys.readouterr().err
