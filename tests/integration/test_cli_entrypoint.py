"""Integration tests for the console-script entry point."""

from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING

import pytest

from cli.app import main
from cli.exit_codes import ExitCode

if TYPE_CHECKING:
    from pathlib import Path

UNALIGNED = b"(a 1) ;c1\n(bb 2) ;c2\n"
ALIGNED = b"(a 1)  ;c1\n(bb 2) ;c2\n"
BROKEN = b"(defn f [x] ;c\n  (+ x 1) ;d\n"


def _exit_status(tokens: list[str]) -> int | str | None:
    with pytest.raises(SystemExit) as excinfo:
        main(tokens)
    return excinfo.value.code


def test_main_exits_zero_after_formatting(
    isolated_cwd: Path,
    stdin_bytes: Callable[[bytes], None],
    capsys: pytest.CaptureFixture[str],
) -> None:
    """Ensure a clean run exits with status 0 and prints the aligned document."""
    _ = isolated_cwd
    stdin_bytes(UNALIGNED)
    assert _exit_status(["format"]) == ExitCode.SUCCESS
    assert capsys.readouterr().out == ALIGNED.decode()


def test_main_propagates_check_failure(
    isolated_cwd: Path,
    stdin_bytes: Callable[[bytes], None],
    capsys: pytest.CaptureFixture[str],
) -> None:
    """Ensure --check reaches the process status as 10."""
    _ = isolated_cwd
    stdin_bytes(UNALIGNED)
    assert _exit_status(["format", "--check"]) == ExitCode.CHECK_FAILED
    assert capsys.readouterr().out == ""


def test_main_propagates_parse_failure(
    isolated_cwd: Path,
    stdin_bytes: Callable[[bytes], None],
    capsys: pytest.CaptureFixture[str],
) -> None:
    """Ensure unparseable input echoes stdin and exits with status 11."""
    _ = isolated_cwd
    stdin_bytes(BROKEN)
    assert _exit_status(["format"]) == ExitCode.SOURCE_PARSE_ERROR
    captured = capsys.readouterr()
    assert captured.out == BROKEN.decode()
    assert "cannot format <stdin>" in captured.err


def test_main_renders_file_results(
    isolated_cwd: Path,
    capsys: pytest.CaptureFixture[str],
) -> None:
    """Ensure structured file results are rendered before exiting."""
    target = isolated_cwd / "core.clj"
    target.write_bytes(UNALIGNED)
    assert _exit_status(["format", str(target), "--write"]) == ExitCode.SUCCESS
    out = capsys.readouterr().out
    assert f"reformatted {target}" in out
    assert "1 file reformatted, 0 left unchanged." in out
    assert target.read_bytes() == ALIGNED


def test_main_reports_unknown_profile(
    isolated_cwd: Path,
    stdin_bytes: Callable[[bytes], None],
    capsys: pytest.CaptureFixture[str],
) -> None:
    """Ensure config failures exit with the config status instead of a traceback."""
    _ = isolated_cwd
    stdin_bytes(UNALIGNED)
    assert _exit_status(["--profile", "nonexistent", "format"]) == ExitCode.CONFIG_ERROR
    assert "Profile 'nonexistent' not found" in capsys.readouterr().err
