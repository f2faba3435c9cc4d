"""Format command: align trailing comments in files or stdin."""

from __future__ import annotations

import logging
import sys
import time
from collections.abc import Iterable, Mapping, Sequence
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from pathlib import Path
from typing import Annotated

from cyclopts import Parameter, validators
from rich.console import Console

from align.planner import DEFAULT_MIN_PADDING
from cli.config_loader import DEFAULT_WORKERS
from cli.context import RunContext
from cli.exit_codes import ExitCode
from cli.groups import alignment_group, output_group
from cli.result import CliResult
from formatters.base import DEFAULT_PRINT_WIDTH, FormatOpts, FormatResult
from formatters.registry import format_with, resolve_chain

logger = logging.getLogger(__name__)

SOURCE_SUFFIXES: Mapping[str, tuple[str, ...]] = {
    "clojure": (".clj", ".cljs", ".cljc", ".edn", ".bb"),
}


@dataclass(frozen=True)
class FileOutcome:
    """Formatting outcome for one file."""

    path: Path
    result: FormatResult


def format_command(
    *paths: Annotated[
        Path,
        Parameter(help="Files or directories to format. Reads stdin when omitted."),
    ],
    lang: Annotated[
        str,
        Parameter(name="--lang", help="Language of the input.", group=alignment_group),
    ] = "clojure",
    write: Annotated[
        bool,
        Parameter(name="--write", help="Rewrite files in place.", group=output_group),
    ] = False,
    check: Annotated[
        bool,
        Parameter(
            name="--check",
            help="Report files that would change and exit non-zero.",
            group=output_group,
        ),
    ] = False,
    min_padding: Annotated[
        int | None,
        Parameter(
            name="--min-padding",
            help="Spaces between the longest code line of a block and its comments.",
            validator=validators.Number(gte=1),
            group=alignment_group,
        ),
    ] = None,
    print_width: Annotated[
        int | None,
        Parameter(
            name="--print-width",
            help="Preferred maximum line width passed to formatters.",
            validator=validators.Number(gte=1),
            group=alignment_group,
        ),
    ] = None,
    workers: Annotated[
        int | None,
        Parameter(
            name="--workers",
            help="Number of files formatted concurrently.",
            validator=validators.Number(gte=1),
            group=alignment_group,
        ),
    ] = None,
    run_context: Annotated[RunContext | None, Parameter(parse=False)] = None,
) -> CliResult | int:
    """Align trailing comments of the given files, or of stdin.

    Returns
    -------
    CliResult | int
        Structured result for file runs, exit code for stdin runs.
    """
    context = run_context or RunContext(log_level="WARNING")
    opts = FormatOpts(
        language=lang,
        print_width=print_width or context.config_int("format_print_width", DEFAULT_PRINT_WIDTH),
        min_padding=min_padding or context.config_int("align_min_padding", DEFAULT_MIN_PADDING),
    )
    languages = context.languages()
    resolve_chain(lang, languages)

    if not paths:
        return _format_stdin(opts, languages, check=check)

    t0 = time.perf_counter()
    files = collect_files(paths, SOURCE_SUFFIXES.get(lang, ()))
    max_workers = workers or context.config_int("format_workers", DEFAULT_WORKERS)
    outcomes = format_files(files, opts, languages, max_workers=max_workers)
    duration_ms = (time.perf_counter() - t0) * 1000.0

    if not write and not check:
        for outcome in outcomes:
            _write_stdout(outcome.result.output)
        return _exit_code(outcomes, check=False)

    changed = [outcome.path for outcome in outcomes if outcome.result.changed]
    if write:
        for outcome in outcomes:
            if outcome.result.changed:
                outcome.path.write_bytes(outcome.result.output)
    failed = {
        outcome.path: str(outcome.result.error)
        for outcome in outcomes
        if outcome.result.error is not None
    }
    summary = _summary(len(outcomes), len(changed), len(failed), check=check)
    metrics = {"duration_ms": duration_ms, "files": float(len(outcomes))}
    exit_code = _exit_code(outcomes, check=check)
    if exit_code == ExitCode.SUCCESS:
        return CliResult.success(summary=summary, changed=changed, metrics=metrics, dry_run=check)
    return CliResult.error(
        exit_code,
        summary=summary,
        changed=changed,
        failed=failed,
        metrics=metrics,
        dry_run=check,
    )


def collect_files(paths: Iterable[Path], suffixes: Sequence[str]) -> list[Path]:
    """Expand directories into their source files, keeping explicit files.

    Returns
    -------
    list[Path]
        Files in argument order, directory contents sorted.

    Raises
    ------
    FileNotFoundError
        Raised when a path does not exist.
    """
    files: list[Path] = []
    for path in paths:
        if path.is_dir():
            files.extend(
                sorted(
                    child
                    for child in path.rglob("*")
                    if child.is_file() and child.suffix in suffixes
                )
            )
        elif path.is_file():
            files.append(path)
        else:
            msg = f"No such file or directory: {str(path)!r}."
            raise FileNotFoundError(msg)
    return files


def format_files(
    files: Sequence[Path],
    opts: FormatOpts,
    languages: Mapping[str, Sequence[str]] | None,
    *,
    max_workers: int,
) -> list[FileOutcome]:
    """Format files concurrently; each document is an independent pass.

    Returns
    -------
    list[FileOutcome]
        Outcomes in the order of ``files``.
    """

    def _one(path: Path) -> FileOutcome:
        result = format_with(path.read_bytes(), opts, languages=languages)
        if result.error is not None:
            logger.warning("Left %s unchanged: %s", path, result.error)
        return FileOutcome(path=path, result=result)

    if max_workers <= 1 or len(files) <= 1:
        return [_one(path) for path in files]
    with ThreadPoolExecutor(max_workers=max_workers) as pool:
        return list(pool.map(_one, files))


def _format_stdin(
    opts: FormatOpts,
    languages: Mapping[str, Sequence[str]] | None,
    *,
    check: bool,
) -> int:
    result = format_with(sys.stdin.buffer.read(), opts, languages=languages)
    if result.error is not None:
        Console(stderr=True).print(
            f"error: cannot format <stdin>: {result.error}",
            markup=False,
            highlight=False,
            soft_wrap=True,
        )
    if not check:
        _write_stdout(result.output)
    if result.error is not None:
        return int(ExitCode.from_exception(result.error))
    if check and result.changed:
        return int(ExitCode.CHECK_FAILED)
    return int(ExitCode.SUCCESS)


def _exit_code(outcomes: Sequence[FileOutcome], *, check: bool) -> ExitCode:
    for outcome in outcomes:
        if outcome.result.error is not None:
            return ExitCode.from_exception(outcome.result.error)
    if check and any(outcome.result.changed for outcome in outcomes):
        return ExitCode.CHECK_FAILED
    return ExitCode.SUCCESS


def _summary(total: int, changed: int, failed: int, *, check: bool) -> str:
    verb = "would be reformatted" if check else "reformatted"
    parts = [f"{changed} file{'s' if changed != 1 else ''} {verb}"]
    parts.append(f"{total - changed - failed} left unchanged")
    if failed:
        parts.append(f"{failed} failed")
    return ", ".join(parts) + "."


def _write_stdout(data: bytes) -> None:
    sys.stdout.flush()
    sys.stdout.buffer.write(data)
    sys.stdout.buffer.flush()


__all__ = ["FileOutcome", "collect_files", "format_command", "format_files"]
