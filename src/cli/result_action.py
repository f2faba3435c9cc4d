"""Result action handler for Cyclopts integration."""

from __future__ import annotations

from typing import Any

from rich.console import Console

from cli.exit_codes import ExitCode
from cli.result import CliResult


def cli_result_action(result: Any) -> int:
    """Render a command's return value and convert it to an exit code.

    Commands dispatched through the meta launcher pass their return value
    here. The launcher's own integer result then reaches ``sys.exit``
    through the app's ``"sys_exit"`` result action.

    Returns
    -------
    int
        Exit code for the process.
    """
    if result is None:
        return ExitCode.SUCCESS

    if isinstance(result, int):
        return int(result)

    console = Console()
    error_console = Console(stderr=True)

    if isinstance(result, CliResult):
        verb = "would reformat" if result.dry_run else "reformatted"
        for path in result.changed:
            console.print(f"{verb} {path}", highlight=False, soft_wrap=True)
        for path, reason in sorted(result.failed.items()):
            error_console.print(
                f"error: cannot format {path}: {reason}",
                markup=False,
                highlight=False,
                soft_wrap=True,
            )
        if result.summary:
            console.print(result.summary, highlight=False)
        duration = result.metrics.get("duration_ms")
        if duration is not None:
            console.print(f"Duration: {duration:.1f}ms")
        return int(result.exit_code)

    error_console.print(
        f"Unexpected command return type: {type(result).__name__} (value: {result!r})"
    )
    return ExitCode.GENERAL_ERROR


__all__ = ["cli_result_action"]
