"""Telemetry wrappers for CLI invocation."""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass

from cyclopts import App
from cyclopts.exceptions import CycloptsError
from opentelemetry import trace

from cli.context import RunContext
from cli.exit_codes import ExitCode
from cli.result_action import cli_result_action

_LOGGER = logging.getLogger(__name__)
tracer = trace.get_tracer("cljalign.cli")


@dataclass(frozen=True)
class CliInvokeEvent:
    """Structured telemetry event for CLI invocation."""

    ok: bool
    command: str | None
    parse_ms: float
    exec_ms: float
    exit_code: int
    error_class: str | None = None
    error_message: str | None = None


@dataclass
class _InvokeState:
    t0: float
    command_name: str
    parse_ms: float | None = None
    exec_ms: float | None = None


def _command_name_from_tokens(tokens: list[str] | None) -> str:
    if not tokens:
        return "<unknown>"
    return tokens[0]


def _run_command(
    app: App,
    tokens: list[str],
    *,
    run_context: RunContext | None,
    state: _InvokeState,
) -> int:
    command, bound, ignored = app.parse_args(tokens, exit_on_error=False, print_error=True)
    state.parse_ms = (time.perf_counter() - state.t0) * 1000.0
    state.command_name = getattr(command, "__qualname__", repr(command))

    if run_context is not None and ignored:
        for name, hint in ignored.items():
            if hint is RunContext or name == "run_context":
                bound.arguments[name] = run_context

    t1 = time.perf_counter()
    with tracer.start_as_current_span("cli.command") as span:
        span.set_attribute("cli.command", state.command_name)
        result = command(*bound.args, **bound.kwargs)
    state.exec_ms = (time.perf_counter() - t1) * 1000.0
    return cli_result_action(result)


def invoke_with_telemetry(
    app: App,
    tokens: list[str] | None,
    *,
    run_context: RunContext | None,
) -> tuple[int, CliInvokeEvent]:
    """Execute CLI tokens inside a root span and time each phase.

    Returns
    -------
    tuple[int, CliInvokeEvent]
        Exit code and the invocation event.
    """
    state = _InvokeState(time.perf_counter(), _command_name_from_tokens(tokens))
    with tracer.start_as_current_span("cli.invocation") as span:
        span.set_attribute("cli.tokens", len(tokens or ()))
        try:
            exit_code = _run_command(app, list(tokens or ()), run_context=run_context, state=state)
            event = CliInvokeEvent(
                ok=exit_code == ExitCode.SUCCESS,
                command=state.command_name,
                parse_ms=state.parse_ms or 0.0,
                exec_ms=state.exec_ms or 0.0,
                exit_code=exit_code,
            )
        except CycloptsError as exc:
            exit_code = ExitCode.from_exception(exc)
            event = CliInvokeEvent(
                ok=False,
                command=state.command_name,
                parse_ms=(time.perf_counter() - state.t0) * 1000.0,
                exec_ms=0.0,
                exit_code=exit_code,
                error_class=f"cyclopts.{exc.__class__.__name__}",
                error_message=str(exc),
            )
        except Exception as exc:
            exit_code = ExitCode.from_exception(exc)
            _LOGGER.exception("Command execution failed.")
            event = CliInvokeEvent(
                ok=False,
                command=state.command_name,
                parse_ms=state.parse_ms or 0.0,
                exec_ms=state.exec_ms or (time.perf_counter() - state.t0) * 1000.0,
                exit_code=exit_code,
                error_class=f"{exc.__class__.__module__}.{exc.__class__.__name__}",
                error_message=str(exc),
            )
        span.set_attribute("cli.command", state.command_name)
        span.set_attribute("cli.exit_code", int(event.exit_code))
        span.set_attribute("cli.ok", event.ok)
    _LOGGER.debug(
        "Command %s finished with exit code %d (parse %.1fms, exec %.1fms).",
        event.command,
        event.exit_code,
        event.parse_ms,
        event.exec_ms,
    )
    return int(exit_code), event


__all__ = ["CliInvokeEvent", "invoke_with_telemetry"]
