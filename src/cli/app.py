"""Main application setup for the cljalign CLI."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Annotated, Literal

from cyclopts import App, Parameter
from rich.console import Console

from cli.commands.version import get_version
from cli.config_loader import ConfigError, load_effective_config_with_sources
from cli.context import RunContext
from cli.exit_codes import ExitCode
from cli.groups import admin_group, session_group
from cli.telemetry import invoke_with_telemetry

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")

_HELP_EPILOGUE = """
Examples:
  cljalign format < core.clj             Align comments from stdin to stdout
  cljalign format src/ --write           Rewrite every .clj file under src/
  cljalign format src/a.clj --check      Exit non-zero if a file would change
  cljalign config show --with-sources    Show effective configuration
  cljalign --profile ci format --check   Apply the [profiles.ci] overrides

Environment Variables:
  CLJALIGN_LOG_LEVEL   Default log level (DEBUG, INFO, WARNING, ERROR)
"""

app = App(
    name="cljalign",
    help="Align trailing comments of Clojure source into shared columns.",
    help_format="rich",
    help_epilogue=_HELP_EPILOGUE,
    version=get_version(),
    version_flags=["--version", "-V"],
    default_parameter=Parameter(
        show_default=True,
        show_env_var=True,
    ),
    result_action="sys_exit",
    exit_on_error=True,
    print_error=True,
    help_on_error=False,
)

app.meta.group_parameters = session_group


@dataclass(frozen=True)
class SessionOptions:
    """Session-level configuration parameters."""

    config_file: Annotated[
        str | None,
        Parameter(
            name="--config",
            help="Path to configuration file (overrides default search).",
            group=session_group,
        ),
    ] = None
    log_level: Annotated[
        Literal["DEBUG", "INFO", "WARNING", "ERROR"],
        Parameter(
            name="--log-level",
            help="Logging verbosity level.",
            env_var="CLJALIGN_LOG_LEVEL",
            group=session_group,
        ),
    ] = "WARNING"
    profiles: Annotated[
        tuple[str, ...],
        Parameter(
            name="--profile",
            help="Apply a [profiles.<name>] table; repeat to layer several in order.",
            group=session_group,
        ),
    ] = ()


_DEFAULT_SESSION_OPTIONS = SessionOptions()


@app.meta.default
def meta_launcher(
    *tokens: Annotated[str, Parameter(show=False, allow_leading_hyphen=True)],
    session: Annotated[SessionOptions, Parameter(name="*")] = _DEFAULT_SESSION_OPTIONS,
) -> int:
    """Meta launcher for config selection and context injection.

    Returns
    -------
    int
        Exit status code from command execution.

    Raises
    ------
    ValueError
        Raised when the log level is invalid.
    """
    if session.log_level not in LOG_LEVELS:
        msg = f"Unsupported log level {session.log_level!r}."
        raise ValueError(msg)
    logging.basicConfig(level=session.log_level.upper())

    try:
        config = load_effective_config_with_sources(
            session.config_file,
            profiles=session.profiles,
        )
    except (ConfigError, OSError) as exc:
        Console(stderr=True).print(
            f"error: {exc}", markup=False, highlight=False, soft_wrap=True
        )
        return ExitCode.from_exception(exc)
    run_context = RunContext(log_level=session.log_level, config=config)

    exit_code, _event = invoke_with_telemetry(
        app,
        list(tokens),
        run_context=run_context,
    )
    return exit_code


app.command("cli.commands.format:format_command", name="format", alias="fmt")

_config_app = App(name="config", help="Configuration management.")
_config_app.command("cli.commands.config:show_config", name="show")
_config_app.command("cli.commands.config:init_config", name="init")
app.command(_config_app)
app.command("cli.commands.version:version_command", name="version", alias="v")

app.register_install_completion_command(
    name="--install-completion",
    add_to_startup=False,
    group=admin_group,
    help="Install shell completion scripts.",
)


def main(tokens: Sequence[str] | None = None) -> None:
    """Run the cljalign CLI and exit with the command's status code.

    Parameters
    ----------
    tokens
        Arguments to parse; defaults to ``sys.argv[1:]``.
    """
    app.meta(tokens)


__all__ = ["app", "main", "meta_launcher"]
