"""Configuration management commands."""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Annotated

from cyclopts import Parameter

from cli.config_loader import CONFIG_FILENAME, load_effective_config_with_sources
from cli.context import RunContext
from cli.groups import admin_group
from cli.validation import validate_config_contents
from serde_msgspec import dumps_json_sorted

_TEMPLATE = """# cljalign.toml

[align]
# Spaces between the longest code line of a block and its comments.
min_padding = 1

[format]
print_width = 80
workers = 4

[languages]
clojure = ["align-comments"]

# Select with `cljalign --profile ci ...`; later profiles override earlier ones.
[profiles.ci.format]
workers = 1
"""


def show_config(
    *,
    with_sources: Annotated[
        bool,
        Parameter(
            name="--with-sources",
            help="Show the source of each configuration value.",
        ),
    ] = False,
    run_context: Annotated[RunContext | None, Parameter(parse=False)] = None,
) -> int:
    """Show the effective configuration payload.

    Returns
    -------
    int
        Exit status code.
    """
    config = (
        run_context.config if run_context is not None else load_effective_config_with_sources(None)
    )
    if with_sources:
        payload: object = config.to_display_dict()
    else:
        contents = config.to_flat_dict()
        validate_config_contents(contents)
        payload = contents
    sys.stdout.write(dumps_json_sorted(payload, pretty=True).decode("utf-8") + "\n")
    return 0


def init_config(
    *,
    path: Annotated[
        Path | None,
        Parameter(
            name="--path",
            help=f"Path to write the configuration template (default: {CONFIG_FILENAME}).",
        ),
    ] = None,
    force: Annotated[
        bool,
        Parameter(
            name="--force",
            help="Overwrite existing config file.",
            group=admin_group,
        ),
    ] = False,
) -> int:
    """Write a configuration template to disk.

    Returns
    -------
    int
        Exit status code.

    Raises
    ------
    FileExistsError
        Raised when the target path exists and ``force`` is false.
    """
    target_path = path if path is not None else Path(CONFIG_FILENAME)
    if target_path.exists() and not force:
        msg = f"Config file already exists: {target_path}."
        raise FileExistsError(msg)
    target_path.write_text(_TEMPLATE, encoding="utf-8")
    return 0


__all__ = ["init_config", "show_config"]
