"""Formatter registry and chains."""

from formatters.base import FormatOpts, FormatResult, Formatter, FormatterError
from formatters.registry import (
    ALIGN_COMMENTS,
    DEFAULT_LANGUAGES,
    TRIM_NEWLINES,
    FormatterRegistry,
    default_registry,
    format_with,
    formatter_names,
    get_formatter,
    register_formatter,
    resolve_chain,
)

__all__ = [
    "ALIGN_COMMENTS",
    "DEFAULT_LANGUAGES",
    "TRIM_NEWLINES",
    "FormatOpts",
    "FormatResult",
    "Formatter",
    "FormatterError",
    "FormatterRegistry",
    "default_registry",
    "format_with",
    "formatter_names",
    "get_formatter",
    "register_formatter",
    "resolve_chain",
]
