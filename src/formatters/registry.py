"""Named formatter registry and per-language formatter chains."""

from __future__ import annotations

import logging
from collections.abc import Iterator, Mapping, Sequence
from dataclasses import dataclass, field

from opentelemetry import trace

from align.errors import AlignError
from formatters.base import FormatOpts, FormatResult, Formatter, FormatterError
from formatters.builtin import align_comments_formatter, trim_newlines_formatter

logger = logging.getLogger(__name__)
tracer = trace.get_tracer("cljalign.formatters")

ALIGN_COMMENTS = "align-comments"
TRIM_NEWLINES = "trim-newlines"

DEFAULT_LANGUAGES: Mapping[str, tuple[str, ...]] = {"clojure": (ALIGN_COMMENTS,)}


@dataclass
class FormatterRegistry:
    """Mutable mapping of formatter names to callables."""

    _entries: dict[str, Formatter] = field(default_factory=dict)

    def register(self, name: str, formatter: Formatter, *, overwrite: bool = False) -> None:
        """Register ``formatter`` under ``name``.

        Raises
        ------
        ValueError
            Raised when the name is taken and ``overwrite`` is false.
        """
        if name in self._entries and not overwrite:
            msg = f"Formatter {name!r} already registered. Use overwrite=True."
            raise ValueError(msg)
        self._entries[name] = formatter

    def get(self, name: str) -> Formatter | None:
        return self._entries.get(name)

    def require(self, name: str) -> Formatter:
        """Return the formatter for ``name``.

        Returns
        -------
        Formatter
            Registered formatter.

        Raises
        ------
        FormatterError
            Raised when no formatter is registered under ``name``.
        """
        formatter = self._entries.get(name)
        if formatter is None:
            known = ", ".join(sorted(self._entries)) or "<none>"
            msg = f"Unknown formatter {name!r} (known: {known})."
            raise FormatterError(msg)
        return formatter

    def unregister(self, name: str) -> None:
        self._entries.pop(name, None)

    def __contains__(self, name: object) -> bool:
        return name in self._entries

    def __iter__(self) -> Iterator[str]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)


def default_registry() -> FormatterRegistry:
    """Build a registry holding the built-in formatters.

    Returns
    -------
    FormatterRegistry
        Fresh registry.
    """
    registry = FormatterRegistry()
    registry.register(ALIGN_COMMENTS, align_comments_formatter)
    registry.register(TRIM_NEWLINES, trim_newlines_formatter)
    return registry


_REGISTRY = default_registry()


def register_formatter(name: str, formatter: Formatter, *, overwrite: bool = False) -> None:
    """Register a formatter in the process-wide registry."""
    _REGISTRY.register(name, formatter, overwrite=overwrite)


def formatter_names() -> tuple[str, ...]:
    """Return the names in the process-wide registry, sorted.

    Returns
    -------
    tuple[str, ...]
        Registered formatter names.
    """
    return tuple(sorted(_REGISTRY))


def get_formatter(name: str) -> Formatter:
    """Return a formatter from the process-wide registry.

    Returns
    -------
    Formatter
        Registered formatter.
    """
    return _REGISTRY.require(name)


def resolve_chain(
    language: str,
    languages: Mapping[str, Sequence[str]] | None = None,
) -> tuple[str, ...]:
    """Return the formatter names configured for ``language``.

    Returns
    -------
    tuple[str, ...]
        Ordered formatter names.

    Raises
    ------
    FormatterError
        Raised when the language has no configured chain.
    """
    table = DEFAULT_LANGUAGES if languages is None else languages
    chain = table.get(language)
    if chain is None:
        known = ", ".join(sorted(table)) or "<none>"
        msg = f"No formatters configured for language {language!r} (known: {known})."
        raise FormatterError(msg)
    return tuple(chain)


def format_with(
    source: bytes,
    opts: FormatOpts,
    *,
    chain: Sequence[str] | None = None,
    languages: Mapping[str, Sequence[str]] | None = None,
    registry: FormatterRegistry | None = None,
) -> FormatResult:
    """Run a formatter chain over one document.

    Parameters
    ----------
    source
        Document bytes.
    opts
        Formatter options; ``opts.language`` selects the chain.
    chain
        Explicit formatter names, overriding the language table.
    languages
        Language to formatter-chain table.
    registry
        Registry to resolve names against (process-wide when omitted).

    Returns
    -------
    FormatResult
        Chain output; the untouched input when any formatter failed.

    Raises
    ------
    FormatterError
        Raised when the chain or a formatter name cannot be resolved.
    """
    names = tuple(chain) if chain is not None else resolve_chain(opts.language, languages)
    lookup = registry if registry is not None else _REGISTRY
    formatters = [(name, lookup.require(name)) for name in names]
    with tracer.start_as_current_span("formatters.format") as span:
        span.set_attribute("formatters.language", opts.language)
        span.set_attribute("formatters.chain", ",".join(names))
        result = source
        applied: list[str] = []
        for name, formatter in formatters:
            try:
                result = formatter(result, opts)
            except AlignError as exc:
                logger.debug("Formatter %s failed: %s", name, exc)
                span.set_attribute("formatters.error", f"{name}: {exc}")
                return FormatResult(output=source, changed=False, applied=tuple(applied), error=exc)
            applied.append(name)
        span.set_attribute("formatters.changed", result != source)
    return FormatResult(output=result, changed=result != source, applied=tuple(applied))


__all__ = [
    "ALIGN_COMMENTS",
    "DEFAULT_LANGUAGES",
    "TRIM_NEWLINES",
    "FormatterRegistry",
    "default_registry",
    "format_with",
    "formatter_names",
    "get_formatter",
    "register_formatter",
    "resolve_chain",
]
