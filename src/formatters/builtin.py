"""Built-in formatters."""

from __future__ import annotations

from align.pipeline import format_source
from formatters.base import FormatOpts

_NEWLINE_BYTES = b"\r\n"


def align_comments_formatter(source: bytes, opts: FormatOpts) -> bytes:
    """Align trailing comment blocks of Clojure source.

    Returns
    -------
    bytes
        Formatted source.

    Raises
    ------
    AlignError
        Raised when the alignment pass could not run.
    """
    outcome = format_source(source, min_padding=opts.min_padding)
    if outcome.error is not None:
        raise outcome.error
    return outcome.output


def trim_newlines_formatter(source: bytes, opts: FormatOpts) -> bytes:
    """Strip leading and trailing line breaks.

    Returns
    -------
    bytes
        Source without surrounding CR/LF bytes.
    """
    _ = opts
    return source.strip(_NEWLINE_BYTES)


__all__ = ["align_comments_formatter", "trim_newlines_formatter"]
