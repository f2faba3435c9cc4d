"""Exit code taxonomy for the cljalign CLI."""

from __future__ import annotations

from enum import IntEnum


class ExitCode(IntEnum):
    """Standard exit codes for CLI commands.

    Exit codes follow Unix conventions with domain-specific extensions:
    - 0: Success
    - 1-9: General errors (usage, validation, config)
    - 10-19: Formatting errors
    """

    SUCCESS = 0
    GENERAL_ERROR = 1
    PARSE_ERROR = 2
    VALIDATION_ERROR = 3
    CONFIG_ERROR = 4

    # Formatting errors (10-19)
    CHECK_FAILED = 10
    SOURCE_PARSE_ERROR = 11
    FORMATTER_ERROR = 12
    INTERNAL_ERROR = 13

    @classmethod
    def from_exception(cls, exc: BaseException) -> ExitCode:
        """Map an exception to an appropriate exit code.

        Parameters
        ----------
        exc
            Exception to classify.

        Returns
        -------
        ExitCode
            Exit code appropriate for the exception type.
        """
        cyclopts_code = _exit_code_for_cyclopts(exc)
        if cyclopts_code is not None:
            return cyclopts_code

        align_code = _exit_code_for_align(exc)
        if align_code is not None:
            return align_code

        if exc.__class__.__name__ in {"ConfigError", "TOMLDecodeError"}:
            return cls.CONFIG_ERROR
        if isinstance(exc, (FileNotFoundError, FileExistsError, PermissionError)):
            return cls.CONFIG_ERROR
        if isinstance(exc, (ValueError, TypeError)):
            return cls.VALIDATION_ERROR
        return cls.GENERAL_ERROR


def _exit_code_for_cyclopts(exc: BaseException) -> ExitCode | None:
    module = exc.__class__.__module__
    if not module.startswith("cyclopts"):
        return None
    if exc.__class__.__name__ == "ValidationError":
        return ExitCode.VALIDATION_ERROR
    return ExitCode.PARSE_ERROR


def _exit_code_for_align(exc: BaseException) -> ExitCode | None:
    from align.errors import InvariantViolation, ParseError
    from formatters.base import FormatterError

    if isinstance(exc, ParseError):
        return ExitCode.SOURCE_PARSE_ERROR
    if isinstance(exc, FormatterError):
        return ExitCode.FORMATTER_ERROR
    if isinstance(exc, InvariantViolation):
        return ExitCode.INTERNAL_ERROR
    return None


__all__ = ["ExitCode"]
