"""CLI result contract for structured command returns."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING

from cli.exit_codes import ExitCode

if TYPE_CHECKING:
    from collections.abc import Mapping, Sequence


@dataclass(frozen=True)
class CliResult:
    """Structured result from CLI command execution.

    Parameters
    ----------
    exit_code
        Integer exit code for the command.
    summary
        Optional human-readable summary of the result.
    changed
        Paths that were (or, under ``--check``, would be) reformatted.
    failed
        Mapping of paths to the error that left them untouched.
    metrics
        Mapping of metric names to numeric values.
    dry_run
        Whether ``changed`` lists files that were only checked.
    """

    exit_code: int
    summary: str | None = None
    changed: tuple[Path, ...] = ()
    failed: Mapping[Path, str] = field(default_factory=dict)
    metrics: Mapping[str, float] = field(default_factory=dict)
    dry_run: bool = False

    @classmethod
    def success(
        cls,
        *,
        summary: str | None = None,
        changed: Sequence[Path] = (),
        metrics: Mapping[str, float] | None = None,
        dry_run: bool = False,
    ) -> CliResult:
        """Create a successful result.

        Returns
        -------
        CliResult
            Success result with exit code 0.
        """
        return cls(
            exit_code=ExitCode.SUCCESS,
            summary=summary,
            changed=tuple(changed),
            metrics=metrics or {},
            dry_run=dry_run,
        )

    @classmethod
    def error(
        cls,
        exit_code: ExitCode | int,
        *,
        summary: str | None = None,
        changed: Sequence[Path] = (),
        failed: Mapping[Path, str] | None = None,
        metrics: Mapping[str, float] | None = None,
        dry_run: bool = False,
    ) -> CliResult:
        """Create an error result.

        Returns
        -------
        CliResult
            Error result with the specified exit code.
        """
        return cls(
            exit_code=int(exit_code),
            summary=summary,
            changed=tuple(changed),
            failed=failed or {},
            metrics=metrics or {},
            dry_run=dry_run,
        )

    @classmethod
    def from_exception(cls, exc: BaseException, *, summary: str | None = None) -> CliResult:
        """Create an error result from an exception.

        Returns
        -------
        CliResult
            Error result with exit code derived from exception type.
        """
        return cls.error(ExitCode.from_exception(exc), summary=summary or str(exc))

    @property
    def ok(self) -> bool:
        return self.exit_code == ExitCode.SUCCESS


__all__ = ["CliResult"]
