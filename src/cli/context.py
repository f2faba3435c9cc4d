"""Run context for CLI command injection."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field

from cli.config_source import EffectiveConfig


@dataclass(frozen=True)
class RunContext:
    """Injected run context for CLI commands.

    Parameters
    ----------
    log_level
        Logging level applied to the invocation.
    config
        Effective configuration, defaults and profiles included.
    """

    log_level: str
    config: EffectiveConfig = field(default_factory=EffectiveConfig)

    def config_int(self, key: str, default: int) -> int:
        value = self.config.get(key)
        if isinstance(value, int) and not isinstance(value, bool):
            return value
        return default

    def languages(self) -> dict[str, tuple[str, ...]] | None:
        value = self.config.get("languages")
        if not isinstance(value, Mapping):
            return None
        return {
            str(name): tuple(str(item) for item in chain)
            for name, chain in value.items()
            if isinstance(chain, list)
        }


__all__ = ["RunContext"]
