"""
Runtime switches for the debugging aids in `batteries_debug`.

Values are read from the environment when first needed:

  BATTERIES_DEBUG      any non-empty value turns on `[DBG]` tracing to stderr
  BATTERIES_ARGCHECK   `0` disables argument checking of exported functions
  BATTERIES_DEPRECATE  `warn` (default), `off`, or `error`
"""

import os
from dataclasses import dataclass, replace
from typing import Optional

DEPRECATE_MODES = ("warn", "off", "error")


@dataclass(frozen=True)
class DebugConfig:
    debug: bool = False
    argcheck: bool = True
    deprecate: str = "warn"

    def __post_init__(self):
        if self.deprecate not in DEPRECATE_MODES:
            raise ValueError(
                f"deprecate must be one of {', '.join(DEPRECATE_MODES)}, got {self.deprecate!r}"
            )

    @classmethod
    def from_env(cls, environ=None) -> "DebugConfig":
        env = os.environ if environ is None else environ
        return cls(
            debug=bool(env.get("BATTERIES_DEBUG")),
            argcheck=env.get("BATTERIES_ARGCHECK", "1").strip() not in ("0", "false", "no", "off"),
            deprecate=env.get("BATTERIES_DEPRECATE", "warn").strip().lower() or "warn",
        )


_config: Optional[DebugConfig] = None


def get_config() -> DebugConfig:
    global _config
    if _config is None:
        _config = DebugConfig.from_env()
    return _config


def configure(**overrides) -> DebugConfig:
    """Replaces individual settings for the rest of the process (or until `reset`)."""
    global _config
    _config = replace(get_config(), **overrides)
    return _config


def reset() -> None:
    """Forgets any overrides; the environment is read again on next use."""
    global _config
    _config = None
