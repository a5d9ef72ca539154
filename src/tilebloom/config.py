"""Run-time configuration read from the environment."""

from dataclasses import dataclass, field
import logging
import os
from typing import Mapping, Optional

from tilebloom.constants import DEFAULT_OUTPUT_IMAGE
from tilebloom.errors import ConfigurationError

_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off"}


@dataclass(frozen=True)
class GameConfig:
    output_image: str = DEFAULT_OUTPUT_IMAGE
    jgraph_command: tuple[str, ...] = ("jgraph",)
    convert_command: tuple[str, ...] = ("convert", "-density", "300")
    render_enabled: bool = True
    log_level: int = logging.WARNING
    seed: Optional[int] = None
    save_path: Optional[str] = field(default=None)

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "GameConfig":
        """Build a config from ``TILEBLOOM_*`` variables, falling back to defaults."""
        env = os.environ if environ is None else environ
        defaults = cls()
        return cls(
            output_image=env.get("TILEBLOOM_OUTPUT", defaults.output_image) or defaults.output_image,
            jgraph_command=_command(env, "TILEBLOOM_JGRAPH", defaults.jgraph_command),
            convert_command=_command(env, "TILEBLOOM_CONVERT", defaults.convert_command),
            render_enabled=_flag(env, "TILEBLOOM_RENDER", defaults.render_enabled),
            log_level=_log_level(env, "TILEBLOOM_LOG_LEVEL", defaults.log_level),
            seed=_seed(env, "TILEBLOOM_SEED"),
        )


def _command(env: Mapping[str, str], key: str, default: tuple[str, ...]) -> tuple[str, ...]:
    raw = env.get(key)
    if raw is None:
        return default
    parts = tuple(raw.split())
    if not parts:
        raise ConfigurationError(key, "command must not be empty")
    return parts


def _flag(env: Mapping[str, str], key: str, default: bool) -> bool:
    raw = env.get(key)
    if raw is None:
        return default
    value = raw.strip().lower()
    if value in _TRUE_VALUES:
        return True
    if value in _FALSE_VALUES:
        return False
    raise ConfigurationError(key, f"expected a boolean, got {raw!r}")


def _log_level(env: Mapping[str, str], key: str, default: int) -> int:
    raw = env.get(key)
    if raw is None:
        return default
    if raw.isdigit():
        return int(raw)
    level = logging.getLevelName(raw.strip().upper())
    if not isinstance(level, int):
        raise ConfigurationError(key, f"unknown log level {raw!r}")
    return level


def _seed(env: Mapping[str, str], key: str) -> Optional[int]:
    raw = env.get(key)
    if raw is None or raw == "":
        return None
    try:
        return int(raw)
    except ValueError:
        raise ConfigurationError(key, f"seed must be an integer, got {raw!r}") from None
