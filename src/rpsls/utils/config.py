"""Runtime settings for the game server.

Values come from environment variables; the server entry point loads a
``.env`` file first so local overrides work without exporting anything.
"""

from __future__ import annotations

import os
from dataclasses import dataclass

from loguru import logger

ENV_PREFIX = "RPSLS_"


@dataclass(frozen=True)
class Settings:
    host: str = "0.0.0.0"
    port: int = 8000
    log_level: str = "INFO"
    default_rounds: int = 1
    max_rounds: int = 25


def _get_int(name: str, default: int, *, minimum: int = 1) -> int:
    raw = os.getenv(ENV_PREFIX + name)
    if raw is None or raw.strip() == "":
        return default
    try:
        value = int(raw)
    except ValueError as exc:
        raise ValueError(f"{ENV_PREFIX}{name} must be an integer, got {raw!r}") from exc
    if value < minimum:
        raise ValueError(f"{ENV_PREFIX}{name} must be >= {minimum}, got {value}")
    return value


def load_settings() -> Settings:
    """Build :class:`Settings` from the environment."""
    settings = Settings(
        host=os.getenv(ENV_PREFIX + "HOST", Settings.host),
        port=_get_int("PORT", Settings.port),
        log_level=os.getenv(ENV_PREFIX + "LOG_LEVEL", Settings.log_level).upper(),
        default_rounds=_get_int("DEFAULT_ROUNDS", Settings.default_rounds),
        max_rounds=_get_int("MAX_ROUNDS", Settings.max_rounds),
    )
    if settings.default_rounds > settings.max_rounds:
        raise ValueError(
            f"{ENV_PREFIX}DEFAULT_ROUNDS ({settings.default_rounds}) exceeds "
            f"{ENV_PREFIX}MAX_ROUNDS ({settings.max_rounds})"
        )
    logger.debug("Loaded settings: {}", settings)
    return settings
