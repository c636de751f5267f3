"""Runtime settings, read once from environment variables when the app is created."""

import os
from dataclasses import dataclass
from typing import Mapping

LOG_FORMATS = ("plain", "json")


@dataclass(frozen=True)
class Settings:
    log_level: str = "INFO"
    log_format: str = "plain"
    # number of random bytes behind each player token
    token_bytes: int = 16
    notifications_enabled: bool = True


def load_settings(env: Mapping[str, str] | None = None) -> Settings:
    """Build Settings from the process environment (or an explicit mapping, handy in tests)."""
    log_format = _text("BATTLESHIP_LOG_FORMAT", "plain", env=env).lower()
    if log_format not in LOG_FORMATS:
        log_format = "plain"
    return Settings(
        log_level=_text("BATTLESHIP_LOG_LEVEL", "INFO", env=env).upper(),
        log_format=log_format,
        token_bytes=_int("BATTLESHIP_TOKEN_BYTES", 16, minimum=8, env=env),
        notifications_enabled=_flag("BATTLESHIP_NOTIFICATIONS", True, env=env),
    )


def _raw(name: str, *, env: Mapping[str, str] | None = None) -> str | None:
    value = os.getenv(name) if env is None else env.get(name)
    return None if value is None else str(value)


def _flag(name: str, default: bool, *, env: Mapping[str, str] | None = None) -> bool:
    raw = _raw(name, env=env)
    if raw is None:
        return default
    value = raw.strip().lower()
    if value in {"1", "true", "yes", "on"}:
        return True
    if value in {"0", "false", "no", "off"}:
        return False
    return default


def _int(
    name: str,
    default: int,
    *,
    minimum: int | None = None,
    env: Mapping[str, str] | None = None,
) -> int:
    raw = _raw(name, env=env)
    if raw is None:
        value = default
    else:
        try:
            value = int(raw.strip())
        except ValueError:
            value = default
    if minimum is None:
        return value
    return max(minimum, value)


def _text(name: str, default: str, *, env: Mapping[str, str] | None = None) -> str:
    raw = _raw(name, env=env)
    if raw is None:
        return default
    value = raw.strip()
    return value if value else default
