"""Environment variable loaders for configuration."""

from __future__ import annotations

import os

from .errors import ConfigurationError

_TRUTHY = frozenset({"1", "true", "yes", "on"})
_FALSY = frozenset({"0", "false", "no", "off"})


def first_env_var(*names: str) -> str | None:
    """Return the first non-blank value among ``names``, in order."""

    for name in names:
        value = os.getenv(name)
        if value is not None and value.strip():
            return value.strip()
    return None


def env_int(*names: str, default: int) -> int:
    raw = first_env_var(*names)
    if raw is None:
        return default
    try:
        return int(raw)
    except ValueError as exc:
        raise ConfigurationError(f"Expected an integer for {names[0]}, got {raw!r}") from exc


def env_float(*names: str) -> float | None:
    raw = first_env_var(*names)
    if raw is None:
        return None
    try:
        return float(raw)
    except ValueError as exc:
        raise ConfigurationError(f"Expected a number for {names[0]}, got {raw!r}") from exc


def env_flag(name: str, *, default: bool) -> bool:
    raw = first_env_var(name)
    if raw is None:
        return default
    lowered = raw.lower()
    if lowered in _TRUTHY:
        return True
    if lowered in _FALSY:
        return False
    raise ConfigurationError(f"Expected a boolean for {name}, got {raw!r}")
