"""Runtime settings read from ``DEVSTRAP_*`` environment variables.

Command-line toggles live in :class:`~devstrap.core.models.RunOptions`;
this module only covers the knobs that rarely change between runs.
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass

from devstrap.core.orchestrator import DEFAULT_PHASE_DELAY
from devstrap.core.tier_runner import DEFAULT_INSTALL_DELAY
from devstrap.exceptions import ConfigurationError

ENV_PREFIX: str = "DEVSTRAP_"


@dataclass(frozen=True, slots=True)
class Settings:
    """Tunables for one run."""

    install_delay: float = DEFAULT_INSTALL_DELAY
    phase_delay: float = DEFAULT_PHASE_DELAY
    log_level: str = "WARNING"
    log_file: str | None = None
    command_timeout: float | None = None

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> Settings:
        """Build settings from *environ* (defaults to ``os.environ``).

        Raises
        ------
        ConfigurationError
            When a numeric variable is malformed or negative.
        """
        env = os.environ if environ is None else environ
        timeout = _read_float(env, "COMMAND_TIMEOUT", None)
        return cls(
            install_delay=_read_float(env, "INSTALL_DELAY", DEFAULT_INSTALL_DELAY),
            phase_delay=_read_float(env, "PHASE_DELAY", DEFAULT_PHASE_DELAY),
            log_level=env.get(f"{ENV_PREFIX}LOG_LEVEL", "WARNING").upper(),
            log_file=env.get(f"{ENV_PREFIX}LOG_FILE") or None,
            command_timeout=timeout if timeout else None,
        )


def _read_float(
    env: Mapping[str, str],
    name: str,
    default: float | None,
) -> float | None:
    key = f"{ENV_PREFIX}{name}"
    raw = env.get(key)
    if raw is None or not raw.strip():
        return default
    try:
        value = float(raw)
    except ValueError as exc:
        raise ConfigurationError(
            f"{key} must be a number, got {raw!r}.",
        ) from exc
    if value < 0:
        raise ConfigurationError(f"{key} must not be negative, got {raw!r}.")
    return value
