"""Harness configuration from environment variables"""

import os
from dataclasses import dataclass, field, replace
from typing import Optional

from . import constants
from .exceptions import ConfigError


def _env_int(name: str, default: int) -> int:
    raw = os.environ.get(name)
    if raw is None or raw == "":
        return default
    try:
        value = int(raw)
    except ValueError:
        raise ConfigError(f"{name} must be an integer, got {raw!r}")
    if value < 0:
        raise ConfigError(f"{name} must not be negative, got {value}")
    return value


def _env_bool(name: str, default: bool) -> bool:
    raw = os.environ.get(name)
    if raw is None or raw == "":
        return default
    return raw.lower() in ("1", "true", "yes", "on")


@dataclass(frozen=True)
class HarnessConfig:
    """Settings for one harness run

    Defaults come from harness.constants; from_env() overlays the
    HARNESS_* environment variables on top of them.
    """

    base_url: str = constants.DEFAULT_BASE_URL
    username: str = constants.DEFAULT_USERNAME
    password: str = field(default=constants.DEFAULT_PASSWORD, repr=False)
    idle_window_ms: int = constants.IDLE_WINDOW_MS
    wait_timeout_ms: int = constants.MAX_WAIT_MS
    poll_interval_ms: int = constants.POLL_INTERVAL_MS
    server_startup_timeout: int = constants.SERVER_STARTUP_TIMEOUT_SECONDS
    headless: bool = True
    log_level: str = "INFO"

    def __post_init__(self):
        if self.wait_timeout_ms <= 0:
            raise ConfigError("wait timeout must be positive")
        if self.poll_interval_ms <= 0:
            raise ConfigError("poll interval must be positive")
        if self.idle_window_ms >= self.wait_timeout_ms:
            # Quiescence could never be observed before the wait gives up
            raise ConfigError(
                f"idle window ({self.idle_window_ms}ms) must be shorter than "
                f"the wait timeout ({self.wait_timeout_ms}ms)"
            )

    @classmethod
    def from_env(cls) -> "HarnessConfig":
        return cls(
            base_url=os.environ.get("HARNESS_BASE_URL", constants.DEFAULT_BASE_URL),
            username=os.environ.get("HARNESS_USERNAME", constants.DEFAULT_USERNAME),
            password=os.environ.get("HARNESS_PASSWORD", constants.DEFAULT_PASSWORD),
            idle_window_ms=_env_int("HARNESS_IDLE_WINDOW_MS", constants.IDLE_WINDOW_MS),
            wait_timeout_ms=_env_int("HARNESS_WAIT_TIMEOUT_MS", constants.MAX_WAIT_MS),
            poll_interval_ms=_env_int("HARNESS_POLL_MS", constants.POLL_INTERVAL_MS),
            server_startup_timeout=_env_int(
                "HARNESS_SERVER_STARTUP_TIMEOUT", constants.SERVER_STARTUP_TIMEOUT_SECONDS
            ),
            headless=_env_bool("HARNESS_HEADLESS", True),
            log_level=os.environ.get("LOG_LEVEL", "INFO").upper(),
        )

    def with_overrides(self, **overrides: Optional[object]) -> "HarnessConfig":
        """Return a copy with every non-None override applied"""
        changes = {key: value for key, value in overrides.items() if value is not None}
        return replace(self, **changes)
