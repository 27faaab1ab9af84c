"""Runtime configuration for HouseConnect.

Values come from ``HOUSECONNECT_*`` environment variables, falling back to
the defaults below.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from datetime import timedelta

DEFAULT_DB_PATH = "houseconnect.db"
DEFAULT_MAX_FAILED_ATTEMPTS = 5
DEFAULT_LOCKOUT_MINUTES = 15
DEFAULT_BCRYPT_ROUNDS = 12

ENV_PREFIX = "HOUSECONNECT_"


def _positive_int(name: str, default: int) -> int:
    raw = os.environ.get(f"{ENV_PREFIX}{name}")
    if raw is None or not raw.strip():
        return default
    try:
        value = int(raw)
    except ValueError as e:
        raise ValueError(f"{ENV_PREFIX}{name} must be an integer, got {raw!r}") from e
    if value <= 0:
        raise ValueError(f"{ENV_PREFIX}{name} must be positive, got {value}")
    return value


@dataclass(frozen=True)
class Settings:
    """Application settings.

    Attributes:
        db_path: SQLite database file. Use ":memory:" for an in-memory DB.
        max_failed_attempts: Failed logins before an identifier is locked.
        lockout_minutes: Lockout window length in minutes.
        bcrypt_rounds: Work factor for newly hashed passwords.
        log_dir: Directory for log files (None means the logging default).
        log_level: Log level name (None means the logging default).
    """

    db_path: str = DEFAULT_DB_PATH
    max_failed_attempts: int = DEFAULT_MAX_FAILED_ATTEMPTS
    lockout_minutes: int = DEFAULT_LOCKOUT_MINUTES
    bcrypt_rounds: int = DEFAULT_BCRYPT_ROUNDS
    log_dir: str | None = None
    log_level: str | None = None

    @property
    def lockout(self) -> timedelta:
        """Lockout window as a timedelta."""
        return timedelta(minutes=self.lockout_minutes)

    @classmethod
    def from_env(cls) -> Settings:
        """Build settings from the environment.

        Raises:
            ValueError: If a numeric variable is not a positive integer.
        """
        return cls(
            db_path=os.environ.get(f"{ENV_PREFIX}DB_PATH", DEFAULT_DB_PATH),
            max_failed_attempts=_positive_int("MAX_FAILED_ATTEMPTS", DEFAULT_MAX_FAILED_ATTEMPTS),
            lockout_minutes=_positive_int("LOCKOUT_MINUTES", DEFAULT_LOCKOUT_MINUTES),
            bcrypt_rounds=_positive_int("BCRYPT_ROUNDS", DEFAULT_BCRYPT_ROUNDS),
            log_dir=os.environ.get(f"{ENV_PREFIX}LOG_DIR"),
            log_level=os.environ.get(f"{ENV_PREFIX}LOG_LEVEL"),
        )
