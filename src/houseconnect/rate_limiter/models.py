"""Data models for the rate limiter."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta


@dataclass(frozen=True)
class AttemptRecord:
    """Failed-login bookkeeping for one normalized identifier.

    Attributes:
        failure_count: Consecutive failures since the record was created.
        last_failure_at: Time of the most recent failure.
        locked_until: End of the lockout, or None while below the threshold.
    """

    failure_count: int
    last_failure_at: datetime
    locked_until: datetime | None = None

    @property
    def is_locked(self) -> bool:
        return self.locked_until is not None

    def is_expired(self, now: datetime, window: timedelta) -> bool:
        """Whether the record no longer counts and the identifier is clean again."""
        if self.locked_until is not None:
            return now >= self.locked_until
        return now >= self.last_failure_at + window
