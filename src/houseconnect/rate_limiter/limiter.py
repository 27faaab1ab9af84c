"""LoginRateLimiter - Failed-attempt lockout per identifier."""

from __future__ import annotations

import logging
import threading
from datetime import UTC, datetime, timedelta
from typing import TYPE_CHECKING

from houseconnect.identifiers import normalize_identifier
from houseconnect.logging import mask_email
from houseconnect.rate_limiter.models import AttemptRecord

if TYPE_CHECKING:
    from collections.abc import Callable

logger = logging.getLogger(__name__)

DEFAULT_MAX_ATTEMPTS = 5
DEFAULT_LOCKOUT = timedelta(minutes=15)
DEFAULT_SHARDS = 64


def _utcnow() -> datetime:
    return datetime.now(UTC)


class LoginRateLimiter:
    """Tracks failed logins and locks identifiers that exceed the threshold.

    State per identifier moves Clean -> Warning (1..N-1 failures) -> Locked
    (N or more). A record that outlives its window snaps back to Clean; a
    failure while Locked restarts the lockout from that failure.

    State lives in process memory only, so a restart clears every lockout.
    Writers for the same identifier serialize on one of a fixed set of shard
    locks; readers never mutate. Expired records are swept by the first
    failure recorded after each lockout window, so idle identifiers do not
    accumulate.
    """

    def __init__(
        self,
        max_attempts: int = DEFAULT_MAX_ATTEMPTS,
        lockout: timedelta = DEFAULT_LOCKOUT,
        clock: Callable[[], datetime] | None = None,
        shards: int = DEFAULT_SHARDS,
    ) -> None:
        """Initialize the limiter.

        Args:
            max_attempts: Failures that trigger a lockout.
            lockout: Lockout duration, also the window after which a
                below-threshold failure count resets.
            clock: Returns the current time. Defaults to UTC wall clock.
            shards: Number of lock stripes.
        """
        if max_attempts < 1:
            raise ValueError("max_attempts must be at least 1")
        if lockout <= timedelta(0):
            raise ValueError("lockout must be positive")
        self.max_attempts = max_attempts
        self.lockout = lockout
        self._clock = clock or _utcnow
        self._records: dict[str, AttemptRecord] = {}
        self._shard_locks = [threading.Lock() for _ in range(max(1, shards))]
        self._sweep_lock = threading.Lock()
        self._next_sweep_at = self._clock() + lockout

    def _lock_for(self, key: str) -> threading.Lock:
        return self._shard_locks[hash(key) % len(self._shard_locks)]

    def _live_record(self, key: str, now: datetime) -> AttemptRecord | None:
        record = self._records.get(key)
        if record is None or record.is_expired(now, self.lockout):
            return None
        return record

    def is_blocked(self, identifier: str) -> bool:
        """Whether the identifier is currently locked out."""
        return self.time_until_unlock(identifier) > timedelta(0)

    def time_until_unlock(self, identifier: str) -> timedelta:
        """Remaining lockout time, or zero if the identifier is not locked."""
        now = self._clock()
        record = self._live_record(normalize_identifier(identifier), now)
        if record is None or record.locked_until is None:
            return timedelta(0)
        return record.locked_until - now

    def failure_count(self, identifier: str) -> int:
        """Failures currently counted against the identifier."""
        record = self._live_record(normalize_identifier(identifier), self._clock())
        return record.failure_count if record is not None else 0

    def record_failed_attempt(self, identifier: str) -> AttemptRecord:
        """Count a failed login for the identifier.

        Returns:
            The updated record.
        """
        key = normalize_identifier(identifier)
        with self._lock_for(key):
            now = self._clock()
            current = self._live_record(key, now)
            count = 1 if current is None else current.failure_count + 1
            locked_until = now + self.lockout if count >= self.max_attempts else None
            record = AttemptRecord(
                failure_count=count,
                last_failure_at=now,
                locked_until=locked_until,
            )
            self._records[key] = record

        self._sweep_if_due(now)
        if count == self.max_attempts:
            logger.warning(
                "Locking %s after %d failed login attempts", mask_email(key), count
            )
        else:
            logger.debug("Failed login %d/%d for %s", count, self.max_attempts, mask_email(key))
        return record

    def __len__(self) -> int:
        """Number of identifiers with a stored record, expired or not."""
        return len(self._records)

    def _sweep_if_due(self, now: datetime) -> None:
        # At most one sweep per lockout window; writers never wait on it
        if now < self._next_sweep_at or not self._sweep_lock.acquire(blocking=False):
            return
        try:
            if now >= self._next_sweep_at:
                self._next_sweep_at = now + self.lockout
                self.purge_expired()
        finally:
            self._sweep_lock.release()

    def reset_attempts(self, identifier: str) -> None:
        """Clear all failures for the identifier."""
        key = normalize_identifier(identifier)
        with self._lock_for(key):
            self._records.pop(key, None)

    def purge_expired(self) -> int:
        """Drop records whose window has elapsed.

        Returns:
            Number of records removed.
        """
        removed = 0
        for key in list(self._records):
            with self._lock_for(key):
                record = self._records.get(key)
                if record is not None and record.is_expired(self._clock(), self.lockout):
                    del self._records[key]
                    removed += 1
        if removed:
            logger.debug("Purged %d expired login attempt records", removed)
        return removed
