"""Unit tests for LoginRateLimiter."""

from datetime import timedelta

import pytest

from houseconnect.rate_limiter import AttemptRecord, LoginRateLimiter


@pytest.fixture
def limiter(clock) -> LoginRateLimiter:
    """A limiter with the default threshold on a fake clock."""
    return LoginRateLimiter(max_attempts=5, lockout=timedelta(minutes=15), clock=clock)


def fail(limiter: LoginRateLimiter, identifier: str, times: int) -> AttemptRecord:
    record = None
    for _ in range(times):
        record = limiter.record_failed_attempt(identifier)
    return record


@pytest.mark.unit
class TestConstruction:
    """Tests for constructor validation."""

    def test_rejects_zero_attempts(self) -> None:
        """A threshold below one is refused."""
        with pytest.raises(ValueError, match="max_attempts"):
            LoginRateLimiter(max_attempts=0)

    def test_rejects_non_positive_lockout(self) -> None:
        """A zero lockout is refused."""
        with pytest.raises(ValueError, match="lockout"):
            LoginRateLimiter(lockout=timedelta(0))


@pytest.mark.unit
class TestThreshold:
    """Tests for the failure threshold."""

    def test_unknown_identifier_is_clean(self, limiter: LoginRateLimiter) -> None:
        """Nothing recorded means not blocked."""
        assert not limiter.is_blocked("a@x.com")
        assert limiter.time_until_unlock("a@x.com") == timedelta(0)
        assert limiter.failure_count("a@x.com") == 0

    def test_below_threshold_not_blocked(self, limiter: LoginRateLimiter) -> None:
        """Four failures leave the identifier usable."""
        record = fail(limiter, "a@x.com", 4)

        assert record.failure_count == 4
        assert not record.is_locked
        assert not limiter.is_blocked("a@x.com")

    def test_threshold_blocks(self, limiter: LoginRateLimiter) -> None:
        """The fifth failure locks for the full window."""
        record = fail(limiter, "a@x.com", 5)

        assert record.is_locked
        assert limiter.is_blocked("a@x.com")
        assert limiter.time_until_unlock("a@x.com") == timedelta(minutes=15)

    def test_identifier_is_normalized(self, limiter: LoginRateLimiter) -> None:
        """Case and surrounding whitespace do not create separate counters."""
        fail(limiter, "A@X.com", 3)
        fail(limiter, "  a@x.COM ", 2)

        assert limiter.is_blocked("a@x.com")

    def test_identifiers_are_independent(self, limiter: LoginRateLimiter) -> None:
        """Failures for one identifier never block another."""
        fail(limiter, "a@x.com", 5)

        assert not limiter.is_blocked("b@x.com")


@pytest.mark.unit
class TestLockoutExpiry:
    """Tests for time-based recovery."""

    def test_lock_expires_after_window(self, limiter: LoginRateLimiter, clock) -> None:
        """A lock ends when the window elapses and the record snaps to clean."""
        fail(limiter, "a@x.com", 5)

        clock.advance(minutes=15)

        assert not limiter.is_blocked("a@x.com")
        assert limiter.failure_count("a@x.com") == 0
        assert limiter.record_failed_attempt("a@x.com").failure_count == 1

    def test_time_until_unlock_counts_down(self, limiter: LoginRateLimiter, clock) -> None:
        """Remaining time shrinks as the clock moves."""
        fail(limiter, "a@x.com", 5)

        clock.advance(minutes=10)

        assert limiter.time_until_unlock("a@x.com") == timedelta(minutes=5)

    def test_failure_while_locked_restarts_lockout(
        self, limiter: LoginRateLimiter, clock
    ) -> None:
        """Failing during a lock pushes the unlock time out again."""
        fail(limiter, "a@x.com", 5)
        clock.advance(minutes=10)

        record = limiter.record_failed_attempt("a@x.com")

        assert record.failure_count == 6
        assert limiter.time_until_unlock("a@x.com") == timedelta(minutes=15)

    def test_warning_decays_after_window(self, limiter: LoginRateLimiter, clock) -> None:
        """Stale failures below the threshold stop counting."""
        fail(limiter, "a@x.com", 4)
        clock.advance(minutes=15)

        record = limiter.record_failed_attempt("a@x.com")

        assert record.failure_count == 1
        assert not limiter.is_blocked("a@x.com")

    def test_warning_window_is_rolling(self, limiter: LoginRateLimiter, clock) -> None:
        """Each failure extends the window for the failures before it."""
        fail(limiter, "a@x.com", 4)
        clock.advance(minutes=14)

        record = limiter.record_failed_attempt("a@x.com")

        assert record.failure_count == 5
        assert limiter.is_blocked("a@x.com")


@pytest.mark.unit
class TestReset:
    """Tests for reset_attempts."""

    def test_reset_clears_lock(self, limiter: LoginRateLimiter) -> None:
        """Reset unblocks immediately."""
        fail(limiter, "a@x.com", 5)

        limiter.reset_attempts("a@x.com")

        assert not limiter.is_blocked("a@x.com")
        assert limiter.failure_count("a@x.com") == 0

    def test_reset_from_one_below_threshold(self, limiter: LoginRateLimiter) -> None:
        """After a reset a full threshold of new failures is needed again."""
        fail(limiter, "a@x.com", 4)
        limiter.reset_attempts("a@x.com")

        fail(limiter, "a@x.com", 4)

        assert not limiter.is_blocked("a@x.com")

    def test_reset_unknown_identifier_is_noop(self, limiter: LoginRateLimiter) -> None:
        """Resetting a clean identifier does nothing."""
        limiter.reset_attempts("nobody@x.com")

        assert limiter.failure_count("nobody@x.com") == 0


@pytest.mark.unit
class TestReadsArePure:
    """Tests that queries never change state."""

    def test_is_blocked_does_not_count(self, limiter: LoginRateLimiter) -> None:
        """Repeated checks leave the failure count alone."""
        fail(limiter, "a@x.com", 2)

        for _ in range(10):
            limiter.is_blocked("a@x.com")
            limiter.time_until_unlock("a@x.com")

        assert limiter.failure_count("a@x.com") == 2

    def test_expired_record_survives_reads(self, limiter: LoginRateLimiter, clock) -> None:
        """Reading an expired record does not delete it; purging does."""
        fail(limiter, "a@x.com", 5)
        clock.advance(minutes=20)

        assert not limiter.is_blocked("a@x.com")
        assert limiter.purge_expired() == 1


@pytest.mark.unit
class TestPurgeExpired:
    """Tests for purge_expired."""

    def test_purges_only_expired(self, limiter: LoginRateLimiter, clock) -> None:
        """Live records are kept."""
        fail(limiter, "old@x.com", 2)
        clock.advance(minutes=10)
        fail(limiter, "new@x.com", 2)
        clock.advance(minutes=6)

        removed = limiter.purge_expired()

        assert removed == 1
        assert limiter.failure_count("new@x.com") == 2
        assert limiter.purge_expired() == 0


@pytest.mark.unit
class TestAutomaticSweep:
    """Tests for expired records being reclaimed during normal use."""

    def test_failures_reclaim_expired_records(self, limiter: LoginRateLimiter, clock) -> None:
        """Distinct identifiers do not accumulate past their window."""
        for i in range(1000):
            limiter.record_failed_attempt(f"user{i}@x.com")
        assert len(limiter) == 1000

        clock.advance(minutes=16)
        limiter.record_failed_attempt("late@x.com")

        assert len(limiter) == 1
        assert limiter.failure_count("late@x.com") == 1

    def test_no_sweep_inside_window(self, limiter: LoginRateLimiter, clock) -> None:
        """Records still inside their window are never swept."""
        fail(limiter, "a@x.com", 2)
        clock.advance(minutes=14)
        fail(limiter, "b@x.com", 1)

        assert len(limiter) == 2
        assert limiter.failure_count("a@x.com") == 2

    def test_sweep_keeps_live_records(self, limiter: LoginRateLimiter, clock) -> None:
        fail(limiter, "old@x.com", 1)
        clock.advance(minutes=10)
        fail(limiter, "recent@x.com", 1)
        clock.advance(minutes=6)
        fail(limiter, "now@x.com", 1)

        assert len(limiter) == 2
        assert limiter.failure_count("recent@x.com") == 1


@pytest.mark.unit
class TestLogging:
    """Tests for lockout logging."""

    def test_lockout_logged_once_without_full_email(
        self, limiter: LoginRateLimiter, caplog: pytest.LogCaptureFixture
    ) -> None:
        """Reaching the threshold logs a warning with a masked identifier."""
        with caplog.at_level("DEBUG", logger="houseconnect.rate_limiter"):
            fail(limiter, "alice@example.com", 6)

        warnings = [r for r in caplog.records if r.levelname == "WARNING"]
        assert len(warnings) == 1
        assert "a***@example.com" in warnings[0].getMessage()
        assert "alice@example.com" not in caplog.text
