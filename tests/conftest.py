"""Shared pytest fixtures and configuration."""

from datetime import UTC, datetime, timedelta

import pytest

from houseconnect.account_store import AccountStores
from houseconnect.credentials import BcryptPasswordVerifier


# Register custom markers
def pytest_configure(config: pytest.Config) -> None:
    """Register custom markers for test categorization."""
    config.addinivalue_line("markers", "unit: fast tests with no external dependencies")
    config.addinivalue_line("markers", "integration: component interaction tests")


class FakeClock:
    """Manually advanced clock for time-dependent tests."""

    def __init__(self, start: datetime | None = None) -> None:
        self.now = start or datetime(2026, 1, 1, 12, 0, tzinfo=UTC)

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs: float) -> None:
        self.now += timedelta(**kwargs)


# Shared fixtures


@pytest.fixture
def clock() -> FakeClock:
    """A clock that only moves when told to."""
    return FakeClock()


@pytest.fixture(scope="session")
def verifier() -> BcryptPasswordVerifier:
    """Low-cost bcrypt verifier so tests stay fast."""
    return BcryptPasswordVerifier(rounds=4)


@pytest.fixture
def stores():
    """In-memory account stores."""
    s = AccountStores.open(":memory:")
    yield s
    s.close()
