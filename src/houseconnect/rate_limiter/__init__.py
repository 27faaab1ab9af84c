"""Rate Limiter - In-memory lockout of identifiers after repeated login failures."""

from houseconnect.rate_limiter.limiter import LoginRateLimiter
from houseconnect.rate_limiter.models import AttemptRecord

__all__ = [
    "AttemptRecord",
    "LoginRateLimiter",
]
