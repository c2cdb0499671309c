"""
Per-role request rate limiting.

Limits are built once from Settings into an explicit {role: RateLimitItem} map
and stored on app.state, so every request shares one counter store. Counters
are keyed by role and client address using a moving window.
"""

import logging
import math
import time

from limits import RateLimitItem, parse
from limits.storage import MemoryStorage
from limits.strategies import MovingWindowRateLimiter

from acquisitions.core.config import Settings
from acquisitions.core.errors import ErrorKind, ServiceError

logger = logging.getLogger(__name__)

GUEST_ROLE = "guest"


class RateLimitExceeded(ServiceError):
    """Raised when a client exceeds the request limit for its role."""

    def __init__(self, message: str, retry_after: int) -> None:
        super().__init__(ErrorKind.RATE_LIMITED, message)
        self.retry_after = retry_after


def _describe(item: RateLimitItem) -> str:
    unit = item.GRANULARITY.name
    period = unit if item.multiples == 1 else f"{item.multiples} {unit}s"
    return f"{item.amount} requests per {period}"


class RoleRateLimiter:
    """Moving-window limiter with one limit per role; unknown roles fall back to guest."""

    def __init__(self, limits_by_role: dict[str, RateLimitItem]) -> None:
        if GUEST_ROLE not in limits_by_role:
            raise ValueError("A guest rate limit is required")
        self.limits_by_role = dict(limits_by_role)
        self._storage = MemoryStorage()
        self._strategy = MovingWindowRateLimiter(self._storage)

    @classmethod
    def from_settings(cls, settings: Settings) -> "RoleRateLimiter":
        return cls(
            {
                "admin": parse(settings.RATE_LIMIT_ADMIN),
                "user": parse(settings.RATE_LIMIT_USER),
                GUEST_ROLE: parse(settings.RATE_LIMIT_GUEST),
            }
        )

    def limit_for(self, role: str | None) -> tuple[str, RateLimitItem]:
        if role in self.limits_by_role:
            return role, self.limits_by_role[role]
        return GUEST_ROLE, self.limits_by_role[GUEST_ROLE]

    def message_for(self, role: str | None) -> str:
        role, item = self.limit_for(role)
        return f"{role.capitalize()} request limit exceeded ({_describe(item)}). Slow down."

    def hit(self, role: str | None, client_key: str) -> None:
        """Count one request; raise RateLimitExceeded when the role's window is full."""
        role, item = self.limit_for(role)
        if self._strategy.hit(item, role, client_key):
            return
        stats = self._strategy.get_window_stats(item, role, client_key)
        retry_after = max(1, math.ceil(stats.reset_time - time.time()))
        logger.warning(
            "Rate limit exceeded",
            extra={"role": role, "client": client_key, "limit": str(item)},
        )
        raise RateLimitExceeded(self.message_for(role), retry_after)

    def reset(self) -> None:
        """Drop all counters (used between tests and on config reload)."""
        self._storage.reset()
