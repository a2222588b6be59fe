import logging
import math
import time
from typing import Optional

from fastapi import HTTPException, Request, status
from limits import parse
from limits.storage import MemoryStorage, Storage
from limits.strategies import FixedWindowRateLimiter

logger = logging.getLogger(__name__)


class RateLimitExceeded(Exception):
    def __init__(self, key: str, retry_after: int):
        super().__init__(f"Rate limit exceeded for {key}")
        self.key = key
        self.retry_after = retry_after


class RateLimiter:
    """
    Fixed-window request counter keyed by client (usually the IP address).

    `limit` is a rate string such as "100/minute" or "5/15 minutes". Counters
    live in a `limits` storage; the default MemoryStorage expires a key once
    its window has passed, is lost on restart and is not shared between
    workers.
    """

    def __init__(self, limit: str, storage: Optional[Storage] = None):
        self.item = parse(limit)
        self.storage = storage or MemoryStorage()
        self.strategy = FixedWindowRateLimiter(self.storage)

    def consume(self, key: str) -> int:
        """
        Count one request for `key` and return how many remain in the window.
        Raises RateLimitExceeded when the window is already exhausted.
        """
        allowed = self.strategy.hit(self.item, key)
        stats = self.strategy.get_window_stats(self.item, key)
        if not allowed:
            retry_after = max(1, math.ceil(stats.reset_time - time.time()))
            logger.warning("Rate limit exceeded for %s (%s)", key, self.item)
            raise RateLimitExceeded(key, retry_after)
        return stats.remaining

    def reset(self, key: Optional[str] = None) -> None:
        if key is None:
            self.storage.reset()
        else:
            self.strategy.clear(self.item, key)


def client_key(request: Request) -> str:
    return request.client.host if request.client else "unknown"


def rate_limit(request: Request) -> None:
    """Dependency applying the app-wide request limiter."""
    limiter: RateLimiter = request.app.state.rate_limiter
    try:
        limiter.consume(client_key(request))
    except RateLimitExceeded as e:
        raise HTTPException(
            status_code=status.HTTP_429_TOO_MANY_REQUESTS,
            detail="请求过于频繁，请稍后再试",
            headers={"Retry-After": str(e.retry_after)},
        )
