import logging
import time
import uuid
from typing import Optional

import redis
from fastapi import HTTPException, Request, status

from freshbox.core.config import settings
from freshbox.core.monitoring import monitoring

logger = logging.getLogger(__name__)

class RateLimiter:
    """Sliding window rate limiter backed by redis sorted sets"""

    def __init__(self, redis_url: Optional[str] = None, redis_client=None):
        self.redis_client = redis_client
        if self.redis_client is None and redis_url:
            self.redis_client = redis.Redis.from_url(redis_url, decode_responses=True)

    @property
    def enabled(self) -> bool:
        return self.redis_client is not None

    def is_allowed(self, identifier: str, max_requests: int = 10, window_seconds: int = 60) -> bool:
        """
        Check if request is allowed using sliding window algorithm
        Returns True if allowed, False if rate limited
        """
        if not self.enabled:
            return True

        now = time.time()
        key = f"rate_limit:{identifier}"

        try:
            # Remove old entries outside the window
            self.redis_client.zremrangebyscore(key, 0, now - window_seconds)

            if self.redis_client.zcard(key) >= max_requests:
                return False

            self.redis_client.zadd(key, {uuid.uuid4().hex: now})
            self.redis_client.expire(key, window_seconds)
            return True

        except redis.RedisError as e:
            logger.warning(f"Rate limiter unavailable, allowing request: {e}")
            return True  # fail open

# Global rate limiter instance
rate_limiter = RateLimiter(settings.REDIS_URL)


def limit_public_writes(request: Request):
    """Dependency for unauthenticated POST endpoints."""
    client = request.client.host if request.client else "unknown"
    allowed = rate_limiter.is_allowed(
        f"{request.url.path}:{client}",
        max_requests=settings.RATE_LIMIT_MAX_REQUESTS,
        window_seconds=settings.RATE_LIMIT_WINDOW_SECONDS,
    )
    if not allowed:
        monitoring.record_rate_limit(client)
        raise HTTPException(
            status_code=status.HTTP_429_TOO_MANY_REQUESTS,
            detail=f"Rate limit exceeded. Maximum {settings.RATE_LIMIT_MAX_REQUESTS} requests per {settings.RATE_LIMIT_WINDOW_SECONDS} seconds."
        )
