"""Rate limiter for API requests using token bucket algorithm.

The Giant Bomb API enforces a per-key request quota. Every outbound request
made by an ``Invoker`` first takes a token from its ``RateLimiter``:

- One token of capacity, so no bursts
- One token refilled every ``interval`` seconds
- Async-compatible (asyncio)
- Cancelling a waiting task does not consume a token

Example usage:
    limiter = RateLimiter(interval=31.0)

    async with limiter.acquire():
        response = await client.get(url)
"""

from __future__ import annotations

import asyncio
import logging
import time
from contextlib import asynccontextmanager
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import AsyncIterator

logger = logging.getLogger(__name__)

# Conservative spacing between requests; the upstream quota is undocumented.
DEFAULT_REQUEST_INTERVAL = 31.0


@dataclass
class TokenBucket:
    """Token bucket for rate limiting.

    The bucket gains one token every ``interval`` seconds up to a maximum
    capacity. Each request consumes one token. An interval of zero keeps the
    bucket permanently full.

    Attributes:
        capacity: Maximum number of tokens the bucket can hold
        interval: Seconds needed to refill a single token
        tokens: Current number of tokens available
        last_refill: Timestamp of last refill operation
    """

    capacity: float
    interval: float
    tokens: float = field(init=False)
    last_refill: float = field(init=False)

    def __post_init__(self) -> None:
        """Initialize the bucket with full tokens."""
        self.tokens = self.capacity
        self.last_refill = time.monotonic()

    def refill(self) -> None:
        """Refill tokens based on elapsed time."""
        now = time.monotonic()
        if self.interval <= 0:
            self.tokens = self.capacity
        else:
            elapsed = now - self.last_refill
            self.tokens = min(self.capacity, self.tokens + elapsed / self.interval)
        self.last_refill = now

    def try_consume(self) -> bool:
        """Try to consume one token.

        Returns:
            True if a token was consumed, False if no tokens available.
        """
        self.refill()
        if self.tokens >= 1.0:
            self.tokens -= 1.0
            return True
        return False

    def time_until_available(self) -> float:
        """Calculate time until at least one token is available.

        Returns:
            Seconds to wait, or 0.0 if a token is available now.
        """
        self.refill()
        if self.tokens >= 1.0 or self.interval <= 0:
            return 0.0
        return (1.0 - self.tokens) * self.interval


class RateLimiter:
    """Async-compatible single-token rate limiter.

    One limiter belongs to one ``Invoker``; it is never shared globally.

    Attributes:
        interval: Seconds between permitted requests
        burst_size: Token capacity (1 for the Giant Bomb quota)
    """

    def __init__(
        self,
        interval: float = DEFAULT_REQUEST_INTERVAL,
        burst_size: float = 1.0,
    ) -> None:
        """Initialize the rate limiter.

        Args:
            interval: Seconds between permitted requests. Zero disables waiting.
            burst_size: Maximum number of tokens held at once.
        """
        if interval < 0:
            raise ValueError("interval must not be negative")
        if burst_size < 1:
            raise ValueError("burst_size must be at least 1")

        self.interval = interval
        self.burst_size = burst_size

        # Guards the bucket across concurrent callers
        self._lock = asyncio.Lock()
        self._bucket = TokenBucket(capacity=burst_size, interval=interval)

    async def wait(self) -> float:
        """Wait until a request is allowed, then take the token.

        The lock is only held while inspecting the bucket, never while
        sleeping, so a cancelled waiter leaves the bucket untouched.

        Returns:
            Time waited in seconds
        """
        total_wait = 0.0

        while True:
            async with self._lock:
                if self._bucket.try_consume():
                    break
                wait_time = self._bucket.time_until_available()

            total_wait += wait_time
            await asyncio.sleep(wait_time)

        if total_wait:
            logger.debug("Rate limiter delayed request by %.2fs", total_wait)
        return total_wait

    @asynccontextmanager
    async def acquire(self) -> AsyncIterator[None]:
        """Context manager for rate-limited operations.

        Usage:
            async with limiter.acquire():
                await make_request()

        Yields:
            None after acquiring permission to proceed
        """
        await self.wait()
        yield

    @property
    def available_tokens(self) -> float:
        """Get the current number of available tokens (may be fractional)."""
        self._bucket.refill()
        return self._bucket.tokens

    def reset(self) -> None:
        """Reset the bucket to full capacity."""
        self._bucket.tokens = self._bucket.capacity
        self._bucket.last_refill = time.monotonic()
