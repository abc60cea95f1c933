"""Token bucket used to space requests to a rate-limited source."""
import asyncio
import time
from dataclasses import dataclass


@dataclass(slots=True)
class _BucketState:
    capacity: float
    refill_rate: float
    tokens: float
    updated_at: float


class TokenBucket:
    """Token bucket limiting coroutine throughput.

    With capacity 1 and refill_rate 1/spacing, consecutive acquires are at
    least `spacing` seconds apart and the first one is immediate.
    """

    __slots__ = ("_state", "_lock")

    def __init__(self, *, capacity: float, refill_rate: float) -> None:
        if capacity <= 0 or refill_rate <= 0:
            raise ValueError("capacity and refill_rate must be positive")
        self._state = _BucketState(
            capacity=float(capacity),
            refill_rate=float(refill_rate),
            tokens=float(capacity),
            updated_at=time.monotonic(),
        )
        self._lock = asyncio.Lock()

    @classmethod
    def spaced(cls, seconds: float) -> "TokenBucket | None":
        """Bucket allowing one request per `seconds`; None when spacing is disabled."""
        if seconds <= 0:
            return None
        return cls(capacity=1.0, refill_rate=1.0 / seconds)

    @property
    def capacity(self) -> float:
        return self._state.capacity

    @property
    def refill_rate(self) -> float:
        return self._state.refill_rate

    def _refill(self, now: float) -> None:
        elapsed = max(0.0, now - self._state.updated_at)
        if elapsed:
            self._state.tokens = min(
                self._state.capacity,
                self._state.tokens + elapsed * self._state.refill_rate,
            )
            self._state.updated_at = now

    async def acquire(self, amount: float = 1.0) -> float:
        """Wait until `amount` tokens are available; returns seconds waited."""
        if amount <= 0:
            return 0.0
        waited = 0.0
        while True:
            async with self._lock:
                now = time.monotonic()
                self._refill(now)
                if self._state.tokens >= amount:
                    self._state.tokens -= amount
                    return waited
                wait = (amount - self._state.tokens) / self._state.refill_rate
            await asyncio.sleep(wait)
            waited += wait

    def snapshot(self) -> dict[str, float]:
        self._refill(time.monotonic())
        return {
            "capacity": self._state.capacity,
            "tokens": self._state.tokens,
            "refill_rate": self._state.refill_rate,
        }
