"""Randomized placeholder metrics for sources that do not expose them."""
import random


class PlaceholderMetrics:
    """Plausible filler values drawn from an injectable random source.

    Sources such as scraped listing pages only expose a name; the dashboard
    still needs participants, followers and similar figures to rank them.
    Seed the `rng` for reproducible values in tests.
    """

    def __init__(self, rng: random.Random | None = None) -> None:
        self._rng = rng or random.Random()

    def between(self, low: int, high: int) -> int:
        """Integer in [low, high]."""
        return self._rng.randint(low, high)

    def uniform(self, low: float, high: float) -> float:
        return self._rng.uniform(low, high)

    def time_remaining(self, max_days: int) -> str:
        """Countdown label like '12d 5h' with 1..max_days days."""
        return f"{self.between(1, max_days)}d {self.between(0, 23)}h"
