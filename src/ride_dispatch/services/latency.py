# ride_dispatch/services/latency.py
import numpy as np

from ride_dispatch.app.protocols import LatencyProvider


class FixedLatency(LatencyProvider):
    def __init__(self, search_s: float = 3.0, pickup_s: float = 0.0, ride_s: float = 3.0):
        self.search_s = search_s
        self.pickup_s = pickup_s
        self.ride_s = ride_s

    def search_delay(self) -> float:
        return self.search_s

    def pickup_delay(self) -> float:
        return self.pickup_s

    def ride_delay(self) -> float:
        return self.ride_s


class WindowLatency(LatencyProvider):
    """Every delay is an independent uniform draw from [min_s, max_s]."""

    def __init__(self, rng: np.random.Generator, min_s: float = 1.0, max_s: float = 5.0):
        self.rng = rng
        self.min_s = min_s
        self.max_s = max_s

    def _draw(self) -> float:
        return float(self.rng.uniform(self.min_s, self.max_s))

    def search_delay(self) -> float:
        return self._draw()

    def pickup_delay(self) -> float:
        return self._draw()

    def ride_delay(self) -> float:
        return self._draw()
