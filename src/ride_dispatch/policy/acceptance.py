# ride_dispatch/policy/acceptance.py
import numpy as np

from ride_dispatch.app.protocols import AcceptancePolicy
from ride_dispatch.domain.entities.driver import DriverProfile


class BernoulliAcceptancePolicy(AcceptancePolicy):
    def __init__(self, rng: np.random.Generator, p_accept: float = 0.7):
        self.rng = rng
        self.p_accept = p_accept

    def accepts(self, driver: DriverProfile, ride) -> bool:
        return bool(self.rng.random() < self.p_accept)


class FixedAcceptancePolicy(AcceptancePolicy):
    """Always answers the same; used for tests and for forced scenarios."""

    def __init__(self, accept: bool = True):
        self.accept = accept

    def accepts(self, driver: DriverProfile, ride) -> bool:
        return self.accept
