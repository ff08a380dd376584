# ride_dispatch/policy/pricing.py
from decimal import ROUND_HALF_UP, Decimal

import numpy as np

from ride_dispatch.app.protocols import PricingPolicy


class UniformFarePolicy(PricingPolicy):
    def __init__(
        self,
        rng: np.random.Generator,
        min_fare=Decimal("5"),
        max_fare=Decimal("20"),
        decimals: int = 2,
    ):
        self.rng = rng
        self.min_fare = Decimal(str(min_fare))
        self.max_fare = Decimal(str(max_fare))
        self.decimals = decimals

    def fare(self) -> Decimal:
        x = float(self.rng.uniform(float(self.min_fare), float(self.max_fare)))
        return Decimal(str(x)).quantize(Decimal(1).scaleb(-self.decimals), rounding=ROUND_HALF_UP)


class ConstantFarePolicy(PricingPolicy):
    def __init__(self, fare=Decimal("10.00")):
        self._fare = Decimal(str(fare))

    def fare(self) -> Decimal:
        return self._fare
