# domain/entities/rider.py
import logging
from dataclasses import dataclass, field
from decimal import Decimal
from enum import Enum

from ride_dispatch.domain.errors import InsufficientFundsError

logger = logging.getLogger(__name__)


class RiderRole(str, Enum):
    RIDER = "rider"
    PREMIUM_RIDER = "premium_rider"


@dataclass(frozen=True)
class Charge:
    fare: Decimal
    charged: Decimal
    saved: Decimal


@dataclass(eq=False)
class RiderProfile:
    id: int
    name: str
    payment_method: str
    balance: Decimal
    role: RiderRole = RiderRole.RIDER
    discount_rate: Decimal = Decimal("0")
    inbox: list[str] = field(default_factory=list)

    @property
    def is_premium(self) -> bool:
        return self.role is RiderRole.PREMIUM_RIDER

    def charge_for(self, fare: Decimal) -> Decimal:
        return fare * (1 - self.discount_rate)

    def deduct_fare(self, fare: Decimal) -> Charge:
        """Take the (possibly discounted) fare from the balance.

        Raises InsufficientFundsError without touching the balance when it
        does not cover the charge.
        """
        charged = self.charge_for(fare)
        if self.balance < charged:
            raise InsufficientFundsError(
                "Insufficient funds. Ride declined.",
                details={"rider_id": self.id, "balance": str(self.balance), "charge": str(charged)},
            )
        self.balance -= charged
        saved = fare - charged
        logger.info(
            "fare_paid",
            extra={
                "extra": {
                    "rider_id": self.id,
                    "amount": str(charged),
                    "payment_method": self.payment_method,
                    "saved": str(saved),
                }
            },
        )
        return Charge(fare=fare, charged=charged, saved=saved)

    def on_notify(self, message: str) -> None:
        self.inbox.append(message)
