# domain/entities/driver.py
import logging
from dataclasses import dataclass, field
from decimal import Decimal
from enum import Enum

logger = logging.getLogger(__name__)


class DriverRole(str, Enum):
    DRIVER = "driver"
    PRIORITY_DRIVER = "priority_driver"


@dataclass(frozen=True)
class Payout:
    fare: Decimal
    commission: Decimal
    paid: Decimal


@dataclass(eq=False)
class DriverProfile:
    id: int
    name: str
    on_duty: bool
    balance: Decimal
    waiting_spot: float
    role: DriverRole = DriverRole.DRIVER
    commission_rate: Decimal = Decimal("0.05")
    inbox: list[str] = field(default_factory=list)

    @property
    def is_priority(self) -> bool:
        return self.role is DriverRole.PRIORITY_DRIVER

    def go_on_duty(self) -> None:
        self.on_duty = True

    def go_off_duty(self) -> None:
        self.on_duty = False

    def receive_fare(self, fare: Decimal) -> Payout:
        commission = fare * self.commission_rate
        paid = fare - commission
        self.balance += paid
        logger.info(
            "fare_received",
            extra={
                "extra": {
                    "driver_id": self.id,
                    "amount": str(paid),
                    "commission": str(commission),
                }
            },
        )
        return Payout(fare=fare, commission=commission, paid=paid)

    def on_notify(self, message: str) -> None:
        self.inbox.append(message)
