# ride_dispatch/domain/settlement.py
from dataclasses import dataclass
from decimal import Decimal

from ride_dispatch.app.protocols import Payee, Payer
from ride_dispatch.domain.entities.driver import Payout
from ride_dispatch.domain.entities.rider import Charge


@dataclass(frozen=True)
class Settlement:
    charge: Charge
    payout: Payout


def settle(rider: Payer, driver: Payee, fare: Decimal) -> Settlement:
    """Charge the rider, then pay the driver.

    Payout cannot fail, so a successful deduction always ends in a payout.
    If the deduction raises, the driver is not paid and nothing changed.
    """
    charge = rider.deduct_fare(fare)
    payout = driver.receive_fare(fare)
    return Settlement(charge=charge, payout=payout)
