from collections.abc import Sequence
from decimal import Decimal
from typing import Protocol, runtime_checkable

from ride_dispatch.domain.entities.driver import DriverProfile
from ride_dispatch.domain.entities.geography import Location


# ------------- Accounts --------------------
@runtime_checkable
class Account(Protocol):
    """
    Capability shared by every balance holder.
    Riders implement deduct_fare, drivers receive_fare; both get on_notify.
    """

    id: int
    name: str
    balance: Decimal

    def on_notify(self, message: str) -> None: ...


@runtime_checkable
class Payer(Account, Protocol):
    def deduct_fare(self, fare: Decimal): ...


@runtime_checkable
class Payee(Account, Protocol):
    def receive_fare(self, fare: Decimal): ...


# ------------- Services --------------------
@runtime_checkable
class LatencyProvider(Protocol):
    """
    Simulated delays in seconds. They only move events along the kernel
    timeline and never feed back into decisions.
    """

    def search_delay(self) -> float: ...
    def pickup_delay(self) -> float: ...
    def ride_delay(self) -> float: ...


# --------------- Policies -------------------------


@runtime_checkable
class MatchingPolicy(Protocol):
    def select(self, candidates: Sequence[DriverProfile], pickup: Location) -> DriverProfile: ...


@runtime_checkable
class PricingPolicy(Protocol):
    def fare(self) -> Decimal: ...


@runtime_checkable
class AcceptancePolicy(Protocol):
    def accepts(self, driver: DriverProfile, ride) -> bool: ...
