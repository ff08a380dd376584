# ride_dispatch/domain/state.py
from dataclasses import dataclass, field
from decimal import Decimal
from enum import Enum

from ride_dispatch.domain.entities.driver import DriverProfile
from ride_dispatch.domain.entities.geography import Location
from ride_dispatch.domain.entities.rider import RiderProfile
from ride_dispatch.domain.errors import InvalidTransitionError


class RideStatus(str, Enum):
    PENDING = "pending"
    ACCEPTED = "accepted"
    DECLINED = "declined"
    DRIVER_EN_ROUTE = "driver_en_route"
    IN_TRANSIT = "in_transit"
    COMPLETED = "completed"
    FAILED = "failed"

    @property
    def terminal(self) -> bool:
        return not VALID_TRANSITIONS[self]


VALID_TRANSITIONS: dict[RideStatus, frozenset[RideStatus]] = {
    RideStatus.PENDING: frozenset({RideStatus.ACCEPTED, RideStatus.DECLINED}),
    RideStatus.ACCEPTED: frozenset({RideStatus.DRIVER_EN_ROUTE}),
    RideStatus.DRIVER_EN_ROUTE: frozenset({RideStatus.IN_TRANSIT}),
    RideStatus.IN_TRANSIT: frozenset({RideStatus.COMPLETED, RideStatus.FAILED}),
    RideStatus.DECLINED: frozenset(),
    RideStatus.COMPLETED: frozenset(),
    RideStatus.FAILED: frozenset(),
}


@dataclass(eq=False)
class RideRecord:
    ride_id: int
    rider: RiderProfile
    driver: DriverProfile
    pickup: Location
    dropoff: Location | str
    fare: Decimal
    status: RideStatus = RideStatus.PENDING
    requested_at: float | None = None
    matched_at: float | None = None
    started_at: float | None = None
    finished_at: float | None = None
    failure_reason: str | None = None

    def __post_init__(self):
        if self.fare < 0:
            raise ValueError(f"fare must be >= 0, got {self.fare}")

    def __setattr__(self, name, value):
        # fare is fixed at creation
        if name == "fare" and "fare" in self.__dict__:
            raise AttributeError("fare is immutable once the ride is created")
        super().__setattr__(name, value)

    @property
    def terminal(self) -> bool:
        return self.status.terminal

    def transition_to(self, new_status: RideStatus) -> None:
        if new_status not in VALID_TRANSITIONS[self.status]:
            raise InvalidTransitionError(
                f"ride {self.ride_id}: {self.status.value} -> {new_status.value} is not allowed"
            )
        self.status = new_status


@dataclass
class DispatchState:
    # dicts keep registration order, which is the ranking tie-break
    riders: dict[int, RiderProfile] = field(default_factory=dict)
    drivers: dict[int, DriverProfile] = field(default_factory=dict)
    rides: list[RideRecord] = field(default_factory=list)

    # driver_id -> ride_id of the driver's non-terminal ride
    engaged: dict[int, int] = field(default_factory=dict)

    def add_rider(self, r: RiderProfile) -> None:
        self.riders[r.id] = r

    def add_driver(self, d: DriverProfile) -> None:
        self.drivers[d.id] = d

    def ride(self, ride_id: int) -> RideRecord:
        return self.rides[ride_id - 1]

    def free_on_duty_drivers(self) -> list[DriverProfile]:
        return [d for d in self.drivers.values() if d.on_duty and d.id not in self.engaged]

    def engage(self, ride: RideRecord) -> None:
        self.engaged[ride.driver.id] = ride.ride_id

    def release(self, ride: RideRecord) -> None:
        if self.engaged.get(ride.driver.id) == ride.ride_id:
            del self.engaged[ride.driver.id]
