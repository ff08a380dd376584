# ride_dispatch/app/controllers/dispatch.py
import logging

from ride_dispatch.app.controllers.rides import RideHandler
from ride_dispatch.app.notifications import NotificationHub
from ride_dispatch.app.protocols import (
    AcceptancePolicy,
    LatencyProvider,
    MatchingPolicy,
    PricingPolicy,
)
from ride_dispatch.domain.entities.driver import DriverProfile, DriverRole
from ride_dispatch.domain.entities.geography import Location, coerce_location
from ride_dispatch.domain.entities.rider import RiderProfile, RiderRole
from ride_dispatch.domain.errors import (
    DispatchError,
    InvalidRoleError,
    NoDriversError,
    NoOnDutyDriversError,
)
from ride_dispatch.domain.state import DispatchState, RideRecord, RideStatus
from ride_dispatch.io.business_events import (
    RequestRejectedBiz,
    RideDeclinedBiz,
    RideMatchedBiz,
    RideRequestedBiz,
)
from ride_dispatch.io.recorder import Recorder
from ride_dispatch.runtime.account_factory import AccountFactory
from ride_dispatch.sim.kernel import Kernel

logger = logging.getLogger(__name__)

_RIDER_TAGS = {r.value for r in RiderRole}
_DRIVER_TAGS = {r.value for r in DriverRole}


class DispatchEngine:
    """
    Owns the rider/driver registries and the ride history.

    request_ride() matches, prices and offers synchronously, then hands
    accepted rides to the RideHandler through the kernel. The caller runs
    the kernel to let rides finish.
    """

    def __init__(
        self,
        *,
        kernel: Kernel,
        state: DispatchState,
        hub: NotificationHub,
        factory: AccountFactory,
        matching: MatchingPolicy,
        pricing: PricingPolicy,
        acceptance: AcceptancePolicy,
        latency: LatencyProvider,
        rides: RideHandler,
        recorder: Recorder | None = None,
        run_id: str = "local",
    ):
        self.kernel = kernel
        self.state = state
        self.hub = hub
        self.factory = factory
        self.matching = matching
        self.pricing = pricing
        self.acceptance = acceptance
        self.latency = latency
        self.rides = rides
        self.recorder = recorder
        self.run_id = run_id

    @property
    def history(self) -> list[RideRecord]:
        return self.state.rides

    # ------------ registration --------------

    def register_rider(self, role: str, name: str, payment_method: str, balance) -> RiderProfile:
        if str(role).strip().lower() not in _RIDER_TAGS:
            raise InvalidRoleError(f"Invalid rider role: {role}")
        rider = self.factory.create(role, name, payment_method, balance)
        self.state.add_rider(rider)
        self.hub.subscribe(rider)
        return rider

    def register_driver(
        self, role: str, name: str, on_duty: bool, balance, *, waiting_spot: float | None = None
    ) -> DriverProfile:
        if str(role).strip().lower() not in _DRIVER_TAGS:
            raise InvalidRoleError(f"Invalid driver role: {role}")
        driver = self.factory.create(role, name, on_duty, balance, waiting_spot=waiting_spot)
        self.state.add_driver(driver)
        self.hub.subscribe(driver)
        return driver

    # ------------ matching --------------

    def candidates(self) -> list[DriverProfile]:
        if not self.state.drivers:
            raise NoDriversError("No available drivers.")
        free = self.state.free_on_duty_drivers()
        if not free:
            raise NoOnDutyDriversError(
                "No on-duty drivers available.",
                details={"registered": len(self.state.drivers), "engaged": len(self.state.engaged)},
            )
        return free

    def match_driver(self, pickup) -> tuple[Location, DriverProfile]:
        """Validate the pickup and pick a driver. Raises DispatchError."""
        loc = coerce_location(pickup)
        return loc, self.matching.select(self.candidates(), loc)

    def request_ride(self, rider: RiderProfile, pickup, dropoff) -> RideRecord | None:
        now = self.kernel.now
        try:
            loc = coerce_location(pickup)
            candidates = self.candidates()
        except DispatchError as err:
            self._reject(rider, err, now)
            return None

        self._biz(
            RideRequestedBiz(
                run_id=self.run_id,
                t=now,
                name="RideRequested",
                rider_id=rider.id,
                pickup=loc.name,
                coordinate=float(loc.coordinate),
            )
        )
        self.hub.notify([rider], f"Searching for the best available driver near {loc.name}...")

        # search latency shifts the timeline only
        search_s = self.latency.search_delay()
        driver = self.matching.select(candidates, loc)
        matched_at = now + search_s

        ride = RideRecord(
            ride_id=len(self.state.rides) + 1,
            rider=rider,
            driver=driver,
            pickup=loc,
            dropoff=dropoff,
            fare=self.pricing.fare(),
            requested_at=now,
            matched_at=matched_at,
        )
        self.state.rides.append(ride)
        logger.info(
            "ride_matched",
            extra={
                "extra": {
                    "ride_id": ride.ride_id,
                    "rider_id": rider.id,
                    "driver_id": driver.id,
                    "fare": str(ride.fare),
                    "t": matched_at,
                }
            },
        )
        self._biz(
            RideMatchedBiz(
                run_id=self.run_id,
                t=matched_at,
                name="RideMatched",
                ride_id=ride.ride_id,
                rider_id=rider.id,
                driver_id=driver.id,
                fare=str(ride.fare),
                distance=float(loc.distance_to(driver.waiting_spot)),
                search_s=search_s,
            )
        )
        self.hub.notify(
            [rider, driver],
            f"New ride created: From {loc.name} to {dropoff}. Cost: ${ride.fare}",
        )

        if self.acceptance.accepts(driver, ride):
            ride.transition_to(RideStatus.ACCEPTED)
            self.hub.notify([rider], "Driver is on the way!")
            ride.transition_to(RideStatus.DRIVER_EN_ROUTE)
            self.state.engage(ride)
            for ev in self.rides.begin(ride, matched_at):
                self.kernel.schedule(ev)
        else:
            ride.transition_to(RideStatus.DECLINED)
            self.hub.notify([rider], "No driver accepted your ride.")
            logger.info(
                "ride_declined",
                extra={"extra": {"ride_id": ride.ride_id, "driver_id": driver.id}},
            )
            self._biz(
                RideDeclinedBiz(
                    run_id=self.run_id,
                    t=matched_at,
                    name="RideDeclined",
                    ride_id=ride.ride_id,
                    rider_id=rider.id,
                    driver_id=driver.id,
                )
            )
        return ride

    # ------------ helpers --------------

    def _reject(self, rider: RiderProfile, err: DispatchError, now: float) -> None:
        self.hub.notify([rider], err.message)
        logger.warning(
            "ride_request_rejected",
            extra={
                "extra": {
                    "rider_id": rider.id,
                    "reason": type(err).__name__,
                    "error": err.message,
                    **err.details,
                }
            },
        )
        self._biz(
            RequestRejectedBiz(
                run_id=self.run_id,
                t=now,
                name="RequestRejected",
                rider_id=rider.id,
                reason=type(err).__name__,
                error=err.message,
            )
        )

    def _biz(self, ev) -> None:
        if self.recorder:
            self.recorder.emit(ev)
