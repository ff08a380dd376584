# ride_dispatch/app/controllers/rides.py
import logging

from ride_dispatch.app.events import RideFinished, RideStarted
from ride_dispatch.app.notifications import NotificationHub
from ride_dispatch.app.protocols import LatencyProvider
from ride_dispatch.domain.errors import DispatchError, InvalidTransitionError
from ride_dispatch.domain.settlement import Settlement, settle
from ride_dispatch.domain.state import DispatchState, RideRecord, RideStatus
from ride_dispatch.io.business_events import RideFailedBiz, RideSettledBiz
from ride_dispatch.io.recorder import Recorder

logger = logging.getLogger(__name__)


def _expect(ride: RideRecord, status: RideStatus) -> None:
    if ride.status is not status:
        raise InvalidTransitionError(
            f"ride {ride.ride_id} is {ride.status.value}, expected {status.value}"
        )


class RideHandler:
    """Runs an accepted ride from driver_en_route to a terminal status."""

    def __init__(
        self,
        state: DispatchState,
        hub: NotificationHub,
        latency: LatencyProvider,
        recorder: Recorder | None = None,
        run_id: str = "local",
    ):
        self.state = state
        self.hub = hub
        self.latency = latency
        self.recorder = recorder
        self.run_id = run_id

    def begin(self, ride: RideRecord, now: float) -> list[RideStarted]:
        """Events that take a ride already en route to the pickup."""
        _expect(ride, RideStatus.DRIVER_EN_ROUTE)
        return [RideStarted(t=now + self.latency.pickup_delay(), ride_id=ride.ride_id)]

    # ------------ event handlers --------------

    def on_ride_started(self, ev: RideStarted):
        ride = self.state.ride(ev.ride_id)
        ride.transition_to(RideStatus.IN_TRANSIT)
        ride.started_at = ev.t
        self.hub.notify(
            [ride.rider, ride.driver], f"Ride from {ride.pickup} to {ride.dropoff} has started!"
        )
        return [RideFinished(t=ev.t + self.latency.ride_delay(), ride_id=ride.ride_id)]

    def on_ride_finished(self, ev: RideFinished):
        ride = self.state.ride(ev.ride_id)
        _expect(ride, RideStatus.IN_TRANSIT)
        ride.finished_at = ev.t
        self.hub.notify(
            [ride.rider, ride.driver], f"Ride from {ride.pickup} to {ride.dropoff} is complete!"
        )
        try:
            self.settle(ride, ev.t)
        finally:
            self.state.release(ride)
        return []

    # ------------ settlement --------------

    def settle(self, ride: RideRecord, now: float) -> Settlement | None:
        """Charge the rider and pay the driver. A DispatchError fails the ride."""
        try:
            receipt = settle(ride.rider, ride.driver, ride.fare)
        except DispatchError as err:
            ride.failure_reason = err.message
            ride.transition_to(RideStatus.FAILED)
            self.hub.notify([ride.rider], f"Payment failed: {err.message}")
            logger.warning(
                "settlement_failed",
                extra={
                    "extra": {
                        "ride_id": ride.ride_id,
                        "t": now,
                        "reason": type(err).__name__,
                        **err.details,
                    }
                },
            )
            self._biz(
                RideFailedBiz(
                    run_id=self.run_id,
                    t=now,
                    name="RideFailed",
                    ride_id=ride.ride_id,
                    rider_id=ride.rider.id,
                    driver_id=ride.driver.id,
                    reason=err.message,
                )
            )
            return None

        ride.transition_to(RideStatus.COMPLETED)
        self._biz(
            RideSettledBiz(
                run_id=self.run_id,
                t=now,
                name="RideSettled",
                ride_id=ride.ride_id,
                rider_id=ride.rider.id,
                driver_id=ride.driver.id,
                fare=str(ride.fare),
                charged=str(receipt.charge.charged),
                saved=str(receipt.charge.saved),
                commission=str(receipt.payout.commission),
                payout=str(receipt.payout.paid),
            )
        )
        return receipt

    def _biz(self, ev) -> None:
        if self.recorder:
            self.recorder.emit(ev)
