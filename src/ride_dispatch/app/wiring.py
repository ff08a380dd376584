# ride_dispatch/app/wiring.py
from ride_dispatch.app.controllers.rides import RideHandler
from ride_dispatch.app.events import RideFinished, RideStarted
from ride_dispatch.sim.kernel import Kernel


def wire(kernel: Kernel, *, rides: RideHandler) -> None:
    k = kernel

    # driver_en_route -> in_transit, then schedules RideFinished
    k.on(RideStarted, rides.on_ride_started)
    # in_transit -> completed | failed, releases the driver
    k.on(RideFinished, rides.on_ride_finished)
