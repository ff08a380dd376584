# app/events.py
from dataclasses import dataclass

from ride_dispatch.sim.event import BaseEvent


# Ride lifecycle
@dataclass(order=True)
class RideStarted(BaseEvent):
    """Driver reached the pickup; driver_en_route -> in_transit."""

    ride_id: int


@dataclass(order=True)
class RideFinished(BaseEvent):
    """Ride duration elapsed; settle and close the ride."""

    ride_id: int
