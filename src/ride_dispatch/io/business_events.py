# ride_dispatch/io/business_events.py

from dataclasses import dataclass


# Analytics records (not scheduled in the kernel!)
@dataclass
class BizEvent:
    run_id: str
    t: float  # simulation time
    name: str  # stable event name


@dataclass
class RideRequestedBiz(BizEvent):
    rider_id: int
    pickup: str
    coordinate: float


@dataclass
class RequestRejectedBiz(BizEvent):
    rider_id: int
    reason: str
    error: str


@dataclass
class RideMatchedBiz(BizEvent):
    ride_id: int
    rider_id: int
    driver_id: int
    fare: str
    distance: float
    search_s: float


@dataclass
class RideDeclinedBiz(BizEvent):
    ride_id: int
    rider_id: int
    driver_id: int


@dataclass
class RideSettledBiz(BizEvent):
    ride_id: int
    rider_id: int
    driver_id: int
    fare: str
    charged: str
    saved: str
    commission: str
    payout: str


@dataclass
class RideFailedBiz(BizEvent):
    ride_id: int
    rider_id: int
    driver_id: int
    reason: str
