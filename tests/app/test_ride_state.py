# tests/app/test_ride_state.py
from decimal import Decimal

import pytest

from ride_dispatch.domain.entities.geography import Location, coerce_location
from ride_dispatch.domain.errors import InvalidPickupError, InvalidTransitionError
from ride_dispatch.domain.state import VALID_TRANSITIONS, RideRecord, RideStatus
from ride_dispatch.runtime.account_factory import AccountFactory

S = RideStatus


def new_ride(fare="12.34"):
    f = AccountFactory()
    return RideRecord(
        ride_id=1,
        rider=f.create("rider", "Alice", "Cash", 50),
        driver=f.create("driver", "Dan", True, 100, waiting_spot=5),
        pickup=Location(name="Mall", coordinate=50),
        dropoff="Park",
        fare=Decimal(fare),
    )


def test_happy_path_walks_every_state():
    ride = new_ride()
    assert ride.status is S.PENDING
    for nxt in (S.ACCEPTED, S.DRIVER_EN_ROUTE, S.IN_TRANSIT, S.COMPLETED):
        ride.transition_to(nxt)
    assert ride.status is S.COMPLETED and ride.terminal


def test_decline_is_terminal():
    ride = new_ride()
    ride.transition_to(S.DECLINED)
    assert ride.terminal
    with pytest.raises(InvalidTransitionError):
        ride.transition_to(S.ACCEPTED)


@pytest.mark.parametrize(
    "path, bad",
    [
        ([], S.IN_TRANSIT),
        ([], S.COMPLETED),
        ([S.ACCEPTED], S.IN_TRANSIT),
        ([S.ACCEPTED, S.DRIVER_EN_ROUTE], S.FAILED),
        ([S.ACCEPTED, S.DRIVER_EN_ROUTE, S.IN_TRANSIT, S.FAILED], S.COMPLETED),
    ],
)
def test_skipping_or_leaving_terminal_states_raises(path, bad):
    ride = new_ride()
    for s in path:
        ride.transition_to(s)
    before = ride.status
    with pytest.raises(InvalidTransitionError):
        ride.transition_to(bad)
    assert ride.status is before


def test_terminal_set():
    assert {s for s in S if s.terminal} == {S.DECLINED, S.COMPLETED, S.FAILED}
    assert set(VALID_TRANSITIONS) == set(S)


def test_fare_is_set_once():
    ride = new_ride()
    with pytest.raises(AttributeError):
        ride.fare = Decimal("1")
    assert ride.fare == Decimal("12.34")


def test_negative_fare_rejected():
    with pytest.raises(ValueError):
        new_ride(fare="-1")


@pytest.mark.parametrize(
    "pickup",
    [
        "Mall",
        None,
        {"name": "Mall"},
        {"coordinates": 20},
        {"name": 5, "coordinates": 20},
        {"name": "Mall", "coordinates": "20"},
        {"name": "Mall", "coordinates": True},
    ],
)
def test_invalid_pickups(pickup):
    with pytest.raises(InvalidPickupError):
        coerce_location(pickup)


def test_pickup_mapping_accepts_either_coordinate_key():
    loc = coerce_location({"name": "Mall", "coordinates": 50})
    assert loc == Location(name="Mall", coordinate=50)
    assert coerce_location({"name": "Mall", "coordinate": 1.5}).coordinate == 1.5
