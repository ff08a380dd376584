# tests/app/test_matching.py
from ride_dispatch.domain.entities.geography import Location
from ride_dispatch.policy.matching import NearestPriorityMatchingPolicy
from ride_dispatch.runtime.account_factory import AccountFactory


def drivers(*specs):
    """specs: (role, waiting_spot) pairs, registered in order."""
    f = AccountFactory()
    return [
        f.create(role, f"d{i}", True, 100, waiting_spot=spot)
        for i, (role, spot) in enumerate(specs)
    ]


def test_priority_beats_any_standard_driver_regardless_of_distance():
    ds = drivers(("driver", 45), ("priority_driver", 100), ("driver", 44))
    picked = NearestPriorityMatchingPolicy().select(ds, Location(name="Stadium", coordinate=45))
    assert picked is ds[1]


def test_nearest_priority_driver_wins_within_tier():
    ds = drivers(("priority_driver", 0), ("priority_driver", 60), ("driver", 50))
    picked = NearestPriorityMatchingPolicy().select(ds, Location(name="Mall", coordinate=50))
    assert picked is ds[1]


def test_nearest_standard_driver_when_no_priority_tier():
    ds = drivers(("driver", 10), ("driver", 70), ("driver", 35))
    picked = NearestPriorityMatchingPolicy().select(ds, Location(name="Park", coordinate=40))
    assert picked is ds[2]


def test_equal_distance_resolves_to_earliest_registered():
    ds = drivers(("driver", 60), ("driver", 40), ("driver", 60))
    picked = NearestPriorityMatchingPolicy().select(ds, Location(name="Mall", coordinate=50))
    assert picked is ds[0]


def test_rank_lists_priority_tier_first_then_standard_by_distance():
    ds = drivers(("driver", 50), ("priority_driver", 90), ("driver", 20), ("priority_driver", 55))
    ranked = NearestPriorityMatchingPolicy().rank(ds, Location(name="X", coordinate=50))
    assert ranked == [ds[3], ds[1], ds[0], ds[2]]


def test_float_coordinates_work():
    ds = drivers(("driver", 10), ("driver", 11))
    picked = NearestPriorityMatchingPolicy().select(ds, Location(name="X", coordinate=10.6))
    assert picked is ds[1]
