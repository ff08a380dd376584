from datetime import UTC, datetime

from ride_dispatch.sim.clock import SimClock, minutes


def test_to_wall_offsets_from_epoch():
    clock = SimClock.utc_epoch(2025, 1, 1, 8, 0, 0)
    assert clock.to_wall(minutes(90)) == datetime(2025, 1, 1, 9, 30, tzinfo=UTC)


def test_to_sim_treats_naive_as_utc():
    clock = SimClock.utc_epoch(2025, 1, 1)
    assert clock.to_sim(datetime(2025, 1, 1, 0, 0, 6)) == 6.0
    assert clock.to_sim(datetime(2025, 1, 1, 0, 1, tzinfo=UTC)) == 60.0
