# ride_dispatch/policy/matching.py
from collections.abc import Sequence
from dataclasses import dataclass

from ride_dispatch.app.protocols import MatchingPolicy
from ride_dispatch.domain.entities.driver import DriverProfile
from ride_dispatch.domain.entities.geography import Location


def rank_by_distance(drivers: Sequence[DriverProfile], pickup: Location) -> list[DriverProfile]:
    # sorted() is stable, so equal distances keep registration order
    return sorted(drivers, key=lambda d: pickup.distance_to(d.waiting_spot))


@dataclass
class NearestPriorityMatchingPolicy(MatchingPolicy):
    """Nearest priority-tier driver wins; the standard tier is only a fallback."""

    def rank(self, candidates: Sequence[DriverProfile], pickup: Location) -> list[DriverProfile]:
        priority = [d for d in candidates if d.is_priority]
        standard = [d for d in candidates if not d.is_priority]
        return rank_by_distance(priority, pickup) + rank_by_distance(standard, pickup)

    def select(self, candidates: Sequence[DriverProfile], pickup: Location) -> DriverProfile:
        ranked = self.rank(candidates, pickup)
        if not ranked:
            raise ValueError("no candidates to select from")
        return ranked[0]
