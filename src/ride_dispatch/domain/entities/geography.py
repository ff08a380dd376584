from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel, ConfigDict, StrictFloat, StrictInt, StrictStr, ValidationError

from ride_dispatch.domain.errors import InvalidPickupError


class Location(BaseModel):
    """Named point on the 1-D service line."""

    model_config = ConfigDict(frozen=True, extra="ignore")
    name: StrictStr
    coordinate: StrictInt | StrictFloat

    def distance_to(self, coordinate: float) -> float:
        return abs(self.coordinate - coordinate)

    def __str__(self) -> str:
        return self.name


def coerce_location(obj: Any) -> Location:
    """Accept a Location or a mapping with name + coordinate(s).

    Raises InvalidPickupError for anything else.
    """
    if isinstance(obj, Location):
        return obj
    if not isinstance(obj, Mapping):
        raise InvalidPickupError(
            "Invalid pickup location. Must have a name and a numeric coordinate.",
            details={"got": type(obj).__name__},
        )
    data = dict(obj)
    if "coordinates" in data and "coordinate" not in data:
        data["coordinate"] = data.pop("coordinates")
    try:
        return Location.model_validate(data)
    except ValidationError as exc:
        raise InvalidPickupError(
            "Invalid pickup location. Must have a name and a numeric coordinate.",
            details={"errors": [e["loc"] for e in exc.errors()]},
        ) from exc
