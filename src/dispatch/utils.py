from __future__ import annotations

from typing import Callable, Iterable, List, Optional

from liftsim.building import Building


def first_floor(floors: Iterable[int], predicate: Callable[[int], bool]) -> Optional[int]:
    """Return the first floor in scan order that satisfies ``predicate``."""

    for floor in floors:
        if predicate(floor):
            return floor
    return None


def floors_ahead(building: Building, direction: int) -> range:
    """Floors strictly beyond the car in ``direction``, nearest first."""

    position = building.lift.position
    if direction > 0:
        return range(position + 1, building.num_floors)
    return range(position - 1, -1, -1)


def scan_order(building: Building, lowest_first: bool) -> List[int]:
    """All floors except the car's own, bottom-up or top-down."""

    floors = range(building.num_floors) if lowest_first else range(building.num_floors - 1, -1, -1)
    return [floor for floor in floors if floor != building.lift.position]


def direction_towards(origin: int, target: int) -> int:
    return 1 if target > origin else -1
