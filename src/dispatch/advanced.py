from __future__ import annotations

from typing import List, Optional

from liftsim.building import Building
from liftsim.config import DispatchSettings
from liftsim.lift import DOWN, UP

from .interface import StepDispatcher
from .utils import direction_towards, first_floor, floors_ahead, scan_order


class AdvancedDispatcher(StepDispatcher):
    """Zoned greedy heuristic.

    The outer ``zone_percentile`` percent of floors at each end form the bottom
    and top zones, where the car clears calls heading back towards the nearer
    end of the building before moving on. In the middle zone it behaves like a
    sweep that also picks up calls a few floors behind it. When the car is
    nearly full it only travels somewhere it can drop someone off.
    """

    name = "advanced"

    def __init__(self, settings: Optional[DispatchSettings] = None, max_steps: Optional[int] = None) -> None:
        self.settings = settings or DispatchSettings()
        super().__init__(max_steps=max_steps if max_steps is not None else self.settings.max_steps)

    def zone_bound(self, building: Building) -> int:
        return building.num_floors * self.settings.zone_percentile // 100

    def near_capacity(self, building: Building) -> bool:
        lift = building.lift
        return lift.is_full() or lift.pending_destinations() >= lift.capacity - self.settings.capacity_margin

    def next_stop(self, building: Building) -> Optional[int]:
        bound = self.zone_bound(building)
        position = building.lift.position
        if position <= bound:
            return self._bottom_zone(building, bound)
        if position >= building.num_floors - bound - 1:
            return self._top_zone(building, bound)
        return self._middle_zone(building, bound)

    def _bottom_zone(self, building: Building, bound: int) -> Optional[int]:
        lift = building.lift
        zone = [f for f in range(bound, -1, -1) if f != lift.position]

        target = first_floor(zone, lambda f: building.has_call(f, DOWN))
        if target is not None:
            lift.direction = DOWN
        else:
            target = self._pick(building, lowest_first=True, direction=UP)
        if target is None:
            target = self._pick(building, lowest_first=False, direction=DOWN)
        return self._limit_to_drop_offs(building, target, zone)

    def _top_zone(self, building: Building, bound: int) -> Optional[int]:
        lift = building.lift
        zone = [f for f in range(building.num_floors - bound - 1, building.num_floors) if f != lift.position]

        target = first_floor(zone, lambda f: building.has_call(f, UP))
        if target is not None:
            lift.direction = UP
        else:
            target = self._pick(building, lowest_first=False, direction=DOWN)
        if target is None:
            target = self._pick(building, lowest_first=True, direction=UP)
        return self._limit_to_drop_offs(building, target, zone)

    def _middle_zone(self, building: Building, bound: int) -> Optional[int]:
        lift = building.lift
        direction = lift.direction

        if not self.near_capacity(building):
            # calls a short way behind the car, farthest first
            behind = range(lift.position - direction * bound, lift.position, direction)
            target = first_floor(behind, lambda f: building.has_call(f, direction))
            if target is not None:
                return target

        target = first_floor(
            floors_ahead(building, direction),
            lambda f: building.has_call(f, direction) or building.has_drop_off(f),
        )
        if target is not None:
            return target

        # switch direction once, starting from the far end of the building
        return self._pick(building, lowest_first=direction == DOWN, direction=-direction)

    def _pick(self, building: Building, lowest_first: bool, direction: int) -> Optional[int]:
        """First floor in scan order with a call in ``direction`` or a drop-off;
        the car is pointed that way when one is found."""
        target = first_floor(
            scan_order(building, lowest_first),
            lambda f: building.has_call(f, direction) or building.has_drop_off(f),
        )
        if target is not None:
            building.lift.direction = direction
        return target

    def _limit_to_drop_offs(self, building: Building, target: Optional[int], zone: List[int]) -> Optional[int]:
        if target is None or not self.near_capacity(building) or building.has_drop_off(target):
            return target
        lift = building.lift
        drop_offs = [f for f in scan_order(building, lowest_first=True) if building.has_drop_off(f)]
        if not drop_offs:
            return target
        in_zone = [f for f in drop_offs if f in zone]
        redirect = min(in_zone or drop_offs, key=lambda f: (abs(f - lift.position), f))
        lift.direction = direction_towards(lift.position, redirect)
        return redirect
