from __future__ import annotations

from typing import Optional

from liftsim.building import Building

from .interface import StepDispatcher
from .utils import first_floor, floors_ahead


class MechanicalDispatcher(StepDispatcher):
    """Fixed sweep (SCAN/LOOK): keep going while anything ahead needs the car."""

    name = "mechanical"

    def next_stop(self, building: Building) -> Optional[int]:
        lift = building.lift
        direction = lift.direction
        ahead = floors_ahead(building, direction)

        target = first_floor(
            ahead,
            lambda f: building.has_call(f, direction) or building.has_drop_off(f),
        )
        if target is not None:
            return target

        # Nothing ahead wants to keep going this way; turn around at the
        # farthest floor that is calling the opposite direction.
        turnaround = None
        for floor in ahead:
            if building.has_call(floor, -direction):
                turnaround = floor
        if turnaround is not None:
            lift.direction = -direction
        return turnaround
