from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, List

from .floor import BoardingPolicy
from .passenger import Person


@dataclass
class Route:
    """Floors visited by the car during one run, in order, with the summed wait cost.

    ``total_cost`` only counts delivered passengers; it is meaningful as a
    final result once ``complete`` is set, which happens when everybody has
    been delivered.
    """

    boarding_policy: BoardingPolicy
    stops: List[int] = field(default_factory=lambda: [0])
    total_cost: int = 0
    complete: bool = False

    @classmethod
    def starting_at(cls, position: int, boarding_policy: BoardingPolicy) -> "Route":
        return cls(boarding_policy=boarding_policy, stops=[position])

    def add_stop(self, floor: int) -> None:
        self.stops.append(floor)

    def record_costs(self, people: Iterable[Person]) -> int:
        total = 0
        complete = True
        for person in people:
            if person.delivered:
                total += person.wait_cost
            else:
                complete = False
        self.total_cost = total
        self.complete = complete
        return total

    def is_better_than(self, other: "Route") -> bool:
        if self.complete != other.complete:
            return self.complete
        return self.total_cost < other.total_cost

    def copy(self) -> "Route":
        return Route(
            boarding_policy=self.boarding_policy,
            stops=list(self.stops),
            total_cost=self.total_cost,
            complete=self.complete,
        )

    def describe(self) -> str:
        path = " -> ".join(str(stop) for stop in self.stops)
        text = f"Stops: [{path}]. Total wait cost: {self.total_cost}"
        if not self.complete:
            text += " (incomplete)"
        return text

    def to_dict(self) -> dict:
        return {
            "stops": list(self.stops),
            "boarding_policy": self.boarding_policy.value,
            "total_cost": self.total_cost,
            "complete": self.complete,
        }

    def __len__(self) -> int:
        return len(self.stops)
