from __future__ import annotations

from dataclasses import dataclass, field
from typing import List

from .passenger import Person

UP = 1
DOWN = -1


@dataclass
class Lift:
    """A single car with destination buttons and a running movement counter.

    Every floor travelled costs one movement and every stop costs one more;
    passenger wait costs are measured against this counter.
    """

    top_floor: int
    capacity: int
    position: int = 0
    direction: int = UP
    passengers: List[Person] = field(default_factory=list)
    movements: int = 0
    buttons: List[bool] = field(init=False)

    def __post_init__(self) -> None:
        self.buttons = [False] * (self.top_floor + 1)
        for person in self.passengers:
            self.buttons[person.destination] = True

    @property
    def going_up(self) -> bool:
        return self.direction > 0

    def is_full(self) -> bool:
        return len(self.passengers) >= self.capacity

    def is_calling(self, floor: int) -> bool:
        return self.buttons[floor]

    def pending_destinations(self) -> int:
        return sum(self.buttons)

    def add_passenger(self, person: Person) -> None:
        if self.is_full():
            raise RuntimeError(f"Lift is full ({self.capacity}); person {person.person_id} cannot board")
        person.on_lift = True
        self.passengers.append(person)
        self.buttons[person.destination] = True

    def move_to(self, target: int) -> List[Person]:
        """Travel to ``target``, drop off everyone bound for it and return them."""
        if not 0 <= target <= self.top_floor:
            raise ValueError(f"Floor {target} is outside the building (0-{self.top_floor})")
        # one movement per floor travelled plus one for stopping
        self.movements += abs(target - self.position) + 1
        self.position = target

        delivered: List[Person] = []
        remaining: List[Person] = []
        for person in self.passengers:
            if person.destination == target:
                person.record_delivery(self.movements)
                delivered.append(person)
            else:
                remaining.append(person)
        self.passengers = remaining
        self.buttons[target] = False
        self._update_direction()
        return delivered

    def reverse(self) -> None:
        self.direction = -self.direction

    def _update_direction(self) -> None:
        if self.position == self.top_floor:
            self.direction = DOWN
        elif self.position == 0:
            self.direction = UP
