from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, List, Optional

from .passenger import Person

if TYPE_CHECKING:  # pragma: no cover - import cycle safe typing
    from .lift import Lift


class BoardingPolicy(str, Enum):
    """Rule for picking which waiting passengers may enter the car."""

    DIRECTION_INDEPENDENT = "direction_independent"
    DIRECTION_DEPENDENT = "direction_dependent"


@dataclass
class Floor:
    """Represents a floor with its waiting passengers and hall call buttons."""

    number: int
    waiting: List[Person] = field(default_factory=list)
    call_up: bool = False
    call_down: bool = False

    def __post_init__(self) -> None:
        self.refresh_calls()

    def add_passenger(self, person: Person) -> None:
        self.waiting.append(person)
        self.refresh_calls()

    def has_waiting(self) -> bool:
        return bool(self.waiting)

    def is_calling(self, direction: int) -> bool:
        return self.call_up if direction > 0 else self.call_down

    def board(self, lift: "Lift", policy: BoardingPolicy) -> List[Person]:
        """Move waiting passengers into ``lift`` one at a time until it is full
        or nobody eligible is left, then recompute the call buttons."""
        boarded: List[Person] = []
        while self.waiting and not lift.is_full():
            person = self._next_boarder(lift.direction, policy)
            if person is None:
                break
            self.waiting.remove(person)
            lift.add_passenger(person)
            boarded.append(person)
        self.refresh_calls()
        return boarded

    def refresh_calls(self) -> None:
        self.call_up = any(p.destination > self.number for p in self.waiting)
        self.call_down = any(p.destination < self.number for p in self.waiting)

    def _next_boarder(self, direction: int, policy: BoardingPolicy) -> Optional[Person]:
        if policy == BoardingPolicy.DIRECTION_INDEPENDENT:
            return self.waiting[0]
        for person in self.waiting:
            if direction > 0 and person.destination > self.number:
                return person
            if direction < 0 and person.destination < self.number:
                return person
        return None

    def __len__(self) -> int:  # pragma: no cover - convenience
        return len(self.waiting)
