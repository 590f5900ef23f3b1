from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Optional

from .floor import BoardingPolicy, Floor
from .lift import Lift
from .passenger import Person


@dataclass
class Building:
    """Snapshot of the whole world: the floors, the car and every passenger.

    Dispatchers mutate a building in place; ``clone`` gives an independent
    copy for exploring an alternative future.
    """

    floors: List[Floor]
    lift: Lift
    people: List[Person] = field(default_factory=list)

    @classmethod
    def create(cls, num_floors: int, capacity: int) -> "Building":
        if num_floors < 2:
            raise ValueError("Building must have at least two floors")
        floors = [Floor(i) for i in range(num_floors)]
        return cls(floors=floors, lift=Lift(top_floor=num_floors - 1, capacity=capacity))

    @property
    def num_floors(self) -> int:
        return len(self.floors)

    @property
    def current_floor(self) -> Floor:
        return self.floors[self.lift.position]

    def get_floor(self, floor_number: int) -> Optional[Floor]:
        if 0 <= floor_number < self.num_floors:
            return self.floors[floor_number]
        return None

    def add_person(self, person: Person) -> None:
        for floor_number in (person.origin, person.destination):
            if self.get_floor(floor_number) is None:
                raise ValueError(f"Floor {floor_number} is outside the building")
        self.people.append(person)
        self.floors[person.origin].add_passenger(person)

    def board(self, policy: BoardingPolicy) -> List[Person]:
        return self.current_floor.board(self.lift, policy)

    def move_lift(self, target: int) -> List[Person]:
        return self.lift.move_to(target)

    def has_call(self, floor_number: int, direction: int) -> bool:
        return self.floors[floor_number].is_calling(direction)

    def has_drop_off(self, floor_number: int) -> bool:
        return self.lift.is_calling(floor_number)

    def has_demand(self, floor_number: int) -> bool:
        floor = self.floors[floor_number]
        return floor.call_up or floor.call_down or self.lift.is_calling(floor_number)

    def all_delivered(self) -> bool:
        return all(person.delivered for person in self.people)

    def undelivered(self) -> int:
        return sum(1 for person in self.people if not person.delivered)

    def clone(self) -> "Building":
        people = [person.clone() for person in self.people]
        by_id: Dict[int, Person] = {person.person_id: person for person in people}
        floors = [
            Floor(
                number=floor.number,
                waiting=[by_id[person.person_id] for person in floor.waiting],
            )
            for floor in self.floors
        ]
        lift = Lift(
            top_floor=self.lift.top_floor,
            capacity=self.lift.capacity,
            position=self.lift.position,
            direction=self.lift.direction,
            passengers=[by_id[person.person_id] for person in self.lift.passengers],
            movements=self.lift.movements,
        )
        return Building(floors=floors, lift=lift, people=people)

    def snapshot(self) -> dict:
        return {
            "floors": [
                {
                    "number": floor.number,
                    "waiting": [person.person_id for person in floor.waiting],
                    "call_up": floor.call_up,
                    "call_down": floor.call_down,
                }
                for floor in self.floors
            ],
            "lift": {
                "position": self.lift.position,
                "direction": self.lift.direction,
                "movements": self.lift.movements,
                "passengers": [person.person_id for person in self.lift.passengers],
                "buttons": [i for i, lit in enumerate(self.lift.buttons) if lit],
            },
        }
