from __future__ import annotations

from dataclasses import dataclass, replace


@dataclass
class Person:
    """Represents a rider moving between floors."""

    person_id: int
    origin: int
    destination: int
    on_lift: bool = False
    delivered: bool = False
    wait_cost: int = 0

    def __post_init__(self) -> None:
        if self.origin == self.destination:
            raise ValueError(f"Person {self.person_id} must travel to a different floor")

    @property
    def direction(self) -> int:
        """Return +1 for up, -1 for down."""
        return 1 if self.destination > self.origin else -1

    @property
    def direct_cost(self) -> int:
        """Movements needed for a non-stop trip: the floors travelled plus one stop."""
        return abs(self.origin - self.destination) + 1

    def record_delivery(self, movements: int) -> None:
        self.on_lift = False
        self.delivered = True
        self.wait_cost = movements - self.direct_cost

    def clone(self) -> "Person":
        return replace(self)

    def to_dict(self) -> dict:
        return {
            "id": self.person_id,
            "origin": self.origin,
            "destination": self.destination,
            "delivered": self.delivered,
            "wait_cost": self.wait_cost,
        }
