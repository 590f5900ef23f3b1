from __future__ import annotations

import random
from typing import List, Optional, Sequence


class DiscreteDistribution:
    """Weighted random floor picker.

    Weights are relative rather than probabilities: floor ``i`` is chosen with
    probability ``weights[i] / sum(weights)``, so ``[1, 3]`` makes floor 1
    three times as likely as floor 0.
    """

    def __init__(self, weights: Sequence[int], random_state: Optional[random.Random] = None) -> None:
        values: List[int] = list(weights)
        if not values:
            raise ValueError("Distribution needs at least one floor weight")
        if any(weight < 0 for weight in values):
            raise ValueError("Floor weights cannot be negative")
        if sum(values) == 0:
            raise ValueError("At least one floor weight must be positive")
        self.weights = values
        self.random = random_state or random.Random()

    @classmethod
    def uniform(cls, num_floors: int, random_state: Optional[random.Random] = None) -> "DiscreteDistribution":
        return cls([1] * num_floors, random_state=random_state)

    def sample(self) -> int:
        return self.random.choices(range(len(self.weights)), weights=self.weights)[0]

    def probability(self, floor: int) -> float:
        return self.weights[floor] / sum(self.weights)

    def __len__(self) -> int:
        return len(self.weights)

    def __repr__(self) -> str:
        return f"DiscreteDistribution({self.weights!r})"
