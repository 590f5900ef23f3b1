from __future__ import annotations

import logging
import math
import random
from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional, Sequence, Tuple

import dispatch

from .building import Building
from .config import DispatchSettings, LiftConstraints
from .distribution import DiscreteDistribution
from .passenger import Person
from .route import Route

logger = logging.getLogger(__name__)

ALGORITHMS = ("mechanical", "advanced", "optimum")


@dataclass
class WaitCostSummary:
    passengers: int
    total: int
    average: float
    median: float
    p95: float
    maximum: int


def summarize_wait_costs(values: Iterable[int]) -> WaitCostSummary:
    costs = sorted(values)
    return WaitCostSummary(
        passengers=len(costs),
        total=sum(costs),
        average=sum(costs) / len(costs) if costs else 0.0,
        median=_percentile(costs, 0.5),
        p95=_percentile(costs, 0.95),
        maximum=costs[-1] if costs else 0,
    )


def _percentile(sorted_vals: List[int], percentile: float) -> float:
    if not sorted_vals:
        return 0.0
    k = (len(sorted_vals) - 1) * percentile
    f = math.floor(k)
    c = math.ceil(k)
    if f == c:
        return float(sorted_vals[int(k)])
    d0 = sorted_vals[int(f)] * (c - k)
    d1 = sorted_vals[int(c)] * (k - f)
    return float(d0 + d1)


@dataclass
class DispatchResult:
    algorithm: str
    route: Route
    people: List[Person]

    @property
    def wait_costs(self) -> List[int]:
        return [person.wait_cost for person in self.people]

    def summary(self) -> WaitCostSummary:
        return summarize_wait_costs(p.wait_cost for p in self.people if p.delivered)

    def to_dict(self) -> dict:
        return {
            "algorithm": self.algorithm,
            "route": self.route.to_dict(),
            "description": self.route.describe(),
            "wait_costs": self.wait_costs,
            "summary": self.summary().__dict__,
        }


class Simulation:
    """One seeded building that every dispatch algorithm is run against.

    The seed world is never mutated: each run works on its own clone, so runs
    are independent and repeating one gives the same route.
    """

    def __init__(self, building: Building, settings: Optional[DispatchSettings] = None) -> None:
        if not building.people:
            raise ValueError("Simulation requires at least one passenger")
        self.settings = settings or DispatchSettings()
        self.settings.validate()
        self.initial = building

    @classmethod
    def generate(
        cls,
        floor_count: int,
        passenger_count: int,
        distribution: Optional[DiscreteDistribution] = None,
        constraints: Optional[LiftConstraints] = None,
        settings: Optional[DispatchSettings] = None,
        random_seed: Optional[int] = None,
    ) -> "Simulation":
        """Spawn ``passenger_count`` people with origins drawn from
        ``distribution`` and destinations drawn uniformly from the other floors."""
        if floor_count < 2:
            raise ValueError("Building must have at least two floors")
        if passenger_count < 1:
            raise ValueError("Simulation requires at least one passenger")
        rng = random.Random(random_seed)
        if distribution is None:
            distribution = DiscreteDistribution.uniform(floor_count, random_state=rng)
        if len(distribution) != floor_count:
            raise ValueError(
                f"Distribution covers {len(distribution)} floors but the building has {floor_count}"
            )

        building = cls._empty_building(floor_count, constraints)
        for person_id in range(passenger_count):
            origin = distribution.sample()
            destination = rng.choice([f for f in range(floor_count) if f != origin])
            building.add_person(Person(person_id=person_id, origin=origin, destination=destination))
        return cls(building, settings=settings)

    @classmethod
    def from_trips(
        cls,
        floor_count: int,
        trips: Sequence[Tuple[int, int]],
        constraints: Optional[LiftConstraints] = None,
        settings: Optional[DispatchSettings] = None,
    ) -> "Simulation":
        """Seed an explicit list of ``(origin, destination)`` pairs, in arrival order."""
        building = cls._empty_building(floor_count, constraints)
        for person_id, (origin, destination) in enumerate(trips):
            building.add_person(Person(person_id=person_id, origin=origin, destination=destination))
        return cls(building, settings=settings)

    @staticmethod
    def _empty_building(floor_count: int, constraints: Optional[LiftConstraints]) -> Building:
        constraints = constraints or LiftConstraints()
        constraints.validate()
        return Building.create(floor_count, capacity=constraints.capacity)

    @property
    def num_floors(self) -> int:
        return self.initial.num_floors

    @property
    def people(self) -> List[Person]:
        return self.initial.people

    def run_mechanical(self) -> Route:
        return self.run("mechanical").route

    def run_advanced(self) -> Route:
        return self.run("advanced").route

    def run_optimum(self) -> Route:
        return self.run("optimum").route

    def run(self, algorithm: str) -> DispatchResult:
        name = algorithm.lower()
        options: Dict[str, object] = {}
        if name == "mechanical":
            options["max_steps"] = self.settings.max_steps
        elif name == "advanced":
            options["settings"] = self.settings
        elif name == "optimum":
            options["bound"] = self.run_mechanical().total_cost
        dispatcher = dispatch.get_dispatcher(name, **options)

        building = self.initial.clone()
        route = dispatcher.run(building)
        if not route.complete:
            logger.warning("%s run finished with an incomplete route: %s", name, route.describe())
        return DispatchResult(algorithm=name, route=route, people=building.people)

    def compare(self, algorithms: Sequence[str] = ALGORITHMS) -> List[DispatchResult]:
        return [self.run(name) for name in algorithms]
