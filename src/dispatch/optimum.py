from __future__ import annotations

import logging
from typing import List, Optional

from liftsim.building import Building
from liftsim.floor import BoardingPolicy
from liftsim.route import Route

from .mechanical import MechanicalDispatcher
from .utils import direction_towards

logger = logging.getLogger(__name__)


class OptimumDispatcher:
    """Exhaustive depth-first search for the route with the lowest total wait cost.

    Every floor with a hall call or a lit car button is a candidate next stop.
    Branches whose running cost already exceeds ``bound`` (by default the
    mechanical sweep's total) are pruned. Anyone waiting may board regardless
    of direction. The search is exponential in the number of passengers, so
    callers must keep scenarios small.
    """

    name = "optimum"
    boarding_policy = BoardingPolicy.DIRECTION_INDEPENDENT

    def __init__(self, bound: Optional[int] = None) -> None:
        self.bound = bound
        self.branches_explored = 0

    def run(self, building: Building) -> Route:
        bound = self.bound
        if bound is None:
            bound = MechanicalDispatcher().run(building.clone()).total_cost
        self.branches_explored = 0

        building.board(self.boarding_policy)
        route = Route.starting_at(building.lift.position, self.boarding_policy)
        if building.all_delivered():
            route.record_costs(building.people)
            return route
        best = self.search(building, route, bound)
        logger.debug(
            "optimum route after %d branches (bound %d): %s",
            self.branches_explored,
            bound,
            best.describe(),
        )
        return best

    def search(self, building: Building, route: Route, bound: int) -> Route:
        best = route.copy()
        best.complete = False
        max_stops = 2 * len(building.people)
        if len(route) > max_stops:
            logger.warning(
                "Abandoning search branch %s: longer than %d stops for %d passengers",
                route.stops,
                max_stops,
                len(building.people),
            )
            return best

        probe = building.clone()
        probe.board(self.boarding_policy)
        for floor in self._candidate_floors(probe):
            self.branches_explored += 1
            branch = probe.clone()
            branch.move_lift(floor)
            candidate = route.copy()
            candidate.add_stop(floor)
            candidate.record_costs(branch.people)
            if candidate.total_cost > bound:
                continue
            if not branch.all_delivered():
                candidate = self.search(branch, candidate, bound)
            if candidate.complete and candidate.is_better_than(best):
                best = candidate
                # ties keep the incumbent
                bound = min(bound, best.total_cost)

        self._replay(building, route, best)
        return best

    def _candidate_floors(self, building: Building) -> List[int]:
        return [
            floor
            for floor in range(building.num_floors)
            if floor != building.lift.position and building.has_demand(floor)
        ]

    def _replay(self, building: Building, route: Route, best: Route) -> None:
        for floor in best.stops[len(route):]:
            building.lift.direction = direction_towards(building.lift.position, floor)
            building.board(self.boarding_policy)
            building.move_lift(floor)
