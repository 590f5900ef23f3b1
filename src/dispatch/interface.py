from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Optional, Protocol

from liftsim.building import Building
from liftsim.floor import BoardingPolicy
from liftsim.route import Route

logger = logging.getLogger(__name__)


class DispatchError(RuntimeError):
    """Raised when a dispatcher reaches a state its bookkeeping says is impossible."""


class Dispatcher(Protocol):
    """Strategy interface for driving one car until every passenger is delivered."""

    name: str
    boarding_policy: BoardingPolicy

    def run(self, building: Building) -> Route:
        """
        Drive ``building`` in place and return the route the car took.

        The building is consumed: callers hand in a copy of their seed world.
        """
        ...


def default_step_limit(building: Building) -> int:
    return 4 * (len(building.people) + 1) * building.num_floors


class StepDispatcher(ABC):
    """Shared loop for dispatchers that pick one stop at a time.

    Each step boards passengers at the current floor and then asks
    :meth:`next_stop` where to go. ``None`` flips the car's direction without
    moving so that passengers heading the other way can board on the next step.
    """

    name: str
    boarding_policy = BoardingPolicy.DIRECTION_DEPENDENT

    def __init__(self, max_steps: Optional[int] = None) -> None:
        self.max_steps = max_steps

    @abstractmethod
    def next_stop(self, building: Building) -> Optional[int]:
        """Return the floor to visit next, or ``None`` to reverse in place."""

    def run(self, building: Building) -> Route:
        route = Route.starting_at(building.lift.position, self.boarding_policy)
        limit = self.max_steps or default_step_limit(building)
        steps = 0
        idle_flips = 0
        while not building.all_delivered():
            if steps >= limit:
                logger.warning(
                    "%s dispatcher stopped after %d steps with %d passengers undelivered",
                    self.name,
                    steps,
                    building.undelivered(),
                )
                break
            steps += 1
            building.board(self.boarding_policy)
            target = self.next_stop(building)
            if target is None:
                idle_flips += 1
                if idle_flips > 1:
                    raise DispatchError(
                        f"{self.name}: no pending calls in either direction but "
                        f"{building.undelivered()} passengers are undelivered"
                    )
                building.lift.reverse()
                continue
            idle_flips = 0
            building.move_lift(target)
            route.add_stop(target)

        route.record_costs(building.people)
        logger.debug("%s route: %s", self.name, route.describe())
        return route
