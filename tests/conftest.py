from __future__ import annotations

from typing import Callable, Iterable, Tuple

import pytest

from liftsim import Building, Person


def _build(num_floors: int, trips: Iterable[Tuple[int, int]], capacity: int = 10) -> Building:
    building = Building.create(num_floors, capacity=capacity)
    for person_id, (origin, destination) in enumerate(trips):
        building.add_person(Person(person_id=person_id, origin=origin, destination=destination))
    return building


@pytest.fixture
def make_building() -> Callable[..., Building]:
    return _build


@pytest.fixture
def two_way_building() -> Building:
    """Three floors: one rider going up from the ground, one coming back down."""
    return _build(3, [(0, 2), (2, 0)])
