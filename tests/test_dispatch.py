import logging

import pytest

from dispatch import (
    AdvancedDispatcher,
    DispatchError,
    MechanicalDispatcher,
    OptimumDispatcher,
    StepDispatcher,
    get_dispatcher,
)
from liftsim import DOWN, UP, BoardingPolicy, Building, DispatchSettings, Route


class StalledDispatcher(StepDispatcher):
    name = "stalled"

    def next_stop(self, building):
        return None


def test_registry_builds_known_dispatchers():
    assert isinstance(get_dispatcher("Mechanical"), MechanicalDispatcher)
    assert isinstance(get_dispatcher("optimum", bound=3), OptimumDispatcher)
    with pytest.raises(ValueError):
        get_dispatcher("elevator-music")


@pytest.mark.parametrize("dispatcher_cls", [MechanicalDispatcher, AdvancedDispatcher, OptimumDispatcher])
def test_two_way_trip(dispatcher_cls, two_way_building):
    route = dispatcher_cls().run(two_way_building)

    assert route.stops == [0, 2, 0]
    assert route.complete
    # the second rider boards after 3 movements and arrives after 6
    assert route.total_cost == 3
    assert [p.wait_cost for p in two_way_building.people] == [0, 3]


@pytest.mark.parametrize("dispatcher_cls", [MechanicalDispatcher, AdvancedDispatcher, OptimumDispatcher])
@pytest.mark.parametrize("origin,destination", [(0, 4), (1, 0), (1, 3), (2, 4), (3, 1), (3, 4), (4, 0)])
def test_single_rider_waits_for_the_car_to_arrive(dispatcher_cls, origin, destination, make_building):
    building = make_building(5, [(origin, destination)])
    route = dispatcher_cls().run(building)

    assert route.complete
    assert route.total_cost == (origin + 1 if origin else 0)


def test_mechanical_turns_around_at_the_farthest_opposite_call(make_building):
    building = make_building(6, [(3, 1), (2, 0)])
    route = MechanicalDispatcher().run(building)
    assert route.stops == [0, 3, 2, 1, 0]


def test_mechanical_keeps_going_while_calls_lie_ahead(make_building):
    building = make_building(6, [(0, 5), (2, 4), (3, 1)])
    route = MechanicalDispatcher().run(building)
    assert route.stops == [0, 2, 4, 5, 3, 1]
    assert route.complete


def test_step_dispatcher_raises_when_stalled(two_way_building):
    with pytest.raises(DispatchError):
        StalledDispatcher().run(two_way_building)


def test_step_limit_returns_incomplete_route(two_way_building, caplog):
    with caplog.at_level(logging.WARNING, logger="dispatch.interface"):
        route = MechanicalDispatcher(max_steps=1).run(two_way_building)

    assert route.stops == [0, 2]
    assert not route.complete
    assert "stopped after 1 steps" in caplog.text


def test_advanced_zone_bound():
    dispatcher = AdvancedDispatcher(DispatchSettings(zone_percentile=20))
    assert dispatcher.zone_bound(_floors(10)) == 2
    assert dispatcher.zone_bound(_floors(3)) == 0


def _floors(count):
    return Building.create(count, capacity=10)


def test_advanced_bottom_zone_clears_calls_heading_down(make_building):
    building = make_building(10, [(0, 5), (1, 0)])
    building.board(BoardingPolicy.DIRECTION_DEPENDENT)

    assert AdvancedDispatcher().next_stop(building) == 1
    assert building.lift.direction == DOWN


def test_advanced_near_capacity_only_goes_to_drop_offs(make_building):
    building = make_building(10, [(0, 5), (1, 0)], capacity=3)
    building.board(BoardingPolicy.DIRECTION_DEPENDENT)
    dispatcher = AdvancedDispatcher(DispatchSettings(capacity_margin=2))

    assert dispatcher.near_capacity(building)
    assert dispatcher.next_stop(building) == 5
    assert building.lift.direction == UP


def test_advanced_middle_zone_picks_up_calls_just_behind(make_building):
    building = make_building(10, [(4, 8), (9, 0)])
    building.lift.position = 5
    building.lift.direction = UP

    assert AdvancedDispatcher().next_stop(building) == 4


def test_advanced_middle_zone_switches_to_lowest_up_call(make_building):
    building = make_building(10, [(7, 9), (6, 8)])
    building.lift.position = 5
    building.lift.direction = DOWN

    assert AdvancedDispatcher().next_stop(building) == 6
    assert building.lift.direction == UP


def test_optimum_boards_regardless_of_direction(make_building):
    building = make_building(4, [(0, 3), (1, 0)])
    mechanical = MechanicalDispatcher().run(building.clone())
    dispatcher = OptimumDispatcher()

    route = dispatcher.run(building)

    assert mechanical.total_cost == 7
    assert route.stops == [0, 1, 0, 3]
    assert route.total_cost == 6
    assert route.complete
    assert dispatcher.branches_explored > 0
    # the winning route is replayed onto the building it was given
    assert building.all_delivered()
    assert [p.wait_cost for p in building.people] == [4, 2]


def test_optimum_with_too_tight_a_bound_finds_nothing(make_building):
    building = make_building(4, [(0, 3), (1, 0)])
    route = OptimumDispatcher(bound=0).run(building)
    assert not route.complete


def test_optimum_abandons_overlong_branches(make_building, caplog):
    building = make_building(3, [(0, 2)])
    route = Route(BoardingPolicy.DIRECTION_INDEPENDENT, stops=[0, 1, 2])

    with caplog.at_level(logging.WARNING, logger="dispatch.optimum"):
        best = OptimumDispatcher().search(building, route, bound=100)

    assert not best.complete
    assert best.stops == [0, 1, 2]
    assert "Abandoning search branch" in caplog.text
