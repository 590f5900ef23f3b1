import logging

import pytest

from liftsim import (
    DiscreteDistribution,
    DispatchSettings,
    LiftConstraints,
    ScenarioConfig,
    Simulation,
    summarize_wait_costs,
)


def test_generate_is_reproducible_with_a_seed():
    first = Simulation.generate(6, 5, random_seed=42)
    second = Simulation.generate(6, 5, random_seed=42)
    assert [(p.origin, p.destination) for p in first.people] == [
        (p.origin, p.destination) for p in second.people
    ]
    assert all(p.origin != p.destination for p in first.people)


def test_generate_uses_the_spawn_distribution():
    simulation = Simulation.generate(4, 20, distribution=DiscreteDistribution([0, 0, 1, 0]), random_seed=1)
    assert {p.origin for p in simulation.people} == {2}


@pytest.mark.parametrize(
    "kwargs",
    [
        {"floor_count": 1, "passenger_count": 3},
        {"floor_count": 4, "passenger_count": 0},
        {"floor_count": 4, "passenger_count": 2, "distribution": DiscreteDistribution([1, 1])},
        {"floor_count": 4, "passenger_count": 2, "constraints": LiftConstraints(capacity=0)},
        {"floor_count": 4, "passenger_count": 2, "settings": DispatchSettings(zone_percentile=50)},
    ],
)
def test_generate_rejects_bad_configuration(kwargs):
    with pytest.raises(ValueError):
        Simulation.generate(**kwargs)


def test_from_trips_rejects_impossible_trips():
    with pytest.raises(ValueError):
        Simulation.from_trips(3, [(1, 1)])
    with pytest.raises(ValueError):
        Simulation.from_trips(3, [(0, 3)])
    with pytest.raises(ValueError):
        Simulation.from_trips(3, [])


def test_runs_do_not_touch_the_seed_world():
    simulation = Simulation.from_trips(3, [(0, 2), (2, 0)])
    first = simulation.run("mechanical")
    second = simulation.run("mechanical")

    assert first.route.stops == second.route.stops == [0, 2, 0]
    assert first.route.total_cost == 3
    assert not any(p.delivered for p in simulation.people)
    assert simulation.initial.lift.movements == 0


def test_unknown_algorithm_is_rejected():
    simulation = Simulation.from_trips(3, [(0, 2)])
    with pytest.raises(ValueError):
        simulation.run("random-walk")


@pytest.mark.parametrize("floors", [3, 4, 5])
@pytest.mark.parametrize("seed", range(8))
def test_every_algorithm_delivers_everyone(floors, seed):
    simulation = Simulation.generate(floors, 3, random_seed=seed)
    results = {result.algorithm: result for result in simulation.compare()}

    for result in results.values():
        assert result.route.complete
        assert all(p.delivered for p in result.people)
        assert all(cost >= 0 for cost in result.wait_costs)
        assert result.route.total_cost == sum(result.wait_costs)
        assert all(0 <= stop < floors for stop in result.route.stops)

    optimum = results["optimum"].route.total_cost
    assert optimum <= results["mechanical"].route.total_cost
    assert optimum <= results["advanced"].route.total_cost


@pytest.mark.parametrize("seed", range(5))
def test_sweeps_finish_busy_buildings(seed):
    simulation = Simulation.generate(12, 40, constraints=LiftConstraints(capacity=4), random_seed=seed)
    for name in ("mechanical", "advanced"):
        result = simulation.run(name)
        assert result.route.complete
        assert result.route.stops[0] == 0


def test_single_rider_costs_agree():
    simulation = Simulation.from_trips(6, [(4, 1)])
    costs = {route.total_cost for route in (
        simulation.run_mechanical(),
        simulation.run_advanced(),
        simulation.run_optimum(),
    )}
    assert costs == {5}


def test_step_limit_from_settings_warns(caplog):
    simulation = Simulation.from_trips(3, [(0, 2), (2, 0)], settings=DispatchSettings(max_steps=1))
    with caplog.at_level(logging.WARNING, logger="liftsim.simulation"):
        result = simulation.run("advanced")

    assert not result.route.complete
    assert "incomplete route" in caplog.text


def test_result_summary_and_serialisation():
    result = Simulation.from_trips(3, [(0, 2), (2, 0)]).run("optimum")
    summary = result.summary()

    assert summary.passengers == 2
    assert summary.total == 3
    assert summary.average == 1.5
    data = result.to_dict()
    assert data["route"]["stops"] == [0, 2, 0]
    assert data["route"]["boarding_policy"] == "direction_independent"
    assert data["description"] == "Stops: [0 -> 2 -> 0]. Total wait cost: 3"
    assert data["wait_costs"] == [0, 3]


def test_summarize_wait_costs_percentiles():
    summary = summarize_wait_costs([4, 1, 3, 2])
    assert summary.median == pytest.approx(2.5)
    assert summary.p95 == pytest.approx(3.85)
    assert summary.maximum == 4
    assert summarize_wait_costs([]).average == 0.0


def test_scenario_config_from_dict():
    config = ScenarioConfig.from_dict(
        {
            "num_floors": 5,
            "num_passengers": 3,
            "weights": [5, 1, 1, 1, 1],
            "lift": {"capacity": 4},
            "dispatch": {"zone_percentile": 30},
        }
    )
    assert config.algorithms == ["mechanical", "advanced"]
    assert config.lift.capacity == 4
    assert config.dispatch.zone_percentile == 30


@pytest.mark.parametrize(
    "data",
    [
        {"num_floors": 5, "num_passengers": 3, "weights": [1, 1]},
        {"num_floors": 5, "num_passengers": 3, "trials": 0},
        {"num_floors": 5, "num_passengers": 3, "algorithms": []},
        {"num_floors": 5, "num_passengers": 3, "dispatch": {"capacity_margin": -1}},
    ],
)
def test_scenario_config_validation(data):
    with pytest.raises(ValueError):
        ScenarioConfig.from_dict(data)
