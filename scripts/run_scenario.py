"""CLI for comparing lift dispatch algorithms over repeated random scenarios."""
from __future__ import annotations

import argparse
import json
import logging
import random
from dataclasses import asdict
from pathlib import Path
from typing import Dict, List, Optional, Sequence

from liftsim import DiscreteDistribution, DispatchResult, ScenarioConfig, Simulation, summarize_wait_costs
from liftsim.config import DEFAULT_ALGORITHMS

logger = logging.getLogger("run_scenario")


def build_config(args: argparse.Namespace) -> ScenarioConfig:
    if args.config:
        data = json.loads(args.config.read_text())
    else:
        data = {"num_floors": 6, "num_passengers": 6}
    overrides = {
        "num_floors": args.floors,
        "num_passengers": args.passengers,
        "weights": args.weights,
        "algorithms": args.algorithms,
        "trials": args.trials,
        "random_seed": args.seed,
    }
    data.update({key: value for key, value in overrides.items() if value is not None})
    return ScenarioConfig.from_dict(data)


def build_simulation(config: ScenarioConfig, rng: random.Random) -> Simulation:
    weights = config.weights or [1] * config.num_floors
    distribution = DiscreteDistribution(weights, random_state=rng)
    return Simulation.generate(
        config.num_floors,
        config.num_passengers,
        distribution=distribution,
        constraints=config.lift,
        settings=config.dispatch,
        random_seed=rng.randrange(2**32),
    )


def run_trials(config: ScenarioConfig) -> Dict[str, List[DispatchResult]]:
    rng = random.Random(config.random_seed)
    results: Dict[str, List[DispatchResult]] = {name: [] for name in config.algorithms}
    for trial in range(config.trials):
        simulation = build_simulation(config, rng)
        for result in simulation.compare(config.algorithms):
            logger.info("trial %d %s: %s", trial + 1, result.algorithm, result.route.describe())
            results[result.algorithm].append(result)
    return results


def save_wait_costs(save_dir: Path, config: ScenarioConfig, algorithm: str, result: DispatchResult) -> Path:
    """Write one wait cost per line to ``<dir>/<floors>/<passengers>/<algorithm>/simulation<k>.txt``."""

    directory = save_dir / str(config.num_floors) / str(config.num_passengers) / algorithm
    directory.mkdir(parents=True, exist_ok=True)
    index = 1
    while (directory / f"simulation{index}.txt").exists():
        index += 1
    path = directory / f"simulation{index}.txt"
    path.write_text("".join(f"{cost}\n" for cost in result.wait_costs))
    return path


def summarise(results: Dict[str, List[DispatchResult]]) -> Dict[str, dict]:
    summary: Dict[str, dict] = {}
    for algorithm, runs in results.items():
        totals = [run.route.total_cost for run in runs]
        costs = [cost for run in runs for cost in run.wait_costs]
        summary[algorithm] = {
            "runs": len(runs),
            "incomplete_runs": sum(1 for run in runs if not run.route.complete),
            "average_total_cost": sum(totals) / len(totals) if totals else 0.0,
            "wait_costs": asdict(summarize_wait_costs(costs)),
        }
    return summary


def save_results(output_path: Optional[Path], data: Dict) -> None:
    if not output_path:
        return
    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(json.dumps(data, indent=2))


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("config", type=Path, nargs="?", help="Optional JSON scenario configuration file")
    parser.add_argument("--floors", type=int, help="Number of floors in the building")
    parser.add_argument("--passengers", type=int, help="Number of passengers to spawn")
    parser.add_argument("--trials", type=int, help="Number of random scenarios to run")
    parser.add_argument("--weights", type=int, nargs="+", help="Relative spawn weight for each floor")
    parser.add_argument(
        "--algorithm",
        dest="algorithms",
        action="append",
        help=f"Algorithm to run (repeatable, default: {', '.join(DEFAULT_ALGORITHMS)})",
    )
    parser.add_argument("--seed", type=int, help="Random seed for reproducible scenarios")
    parser.add_argument("--output", type=Path, help="Optional file path to write results as JSON")
    parser.add_argument("--save-dir", type=Path, help="Directory for raw wait costs, one file per run")
    parser.add_argument("--verbose", action="store_true", help="Log every route")
    return parser.parse_args(argv)


def main(argv: Optional[Sequence[str]] = None) -> None:
    args = parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    config = build_config(args)
    if "optimum" in config.algorithms and config.num_passengers > 8:
        logger.warning("Optimum search with %d passengers may take a very long time", config.num_passengers)

    results = run_trials(config)
    if args.save_dir:
        for algorithm, runs in results.items():
            for run in runs:
                save_wait_costs(args.save_dir, config, algorithm, run)

    summary = summarise(results)
    save_results(
        args.output,
        {
            "num_floors": config.num_floors,
            "num_passengers": config.num_passengers,
            "trials": config.trials,
            "summary": summary,
            "runs": {name: [run.to_dict() for run in runs] for name, runs in results.items()},
        },
    )

    print(f"Floors: {config.num_floors}  Passengers: {config.num_passengers}  Trials: {config.trials}")
    for algorithm, stats in summary.items():
        print(f"{algorithm}:")
        for key, value in stats.items():
            print(f"  {key}: {value}")
    if args.output:
        print(f"Saved results to {args.output}")


if __name__ == "__main__":
    main()
