from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Optional

DEFAULT_ALGORITHMS = ["mechanical", "advanced"]


@dataclass
class LiftConstraints:
    """Physical limits of the car."""

    capacity: int = 10

    def validate(self) -> None:
        if self.capacity < 1:
            raise ValueError("Lift capacity must be at least one passenger")


@dataclass
class DispatchSettings:
    """Tuning knobs for the dispatch heuristics.

    ``zone_percentile`` is the share of floors counted as the bottom and top
    zones of the advanced algorithm. ``capacity_margin`` sets how many lit car
    buttons short of capacity the car is treated as nearly full. ``max_steps``
    caps the sweep loops; ``None`` derives a limit from the building size.
    """

    zone_percentile: int = 20
    capacity_margin: int = 2
    max_steps: Optional[int] = None

    def validate(self) -> None:
        if not 0 <= self.zone_percentile < 50:
            raise ValueError("Zone percentile must be within [0, 50)")
        if self.capacity_margin < 0:
            raise ValueError("Capacity margin cannot be negative")
        if self.max_steps is not None and self.max_steps < 1:
            raise ValueError("max_steps must be positive when set")


@dataclass
class ScenarioConfig:
    num_floors: int
    num_passengers: int
    weights: Optional[List[int]] = None
    algorithms: List[str] = field(default_factory=lambda: list(DEFAULT_ALGORITHMS))
    trials: int = 1
    random_seed: Optional[int] = None
    lift: LiftConstraints = field(default_factory=LiftConstraints)
    dispatch: DispatchSettings = field(default_factory=DispatchSettings)

    def validate(self) -> None:
        if self.num_floors < 2:
            raise ValueError("Building must have at least two floors")
        if self.num_passengers < 1:
            raise ValueError("Simulation requires at least one passenger")
        if self.trials < 1:
            raise ValueError("At least one trial is required")
        if self.weights is not None and len(self.weights) != self.num_floors:
            raise ValueError("Spawn weights must match the number of floors")
        if not self.algorithms:
            raise ValueError("At least one algorithm must be selected")
        self.lift.validate()
        self.dispatch.validate()

    @classmethod
    def from_dict(cls, data: Dict) -> "ScenarioConfig":
        cfg = cls(
            num_floors=data["num_floors"],
            num_passengers=data["num_passengers"],
            weights=data.get("weights"),
            algorithms=data.get("algorithms", list(DEFAULT_ALGORITHMS)),
            trials=data.get("trials", 1),
            random_seed=data.get("random_seed"),
            lift=LiftConstraints(**data.get("lift", {})),
            dispatch=DispatchSettings(**data.get("dispatch", {})),
        )
        cfg.validate()
        return cfg
