"""World model and simulation facade for single-car lift dispatch."""

from .building import Building
from .config import DispatchSettings, LiftConstraints, ScenarioConfig
from .distribution import DiscreteDistribution
from .floor import BoardingPolicy, Floor
from .lift import DOWN, UP, Lift
from .passenger import Person
from .route import Route
from .simulation import ALGORITHMS, DispatchResult, Simulation, WaitCostSummary, summarize_wait_costs

__all__ = [
    "ALGORITHMS",
    "BoardingPolicy",
    "Building",
    "DiscreteDistribution",
    "DispatchResult",
    "DispatchSettings",
    "DOWN",
    "Floor",
    "Lift",
    "LiftConstraints",
    "Person",
    "Route",
    "ScenarioConfig",
    "Simulation",
    "UP",
    "WaitCostSummary",
    "summarize_wait_costs",
]
