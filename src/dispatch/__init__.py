from __future__ import annotations

from typing import Dict, Type

from .advanced import AdvancedDispatcher
from .interface import Dispatcher, DispatchError, StepDispatcher
from .mechanical import MechanicalDispatcher
from .optimum import OptimumDispatcher

__all__ = [
    "AdvancedDispatcher",
    "DispatchError",
    "Dispatcher",
    "MechanicalDispatcher",
    "OptimumDispatcher",
    "StepDispatcher",
    "get_dispatcher",
]


DISPATCHER_REGISTRY: Dict[str, Type] = {
    "mechanical": MechanicalDispatcher,
    "advanced": AdvancedDispatcher,
    "optimum": OptimumDispatcher,
}


def get_dispatcher(name: str, **kwargs) -> Dispatcher:
    cls = DISPATCHER_REGISTRY.get(name.lower())
    if cls is None:
        raise ValueError(f"Unknown algorithm '{name}'. Available: {', '.join(DISPATCHER_REGISTRY)}")
    return cls(**kwargs)
