from __future__ import annotations

import asyncio
import itertools
from typing import Dict, List, Optional, Tuple

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel, Field

from liftsim import ALGORITHMS, DiscreteDistribution, LiftConstraints, Simulation

DEFAULT_MAX_OPTIMUM_PASSENGERS = 8


class SimulationRequest(BaseModel):
    floor_count: int = Field(6, ge=2, le=100)
    passenger_count: int = Field(6, ge=1, le=500)
    weights: Optional[List[int]] = None
    trips: Optional[List[Tuple[int, int]]] = None
    algorithms: List[str] = ["mechanical", "advanced"]
    random_seed: Optional[int] = None
    capacity: int = Field(10, ge=1)


class SimulationManager:
    """Keeps seeded simulations so further algorithms can be run on the same passengers."""

    def __init__(self, max_optimum_passengers: int = DEFAULT_MAX_OPTIMUM_PASSENGERS) -> None:
        self.max_optimum_passengers = max_optimum_passengers
        self.simulations: Dict[int, Simulation] = {}
        self.results: Dict[int, Dict[str, dict]] = {}
        self._ids = itertools.count(1)
        self._lock = asyncio.Lock()

    def build(self, request: SimulationRequest) -> Simulation:
        constraints = LiftConstraints(capacity=request.capacity)
        if request.trips:
            return Simulation.from_trips(request.floor_count, request.trips, constraints=constraints)
        distribution = None
        if request.weights is not None:
            distribution = DiscreteDistribution(request.weights)
        return Simulation.generate(
            request.floor_count,
            request.passenger_count,
            distribution=distribution,
            constraints=constraints,
            random_seed=request.random_seed,
        )

    async def create(self, request: SimulationRequest) -> dict:
        simulation = self.build(request)
        for name in request.algorithms:
            self._check_algorithm(simulation, name)
        async with self._lock:
            simulation_id = next(self._ids)
            self.simulations[simulation_id] = simulation
            self.results[simulation_id] = {}
        for name in request.algorithms:
            await self.run(simulation_id, name)
        return self.state(simulation_id)

    async def run(self, simulation_id: int, algorithm: str) -> dict:
        simulation = self._get(simulation_id)
        self._check_algorithm(simulation, algorithm)
        result = await asyncio.to_thread(simulation.run, algorithm)
        async with self._lock:
            self.results[simulation_id][result.algorithm] = result.to_dict()
        return self.results[simulation_id][result.algorithm]

    def state(self, simulation_id: int) -> dict:
        simulation = self._get(simulation_id)
        return {
            "id": simulation_id,
            "floor_count": simulation.num_floors,
            "passengers": [
                {"id": p.person_id, "origin": p.origin, "destination": p.destination}
                for p in simulation.people
            ],
            "results": self.results[simulation_id],
        }

    def _get(self, simulation_id: int) -> Simulation:
        simulation = self.simulations.get(simulation_id)
        if simulation is None:
            raise KeyError(simulation_id)
        return simulation

    def _check_algorithm(self, simulation: Simulation, name: str) -> None:
        if name.lower() not in ALGORITHMS:
            raise ValueError(f"Unknown algorithm '{name}'. Available: {', '.join(ALGORITHMS)}")
        if name.lower() == "optimum" and len(simulation.people) > self.max_optimum_passengers:
            raise ValueError(
                f"Optimum search is limited to {self.max_optimum_passengers} passengers "
                f"(requested {len(simulation.people)})"
            )


manager = SimulationManager()
app = FastAPI(title="Lift Dispatch Simulation API")
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.get("/algorithms")
async def list_algorithms() -> dict:
    return {"algorithms": list(ALGORITHMS), "max_optimum_passengers": manager.max_optimum_passengers}


@app.post("/simulations")
async def create_simulation(request: SimulationRequest) -> dict:
    try:
        return await manager.create(request)
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc))


@app.get("/simulations/{simulation_id}")
async def get_simulation(simulation_id: int) -> dict:
    try:
        return manager.state(simulation_id)
    except KeyError:
        raise HTTPException(status_code=404, detail=f"Simulation {simulation_id} not found")


@app.post("/simulations/{simulation_id}/runs/{algorithm}")
async def run_algorithm(simulation_id: int, algorithm: str) -> dict:
    try:
        return await manager.run(simulation_id, algorithm)
    except KeyError:
        raise HTTPException(status_code=404, detail=f"Simulation {simulation_id} not found")
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc))


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("server.app:app", host="0.0.0.0", port=8000, reload=False)
