from __future__ import annotations

from .agent import Agent, AgentView
from .config import (
    BoundaryPolicy,
    ConfigError,
    FlockParameters,
    NeighborStrategy,
    SimulationConfig,
    load_config,
)
from .vector import Vec2
from .viewport import Viewport
from .world import FlockSimulation, SimulationError

__all__ = [
    "Agent",
    "AgentView",
    "BoundaryPolicy",
    "ConfigError",
    "FlockParameters",
    "FlockSimulation",
    "NeighborStrategy",
    "SimulationConfig",
    "SimulationError",
    "Vec2",
    "Viewport",
    "load_config",
]
