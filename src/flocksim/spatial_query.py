from __future__ import annotations

from typing import TYPE_CHECKING, Iterable, List, Protocol

from .config import NeighborStrategy
from .spatial_grid import SpatialGrid

if TYPE_CHECKING:
    from .agent import Agent


class SpatialIndex(Protocol):
    neighbor_checks: int

    def rebuild(self, agents: Iterable["Agent"]) -> None: ...

    def neighbors_of(self, agent: "Agent", radius: float) -> List["Agent"]: ...


class BruteForceIndex:
    """Linear scan over every agent; the reference the grid must agree with."""

    def __init__(self) -> None:
        self._agents: List["Agent"] = []
        self.neighbor_checks = 0

    def rebuild(self, agents: Iterable["Agent"]) -> None:
        self._agents = list(agents)
        self.neighbor_checks = 0

    def neighbors_of(self, agent: "Agent", radius: float) -> List["Agent"]:
        if radius < 0:
            return []
        found: List["Agent"] = []
        pos_x = agent.position.x
        pos_y = agent.position.y
        radius_sq = radius * radius
        checks = 0
        for other in self._agents:
            if other is agent:
                continue
            offset_x = other.position.x - pos_x
            offset_y = other.position.y - pos_y
            # Box prefilter only; membership is decided by the circle test below.
            if abs(offset_x) > radius or abs(offset_y) > radius:
                continue
            checks += 1
            if offset_x * offset_x + offset_y * offset_y <= radius_sq:
                found.append(other)
        self.neighbor_checks += checks
        return found


def create_spatial_index(strategy: NeighborStrategy, cell_size: float) -> SpatialIndex:
    if strategy is NeighborStrategy.GRID:
        return SpatialGrid(cell_size)
    if strategy is NeighborStrategy.BRUTE_FORCE:
        return BruteForceIndex()
    raise ValueError(f"Unknown neighbor strategy: {strategy}")
