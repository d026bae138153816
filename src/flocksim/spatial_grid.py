from __future__ import annotations

import math
from typing import TYPE_CHECKING, Dict, Iterable, Iterator, List, Tuple

if TYPE_CHECKING:
    from .agent import Agent
    from .vector import Vec2


class SpatialGrid:
    """Uniform bucket grid over agent positions.

    Cell size is normally the detection radius, so a detection query only
    touches the 3x3 block around the agent's own cell. Larger radii widen the
    block to ``ceil(radius / cell_size)`` rings.
    """

    def __init__(self, cell_size: float) -> None:
        if cell_size <= 0:
            raise ValueError(f"cell_size must be positive, got {cell_size}")
        self._cell_size = cell_size
        self._cells: Dict[Tuple[int, int], List["Agent"]] = {}
        self._active_keys: List[Tuple[int, int]] = []
        self.neighbor_checks = 0

    def clear(self) -> None:
        for key in self._active_keys:
            bucket = self._cells.get(key)
            if bucket:
                bucket.clear()
        self._active_keys.clear()

    def insert(self, agent: "Agent") -> None:
        key = self._cell_key(agent.position)
        bucket = self._cells.get(key)
        if bucket is None:
            bucket = []
            self._cells[key] = bucket
            self._active_keys.append(key)
        elif not bucket:
            # Bucket exists but was cleared at the start of this tick; mark it active again.
            self._active_keys.append(key)
        bucket.append(agent)

    def rebuild(self, agents: Iterable["Agent"]) -> None:
        self.clear()
        self.neighbor_checks = 0
        for agent in agents:
            self.insert(agent)

    def neighbors_of(self, agent: "Agent", radius: float) -> List["Agent"]:
        if radius < 0:
            return []
        found: List["Agent"] = []
        position = agent.position
        base_x, base_y = self._cell_key(position)
        radius_sq = radius * radius
        pos_x = position.x
        pos_y = position.y
        checks = 0

        for bucket in self._candidate_buckets(base_x, base_y, radius):
            for other in bucket:
                if other is agent:
                    continue
                checks += 1
                pos = other.position
                offset_x = pos.x - pos_x
                offset_y = pos.y - pos_y
                if offset_x * offset_x + offset_y * offset_y <= radius_sq:
                    found.append(other)
        self.neighbor_checks += checks
        return found

    def _candidate_buckets(self, base_x: int, base_y: int, radius: float) -> Iterator[List["Agent"]]:
        cells = self._cells
        span = radius / self._cell_size
        if math.isfinite(span):
            cell_range = int(math.ceil(span))
            if (2 * cell_range + 1) ** 2 <= len(self._active_keys):
                for dx in range(-cell_range, cell_range + 1):
                    for dy in range(-cell_range, cell_range + 1):
                        bucket = cells.get((base_x + dx, base_y + dy))
                        if bucket:
                            yield bucket
                return
        # The block is wider than the occupied area; walk occupied cells instead.
        for key in self._active_keys:
            yield cells[key]

    def _cell_key(self, position: "Vec2") -> Tuple[int, int]:
        return (int(position.x // self._cell_size), int(position.y // self._cell_size))
