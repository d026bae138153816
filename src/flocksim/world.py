from __future__ import annotations

import logging
import math
from time import perf_counter
from typing import Any, Dict, Iterable, List, Optional, Tuple

from .agent import Agent, AgentView
from .boundary import apply_boundary
from .config import ConfigError, SimulationConfig
from .metrics import TickMetrics
from .rng import DeterministicRng
from .snapshot import Snapshot, SnapshotMetadata, SnapshotViewport
from .spatial_query import create_spatial_index
from .steering import steering_force
from .vector import Vec2
from .viewport import Viewport, ViewportSource, resolve_viewport

logger = logging.getLogger(__name__)


class SimulationError(RuntimeError):
    """Raised when agent state stops being finite."""


class FlockSimulation:
    """Owns the swarm and advances it one fixed step per ``tick()``.

    Each tick runs three phases over the whole swarm:

    * acceleration: every agent's steering force is computed from the
      pre-tick positions and velocities and written to its own
      ``acceleration`` slot only;
    * integration: velocity and position are advanced, velocity capped at
      ``max_speed``;
    * boundary: positions are wrapped or clamped to the viewport.

    No position or velocity changes until every acceleration is known, so the
    result does not depend on agent order.
    """

    def __init__(
        self,
        config: SimulationConfig,
        viewport: Optional[ViewportSource] = None,
        agents: Optional[Iterable[Agent]] = None,
    ):
        self._config = config.validate()
        if viewport is None:
            viewport = Viewport(config.viewport_width, config.viewport_height)
        self._viewport_source = viewport
        self._viewport = self._poll_viewport()
        self._rng = DeterministicRng(config.seed)
        self._index = create_spatial_index(config.neighbor_strategy, config.flock.detection_radius)
        self._agents: List[Agent] = []
        self._next_id = 0
        self._tick = 0
        self._metrics: TickMetrics | None = None
        # Starting state of caller-supplied agents, replayed by reset().
        self._initial_views: Tuple[AgentView, ...] | None = None
        if agents is None:
            self._generate_swarm()
        else:
            self._adopt_agents(agents)

    @property
    def config(self) -> SimulationConfig:
        return self._config

    @property
    def viewport(self) -> Viewport:
        return self._viewport

    @property
    def agent_size(self) -> float:
        return self._config.flock.agent_size

    @property
    def tick_count(self) -> int:
        return self._tick

    @property
    def metrics(self) -> TickMetrics | None:
        return self._metrics

    def agents(self) -> Tuple[AgentView, ...]:
        return tuple(agent.view() for agent in self._agents)

    def reset(self) -> None:
        self._agents.clear()
        self._rng.reset()
        self._next_id = 0
        self._tick = 0
        self._metrics = None
        self._viewport = self._poll_viewport()
        if self._initial_views is None:
            self._generate_swarm()
        else:
            self._restore_adopted()

    def tick(self) -> None:
        start = perf_counter()
        self._viewport = self._poll_viewport()
        self._compute_accelerations()
        self._integrate()
        self._apply_boundaries()

        elapsed_ms = (perf_counter() - start) * 1000.0
        self._metrics = self._create_metrics(elapsed_ms)
        self._tick += 1
        logger.debug(
            "tick %d: %d agents, %d neighbor checks, %.3f ms",
            self._metrics.tick,
            self._metrics.population,
            self._metrics.neighbor_checks,
            elapsed_ms,
        )

    def snapshot(self) -> Snapshot:
        config = self._config
        return Snapshot(
            tick=self._tick,
            metrics=self._metrics,
            agents=[self._agent_snapshot(agent) for agent in self._agents],
            viewport=SnapshotViewport(width=self._viewport.width, height=self._viewport.height),
            metadata=SnapshotMetadata(
                agent_size=config.flock.agent_size,
                tick_interval_ms=config.flock.tick_interval_ms,
                boundary=config.boundary.value,
                neighbor_strategy=config.neighbor_strategy.value,
                seed=config.seed,
                config_version=config.config_version,
            ),
        )

    def _compute_accelerations(self) -> None:
        flock = self._config.flock
        index = self._index
        viewport = self._viewport
        index.rebuild(self._agents)
        for agent in self._agents:
            close = index.neighbors_of(agent, flock.separation_radius)
            nearby = index.neighbors_of(agent, flock.detection_radius)
            force = steering_force(agent, close, nearby, flock, viewport)
            agent.acceleration.set(force.x, force.y)

    def _integrate(self) -> None:
        max_speed = self._config.flock.max_speed
        for agent in self._agents:
            agent.velocity.add(agent.acceleration).clamp_magnitude(max_speed)
            agent.position.add(agent.velocity)
            if not (agent.velocity.is_finite() and agent.position.is_finite()):
                raise SimulationError(
                    f"agent {agent.id} left the finite domain: position={agent.position}, velocity={agent.velocity}"
                )

    def _apply_boundaries(self) -> None:
        policy = self._config.boundary
        viewport = self._viewport
        for agent in self._agents:
            apply_boundary(agent.position, viewport, policy)

    def _poll_viewport(self) -> Viewport:
        return resolve_viewport(self._viewport_source).validate(self._config.boundary)

    def _generate_swarm(self) -> None:
        flock = self._config.flock
        width = self._viewport.width
        height = self._viewport.height
        for _ in range(flock.swarm_size):
            position = Vec2(self._rng.next_range(0.0, width), self._rng.next_range(0.0, height))
            velocity = self._rng.next_unit_circle().scale(flock.starting_speed)
            self._agents.append(Agent(id=self._allocate_id(), position=position, velocity=velocity))
        logger.info(
            "generated swarm of %d agents in %.0fx%.0f viewport (boundary=%s, neighbors=%s)",
            len(self._agents),
            width,
            height,
            self._config.boundary.value,
            self._config.neighbor_strategy.value,
        )

    def _adopt_agents(self, agents: Iterable[Agent]) -> None:
        seen: set[int] = set()
        for agent in agents:
            if agent.id in seen:
                raise ConfigError(f"duplicate agent id {agent.id}")
            seen.add(agent.id)
            self._agents.append(agent)
        self._next_id = max(seen, default=-1) + 1
        self._initial_views = self.agents()

    def _restore_adopted(self) -> None:
        for view in self._initial_views:
            self._agents.append(
                Agent(id=view.id, position=Vec2(view.x, view.y), velocity=Vec2(view.vx, view.vy))
            )
        self._next_id = max((view.id for view in self._initial_views), default=-1) + 1

    def _allocate_id(self) -> int:
        agent_id = self._next_id
        self._next_id += 1
        return agent_id

    def _create_metrics(self, elapsed_ms: float) -> TickMetrics:
        population = len(self._agents)
        speed_sum = 0.0
        fastest = 0.0
        for agent in self._agents:
            speed = agent.velocity.magnitude()
            speed_sum += speed
            if speed > fastest:
                fastest = speed
        return TickMetrics(
            tick=self._tick,
            population=population,
            neighbor_checks=self._index.neighbor_checks,
            average_speed=speed_sum / population if population else 0.0,
            max_speed=fastest,
            tick_duration_ms=elapsed_ms,
        )

    @staticmethod
    def _agent_snapshot(agent: Agent) -> Dict[str, Any]:
        velocity = agent.velocity
        heading = math.atan2(velocity.y, velocity.x) if velocity.magnitude_squared() > 1e-12 else 0.0
        return {
            "id": agent.id,
            "x": agent.position.x,
            "y": agent.position.y,
            "vx": velocity.x,
            "vy": velocity.y,
            "heading": heading,
        }
