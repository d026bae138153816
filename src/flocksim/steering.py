"""Steering rules.

Every rule reads the agent and its pre-filtered neighbors and returns a new
force vector. Positions and velocities are only ever read; any arithmetic on
them happens on clones.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Sequence

from .vector import Vec2

if TYPE_CHECKING:
    from .agent import Agent
    from .config import FlockParameters
    from .viewport import Viewport


def separation(agent: Agent, close_neighbors: Sequence[Agent], weight: float) -> Vec2:
    force = Vec2()
    for other in close_neighbors:
        force.add(agent.position.clone().subtract(other.position))
    return force.divide(max(len(close_neighbors), 1)).scale(weight)


def alignment(agent: Agent, neighbors: Sequence[Agent], weight: float) -> Vec2:
    force = Vec2()
    for other in neighbors:
        force.add(other.velocity)
    return force.divide(max(len(neighbors), 1)).scale(weight)


def cohesion(agent: Agent, neighbors: Sequence[Agent], weight: float) -> Vec2:
    force = Vec2()
    for other in neighbors:
        force.add(other.position.clone().subtract(agent.position))
    return force.divide(max(len(neighbors), 1)).scale(weight)


def avoidance(agent: Agent, viewport: Viewport, margin: float, weight: float = 1.0) -> Vec2:
    """Push away from walls closer than ``margin``, in proportion to how far inside the margin the agent is."""
    force = Vec2()
    if margin <= 0:
        return force
    x = agent.position.x
    y = agent.position.y
    if x < margin:
        force.x += margin - x
    if x > viewport.width - margin:
        force.x -= x - (viewport.width - margin)
    if y < margin:
        force.y += margin - y
    if y > viewport.height - margin:
        force.y -= y - (viewport.height - margin)
    return force.scale(weight)


def steering_force(
    agent: Agent,
    close_neighbors: Sequence[Agent],
    neighbors: Sequence[Agent],
    params: FlockParameters,
    viewport: Viewport,
) -> Vec2:
    force = separation(agent, close_neighbors, params.separation_weight)
    force.add(alignment(agent, neighbors, params.alignment_weight))
    force.add(cohesion(agent, neighbors, params.cohesion_weight))
    if params.avoidance_margin > 0:
        force.add(avoidance(agent, viewport, params.avoidance_margin, params.avoidance_weight))
    return force
