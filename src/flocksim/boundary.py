from __future__ import annotations

from .config import BoundaryPolicy
from .vector import Vec2
from .viewport import Viewport


def wrap_coordinate(value: float, dimension: float) -> float:
    wrapped = value % dimension
    # Tiny negatives round up to ``dimension`` in float math.
    if wrapped >= dimension:
        return 0.0
    return wrapped


def clamp_coordinate(value: float, dimension: float) -> float:
    return max(1.0, min(dimension - 1.0, value))


def apply_boundary(position: Vec2, viewport: Viewport, policy: BoundaryPolicy) -> Vec2:
    if policy is BoundaryPolicy.WRAP:
        return position.set(
            wrap_coordinate(position.x, viewport.width),
            wrap_coordinate(position.y, viewport.height),
        )
    return position.set(
        clamp_coordinate(position.x, viewport.width),
        clamp_coordinate(position.y, viewport.height),
    )
