from __future__ import annotations

from dataclasses import dataclass, field

from .vector import Vec2


@dataclass(frozen=True, slots=True)
class AgentView:
    id: int
    x: float
    y: float
    vx: float
    vy: float


@dataclass(slots=True)
class Agent:
    id: int
    position: Vec2
    velocity: Vec2
    # Scratch slot written during the acceleration phase of each tick.
    acceleration: Vec2 = field(default_factory=Vec2.zero)

    def view(self) -> AgentView:
        return AgentView(
            id=self.id,
            x=self.position.x,
            y=self.position.y,
            vx=self.velocity.x,
            vy=self.velocity.y,
        )
