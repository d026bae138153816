from __future__ import annotations

import argparse
import logging
from pathlib import Path
from typing import Iterable, Optional, Tuple

import pygame

from .agent import AgentView
from .config import SimulationConfig
from .viewport import Viewport
from .world import FlockSimulation

logger = logging.getLogger(__name__)

BACKGROUND = (16, 20, 24)
AGENT_COLOR = (232, 226, 200)


def render_agents(
    surface: pygame.Surface,
    agents: Iterable[AgentView],
    size: float,
    color: Tuple[int, int, int] = AGENT_COLOR,
) -> int:
    """Draw each agent as a filled square at its position; returns the number drawn."""
    side = max(1, int(round(size)))
    drawn = 0
    for agent in agents:
        pygame.draw.rect(surface, color, pygame.Rect(int(agent.x), int(agent.y), side, side))
        drawn += 1
    return drawn


def draw_frame(surface: pygame.Surface, simulation: FlockSimulation) -> int:
    surface.fill(BACKGROUND)
    return render_agents(surface, simulation.agents(), simulation.agent_size)


def run_viewer(config: SimulationConfig, max_ticks: Optional[int] = None) -> FlockSimulation:
    pygame.init()
    try:
        viewport = Viewport(config.viewport_width, config.viewport_height)
        screen = pygame.display.set_mode((int(viewport.width), int(viewport.height)), pygame.RESIZABLE)
        pygame.display.set_caption("flocksim")
        simulation = FlockSimulation(config, viewport)
        clock = pygame.time.Clock()
        fps = 1000.0 / config.flock.tick_interval_ms
        logger.info("viewer started at %.0f ticks/s", fps)

        running = True
        while running and (max_ticks is None or simulation.tick_count < max_ticks):
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    running = False
                elif event.type == pygame.VIDEORESIZE:
                    viewport.resize(event.w, event.h)
                    screen = pygame.display.set_mode((event.w, event.h), pygame.RESIZABLE)
            draw_frame(screen, simulation)
            pygame.display.flip()
            simulation.tick()
            clock.tick(fps)
        logger.info("viewer stopped after %d ticks", simulation.tick_count)
        return simulation
    finally:
        pygame.quit()


def main() -> None:
    parser = argparse.ArgumentParser(description="Pygame window for the flocking simulation")
    parser.add_argument("--config", type=Path, default=None, help="YAML configuration file")
    parser.add_argument("--seed", type=int, default=None)
    parser.add_argument("--log-level", default="INFO", help="Python logging level")
    args = parser.parse_args()
    logging.basicConfig(level=args.log_level.upper(), format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    config = SimulationConfig.from_yaml(args.config) if args.config else SimulationConfig()
    if args.seed is not None:
        config.seed = args.seed
    run_viewer(config)


if __name__ == "__main__":
    main()
