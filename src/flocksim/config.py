from __future__ import annotations

import math
from dataclasses import dataclass, field, fields
from enum import Enum
from pathlib import Path

import yaml


class ConfigError(ValueError):
    """Raised when a configuration or viewport would put the flock in an undefined regime."""


class BoundaryPolicy(str, Enum):
    WRAP = "wrap"
    CLAMP = "clamp"


class NeighborStrategy(str, Enum):
    BRUTE_FORCE = "brute_force"
    GRID = "grid"


@dataclass
class FlockParameters:
    starting_speed: float = 1.0
    max_speed: float = 4.0
    separation_radius: float = 8.0
    detection_radius: float = 40.0
    separation_weight: float = 0.05
    alignment_weight: float = 0.05
    cohesion_weight: float = 0.005
    # Distance from a wall at which avoidance starts; 0 disables it. Clamp boundaries only.
    avoidance_margin: float = 0.0
    avoidance_weight: float = 0.05
    agent_size: float = 2.0
    swarm_size: int = 100
    tick_interval_ms: float = 10.0


@dataclass
class SimulationConfig:
    flock: FlockParameters = field(default_factory=FlockParameters)
    boundary: BoundaryPolicy = BoundaryPolicy.WRAP
    neighbor_strategy: NeighborStrategy = NeighborStrategy.GRID
    seed: int = 42
    viewport_width: float = 800.0
    viewport_height: float = 600.0
    config_version: str = "v1"

    @property
    def tick_interval_seconds(self) -> float:
        return self.flock.tick_interval_ms / 1000.0

    @staticmethod
    def from_yaml(path: Path) -> "SimulationConfig":
        data = yaml.safe_load(Path(path).read_text()) or {}
        if not isinstance(data, dict):
            raise ConfigError(f"{path}: expected a mapping at the top level")
        return load_config(data)

    def validate(self) -> "SimulationConfig":
        flock = self.flock
        if not isinstance(flock.swarm_size, int) or flock.swarm_size <= 0:
            raise ConfigError(f"swarm_size must be a positive integer, got {flock.swarm_size!r}")
        for name in (
            "starting_speed",
            "max_speed",
            "separation_radius",
            "detection_radius",
            "separation_weight",
            "alignment_weight",
            "cohesion_weight",
            "avoidance_margin",
            "avoidance_weight",
            "agent_size",
            "tick_interval_ms",
        ):
            value = getattr(flock, name)
            if not _is_real(value) or not math.isfinite(value) or value < 0:
                raise ConfigError(f"{name} must be a finite non-negative number, got {value!r}")
        if flock.max_speed <= 0:
            raise ConfigError("max_speed must be greater than zero")
        if flock.detection_radius <= 0:
            raise ConfigError("detection_radius must be greater than zero")
        if flock.detection_radius < flock.separation_radius:
            raise ConfigError(
                f"detection_radius ({flock.detection_radius}) must be >= "
                f"separation_radius ({flock.separation_radius})"
            )
        if flock.tick_interval_ms <= 0:
            raise ConfigError("tick_interval_ms must be greater than zero")
        if not isinstance(self.boundary, BoundaryPolicy):
            raise ConfigError(f"unknown boundary policy: {self.boundary!r}")
        if not isinstance(self.neighbor_strategy, NeighborStrategy):
            raise ConfigError(f"unknown neighbor strategy: {self.neighbor_strategy!r}")
        if self.boundary is BoundaryPolicy.WRAP and flock.avoidance_margin > 0:
            raise ConfigError("avoidance_margin requires the clamp boundary policy; wrap and avoidance are exclusive")
        validate_dimensions(self.viewport_width, self.viewport_height, self.boundary)
        return self


def _is_real(value: object) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def validate_dimensions(width: float, height: float, boundary: BoundaryPolicy | None = None) -> None:
    for name, value in (("width", width), ("height", height)):
        if not _is_real(value) or not math.isfinite(value) or value <= 0:
            raise ConfigError(f"viewport {name} must be a finite positive number, got {value!r}")
    if boundary is BoundaryPolicy.CLAMP and (width < 2 or height < 2):
        raise ConfigError("clamp boundaries need a viewport of at least 2x2")


def _enum_value(enum_type: type[Enum], value: object) -> Enum:
    if isinstance(value, enum_type):
        return value
    try:
        return enum_type(str(value).lower())
    except ValueError:
        choices = ", ".join(member.value for member in enum_type)
        raise ConfigError(f"{value!r} is not one of: {choices}") from None


def _check_keys(section: str, raw: dict, allowed: set[str]) -> None:
    unknown = sorted(set(raw) - allowed)
    if unknown:
        raise ConfigError(f"unknown {section} option(s): {', '.join(unknown)}")


def load_config(raw: dict) -> SimulationConfig:
    flock_raw = raw.get("flock", {}) or {}
    if not isinstance(flock_raw, dict):
        raise ConfigError("the flock section must be a mapping")
    _check_keys("flock", flock_raw, {f.name for f in fields(FlockParameters)})
    flock = FlockParameters(**flock_raw)

    sim_names = {f.name for f in fields(SimulationConfig)} - {"flock"}
    sim_values = {k: v for k, v in raw.items() if k != "flock"}
    _check_keys("simulation", sim_values, sim_names)
    if "boundary" in sim_values:
        sim_values["boundary"] = _enum_value(BoundaryPolicy, sim_values["boundary"])
    if "neighbor_strategy" in sim_values:
        sim_values["neighbor_strategy"] = _enum_value(NeighborStrategy, sim_values["neighbor_strategy"])
    return SimulationConfig(flock=flock, **sim_values).validate()
