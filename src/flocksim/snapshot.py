from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from .metrics import TickMetrics


@dataclass(slots=True)
class Snapshot:
    tick: int
    metrics: Optional[TickMetrics]
    agents: List[Dict[str, Any]]
    viewport: "SnapshotViewport"
    metadata: "SnapshotMetadata"


@dataclass(slots=True)
class SnapshotViewport:
    width: float
    height: float


@dataclass(slots=True)
class SnapshotMetadata:
    agent_size: float
    tick_interval_ms: float
    boundary: str
    neighbor_strategy: str
    seed: int
    config_version: str
