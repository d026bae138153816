from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Union

from .config import BoundaryPolicy, validate_dimensions


@dataclass
class Viewport:
    width: float
    height: float

    def validate(self, boundary: BoundaryPolicy | None = None) -> "Viewport":
        validate_dimensions(self.width, self.height, boundary)
        return self

    def resize(self, width: float, height: float) -> None:
        validate_dimensions(width, height)
        self.width = float(width)
        self.height = float(height)


ViewportProvider = Callable[[], Viewport]
ViewportSource = Union[Viewport, ViewportProvider]


def resolve_viewport(source: ViewportSource) -> Viewport:
    if isinstance(source, Viewport):
        return source
    return source()
