from __future__ import annotations

from dataclasses import dataclass, field

import numpy as np

Point = tuple[float, float]


@dataclass
class Projectile:
    pos: np.ndarray  # float64[2], +y down
    vel: np.ndarray  # float64[2], units per tick
    active: bool = True
    # Oldest first; bounded by RangeConfig.trail_max_points.
    trail: tuple[Point, ...] = field(default_factory=tuple)

    @property
    def x(self) -> float:
        return float(self.pos[0])

    @property
    def y(self) -> float:
        return float(self.pos[1])

    @property
    def speed(self) -> float:
        return float(np.hypot(self.vel[0], self.vel[1]))

    def to_dict(self) -> dict:
        return {
            "pos": [float(v) for v in self.pos],
            "vel": [float(v) for v in self.vel],
            "active": bool(self.active),
            "trail": [[x, y] for x, y in self.trail],
        }
