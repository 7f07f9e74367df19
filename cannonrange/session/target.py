from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

import numpy as np

from ..config import TargetConfig


class ShotOutcome(str, Enum):
    NONE = "none"
    HIT = "hit"
    MISS = "miss"


@dataclass(frozen=True)
class Target:
    x: float
    y: float
    visual_radius: float
    hit_radius: float

    @property
    def center(self) -> tuple[float, float]:
        return (self.x, self.y)

    def distance_to(self, pos: np.ndarray | tuple[float, float]) -> float:
        return float(np.hypot(float(pos[0]) - self.x, float(pos[1]) - self.y))

    def to_dict(self) -> dict:
        return {
            "center": [self.x, self.y],
            "visual_radius": self.visual_radius,
            "hit_radius": self.hit_radius,
        }


def spawn_target(cfg: TargetConfig, rng: np.random.Generator) -> Target:
    """Place a target uniformly at random within the configured x band."""
    lo, hi = cfg.x_band
    x = float(rng.uniform(lo, hi)) if hi > lo else float(lo)
    return Target(x=x, y=float(cfg.y), visual_radius=float(cfg.visual_radius), hit_radius=float(cfg.hit_radius))


def classify_shot(pos: np.ndarray | tuple[float, float], target: Target) -> tuple[ShotOutcome, float]:
    """Binary hit test against the target's hit radius.

    Strict: a final position exactly ``hit_radius`` away is a miss.
    """
    dist = target.distance_to(pos)
    outcome = ShotOutcome.HIT if dist < target.hit_radius else ShotOutcome.MISS
    return outcome, dist
