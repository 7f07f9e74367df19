from __future__ import annotations

import math
from dataclasses import dataclass, field

from .constants import (
    ANGLE_MAX_DEG,
    ANGLE_MIN_DEG,
    FIELD_HEIGHT,
    FIELD_WIDTH,
    FIELD_X_MARGIN,
    GRAVITY,
    MAX_HITS,
    MUZZLE_X,
    MUZZLE_Y,
    POWER_MAX,
    POWER_MIN,
    TARGET_HIT_RADIUS,
    TARGET_VISUAL_RADIUS,
    TARGET_X_MAX,
    TARGET_X_MIN,
    TARGET_Y,
    TRAIL_MAX_POINTS,
    VELOCITY_SCALE,
)


@dataclass(frozen=True)
class FieldConfig:
    width: float = FIELD_WIDTH
    height: float = FIELD_HEIGHT
    x_margin: float = FIELD_X_MARGIN

    def __post_init__(self) -> None:
        if self.width <= 0.0 or self.height <= 0.0:
            raise ValueError(f"field size must be positive, got {self.width}x{self.height}")
        if self.x_margin < 0.0:
            raise ValueError(f"x_margin must be >= 0, got {self.x_margin}")


@dataclass(frozen=True)
class LauncherConfig:
    muzzle: tuple[float, float] = (MUZZLE_X, MUZZLE_Y)
    angle_range_deg: tuple[float, float] = (ANGLE_MIN_DEG, ANGLE_MAX_DEG)
    power_range: tuple[float, float] = (POWER_MIN, POWER_MAX)
    velocity_scale: float = VELOCITY_SCALE

    def __post_init__(self) -> None:
        lo, hi = self.angle_range_deg
        if lo > hi:
            raise ValueError(f"angle range min ({lo}) must be <= max ({hi})")
        lo, hi = self.power_range
        if lo > hi:
            raise ValueError(f"power range min ({lo}) must be <= max ({hi})")
        if self.velocity_scale <= 0.0:
            raise ValueError(f"velocity_scale must be positive, got {self.velocity_scale}")


@dataclass(frozen=True)
class TargetConfig:
    y: float = TARGET_Y
    x_band: tuple[float, float] = (TARGET_X_MIN, TARGET_X_MAX)
    visual_radius: float = TARGET_VISUAL_RADIUS
    hit_radius: float = TARGET_HIT_RADIUS

    def __post_init__(self) -> None:
        lo, hi = self.x_band
        if lo > hi:
            raise ValueError(f"target x band min ({lo}) must be <= max ({hi})")
        if self.visual_radius <= 0.0:
            raise ValueError(f"visual_radius must be positive, got {self.visual_radius}")
        if self.hit_radius < self.visual_radius:
            raise ValueError(f"hit_radius ({self.hit_radius}) must be >= visual_radius ({self.visual_radius})")


@dataclass(frozen=True)
class RangeConfig:
    playfield: FieldConfig = field(default_factory=FieldConfig)
    launcher: LauncherConfig = field(default_factory=LauncherConfig)
    target: TargetConfig = field(default_factory=TargetConfig)
    gravity: float = GRAVITY
    trail_max_points: int = TRAIL_MAX_POINTS
    max_hits: int = MAX_HITS
    seed: int | None = None
    # Append a frame per controller operation; see RangeController.get_replay().
    record_replay: bool = False

    def __post_init__(self) -> None:
        if not math.isfinite(self.gravity) or self.gravity <= 0.0:
            raise ValueError(f"gravity must be a positive finite number, got {self.gravity}")
        if self.trail_max_points < 1:
            raise ValueError(f"trail_max_points must be >= 1, got {self.trail_max_points}")
        if self.max_hits < 1:
            raise ValueError(f"max_hits must be >= 1, got {self.max_hits}")

    def to_dict(self) -> dict:
        return {
            "playfield": {
                "width": self.playfield.width,
                "height": self.playfield.height,
                "x_margin": self.playfield.x_margin,
            },
            "launcher": {
                "muzzle": list(self.launcher.muzzle),
                "angle_range_deg": list(self.launcher.angle_range_deg),
                "power_range": list(self.launcher.power_range),
                "velocity_scale": self.launcher.velocity_scale,
            },
            "target": {
                "y": self.target.y,
                "x_band": list(self.target.x_band),
                "visual_radius": self.target.visual_radius,
                "hit_radius": self.target.hit_radius,
            },
            "gravity": self.gravity,
            "trail_max_points": self.trail_max_points,
            "max_hits": self.max_hits,
            "seed": self.seed,
        }
