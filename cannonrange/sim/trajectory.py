"""Fixed-timestep projectile integration under constant gravity.

The engine is a set of pure functions over :class:`Projectile`. Nothing is
kept between calls; a stepped projectile is returned as a new value and the
input is left untouched, so the caller can hold on to the previous tick.

Integration is semi-implicit Euler with dt = 1 tick::

    pos += vel
    vel.y += gravity

The order is load-bearing: swapping the two lines changes every arc.
"""

from __future__ import annotations

import logging
import math

import numpy as np

from ..config import RangeConfig
from .projectile import Point, Projectile

logger = logging.getLogger(__name__)

_DEFAULT_CONFIG = RangeConfig()


def _clamp(value: float, bounds: tuple[float, float]) -> float:
    lo, hi = bounds
    return float(min(max(value, lo), hi))


def launch(angle_deg: float, power: float, cfg: RangeConfig | None = None) -> Projectile:
    """Create an in-flight projectile at the muzzle.

    Angle is measured from the horizontal, counter-clockwise on screen, so a
    positive angle gives an upward (negative) ``vy``. Inputs outside the
    configured ranges are clamped; non-finite inputs raise ``ValueError``.
    """
    cfg = cfg or _DEFAULT_CONFIG
    launcher = cfg.launcher
    if not (math.isfinite(angle_deg) and math.isfinite(power)):
        raise ValueError(f"launch inputs must be finite, got angle={angle_deg!r} power={power!r}")

    angle = _clamp(angle_deg, launcher.angle_range_deg)
    pw = _clamp(power, launcher.power_range)
    if angle != angle_deg or pw != power:
        logger.warning(f"Launch inputs clamped: angle {angle_deg} -> {angle}, power {power} -> {pw}")

    rad = math.radians(angle)
    speed = launcher.velocity_scale * pw
    muzzle = np.array(launcher.muzzle, dtype=np.float64)
    vel = np.array([math.cos(rad) * speed, -math.sin(rad) * speed], dtype=np.float64)
    return Projectile(pos=muzzle, vel=vel, active=True, trail=((float(muzzle[0]), float(muzzle[1])),))


def rest_projectile(cfg: RangeConfig | None = None) -> Projectile:
    """Inactive, motionless projectile sitting at the muzzle with no trail."""
    cfg = cfg or _DEFAULT_CONFIG
    return Projectile(
        pos=np.array(cfg.launcher.muzzle, dtype=np.float64),
        vel=np.zeros(2, dtype=np.float64),
        active=False,
        trail=(),
    )


def out_of_bounds(pos: np.ndarray, cfg: RangeConfig | None = None) -> bool:
    # Only the right edge (plus margin) and the floor retire a shot; a shot
    # above the top edge is still climbing toward its apex.
    cfg = cfg or _DEFAULT_CONFIG
    pf = cfg.playfield
    return bool(pos[0] > pf.width + pf.x_margin or pos[1] > pf.height)


def step(p: Projectile, cfg: RangeConfig | None = None) -> Projectile:
    """Advance ``p`` by one tick. Inactive projectiles are returned as-is."""
    if not p.active:
        return p
    cfg = cfg or _DEFAULT_CONFIG

    pos = p.pos + p.vel
    vel = p.vel.copy()
    vel[1] += cfg.gravity

    point: Point = (float(pos[0]), float(pos[1]))
    trail = (*p.trail, point)[-cfg.trail_max_points :]

    return Projectile(pos=pos, vel=vel, active=not out_of_bounds(pos, cfg), trail=trail)


def fly(p: Projectile, cfg: RangeConfig | None = None, max_ticks: int = 10_000) -> tuple[Projectile, int]:
    """Step until the projectile retires or ``max_ticks`` is reached.

    Returns the last projectile and the number of ticks actually stepped.
    """
    ticks = 0
    while p.active and ticks < max_ticks:
        p = step(p, cfg)
        ticks += 1
    return p, ticks
